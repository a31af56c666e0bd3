import numpy as np
import numba as nb

# Relative overshoot of the last table point that is still accepted as a
# query. The kinematics recompute the table bound with a different operation
# order, so the extreme samples may exceed it by a few ulp.
RANGE_TOLERANCE = 1e-12

class TableRangeError(RuntimeError):
	"""A lookup was requested beyond the tabulated domain.

	This means the maximum of the table was computed incorrectly for the
	transition at hand; it is never a normal runtime condition."""
	pass


@nb.jit(nopython=True, nogil=True)
def locate(x, xp):
	"""Index of the first table point with x[i] >= xp, found by a forward scan."""
	n = len(x)
	if not xp <= x[n-1]:
		if xp - x[n-1] <= RANGE_TOLERANCE * abs(x[n-1]):
			return n - 1
		raise TableRangeError("Query lies beyond the maximum of the table")

	i = 0
	while x[i] < xp:
		i += 1
	return i

@nb.jit(nopython=True, nogil=True)
def interpolate_at(x, y, i, xp):
	"""Linear interpolation between table points i-1 and i."""
	if i == 0:
		return y[0]
	return y[i-1] + (y[i] - y[i-1]) * (xp - x[i-1]) / (x[i] - x[i-1])

@nb.jit(nopython=True, nogil=True)
def lookup(x, y, xp):
	return interpolate_at(x, y, locate(x, xp), xp)


class lookup_table:
	"""Ordered table of (x, y) samples, with strictly increasing x.

	Properties:
	 - x: Sample positions (e.g. scattering vector q, 1/m)
	 - y: Tabulated values

	Calling the table returns the linearly interpolated value. A query beyond
	the last x raises TableRangeError; a query below the first x returns the
	first value.
	"""

	def __init__(self, x, y):
		self.x = np.ascontiguousarray(x, dtype=float)
		self.y = np.ascontiguousarray(y, dtype=float)

		if self.x.ndim != 1 or self.x.shape != self.y.shape:
			raise ValueError("Table keys and values have different shapes: "
				"{} and {}".format(self.x.shape, self.y.shape))
		if len(self.x) < 2:
			raise ValueError("A lookup table needs at least two samples.")
		if np.any(np.diff(self.x) <= 0):
			raise ValueError("Table keys must be strictly increasing.")

	def __len__(self):
		return len(self.x)

	def __call__(self, xp):
		if np.ndim(xp) == 0:
			return lookup(self.x, self.y, float(xp))

		xp = np.asarray(xp, dtype=float)
		return np.array([lookup(self.x, self.y, v) for v in xp.ravel()]) \
			.reshape(xp.shape)

	def get_max(self):
		"""Largest tabulated x."""
		return self.x[-1]
