import numpy as np
from scipy.special import expit
from srtool.common import read_table, read_last_column, FileLinesNotAsExpected
from srtool.common.constants import hBar, kB, meV

class subband:
	"""A single quantum-well subband with a parabolic in-plane dispersion.

	Properties:
	 - E:   Band-edge (subband minimum) energy, J
	 - z:   Spatial grid in the growth direction, m. Uniformly spaced.
	 - dz:  Grid step, m
 - psi: Wavefunction on that grid, m^(-1/2)
	 - m:   Band-edge effective mass, kg
	 - Ef:  Quasi-Fermi energy, J. Set by set_distribution().
	 - N:   Population, m^-2. Set by set_distribution().

	All energies passed to or returned from this class are in joules and are
	measured on the same scale as E, unless stated otherwise.
	"""

	def __init__(self, E, z, psi, m):
		self.E = float(E)
		self.z = np.asarray(z, dtype=float)
		self.psi = np.asarray(psi, dtype=float)
		self.m = float(m)
		self.Ef = None
		self.N = None

		if self.z.ndim != 1 or len(self.z) < 2:
			raise RuntimeError("Wavefunction grid needs at least two points.")
		if self.psi.shape != self.z.shape:
			raise RuntimeError("Wavefunction and grid have different sizes: "
				"{} and {} respectively.".format(len(self.psi), len(self.z)))

		dz = np.diff(self.z)
		if np.any(dz <= 0) or not np.allclose(dz, dz[0], rtol=1e-6, atol=0):
			raise RuntimeError("Wavefunction grid must be strictly increasing "
				"with a constant step.")
		self.dz = self.z[1] - self.z[0]

	def set_distribution(self, Ef, N):
		"""Set the quasi-Fermi energy (J) and population (m^-2)."""
		self.Ef = float(Ef)
		self.N = float(N)


	def k(self, Ek):
		"""In-plane wavevector (1/m) for a kinetic energy Ek (J) above the
		subband minimum."""
		Ek = np.asarray(Ek, dtype=float)
		if np.any(Ek < 0):
			raise ValueError("Negative kinetic energy ({} J) has no real "
				"wavevector.".format(np.min(Ek)))
		k = np.sqrt(2*self.m*Ek) / hBar
		return float(k) if k.ndim == 0 else k

	def Ek(self, k):
		"""Kinetic energy (J) above the subband minimum at wavevector k."""
		return hBar*hBar * np.square(k) / (2*self.m)

	def f_FD(self, E, T):
		"""Fermi-Dirac occupation at total energy E (J) and temperature T (K)."""
		if self.Ef is None:
			raise RuntimeError("Carrier distribution has not been set for "
				"this subband.")
		return expit((self.Ef - np.asarray(E, dtype=float)) / (kB*T))

	def f_FD_k(self, k, T):
		"""Fermi-Dirac occupation at in-plane wavevector k."""
		return self.f_FD(self.E + self.Ek(k), T)

	def get_k_max(self, T):
		"""Wavevector 5kT above the quasi-Fermi energy, or above the band edge
		if the Fermi energy lies below it. This covers all of the significantly
		occupied states."""
		Ek_max = max(self.Ef - self.E, 0.0) + 5*kB*T
		return self.k(Ek_max)


	@classmethod
	def read_from_file(cls, energy_file, wf_prefix, wf_ext, m):
		"""Read all subbands.

		energy_file holds one energy (meV) per subband. The wavefunction of
		subband n (1-based) is read from wf_prefix + n + wf_ext, as two columns
		of position (m) and amplitude (m^(-1/2)). All wavefunctions must share
		the same grid size.
		"""
		E = read_last_column(energy_file) * meV
		if len(E) == 0:
			raise RuntimeError("No subband energies found in {}".format(energy_file))

		subbands = []
		for i, Ei in enumerate(E):
			filename = "{}{}{}".format(wf_prefix, i+1, wf_ext)
			data = read_table(filename, ncols=2)

			if subbands and len(data) != len(subbands[0].z):
				raise FileLinesNotAsExpected(filename, len(subbands[0].z), len(data))

			subbands.append(cls(Ei, data[:,0], data[:,1], m))

		return subbands
