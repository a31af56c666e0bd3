import warnings
import numpy as np
from srtool.common.constants import pi

def fermi_weighted_mean(k, W, isb, T):
	"""Mean of a scattering rate W(k) over the initial carrier distribution.

	Evaluates ∫ W(k) f(k) k dk / (π N) on the uniform k grid, where f is the
	Fermi-Dirac occupation of the initial subband and N its population. The
	factor 1/π collects the angular integral and the spin degeneracy of the
	2D density of states.
	"""
	N = isb.N
	if not N > 0:
		warnings.warn("Initial subband has no population ({} m^-2); its mean "
			"scattering rate is undefined".format(N))
		return np.nan

	dk = k[1] - k[0]
	return np.sum(W * k * isb.f_FD_k(k, T)) * dk / (pi*N)


class rate_curve:
	"""Scattering rate against initial wavevector for one mechanism of one
	transition.

	Properties:
	 - k:    Initial in-plane wavevectors (1/m), uniformly spaced from 0
	 - E:    Total carrier energy at each k (J)
	 - W:    Scattering rate (1/s)
	 - mean: Fermi-Dirac weighted mean of W (1/s)
	"""

	def __init__(self, isb, k, W, T):
		self.k = np.asarray(k, dtype=float)
		self.W = np.asarray(W, dtype=float)
		self.E = isb.E + isb.Ek(self.k)
		self.mean = fermi_weighted_mean(self.k, self.W, isb, T)
