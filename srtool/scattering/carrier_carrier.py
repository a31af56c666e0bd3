import math
import numpy as np
import numba as nb
from srtool.common.interpolate import locate, interpolate_at
from srtool.common.constants import pi, e, hBar
from srtool.form_factor import coulomb
from srtool.screening import PI_table
from .average import rate_curve

"""
Carrier-carrier scattering rate between subbands (i,j) -> (f,g), following
Smet (J. Appl. Phys. 79, 9305 (1996)) and QWWAD chapter 10.

For every initial wavevector ki we integrate over the wavevector kj of the
partner carrier, the angle α between ki and kj, and the angle θ between the
initial and final relative wavevectors. The squared, screened form factor is
looked up at the in-plane scattering vector q⊥ of each sample.
"""

def delta_k0_sqr(indices, subbands):
	"""Δk0² = 4m(Ei + Ej - Ef - Eg)/ħ², twice the change in kinetic energy
	(Smet eq. 55). Zero if the index sums of initial and final states balance,
	which includes all elastic channels."""
	i, j, f, g = indices
	if i + j == f + g:
		return 0.0

	m = subbands[i].m
	dE = subbands[i].E + subbands[j].E \
		- subbands[f].E - subbands[g].E
	return 4*m*dE/(hBar*hBar)


@nb.jit(nopython=True, nogil=True)
def _cc_sum(ki, kj, P_kj, cos_alpha, cos_theta, Deltak0sqr,
		q, A, PI, screening_coupling):
	W = 0.0
	for ikj in range(len(kj)):
		weight = P_kj[ikj] * kj[ikj]

		for ialpha in range(len(cos_alpha)):
			# Relative wavevector |kj - ki|
			kij = math.sqrt(max(
				ki*ki + kj[ikj]*kj[ikj] - 2*ki*kj[ikj]*cos_alpha[ialpha], 0.0))

			kfg_sqr = kij*kij + Deltak0sqr
			if kfg_sqr < 0:
				continue
			kfg = math.sqrt(kfg_sqr)

			for itheta in range(len(cos_theta)):
				# Negative means q⊥ is imaginary: the channel is closed here
				q_perpsqr4 = 2*kij*kij + Deltak0sqr - 2*kij*kfg*cos_theta[itheta]
				if q_perpsqr4 < 0:
					continue

				q_perp = math.sqrt(q_perpsqr4)/2
				iq = locate(q, q_perp)
				Aq = interpolate_at(q, A, iq, q_perp)
				PIq = interpolate_at(q, PI, iq, q_perp)

				# Screening is folded into the denominator, which removes
				# the pole at q⊥=0 whenever screening is on.
				denominator = q_perp + screening_coupling*PIq*Aq
				if denominator == 0:
					continue
				W += (Aq/denominator)**2 * weight
	return W

@nb.jit(nopython=True, nogil=True)
def _cc_rates(ki, kj, P_kj, cos_alpha, cos_theta, Deltak0sqr,
		q, A, PI, screening_coupling):
	W = np.zeros(len(ki))
	for iki in range(len(ki)):
		W[iki] = _cc_sum(ki[iki], kj, P_kj, cos_alpha, cos_theta, Deltak0sqr,
			q, A, PI, screening_coupling)
	return W


def cc_rate(isb, jsb, fsb, gsb, Deltak0sqr, V_max, T, epsilon,
		nki=101, nkj=101, nalpha=101, ntheta=101, nq=101, screening=True):
	"""Compute the carrier-carrier scattering rate for one transition.

	Parameters:
	 - isb, jsb:   Initial subbands of the two carriers
	 - fsb, gsb:   Final subbands
	 - Deltak0sqr: Δk0² from delta_k0_sqr (1/m²)
	 - V_max:      Maximum of the potential profile (J). Bounds ki and kj.
	 - T:          Carrier temperature (K)
	 - epsilon:    Low-frequency permittivity (F/m)
	 - nki:        Number of initial wavevectors
	 - nkj:        Number of strips in the |kj| integration
	 - nalpha:     Number of strips in the α integration
	 - ntheta:     Number of strips in the θ integration
	 - nq:         Number of q⊥ samples in the form factor table
	 - screening:  Include screening

	Returns:
	 - A rate_curve for the initial subband
	"""
	for name, n in [('nki', nki), ('nkj', nkj), ('nalpha', nalpha),
			('ntheta', ntheta), ('nq', nq)]:
		if n < 2:
			raise ValueError("{} must be at least 2, got {}".format(name, n))

	m = isb.m

	A = coulomb.ff_table(Deltak0sqr, isb, jsb, fsb, gsb, V_max, nq)
	PI = PI_table(A, isb, T, screening)

	ki = np.linspace(0, coulomb.in_plane_k_max(isb, V_max), nki)
	kj = np.linspace(0, coulomb.in_plane_k_max(jsb, V_max), nkj)
	dkj = kj[1] - kj[0]

	dalpha = 2*pi/(nalpha - 1)
	dtheta = 2*pi/(ntheta - 1)

	W = _cc_rates(ki, kj, jsb.f_FD_k(kj, T),
		np.cos(dalpha*np.arange(nalpha)), np.cos(dtheta*np.arange(ntheta)),
		Deltak0sqr, A.x, A.y, PI.y, e*e/(2*epsilon))

	W *= dtheta*dalpha*dkj
	W *= (e*e/(hBar*4*pi*epsilon))**2 * m/(pi*hBar)

	return rate_curve(isb, ki, W, T)
