import warnings
import numpy as np
from srtool.common import lookup_table
from srtool.common.constants import pi, hBar, kB, meV

# Step in chemical potential for the thermal average of the polarizability
MU_STEP = 1 * meV

# The integration stops once the latest integrand value P0·weight falls below
# this fraction of the accumulated integral.
CONVERGENCE_THRESHOLD = 0.01

def _thermal_weight(Ef, mu, kT):
	"""1/(4kT cosh²((Ef-μ)/2kT)), the derivative of the Fermi function with
	respect to the chemical potential."""
	x = abs(Ef - mu)/(2*kT)
	if x > 350:
		# cosh² overflows a double; the weight is zero to machine precision
		return 0.0
	return 1/(4*kT*np.cosh(x)**2)

def _P0(isb, q, mu):
	"""Zero-temperature polarizability at chemical potential mu (Smet eq. 43)."""
	m = isb.m
	# mu is a kinetic energy measured from the zero of the subband energies
	k = isb.k(mu)
	P0 = m/(pi*hBar*hBar)
	if q > 2*k:
		P0 -= m/(pi*hBar*hBar)*np.sqrt(1 - (2*k/q)**2)
	return P0

def polarizability(isb, q, T, tolerance=CONVERGENCE_THRESHOLD):
	"""Static polarizability Π(q) of a subband at temperature T (K), by
	integrating the zero-temperature result over the chemical potential
	(Maldague; Smet eq. 44). This is the screening factor that Smet calls e_sc.

	The integral starts at the subband minimum and proceeds in steps of
	MU_STEP. The first step is always taken; after that, integration continues
	while the latest integrand value exceeds tolerance times the running
	integral. The integrand is not multiplied by the step in this comparison,
	so the loop runs well into the thermal tail above the Fermi energy.
	"""
	kT = kB*T
	Ef = isb.Ef

	mu = isb.E
	weight = _thermal_weight(Ef, mu, kT)
	if weight == 0:
		warnings.warn("Fermi energy lies too far from the subband minimum for the "
			"thermal weight to be represented; polarizability is zero")
	dI = _P0(isb, q, mu) * weight
	integral = dI*MU_STEP
	mu += MU_STEP

	while dI > tolerance*integral:
		dI = _P0(isb, q, mu) * _thermal_weight(Ef, mu, kT)
		integral += dI*MU_STEP
		mu += MU_STEP

	return integral

def PI_table(ff, isb, T, screening=True):
	"""Tabulate the polarizability on the wavevectors of a form-factor table.

	If screening is disabled the table is all zeros and nothing is integrated.
	"""
	if not screening:
		return lookup_table(ff.x, np.zeros(len(ff)))
	return lookup_table(ff.x, [polarizability(isb, q, T) for q in ff.x])
