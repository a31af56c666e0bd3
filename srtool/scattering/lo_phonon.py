import warnings
import numpy as np
from scipy.integrate import trapezoid
from srtool.common.constants import pi, e, hBar, kB
from srtool.form_factor import phonon
from .average import rate_curve

def lo_prefactors(E_LO, Tl, eps_s, eps_inf, m):
	"""Pre-factors Υ* for LO-phonon absorption and emission.

	Parameters:
	 - E_LO:    Phonon energy (J)
	 - Tl:      Lattice temperature (K)
	 - eps_s:   Static permittivity (F/m)
	 - eps_inf: High-frequency permittivity (F/m)
	 - m:       Effective mass (kg)

	Returns:
	 - (absorption, emission) pre-factors. They differ only in the phonon
	   occupation, N0 for absorption and N0+1 for emission.
	"""
	omega_0 = E_LO/hBar
	N0 = 1/np.expm1(E_LO/(kB*Tl))

	common = pi*e*e*omega_0/eps_s*(eps_s/eps_inf - 1) \
		* 2*m/(hBar*hBar) * 2/(8*pi*pi*pi)
	return common*N0, common*(N0 + 1)

def screening_length_sqr(subbands, Te, eps_s):
	"""Squared inverse screening length λ² (1/m²) of the whole carrier
	population, summed over all subbands."""
	lambda_s_sq = 0.0
	for sb in subbands:
		m = sb.m
		Ej = sb.E
		lambda_s_sq += np.sqrt(2*m*Ej) * m * sb.f_FD(Ej, Te)
	return lambda_s_sq * e*e/(pi*pi*hBar*hBar*hBar*eps_s)

def cutoff_energy(isb, fsb, E_LO, Te, Ecutoff=None):
	"""Maximum kinetic energy (J) in the initial subband.

	A user-specified cut-off is kept unless it leaves no room for absorption
	into the final subband, in which case it is extended by the final subband
	energy. Otherwise the range reaches 5kT past the Fermi energy, extended the
	same way if it ends below the final subband minimum.
	"""
	Ei = isb.E
	Ef = fsb.E

	if Ecutoff is not None:
		if Ecutoff + Ei - E_LO < Ef:
			warnings.warn("No scattering permitted within the specified cut-off "
				"energy; extending range automatically")
			Ecutoff += Ef
		return Ecutoff

	Ecutoff = isb.Ek(isb.get_k_max(Te))
	if Ecutoff + Ei < Ef:
		Ecutoff += Ef
	return Ecutoff

def final_state_blocking(fsb, Ek_final, Te):
	"""Probability (1 - f) that the final state is empty.

	Ek_final is the final kinetic energy (J). Where it is negative no final
	state exists and the factor is 1."""
	Ek_final = np.asarray(Ek_final, dtype=float)
	allowed = Ek_final >= 0
	kf = np.sqrt(2*fsb.m*np.where(allowed, Ek_final, 0))/hBar
	return np.where(allowed, 1 - fsb.f_FD_k(kf, Te), 1.0)


def _integrate_Kz(ff, ki, Kz_2, m, Delta):
	"""∫ G²(Kz) / sqrt(Kz⁴ + 2Kz²(2ki² - 2mΔ/ħ²) + (2mΔ/ħ²)²) dKz for all ki
	at once. Rows correspond to ki."""
	a = 2*m*Delta/(hBar*hBar)
	Kz_2 = Kz_2[np.newaxis,:]
	ki_2 = np.square(ki)[:,np.newaxis]

	integrand = ff.y / np.sqrt(Kz_2*Kz_2 + 2*Kz_2*(2*ki_2 - a) + a*a)
	return trapezoid(integrand, dx=ff.x[1] - ff.x[0], axis=1)

def lo_rate(isb, fsb, E_LO, Te, Tl, eps_s, eps_inf, A0,
		nki=1001, nKz=1001, Ecutoff=None,
		lambda_s_sq=0.0, blocking=True, ff=None):
	"""Compute LO-phonon absorption and emission rates for one transition.

	Parameters:
	 - isb, fsb:    Initial and final subbands
	 - E_LO:        Phonon energy (J)
	 - Te, Tl:      Carrier and lattice temperatures (K)
	 - eps_s:       Static permittivity (F/m)
	 - eps_inf:     High-frequency permittivity (F/m)
	 - A0:          Lattice constant (m); phonon wavevectors span 2/A0
	 - nki:         Number of initial wavevectors
	 - nKz:         Number of phonon wavevectors
	 - Ecutoff:     Maximum initial kinetic energy (J), None for automatic
	 - lambda_s_sq: Squared inverse screening length (1/m²), 0 for no screening
	 - blocking:    Include final-state blocking
	 - ff:          Optional precomputed form-factor table

	Returns:
	 - (absorption, emission) rate_curves
	"""
	if nki < 2 or nKz < 2:
		raise ValueError("nki and nKz must be at least 2, got {} and {}".format(
			nki, nKz))

	m = isb.m
	Ei = isb.E
	Ef = fsb.E

	Upsilon_a, Upsilon_e = lo_prefactors(E_LO, Tl, eps_s, eps_inf, m)

	if ff is None:
		ff = phonon.ff_table(phonon.phonon_dKz(A0, nKz), isb, fsb, nKz)

	kimax = isb.k(cutoff_energy(isb, fsb, E_LO, Te, Ecutoff))
	dki = kimax/nki
	ki = dki*np.arange(nki)

	Kz_2 = np.square(ff.x)
	if lambda_s_sq > 0:
		# Screening correction; the Kz=0 sample is left alone
		Kz_2[1:] *= 1 + 2*lambda_s_sq/Kz_2[1:] + lambda_s_sq**2/Kz_2[1:]**2

	Delta_a = Ef - Ei - E_LO
	Delta_e = Ef - Ei + E_LO

	W_a = Upsilon_a*pi*_integrate_Kz(ff, ki, Kz_2, m, Delta_a)
	W_e = Upsilon_e*pi*_integrate_Kz(ff, ki, Kz_2, m, Delta_e)

	# Final kinetic energies
	Eki = isb.Ek(ki)
	Ef_ab = Eki - Delta_a
	Ef_em = Eki - Delta_e

	# Energy conservation: no rate at all without a final state
	W_a = np.where(Ef_ab >= 0, W_a, 0.0)
	W_e = np.where(Ef_em >= 0, W_e, 0.0)

	if blocking:
		W_a *= final_state_blocking(fsb, Ef_ab, Te)
		W_e *= final_state_blocking(fsb, Ef_em, Te)

	return rate_curve(isb, ki, W_a, Te), rate_curve(isb, ki, W_e, Te)
