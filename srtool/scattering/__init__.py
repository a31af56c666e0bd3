from .average import fermi_weighted_mean, rate_curve
from .carrier_carrier import cc_rate, delta_k0_sqr
from .lo_phonon import (
	lo_rate, lo_prefactors, screening_length_sqr, cutoff_energy,
	final_state_blocking)
