import numpy as np
import pytest

from srtool.common import lookup_table
from srtool.common.constants import pi, e, hBar, eps0, meV
from srtool.form_factor import coulomb
from srtool.scattering import cc_rate, delta_k0_sqr
from srtool.scattering.carrier_carrier import _cc_sum


def periodic_cosines(n):
	"""cos of n angles evenly spread over one period, without repeating 2π."""
	return np.cos(2*pi/n*np.arange(n))

def flat_table(q_max, n=3):
	return lookup_table(np.linspace(0, q_max, n), np.ones(n))


def test_angular_integrals_match_closed_form():
	# With A=1 and no screening 1/q⊥² = 4/(a - b cosθ), a = 2kij² + Δk0²,
	# b = 2kij·sqrt(kij² + Δk0²). Since a² - b² = Δk0⁴, the θ integral is
	# 8π/Δk0² whatever kij, and the α integral adds a factor 2π.
	Deltak0sqr = 4.0
	ki = 0.7
	kj = np.linspace(0.1, 1, 4)
	P_kj = np.array([0.9, 0.6, 0.3, 0.1])
	nalpha, ntheta = 16, 64

	W = _cc_sum(ki, kj, P_kj, periodic_cosines(nalpha), periodic_cosines(ntheta),
		Deltak0sqr, np.linspace(0, 10, 3), np.ones(3), np.zeros(3), 1.0)
	W *= 2*pi/nalpha * 2*pi/ntheta

	expected = np.sum(P_kj*kj) * 2*pi * 8*pi/Deltak0sqr
	assert W == pytest.approx(expected, rel=1e-9)


def test_zero_scattering_vector_is_skipped_without_screening():
	# Δk0²=0 and θ=0 put every sample at q⊥=0
	kj = np.linspace(0.1, 1, 4)
	P_kj = np.array([0.9, 0.6, 0.3, 0.1])
	args = (0.7, kj, P_kj, periodic_cosines(8), np.array([1.0]), 0.0,
		np.linspace(0, 10, 3), np.ones(3))

	assert _cc_sum(*args, np.zeros(3), 1.0) == 0.0

	# With screening the same samples are finite: (A/(c·Π·A))² each
	PI, coupling = 2.0, 0.5
	W = _cc_sum(*args, np.full(3, PI), coupling)
	assert W == pytest.approx(8*np.sum(P_kj*kj)/(coupling*PI)**2, rel=1e-12)


def test_rate_with_flat_form_factor_matches_closed_form(sine_pair, monkeypatch):
	def flat_ff_table(Deltak0sqr, isb, jsb, fsb, gsb, V_max, nq):
		return flat_table(coulomb.q_perp_max(coulomb.in_plane_k_max(isb, V_max),
			coulomb.in_plane_k_max(jsb, V_max), Deltak0sqr), nq)
	monkeypatch.setattr(coulomb, 'ff_table', flat_ff_table)

	isb, jsb = sine_pair[1], sine_pair[0]
	Deltak0sqr = delta_k0_sqr((1, 0, 0, 0), sine_pair)
	V_max = 60*meV
	T = 77
	epsilon = 13.18*eps0
	nki, nkj, nalpha, ntheta = 3, 3, 5, 201

	curve = cc_rate(isb, jsb, jsb, jsb, Deltak0sqr, V_max, T, epsilon,
		nki=nki, nkj=nkj, nalpha=nalpha, ntheta=ntheta, nq=5, screening=False)

	# Both angle grids include 0 and 2π, so the θ sum is the periodic rule
	# (8π/Δk0² in closed form) plus one extra sample at θ=0, where
	# 4q⊥² = (kfg - kij)².
	ki = np.linspace(0, coulomb.in_plane_k_max(isb, V_max), nki)
	kj = np.linspace(0, coulomb.in_plane_k_max(jsb, V_max), nkj)
	alpha = 2*pi/(nalpha - 1)*np.arange(nalpha)
	dalpha = 2*pi/(nalpha - 1)
	dtheta = 2*pi/(ntheta - 1)
	P_kj = jsb.f_FD_k(kj, T)

	KJ, ALPHA = np.meshgrid(kj, alpha, indexing='ij')
	prefactor = (e*e/(hBar*4*pi*epsilon))**2 * isb.m/(pi*hBar)
	for ki_, W in zip(ki, curve.W):
		kij = np.sqrt(np.maximum(ki_*ki_ + KJ*KJ - 2*ki_*KJ*np.cos(ALPHA), 0))
		kfg = np.sqrt(kij*kij + Deltak0sqr)
		theta_integral = 8*pi/Deltak0sqr \
			+ dtheta * 4*(kfg + kij)**2/Deltak0sqr**2
		weight = (P_kj*kj)[:,np.newaxis]
		expected = prefactor * (kj[1] - kj[0]) * dalpha \
			* np.sum(weight*theta_integral)
		assert W == pytest.approx(expected, rel=1e-8)


def test_unscreened_rate_scales_with_inverse_square_permittivity(
		sine_pair, barrier_potential):
	args = (*[sine_pair[0]]*4, 0.0, barrier_potential.max(), 77)
	grid = dict(nki=4, nkj=4, nalpha=4, ntheta=4, nq=8, screening=False)
	W1 = cc_rate(*args, 13.18*eps0, **grid).W
	W2 = cc_rate(*args, 2*13.18*eps0, **grid).W
	assert W1 == pytest.approx(4*W2, rel=1e-12)

def test_kernel_skips_closed_channels():
	# A large negative Δk0² closes every channel
	W = _cc_sum(0.5, np.linspace(0, 1, 4), np.ones(4),
		np.cos(np.linspace(0, 2*np.pi, 5)), np.cos(np.linspace(0, 2*np.pi, 5)),
		-100.0, np.linspace(0, 10, 3), np.ones(3), np.zeros(3), 1.0)
	assert W == 0.0


def test_delta_k0_sqr(sine_pair):
	assert delta_k0_sqr((0, 1, 1, 0), sine_pair) == 0.0
	assert delta_k0_sqr((0, 0, 0, 0), sine_pair) == 0.0
	assert delta_k0_sqr((1, 0, 0, 0), sine_pair) > 0
	assert delta_k0_sqr((0, 0, 1, 0), sine_pair) < 0
	assert delta_k0_sqr((1, 0, 0, 0), sine_pair) == \
		pytest.approx(-delta_k0_sqr((0, 0, 1, 0), sine_pair))


small_grid = dict(nki=5, nkj=5, nalpha=5, ntheta=5, nq=11)

@pytest.mark.parametrize("indices", [(0, 0, 0, 0), (1, 0, 0, 0), (1, 1, 0, 0)])
@pytest.mark.parametrize("screening", [True, False])
def test_rates_are_finite_and_not_negative(sine_pair, barrier_potential,
		indices, screening):
	sbs = [sine_pair[i] for i in indices]
	curve = cc_rate(*sbs, delta_k0_sqr(indices, sine_pair),
		barrier_potential.max(), 77, 13.18*eps0, screening=screening,
		**small_grid)

	assert len(curve.W) == 5
	assert np.all(np.isfinite(curve.W))
	assert np.all(curve.W >= 0)
	assert np.isfinite(curve.mean)
	assert curve.E[0] == sbs[0].E


def test_initial_state_must_be_confined(sine_pair):
	with pytest.raises(RuntimeError):
		cc_rate(*[sine_pair[1]]*4, 0.0, 20*meV, 77, 13.18*eps0,
			**small_grid)


def test_grid_sizes_are_checked(sine_pair, barrier_potential):
	with pytest.raises(ValueError):
		cc_rate(*[sine_pair[0]]*4, 0.0, barrier_potential.max(), 77, 13.18*eps0,
			nki=1)
