import os
from multiprocessing.pool import ThreadPool
import numpy as np
from srtool.common import read_table, write_table
from srtool.common.constants import meV
from srtool.form_factor import coulomb, phonon
from srtool.scattering import cc_rate, delta_k0_sqr, lo_rate, screening_length_sqr

"""
Runs the scattering-rate calculation over a list of transitions and writes
the results.

Each transition is computed independently, with its own form-factor and
screening tables. Transitions may therefore run on a thread pool; the numba
kernels release the GIL. Files are written by the calling thread, in the
order of the transition list, once all transitions are done.
"""

def output_name(prefix, indices, suffix='.r'):
	"""File name for a transition, e.g. cc1211.r. Indices are 0-based and
	written 1-based."""
	return prefix + ''.join(str(i + 1) for i in indices) + suffix

def check_unique_names(names):
	"""Concatenated indices are ambiguous beyond 9 subbands (1,11 vs 11,1), and
	a transition may be listed twice. Either would overwrite output."""
	seen = set()
	for name in names:
		if name in seen:
			raise RuntimeError("Output {} would be written more than once; "
				"check the transition list".format(name))
		seen.add(name)

def map_transitions(fn, transitions, threads=1):
	"""Apply fn to every transition and return the results in order."""
	if threads > 1:
		with ThreadPool(threads) as pool:
			return pool.map(fn, transitions)

	results = []
	for t in transitions:
		results.append(fn(t))
		print('.', end='', flush=True)
	print()
	return results


def write_curve(filename, curve):
	"""Write a rate curve: carrier energy (meV) against rate (1/s)."""
	write_table(filename, curve.E/meV, curve.W)

def read_curve(filename):
	"""Read a rate curve written by write_curve. Returns (energy in meV,
	rate in 1/s)."""
	data = read_table(filename, ncols=2)
	return data[:,0], data[:,1]

def write_summary(filename, transitions, means):
	"""Write one line per transition: the 1-based indices and the mean rate."""
	columns = [np.array([t[n] + 1 for t in transitions], dtype=int)
		for n in range(len(transitions[0]))] if transitions else []
	write_table(filename, *columns, np.asarray(means, dtype=float),
		fmt=['%i'] * len(columns) + ['%20.17e'])

def archive_curve(archive, mechanism, indices, curve):
	"""Store a rate curve and its mean in an open datafile."""
	group = archive.create_group('/{}/{}'.format(mechanism,
		''.join(str(i + 1) for i in indices)))
	group.add_curve(curve.E/meV, curve.W)
	group.set_property('mean_rate', curve.mean, '1/s')


def compile_cc(subbands, V, transitions, outdir='.', threads=1,
		archive=None, ff_width=None, **rate_args):
	"""Carrier-carrier scattering rates for all transitions.

	Parameters:
	 - subbands:    List of subbands, with distributions set
	 - V:           Potential profile (J), on the wavefunction grid
	 - transitions: List of 0-based (i, j, f, g) tuples
	 - outdir:      Output directory
	 - threads:     Number of transitions computed in parallel
	 - archive:     Optional open datafile to store curves in
	 - ff_width:    If given, write form factors A<ijfg>.r scaled by this width (m)
	 - rate_args:   Passed on to scattering.cc_rate

	Writes cc<ijfg>.r for every transition and the mean rates to ccABCD.r.
	Returns the list of rate curves.
	"""
	names = [output_name('cc', t) for t in transitions]
	check_unique_names(names)
	V_max = np.max(V)

	if ff_width is not None:
		print("# Writing carrier-carrier form factors.")
		for t in transitions:
			coulomb.output_ff(os.path.join(outdir, output_name('A', t)),
				ff_width, *[subbands[i] for i in t])

	def compute(t):
		i, j, f, g = t
		return cc_rate(subbands[i], subbands[j], subbands[f], subbands[g],
			delta_k0_sqr(t, subbands), V_max, **rate_args)

	print("# Computing carrier-carrier scattering rates for {} transitions.".format(
		len(transitions)))
	curves = map_transitions(compute, transitions, threads)

	for t, name, curve in zip(transitions, names, curves):
		write_curve(os.path.join(outdir, name), curve)
		if archive is not None:
			archive_curve(archive, 'cc', t, curve)
	write_summary(os.path.join(outdir, 'ccABCD.r'), transitions,
		[c.mean for c in curves])

	return curves

def compile_lo(subbands, transitions, E_LO, Te, eps_s, A0, nKz=1001,
		screening=True, outdir='.', threads=1, archive=None,
		output_ff=False, **rate_args):
	"""LO-phonon absorption and emission rates for all transitions.

	Parameters:
	 - subbands:    List of subbands, with distributions set
	 - transitions: List of 0-based (i, f) tuples
	 - E_LO:        Phonon energy (J)
	 - Te:          Carrier temperature (K)
	 - eps_s:       Static permittivity (F/m)
	 - A0:          Lattice constant (m)
	 - nKz:         Number of phonon wavevector samples
	 - screening:   Include screening by the whole carrier population
	 - outdir:      Output directory
	 - threads:     Number of transitions computed in parallel
	 - archive:     Optional open datafile to store curves in
	 - output_ff:   Write form factors G<if>.r
	 - rate_args:   Passed on to scattering.lo_rate

	Writes LOa<if>.r and LOe<if>.r for every transition, and the mean rates
	to LOa-if.r and LOe-if.r. Returns a list of (absorption, emission) curves.
	"""
	names_a = [output_name('LOa', t) for t in transitions]
	names_e = [output_name('LOe', t) for t in transitions]
	check_unique_names(names_a + names_e)

	lambda_s_sq = screening_length_sqr(subbands, Te, eps_s) if screening else 0.0
	dKz = phonon.phonon_dKz(A0, nKz)

	def compute(t):
		i, f = t
		ff = phonon.ff_table(dKz, subbands[i], subbands[f], nKz)
		return ff, lo_rate(subbands[i], subbands[f], E_LO, Te,
			eps_s=eps_s, A0=A0, nKz=nKz, lambda_s_sq=lambda_s_sq, ff=ff,
			**rate_args)

	print("# Computing LO-phonon scattering rates for {} transitions.".format(
		len(transitions)))
	results = map_transitions(compute, transitions, threads)

	for t, name_a, name_e, (ff, (curve_a, curve_e)) in zip(
			transitions, names_a, names_e, results):
		if output_ff:
			phonon.ff_output(os.path.join(outdir, output_name('G', t)), ff)
		write_curve(os.path.join(outdir, name_a), curve_a)
		write_curve(os.path.join(outdir, name_e), curve_e)
		if archive is not None:
			archive_curve(archive, 'LOa', t, curve_a)
			archive_curve(archive, 'LOe', t, curve_e)

	curves = [r[1] for r in results]
	write_summary(os.path.join(outdir, 'LOa-if.r'), transitions,
		[c[0].mean for c in curves])
	write_summary(os.path.join(outdir, 'LOe-if.r'), transitions,
		[c[1].mean for c in curves])

	return curves
