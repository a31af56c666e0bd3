import numpy as np
from srtool.common import read_table, read_last_column, FileLinesNotAsExpected
from srtool.common.constants import meV

def read_transitions(filename, nindices, nsubbands):
	"""Read the list of wanted transitions.

	Each line holds nindices 1-based subband indices (4 for carrier-carrier,
	2 for LO-phonon scattering). Returns a list of tuples of 0-based indices.
	"""
	data = read_table(filename, ncols=nindices)

	if not np.all(data == np.round(data)):
		raise RuntimeError("Subband indices in {} must be integers".format(filename))
	data = data.astype(int)

	if np.any(data < 1) or np.any(data > nsubbands):
		raise RuntimeError("Subband index in {} lies outside the range 1..{}".format(
			filename, nsubbands))

	return [tuple(int(i) - 1 for i in row) for row in data]

def read_distributions(subbands, ef_file, pop_file):
	"""Read quasi-Fermi energies (meV) and populations (10^10 cm^-2) and
	attach them to the subbands."""
	Ef = read_last_column(ef_file)
	if len(Ef) != len(subbands):
		raise FileLinesNotAsExpected(ef_file, len(subbands), len(Ef))

	N = read_last_column(pop_file)
	if len(N) != len(subbands):
		raise FileLinesNotAsExpected(pop_file, len(subbands), len(N))

	for sb, Ef_sb, N_sb in zip(subbands, Ef*meV, N*1e14):
		sb.set_distribution(Ef_sb, N_sb)

def read_potential(filename, subbands):
	"""Read the potential profile (m, J). Its grid must match the subbands'."""
	data = read_table(filename, ncols=2)
	nz = len(subbands[0].z)
	if len(data) != nz:
		raise RuntimeError("Potential and wavefunction arrays are different "
			"sizes: {} and {} respectively.".format(len(data), nz))
	return data[:,1]
