import numpy as np
import pytest

from srtool.common.constants import me, meV
from srtool.input_data import subband

# Infinite-well-like test structure: 101 points across a 200 Å well
WELL_WIDTH = 200e-10
MASS = 0.067*me


def well_grid(nz=101):
	return np.linspace(0, WELL_WIDTH, nz)

def sine_state(n, z):
	"""Normalised n-th state of an infinite well spanning the grid."""
	L = z[-1] - z[0]
	return np.sqrt(2/L) * np.sin(n*np.pi*(z - z[0])/L)

def flat_state(z):
	return np.ones(len(z)) / np.sqrt(z[-1] - z[0])


@pytest.fixture
def make_subband():
	def _make(E_meV, z, psi, Ef_meV=None, N=1e15, m=MASS):
		sb = subband(E_meV*meV, z, psi, m)
		if Ef_meV is not None:
			sb.set_distribution(Ef_meV*meV, N)
		return sb
	return _make

@pytest.fixture
def flat_pair(make_subband):
	"""Two subbands with flat wavefunctions at 10 and 50 meV."""
	z = well_grid()
	psi = flat_state(z)
	return [make_subband(10, z, psi, Ef_meV=5, N=1e15),
		make_subband(50, z, psi, Ef_meV=20, N=1e14)]

@pytest.fixture
def sine_pair(make_subband):
	"""Ground and first excited state of a 200 Å well."""
	z = well_grid()
	return [make_subband(10, z, sine_state(1, z), Ef_meV=15, N=1e15),
		make_subband(40, z, sine_state(2, z), Ef_meV=15, N=1e14)]

@pytest.fixture
def barrier_potential():
	"""300 meV barriers in the outer fifths of the grid."""
	z = well_grid()
	V = np.zeros(len(z))
	V[z < 0.2*WELL_WIDTH] = 300*meV
	V[z > 0.8*WELL_WIDTH] = 300*meV
	return V

@pytest.fixture
def input_files(tmp_path, monkeypatch):
	"""Write a complete set of input files for two electron subbands into a
	temporary working directory."""
	z = well_grid()
	np.savetxt(tmp_path / "Ee.r", np.column_stack(([1, 2], [10.0, 40.0])))
	np.savetxt(tmp_path / "wf_e1.r", np.column_stack((z, sine_state(1, z))))
	np.savetxt(tmp_path / "wf_e2.r", np.column_stack((z, sine_state(2, z))))
	np.savetxt(tmp_path / "Ef.r", np.column_stack(([1, 2], [15.0, 15.0])))
	np.savetxt(tmp_path / "N.r", np.column_stack(([1, 2], [10.0, 1.0])))

	V = np.where((z < 0.2*WELL_WIDTH) | (z > 0.8*WELL_WIDTH), 300*meV, 0.0)
	np.savetxt(tmp_path / "v.r", np.column_stack((z, V)))

	np.savetxt(tmp_path / "rr.r", [[1, 1, 1, 1], [2, 1, 1, 1]], fmt='%i')
	np.savetxt(tmp_path / "rrp.r", [[2, 1], [1, 1]], fmt='%i')

	monkeypatch.chdir(tmp_path)
	return tmp_path
