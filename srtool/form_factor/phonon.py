import numpy as np
from scipy.integrate import trapezoid
from srtool.common import lookup_table, write_table

def phonon_dKz(A0, nKz):
	"""Step in phonon wavevector, such that nKz samples span 2/A0."""
	return 2/(A0*nKz)

def Gsqr(Kz, isb, fsb):
	"""Squared overlap |∫dz exp(iKz z) ψ_i(z) ψ_f(z)|² between two states, for
	a scalar or an array of phonon wavevectors Kz."""
	z = isb.z
	dz = isb.dz
	psi_if = isb.psi * fsb.psi

	Kz = np.asarray(Kz, dtype=float)
	G = np.array([trapezoid(np.exp(1j*_Kz*z) * psi_if, dx=dz)
		for _Kz in Kz.ravel()])
	Gsqr = np.square(np.abs(G)).reshape(Kz.shape)
	return float(Gsqr) if Gsqr.ndim == 0 else Gsqr

def ff_table(dKz, isb, fsb, nKz):
	"""Tabulate the squared form factor at Kz = 0, dKz, ..., (nKz-1)dKz."""
	Kz = np.arange(nKz) * dKz
	return lookup_table(Kz, Gsqr(Kz, isb, fsb))

def ff_output(filename, table):
	"""Write a form-factor table as two columns: Kz (1/m) and G²."""
	write_table(filename, table.x, table.y)
