import numpy as np
from scipy.integrate import trapezoid
from srtool.common import lookup_table, write_table

"""
Form factor for carrier-carrier scattering between subbands (i,j) -> (f,g)
(Smet, J. Appl. Phys. 79, 9305 (1996)):

	A_ijfg(q) = ∫dz' ψ_i(z')ψ_f(z') ∫dz ψ_j(z)ψ_g(z) exp(-q|z-z'|)

The inner integral is evaluated for all z' at once by splitting the modulus
into two monotone partial sums, so each q costs O(nz) rather than O(nz²).
"""

def find_exp_qz(q, z):
	"""exp(qz) over the grid, using the first grid point as the origin so as
	to keep the magnitude of the exponentials down."""
	return np.exp(q * (z - z[0]))

def find_C_plus(psi_jg, exp_qz, dz):
	"""C⁺(q,z') = ∫_{z'}^∞ dz ψ_j(z)ψ_g(z)/exp(qz), accumulated backward from
	the last grid point."""
	return np.cumsum((psi_jg / exp_qz * dz)[::-1])[::-1]

def find_C_minus(psi_jg, exp_qz, dz):
	"""C⁻(q,z') = ∫_{-∞}^{z'} dz ψ_j(z)ψ_g(z) exp(qz).

	The upper limit is the point just before each z', so that the point z=z'
	is only counted once (in C⁺)."""
	C_minus = np.zeros(len(psi_jg))
	C_minus[1:] = np.cumsum(psi_jg[:-1] * exp_qz[:-1] * dz)
	return C_minus

def matrix_element(C_plus, C_minus, exp_qz):
	"""I_jg(q,z') = ∫dz ψ_j(z)ψ_g(z) exp(-q|z-z'|) for every z' on the grid."""
	return C_minus/exp_qz + C_plus*exp_qz

def _A(q, z, dz, psi_if, psi_jg):
	exp_qz = find_exp_qz(q, z)
	I_jg = matrix_element(
		find_C_plus(psi_jg, exp_qz, dz),
		find_C_minus(psi_jg, exp_qz, dz),
		exp_qz)
	return trapezoid(psi_if * I_jg, dx=dz)

def A(q, isb, jsb, fsb, gsb):
	"""Overlap integral over all four carrier states at in-plane wavevector q.

	This is not squared."""
	z = isb.z
	return _A(q, z, isb.dz,
		isb.psi * fsb.psi,
		jsb.psi * gsb.psi)


def in_plane_k_max(sb, V_max):
	"""Largest in-plane wavevector of a carrier still confined by V_max."""
	if V_max <= sb.E:
		raise RuntimeError("Subband minimum ({} J) does not lie below the "
			"maximum of the potential ({} J)".format(sb.E, V_max))
	return sb.k(V_max - sb.E)

def q_perp_max(kimax, kjmax, Deltak0sqr):
	"""Largest in-plane scattering vector reachable from ki <= kimax and
	kj <= kjmax, i.e. |kij| = kimax + kjmax with the final relative
	wavevector antiparallel."""
	K = kimax + kjmax
	if K*K + Deltak0sqr < 0:
		# No scattering channel is open at all.
		return K
	return np.sqrt(2*K*K + Deltak0sqr + 2*K*np.sqrt(K*K + Deltak0sqr))/2

def ff_table(Deltak0sqr, isb, jsb, fsb, gsb, V_max, nq):
	"""Tabulate A_ijfg(q) at nq evenly spaced q between 0 and the largest q
	that the carrier-carrier kinematics can reach."""
	q_max = q_perp_max(in_plane_k_max(isb, V_max), in_plane_k_max(jsb, V_max),
		Deltak0sqr)
	q = np.linspace(0, q_max, nq)

	z = isb.z
	dz = isb.dz
	psi_if = isb.psi * fsb.psi
	psi_jg = jsb.psi * gsb.psi

	return lookup_table(q, [_A(_q, z, dz, psi_if, psi_jg) for _q in q])

def output_ff(filename, W, isb, jsb, fsb, gsb, nq=100):
	"""Write A_ijfg(q)² against the dimensionless q·W, for q between 0 and 6/W.
	W is an arbitrary (well) width, only used to scale the output."""
	q = 6*np.arange(nq)/(nq*W)
	Asqr = [A(_q, isb, jsb, fsb, gsb)**2 for _q in q]
	write_table(filename, q*W, Asqr, fmt='%e')
