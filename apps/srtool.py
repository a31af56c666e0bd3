import srtool as srt
from srtool.common import units, datafile, check_positive, check_not_negative
from srtool.common.constants import meV, eps0
from srtool.input_data import (
	subband, material, read_transitions, read_distributions, read_potential)
from srtool.driver import compile_cc, compile_lo

import sys
import argparse




def load_material(args):
	"""Material defaults, from the YAML file if one was given."""
	if args.material is not None:
		return material.from_file(args.material)
	return material()

def override(value, default, unit=None):
	"""Command-line value if given, else the material default, as a plain
	number in unit (or dimensionless)."""
	if value is not None:
		return value
	if unit is None:
		return default.to(units.dimensionless).magnitude
	return default.to(unit).magnitude

def load_subbands(particle, m):
	"""Read subband energies, wavefunctions and carrier distributions from
	the working directory."""
	subbands = subband.read_from_file(
		"E{}.r".format(particle), "wf_{}".format(particle), ".r", m)
	read_distributions(subbands, "Ef.r", "N.r")
	return subbands

def open_archive(filename, mechanism, **properties):
	if filename is None:
		return None
	archive = datafile(filename, 'w')
	archive.set_property('srtool_version', srt.__version__)
	archive.set_property('mechanism', mechanism)
	for key, value in properties.items():
		archive.set_property(key, value)
	return archive




def run_cc(args):
	mat = load_material(args)
	m       = check_positive(override(args.mass, mat.mass, 'm_e'), 'mass') * units.m_e
	eps_r   = check_positive(override(args.epsilon, mat.eps_s), 'permittivity')
	T       = check_positive(args.temperature, 'temperature') * units.K
	W       = check_positive(args.width, 'well width') * units.angstrom

	print("# Material {}, m* = {}, epsilon = {}".format(mat.name, m, eps_r))

	subbands = load_subbands(args.particle, m.to('kg').magnitude)
	V = read_potential("v.r", subbands)
	transitions = read_transitions("rr.r", 4, len(subbands))

	archive = open_archive(args.hdf5, 'carrier-carrier',
		temperature=T, screening=not args.noscreening)
	try:
		compile_cc(subbands, V, transitions,
			threads=args.threads,
			archive=archive,
			ff_width=W.to('m').magnitude if args.outputff else None,
			T=T.to('K').magnitude,
			epsilon=eps_r*eps0,
			nki=args.nki, nkj=args.nkj, nalpha=args.nalpha,
			ntheta=args.ntheta, nq=args.nq,
			screening=not args.noscreening)
	finally:
		if archive is not None:
			archive.close()

def run_lo(args):
	mat = load_material(args)
	m       = check_positive(override(args.mass, mat.mass, 'm_e'), 'mass') * units.m_e
	eps_s   = check_positive(override(args.epss, mat.eps_s), 'static permittivity')
	eps_inf = check_positive(override(args.epsinf, mat.eps_inf), 'high-frequency permittivity')
	A0      = check_positive(override(args.latticeconst, mat.lattice, 'angstrom'),
		'lattice constant') * units.angstrom
	E_LO    = check_positive(override(args.ELO, mat.E_LO, 'meV'), 'phonon energy') * units.meV
	Te      = check_positive(args.Te, 'carrier temperature') * units.K
	Tl      = check_positive(args.Tl, 'lattice temperature') * units.K
	Ecutoff = None
	if args.Ecutoff is not None:
		Ecutoff = check_not_negative(args.Ecutoff, 'cut-off energy') * meV

	print("# Material {}, m* = {}, E_LO = {}".format(mat.name, m, E_LO))

	subbands = load_subbands(args.particle, m.to('kg').magnitude)
	transitions = read_transitions("rrp.r", 2, len(subbands))

	archive = open_archive(args.hdf5, 'LO-phonon',
		carrier_temperature=Te, lattice_temperature=Tl, phonon_energy=E_LO,
		screening=not args.noscreening, blocking=not args.noblocking)
	try:
		compile_lo(subbands, transitions,
			E_LO=E_LO.to('J').magnitude,
			Te=Te.to('K').magnitude,
			eps_s=eps_s*eps0,
			A0=A0.to('m').magnitude,
			nKz=args.nKz,
			screening=not args.noscreening,
			threads=args.threads,
			archive=archive,
			output_ff=args.outputff,
			Tl=Tl.to('K').magnitude,
			eps_inf=eps_inf*eps0,
			nki=args.nki,
			Ecutoff=Ecutoff,
			blocking=not args.noblocking)
	finally:
		if archive is not None:
			archive.close()




def build_parser():
	common = argparse.ArgumentParser(add_help=False)
	common.add_argument(
		'--material', type=str, default=None,
		help="YAML file with material parameters. Explicit options take precedence.")
	common.add_argument(
		'-a', '--outputff', action='store_true',
		help="Output form factors to file.")
	common.add_argument(
		'-S', '--noscreening', action='store_true',
		help="Disable screening.")
	common.add_argument(
		'-m', '--mass', type=float, default=None,
		help="Band-edge effective mass, relative to the free electron. Default 0.067.")
	common.add_argument(
		'-p', '--particle', type=str, default='e', choices=['e', 'h', 'l'],
		help="Particle: electrons, heavy holes or light holes. Default e.")
	common.add_argument(
		'--threads', type=int, default=1,
		help="Number of transitions computed in parallel. Default 1.")
	common.add_argument(
		'--hdf5', type=str, default=None,
		help="Also store all rate curves in this HDF5 file.")

	parser = argparse.ArgumentParser(
		description='Compute scattering rates between quantum-well subbands.')
	subparsers = parser.add_subparsers(dest='mechanism', required=True)

	cc = subparsers.add_parser('cc', parents=[common],
		help="Carrier-carrier scattering. Transitions are read from rr.r.")
	cc.add_argument(
		'-e', '--epsilon', type=float, default=None,
		help="Low-frequency relative permittivity. Default 13.18.")
	cc.add_argument(
		'-T', '--temperature', type=float, default=300,
		help="Carrier temperature in K. Default 300 K.")
	cc.add_argument(
		'-w', '--width', type=float, default=250,
		help="Well width in Å, only used to scale form-factor output. Default 250 Å.")
	cc.add_argument('--nki', type=int, default=101,
		help="Number of initial wavevector samples.")
	cc.add_argument('--nkj', type=int, default=101,
		help="Number of strips in the |kj| integration.")
	cc.add_argument('--nalpha', type=int, default=101,
		help="Number of strips in the alpha integration.")
	cc.add_argument('--ntheta', type=int, default=101,
		help="Number of strips in the theta integration.")
	cc.add_argument('--nq', type=int, default=101,
		help="Number of entries in the form-factor table.")
	cc.set_defaults(func=run_cc)

	lo = subparsers.add_parser('lo', parents=[common],
		help="Polar LO-phonon scattering. Transitions are read from rrp.r.")
	lo.add_argument(
		'-b', '--noblocking', action='store_true',
		help="Disable final-state blocking.")
	lo.add_argument(
		'-A', '--latticeconst', type=float, default=None,
		help="Lattice constant in the growth direction, in Å. Default 5.65 Å.")
	lo.add_argument(
		'-E', '--ELO', type=float, default=None,
		help="LO-phonon energy in meV. Default 36 meV.")
	lo.add_argument(
		'-e', '--epss', type=float, default=None,
		help="Static relative permittivity. Default 13.18.")
	lo.add_argument(
		'-f', '--epsinf', type=float, default=None,
		help="High-frequency relative permittivity. Default 10.89.")
	lo.add_argument(
		'--Te', type=float, default=300,
		help="Carrier temperature in K. Default 300 K.")
	lo.add_argument(
		'--Tl', type=float, default=300,
		help="Lattice temperature in K. Default 300 K.")
	lo.add_argument(
		'--Ecutoff', type=float, default=None,
		help="Cut-off energy for the carrier distribution in meV. If not "
		     "given, 5kT above the Fermi energy.")
	lo.add_argument('--nki', type=int, default=1001,
		help="Number of initial wavevector samples.")
	lo.add_argument('--nKz', type=int, default=1001,
		help="Number of phonon wavevector samples.")
	lo.set_defaults(func=run_lo)

	return parser

def main(argv=None):
	args = build_parser().parse_args(argv)

	print("This is srtool version {}".format(srt.__version__))

	try:
		args.func(args)
	except (RuntimeError, ValueError, OSError) as err:
		print("srtool: error: {}".format(err), file=sys.stderr)
		sys.exit(1)

if __name__ == '__main__':
	main()
