from setuptools import setup

setup(
	name = 'srtool',
	version = '1.0.0',
	description = 'Computes carrier-carrier and LO-phonon scattering rates in quantum-well subbands',
	packages = ['srtool',
		'srtool.common', 'srtool.form_factor', 'srtool.input_data',
		'srtool.scattering', 'srtool.screening',
		'srtool.apps'
	],
	package_dir = {
		'srtool': 'srtool',
		'srtool.apps': 'apps'
	},
	install_requires = ['numpy', 'scipy', 'pyyaml', 'h5py', 'numba', 'pint>=0.11'],
	extras_require = {'test': ['pytest']},
	entry_points = {'console_scripts': ['srtool = srtool.apps.srtool:main']},
)
