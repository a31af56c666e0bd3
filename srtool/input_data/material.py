import yaml
from srtool.common import units
from .helpers import load_quantity

class material:
	"""Material parameters entering the scattering rates.

	Defaults describe GaAs. All values are pint quantities.

	Properties:
	 - name:      Name of the material
	 - mass:      Band-edge effective mass
	 - eps_s:     Static (low-frequency) relative permittivity
	 - eps_inf:   High-frequency relative permittivity
	 - lattice:   Lattice constant in the growth direction
	 - E_LO:      LO-phonon energy
	"""

	def __init__(self, yaml_data=None):
		if yaml_data is None:
			yaml_data = {}

		self.name    = yaml_data.get('name', 'GaAs')
		self.mass    = load_quantity(yaml_data, 'mass', units.m_e, 0.067*units.m_e)
		self.eps_s   = load_quantity(yaml_data, 'eps_s', units.dimensionless,
			13.18*units.dimensionless)
		self.eps_inf = load_quantity(yaml_data, 'eps_inf', units.dimensionless,
			10.89*units.dimensionless)
		self.lattice = load_quantity(yaml_data, 'lattice', units.angstrom,
			5.65*units.angstrom)
		self.E_LO    = load_quantity(yaml_data, 'E_LO', units.meV, 36.0*units.meV)

		for key in ['mass', 'eps_s', 'eps_inf', 'lattice', 'E_LO']:
			if getattr(self, key).magnitude <= 0:
				raise RuntimeError("Material parameter {} must be positive, "
					"got {}".format(key, getattr(self, key)))

	@classmethod
	def from_file(cls, filename):
		"""Load parameters from a YAML file. Missing keys keep their defaults."""
		with open(filename, encoding='utf-8') as file:
			data = yaml.safe_load(file)
		if data is None:
			data = {}
		if not isinstance(data, dict):
			raise RuntimeError("Material file {} does not contain a mapping".format(filename))
		return cls(data)
