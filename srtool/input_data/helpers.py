from srtool.common import units

def load_quantity(yaml_data, name, target_units, default=None):
	"""Read a quantity such as '0.067 m_e' or '36 meV' from parsed YAML data.

	Plain numbers are read as dimensionless. If the key is absent, default is
	returned instead."""
	if name not in yaml_data:
		return default

	value = units.Quantity(yaml_data[name])
	if not value.is_compatible_with(target_units):
		raise RuntimeError('Inconsistent units for {}: got {}, expected {}'.format(
			name, value.units, target_units))

	return value.to(target_units)
