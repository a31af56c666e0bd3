import numpy as np
import h5py
from srtool.common import units

class datafile:
    """Archive of scattering-rate curves, stored as HDF5 with units. It is a
    thin wrapper around h5py.

    Each transition is stored as a "group", containing a rate dataset that has
    the carrier energy attached as its dimension scale. Scalar results, such as
    the Fermi-weighted mean rate, are stored as attributes of the group, in
    the form value - unit.

    Global run properties (temperatures, flags, version) are stored as file
    attributes. Strings and plain numbers are stored directly; pint quantities
    are stored as value - unit pairs.
    """

    def __init__(self, filename, mode):
        """Open a file. Mode can be any of:
            r  Read-only, file must exist
            w  Create file, truncate if exists
            a  Read-write if exists, create otherwise
        """
        self.file = h5py.File(filename, mode)
    def close(self):
        self.file.close()


    def create_group(self, name):
        return datafile_group(self.file.create_group(name))
    def get_group(self, key):
        return datafile_group(self.file[key])
    def list_groups(self, key='/'):
        return list(self.file[key].keys())


    def set_property(self, key, value, unit=None):
        _set_attribute(self.file.attrs, key, value, unit)
    def get_property(self, key):
        return _get_attribute(self.file.attrs, key)


    def __enter__(self):
        return self
    def __exit__(self, exc_type, exc_value, traceback):
        self.close()




class datafile_group:
    """One transition: a rate curve, its energy scale, and scalar results."""
    def __init__(self, h5_group):
        self.group = h5_group


    def add_curve(self, energy, rate, energy_unit='meV', rate_unit='1/s'):
        """Store a rate curve with the carrier energy as dimension scale."""
        if len(energy) != len(rate):
            raise ValueError('Energy scale and rate have different lengths.')

        energy, energy_unit = _strip_unit(energy, energy_unit)
        rate, rate_unit = _strip_unit(rate, rate_unit)

        h5_scale = self.group.create_dataset('energy', data = energy)
        h5_scale.attrs['units'] = energy_unit.encode('ascii')
        h5_scale.make_scale('energy')

        h5_dset = self.group.create_dataset('rate', data = rate)
        h5_dset.attrs['units'] = rate_unit.encode('ascii')
        h5_dset.dims[0].attach_scale(h5_scale)

    def get_dataset(self, name):
        h5_dset = self.group[name]
        return np.copy(h5_dset[()]) * units(h5_dset.attrs['units'].decode('ascii'))


    def set_property(self, key, value, unit=None):
        _set_attribute(self.group.attrs, key, value, unit)
    def get_property(self, key):
        return _get_attribute(self.group.attrs, key)




def _set_attribute(attrs, key, value, unit):
    if unit is None and isinstance(value, (bool, float, int, np.floating, np.integer)):
        attrs[key] = value
    elif isinstance(value, str):
        attrs[key] = value.encode('ascii')
    else:
        value, unit = _strip_unit(value, unit)
        attrs[key] = np.array((value, unit.encode('ascii')),
            dtype=np.dtype([('value', float),
                            ('unit', h5py.special_dtype(vlen=bytes))]))

def _get_attribute(attrs, key):
    value = attrs[key]
    if isinstance(value, bytes):
        return value.decode('ascii')
    if isinstance(value, np.ndarray) and value.dtype.names is not None:
        return float(value['value']) * units(value['unit'].decode('ascii'))
    if isinstance(value, np.void):
        return float(value['value']) * units(value['unit'].decode('ascii'))
    return value

def _strip_unit(value, unit = None):
    """Split a value into a plain magnitude and a unit string.

    Quantities are converted to unit if given. Plain numbers are assumed to
    already be in unit."""
    if hasattr(value, 'units'):
        if unit is None:
            return value.magnitude, str(value.units)
        return value.to(unit).magnitude, unit

    if unit is None:
        unit = ''
    return value, unit
