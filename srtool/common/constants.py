# Physical constants in SI units, taken from the pint registry so that the
# numerical kernels can work with plain floats.
import numpy as np
from srtool.common import units

pi   = np.pi
e    = (1*units.elementary_charge).to('C').magnitude
hBar = (1*units.hbar).to('J*s').magnitude
me   = (1*units.m_e).to('kg').magnitude
eps0 = (1*units.vacuum_permittivity).to('F/m').magnitude
kB   = (1*units.boltzmann_constant).to('J/K').magnitude

# One milli-electronvolt, the energy unit of all text files
meV  = 1e-3 * e
