__version__ = '1.0.0'

from . import common
from . import input_data
from . import form_factor
from . import screening
from . import scattering
