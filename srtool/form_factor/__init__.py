from . import coulomb
from . import phonon
