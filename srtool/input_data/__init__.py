from .subband import subband
from .material import material
from .transitions import read_transitions, read_distributions, read_potential
