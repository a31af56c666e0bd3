from pint import UnitRegistry
units = UnitRegistry()

from .interpolate import lookup_table, lookup, TableRangeError
from .text_table import (
	read_table, read_last_column, write_table, FileLinesNotAsExpected,
	check_positive, check_not_negative)
from .datafile import datafile
