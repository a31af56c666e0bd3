import numpy as np

class FileLinesNotAsExpected(RuntimeError):
	"""A data file does not contain the expected number of records."""

	def __init__(self, filename, nlines_expected, nlines_read):
		self.filename = filename
		self.nlines_expected = nlines_expected
		self.nlines_read = nlines_read
		super().__init__("{} contains {} lines of data. Expected {}".format(
			filename, nlines_read, nlines_expected))


def read_table(filename, ncols=None, nrows=None):
	"""Read a whitespace-delimited numeric table.

	Lines starting with '#' are ignored. Returns a 2D array with one row per
	record.

	Parameters:
	 - filename: Name of the file
	 - ncols:    Required number of columns, or None to accept any
	 - nrows:    Required number of records, or None to accept any
	"""
	data = np.loadtxt(filename, ndmin=2)

	if nrows is not None and data.shape[0] != nrows:
		raise FileLinesNotAsExpected(filename, nrows, data.shape[0])
	if ncols is not None and data.shape[0] > 0 and data.shape[1] != ncols:
		raise RuntimeError("{} contains {} columns of data. Expected {}".format(
			filename, data.shape[1], ncols))

	return data

def read_last_column(filename, nrows=None):
	"""Read the last column of a table.

	Many input files optionally carry an index column in front of the value,
	this reads the value regardless.
	"""
	data = read_table(filename, nrows=nrows)
	if data.shape[0] == 0:
		return np.zeros(0)
	return data[:,-1]

def write_table(filename, *columns, fmt='%20.17e'):
	"""Write equal-length columns to a whitespace-delimited text file.

	fmt is either a single format used for every column, or a list with one
	format per column.
	"""
	lengths = set(len(c) for c in columns)
	if len(lengths) > 1:
		raise ValueError("Cannot write columns of different lengths "
			"{} to {}".format(sorted(lengths), filename))

	if not isinstance(fmt, str):
		fmt = ' '.join(fmt)
	else:
		fmt = ' '.join([fmt] * len(columns))

	with open(filename, 'w') as file:
		for row in zip(*columns):
			file.write(fmt % tuple(row) + '\n')


def check_positive(value, name='Value'):
	"""Checks that a property is positive and nonzero"""
	if not value > 0:
		raise ValueError("Nonpositive {} ({}) detected.".format(name, value))
	return value

def check_not_negative(value, name='Value'):
	"""Checks that a property is not negative"""
	if not value >= 0:
		raise ValueError("Negative {} ({}) detected.".format(name, value))
	return value
