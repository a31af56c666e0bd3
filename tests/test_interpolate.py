import numpy as np
import pytest

from srtool.common import lookup_table, TableRangeError


def make_table():
	q = np.linspace(0, 2e9, 21)
	return lookup_table(q, np.exp(-q/1e9) + 0.1*np.sin(q/3e8))


def test_lookup_at_stored_points_returns_stored_values():
	table = make_table()
	for q, value in zip(table.x, table.y):
		assert table(q) == pytest.approx(value, rel=1e-12, abs=1e-15)


def test_lookup_between_points_lies_between_neighbours():
	table = make_table()
	midpoints = 0.5*(table.x[1:] + table.x[:-1])
	values = table(midpoints)

	low = np.minimum(table.y[1:], table.y[:-1])
	high = np.maximum(table.y[1:], table.y[:-1])
	assert np.all(values >= low - 1e-15)
	assert np.all(values <= high + 1e-15)


def test_lookup_is_linear_between_points():
	table = lookup_table([0.0, 1.0, 3.0], [2.0, 4.0, 0.0])
	assert table(0.25) == pytest.approx(2.5)
	assert table(2.0) == pytest.approx(2.0)
	assert table(3.0) == pytest.approx(0.0)


def test_lookup_beyond_table_is_an_error():
	table = make_table()
	with pytest.raises(TableRangeError):
		table(table.get_max() * 1.001)


def test_lookup_tolerates_rounding_at_the_last_point():
	table = make_table()
	q = table.get_max() * (1 + 1e-15)
	assert table(q) == pytest.approx(table.y[-1])


def test_lookup_of_arrays_keeps_shape():
	table = make_table()
	q = np.array([[0.0, 1e9], [1.5e9, 2e9]])
	assert table(q).shape == (2, 2)


@pytest.mark.parametrize("x, y", [
	([0.0, 1.0, 1.0], [1.0, 2.0, 3.0]),
	([1.0, 0.0], [1.0, 2.0]),
	([0.0], [1.0]),
	([0.0, 1.0], [1.0, 2.0, 3.0]),
])
def test_invalid_tables_are_rejected(x, y):
	with pytest.raises(ValueError):
		lookup_table(x, y)
