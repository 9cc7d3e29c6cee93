import math

import numpy as np
import pytest

from holefill.core.errors import InvalidGridStateError
from holefill.core.grid import Grid, Point, HOLE_VALUE


def test_point_identity_ignores_intensity():
    a = Point(2, 3, 0.1)
    b = Point(2, 3, 0.9)
    assert a == b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1
    assert Point(3, 2, 0.1) != a


def test_point_update_in_place_keeps_set_membership():
    p = Point(1, 1, HOLE_VALUE)
    points = frozenset([p])
    assert p.is_hole
    p.intensity = 0.25
    assert p in points
    assert not next(iter(points)).is_hole


def test_point_coordinates_are_read_only():
    p = Point(4, 5, 0.5)
    with pytest.raises(AttributeError):
        p.x = 1
    assert p.coords == (4, 5)


def test_grid_from_array_indexing():
    values = np.array([
        [0.0, 0.1, 0.2],
        [0.3, -1.0, 0.5],
    ], dtype=np.float32)
    grid = Grid.from_array(values)
    assert grid.shape == (2, 3)
    assert grid.height == 2 and grid.width == 3
    assert len(grid) == 6
    assert grid.at(2, 0).intensity == pytest.approx(0.2)
    assert grid[1, 1].is_hole
    assert grid.at(1, 1).coords == (1, 1)
    np.testing.assert_allclose(grid.to_array(), values)


def test_grid_iterates_row_major():
    grid = Grid.from_array([[0.1, 0.2], [0.3, 0.4]])
    assert [c.coords for c in grid] == [(0, 0), (1, 0), (0, 1), (1, 1)]


def test_grid_bounds():
    grid = Grid.from_array([[0.1, 0.2], [0.3, 0.4]])
    assert grid.in_bounds(1, 1)
    assert not grid.in_bounds(2, 0)
    assert not grid.in_bounds(0, -1)
    with pytest.raises(IndexError):
        grid.at(-1, 0)


@pytest.mark.parametrize("values", [[], [[]], np.zeros((0, 4))])
def test_empty_grid_rejected(values):
    with pytest.raises(InvalidGridStateError):
        Grid.from_array(values)


def test_ragged_grid_rejected():
    with pytest.raises(InvalidGridStateError) as excinfo:
        Grid.from_array([[0.1, 0.2], [0.3]])
    assert excinfo.value.point == (0, 1)


def test_non_2d_array_rejected():
    with pytest.raises(InvalidGridStateError):
        Grid.from_array(np.zeros((2, 2, 3)))


@pytest.mark.parametrize("bad", [1.5, -0.5, -2.0, math.nan, math.inf])
def test_out_of_range_value_rejected(bad):
    with pytest.raises(InvalidGridStateError) as excinfo:
        Grid.from_array([[0.1, 0.2], [0.3, bad]])
    assert excinfo.value.point == (1, 1)


def test_validate_catches_later_corruption():
    grid = Grid.from_array([[0.1, -1.0], [0.3, 0.4]])
    grid.at(0, 0).intensity = 3.0
    with pytest.raises(InvalidGridStateError):
        grid.validate()
