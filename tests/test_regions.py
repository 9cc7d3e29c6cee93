import dataclasses

import numpy as np
import pytest

from holefill.core.errors import BoundaryAdjacencyError, InvalidGridStateError
from holefill.core.grid import Grid, HOLE_VALUE
from holefill.core.regions import RegionDetector, Regions, find_boundary, find_hole


def _grid_with_holes(height, width, holes, fill=0.5):
    values = np.full((height, width), fill, dtype=np.float32)
    for x, y in holes:
        values[y, x] = HOLE_VALUE
    return Grid.from_array(values)


def _coords(points):
    return {p.coords for p in points}


def test_single_hole_four_connectivity():
    grid = _grid_with_holes(10, 10, [(5, 5)])
    regions = RegionDetector(connectivity=4).detect(grid)
    assert _coords(regions.hole) == {(5, 5)}
    assert _coords(regions.boundary) == {(4, 5), (6, 5), (5, 4), (5, 6)}


def test_single_hole_eight_connectivity():
    grid = _grid_with_holes(10, 10, [(5, 5)])
    regions = RegionDetector(connectivity=8).detect(grid)
    assert len(regions.boundary) == 8
    expected = {(5 + dx, 5 + dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1)} - {(5, 5)}
    assert _coords(regions.boundary) == expected


@pytest.mark.parametrize("connectivity", [4, 8])
def test_boundary_matches_brute_force(connectivity):
    holes = [(3, 3), (4, 3), (5, 3), (4, 4), (4, 5), (7, 6)]
    grid = _grid_with_holes(10, 12, holes)
    regions = RegionDetector(connectivity=connectivity).detect(grid)

    if connectivity == 4:
        offsets = [(-1, 0), (1, 0), (0, -1), (0, 1)]
    else:
        offsets = [(dx, dy) for dx in (-1, 0, 1) for dy in (-1, 0, 1) if (dx, dy) != (0, 0)]
    expected = set()
    for x, y in holes:
        for dx, dy in offsets:
            if (x + dx, y + dy) not in holes:
                expected.add((x + dx, y + dy))

    assert _coords(regions.hole) == set(holes)
    assert _coords(regions.boundary) == expected
    assert not (regions.hole & regions.boundary)
    assert all(not p.is_hole for p in regions.boundary)


def test_shared_neighbour_listed_once():
    grid = _grid_with_holes(5, 5, [(1, 2), (3, 2)])
    boundary = find_boundary(grid, find_hole(grid), connectivity=4)
    assert (2, 2) in _coords(boundary)
    assert len(boundary) == 7


def test_hole_at_corner_skips_outside_neighbours():
    grid = _grid_with_holes(4, 4, [(0, 0)])
    regions = RegionDetector(connectivity=4, edge_policy="skip").detect(grid)
    assert _coords(regions.boundary) == {(1, 0), (0, 1)}

    regions = RegionDetector(connectivity=8, edge_policy="skip").detect(grid)
    assert _coords(regions.boundary) == {(1, 0), (0, 1), (1, 1)}


def test_hole_at_edge_raises_when_requested():
    grid = _grid_with_holes(4, 4, [(3, 1)])
    with pytest.raises(BoundaryAdjacencyError) as excinfo:
        RegionDetector(connectivity=4, edge_policy="raise").detect(grid)
    assert excinfo.value.point == (3, 1)
    assert excinfo.value.neighbor == (4, 1)


def test_no_hole_gives_empty_sets():
    grid = _grid_with_holes(3, 3, [])
    regions = RegionDetector().detect(grid)
    assert regions.hole == frozenset()
    assert regions.boundary == frozenset()


def test_all_hole_gives_empty_boundary():
    grid = Grid.from_array(np.full((3, 3), HOLE_VALUE))
    regions = RegionDetector().detect(grid)
    assert len(regions.hole) == 9
    assert regions.boundary == frozenset()


@pytest.mark.parametrize("connectivity", [0, 6, "4"])
def test_invalid_connectivity(connectivity):
    with pytest.raises(ValueError):
        RegionDetector(connectivity=connectivity)


def test_invalid_edge_policy():
    with pytest.raises(ValueError):
        RegionDetector(edge_policy="clamp")


def test_detect_validates_grid():
    grid = _grid_with_holes(3, 3, [(1, 1)])
    grid.at(0, 0).intensity = 1.2
    with pytest.raises(InvalidGridStateError) as excinfo:
        RegionDetector().detect(grid)
    assert excinfo.value.point == (0, 0)


def test_regions_snapshot_is_frozen():
    grid = _grid_with_holes(5, 5, [(2, 2)])
    regions = RegionDetector(connectivity=4).detect(grid)
    with pytest.raises(dataclasses.FrozenInstanceError):
        regions.boundary = frozenset()

    # Filling changes intensities, not membership
    for p in regions.hole:
        p.intensity = 0.3
    assert _coords(regions.hole) == {(2, 2)}
    assert len(regions.boundary) == 4


def test_regions_reject_overlap():
    grid = _grid_with_holes(3, 3, [(1, 1)])
    p = grid.at(1, 1)
    q = grid.at(0, 1)
    with pytest.raises(InvalidGridStateError) as excinfo:
        Regions(hole=frozenset([p, q]), boundary=frozenset([p, q]), connectivity=4)
    assert excinfo.value.point == (0, 1)
    assert isinstance(excinfo.value, ValueError)
