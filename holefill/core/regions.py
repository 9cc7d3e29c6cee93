"""
Hole and boundary detection over a pixel grid.
"""

from dataclasses import dataclass
from typing import FrozenSet

from .errors import BoundaryAdjacencyError, InvalidGridStateError
from .grid import Grid, Point

FOUR_NEIGHBORS = ((-1, 0), (1, 0), (0, -1), (0, 1))
EIGHT_NEIGHBORS = FOUR_NEIGHBORS + ((-1, -1), (-1, 1), (1, -1), (1, 1))

CONNECTIVITY_OFFSETS = {
    4: FOUR_NEIGHBORS,
    8: EIGHT_NEIGHBORS,
}

# What to do with a neighbour that falls outside the grid
EDGE_POLICIES = ("skip", "raise")


@dataclass(frozen=True)
class Regions:
    """Snapshot of the hole (H) and boundary (B) taken right after loading.

    The sets are not recomputed while the hole is being filled; only the
    intensities of their members change.
    """

    hole: FrozenSet[Point]
    boundary: FrozenSet[Point]
    connectivity: int

    def __post_init__(self):
        overlap = sorted(self.hole & self.boundary, key=lambda p: (p.y, p.x))
        if overlap:
            first = overlap[0]
            raise InvalidGridStateError(
                f"Hole and boundary overlap at {[p.coords for p in overlap]}: "
                f"pixel (x={first.x}, y={first.y}) cannot be both",
                point=first.coords,
            )


def neighbor_offsets(connectivity):
    """Return the (dx, dy) offsets for 4- or 8-connectivity."""
    try:
        return CONNECTIVITY_OFFSETS[connectivity]
    except KeyError:
        raise ValueError(f"Connectivity must be 4 or 8, got {connectivity!r}") from None


def find_hole(grid: Grid) -> FrozenSet[Point]:
    """Return every cell of ``grid`` that still carries the hole value."""
    return frozenset(cell for cell in grid if cell.is_hole)


def find_boundary(grid: Grid, hole, connectivity=8, edge_policy="skip") -> FrozenSet[Point]:
    """
    Collect the non-hole neighbours of the hole pixels.

    Parameters:
    - grid: grid the hole was detected on
    - hole: set of hole points
    - connectivity: 4 (orthogonal) or 8 (orthogonal + diagonal)
    - edge_policy: "skip" ignores neighbours outside the grid,
      "raise" raises BoundaryAdjacencyError for them

    Returns:
    - boundary: frozenset of boundary points, each listed once
    """
    offsets = neighbor_offsets(connectivity)
    if edge_policy not in EDGE_POLICIES:
        raise ValueError(f"edge_policy must be one of {EDGE_POLICIES}, got {edge_policy!r}")

    boundary = set()
    for p in hole:
        for dx, dy in offsets:
            nx, ny = p.x + dx, p.y + dy
            if not grid.in_bounds(nx, ny):
                if edge_policy == "raise":
                    raise BoundaryAdjacencyError(
                        f"Hole pixel (x={p.x}, y={p.y}) touches the image border: "
                        f"neighbour (x={nx}, y={ny}) is outside the "
                        f"{grid.width}x{grid.height} grid",
                        point=p.coords,
                        neighbor=(nx, ny),
                    )
                continue
            neighbor = grid.at(nx, ny)
            if not neighbor.is_hole:
                boundary.add(neighbor)
    return frozenset(boundary)


class RegionDetector:
    """Finds H and B on a grid for a fixed connectivity and edge policy."""

    def __init__(self, connectivity=8, edge_policy="skip"):
        neighbor_offsets(connectivity)
        if edge_policy not in EDGE_POLICIES:
            raise ValueError(f"edge_policy must be one of {EDGE_POLICIES}, got {edge_policy!r}")
        self.connectivity = connectivity
        self.edge_policy = edge_policy

    def detect(self, grid: Grid) -> Regions:
        grid.validate()
        hole = find_hole(grid)
        boundary = find_boundary(grid, hole, self.connectivity, self.edge_policy)
        return Regions(hole=hole, boundary=boundary, connectivity=self.connectivity)
