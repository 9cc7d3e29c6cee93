"""
Pixel grid model: coordinates plus a mutable intensity per pixel.
"""

import math

import numpy as np

from .errors import InvalidGridStateError

# Intensity marking a pixel inside the hole that has not been filled yet
HOLE_VALUE = -1.0


class Point:
    """
    A single pixel.

    ``x`` is the column and ``y`` the row. Equality and hashing use the
    coordinates only, so a point keeps its identity inside a set while its
    intensity is updated in place.
    """

    __slots__ = ("_x", "_y", "intensity")

    def __init__(self, x, y, intensity):
        self._x = int(x)
        self._y = int(y)
        self.intensity = float(intensity)

    @property
    def x(self):
        return self._x

    @property
    def y(self):
        return self._y

    @property
    def coords(self):
        return (self._x, self._y)

    @property
    def is_hole(self):
        return self.intensity == HOLE_VALUE

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return self._x == other._x and self._y == other._y

    def __hash__(self):
        return hash((self._x, self._y))

    def __repr__(self):
        return f"Point(x={self._x}, y={self._y}, intensity={self.intensity:.4f})"


class Grid:
    """
    Rectangular ``height x width`` array of :class:`Point`.

    The dimensions are fixed once the grid is built; only the intensities of
    the cells change.
    """

    def __init__(self, cells):
        rows = [list(row) for row in cells]
        if not rows or not rows[0]:
            raise InvalidGridStateError("Grid must have at least one row and one column")
        width = len(rows[0])
        for y, row in enumerate(rows):
            if len(row) != width:
                raise InvalidGridStateError(
                    f"Grid is not rectangular: row {y} has {len(row)} cells, expected {width}",
                    point=(0, y),
                )
            for x, cell in enumerate(row):
                if cell.coords != (x, y):
                    raise InvalidGridStateError(
                        f"Cell {cell!r} stored at position (x={x}, y={y})", point=(x, y)
                    )
        self._cells = rows
        self._height = len(rows)
        self._width = width
        self.validate()

    @classmethod
    def from_array(cls, values):
        """
        Build a grid from a 2D array of intensities.

        Parameters:
        - values: 2D numpy array or nested lists with -1 for hole pixels and
          values in [0, 1] elsewhere

        Returns:
        - grid: new Grid owning its own cells
        """
        if isinstance(values, np.ndarray):
            if values.ndim != 2:
                raise InvalidGridStateError(
                    f"Expected a 2D intensity array, got shape {values.shape}"
                )
            rows = values.tolist()
        else:
            rows = [list(row) for row in values]
        cells = [
            [Point(x, y, value) for x, value in enumerate(row)]
            for y, row in enumerate(rows)
        ]
        return cls(cells)

    @property
    def height(self):
        return self._height

    @property
    def width(self):
        return self._width

    @property
    def shape(self):
        return (self._height, self._width)

    def in_bounds(self, x, y):
        return 0 <= x < self._width and 0 <= y < self._height

    def at(self, x, y):
        """Return the cell in column ``x``, row ``y``."""
        if not self.in_bounds(x, y):
            raise IndexError(f"({x}, {y}) is outside a {self._width}x{self._height} grid")
        return self._cells[y][x]

    def __getitem__(self, index):
        y, x = index
        return self.at(x, y)

    def __iter__(self):
        for row in self._cells:
            yield from row

    def __len__(self):
        return self._height * self._width

    def validate(self):
        """Raise InvalidGridStateError on the first cell outside {-1} U [0, 1]."""
        for cell in self:
            value = cell.intensity
            if math.isnan(value) or math.isinf(value):
                raise InvalidGridStateError(
                    f"Non-finite intensity {value} at (x={cell.x}, y={cell.y})",
                    point=cell.coords,
                )
            if value != HOLE_VALUE and not 0.0 <= value <= 1.0:
                raise InvalidGridStateError(
                    f"Intensity {value} at (x={cell.x}, y={cell.y}) is neither "
                    f"the hole value {HOLE_VALUE} nor in [0, 1]",
                    point=cell.coords,
                )

    def to_array(self, dtype=np.float32):
        """Return the intensities as a ``height x width`` numpy array."""
        return np.array(
            [[cell.intensity for cell in row] for row in self._cells], dtype=dtype
        )

    def __repr__(self):
        return f"Grid(height={self._height}, width={self._width})"
