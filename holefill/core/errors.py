"""
Exceptions raised by the hole filling core.
"""


class HoleFillError(Exception):
    """Base class for every error raised by holefill."""

    def __init__(self, message, point=None):
        super().__init__(message)
        self.point = point


class InvalidGridStateError(HoleFillError, ValueError):
    """Grid is empty, ragged, or holds a value outside {-1} U [0, 1]."""


class BoundaryAdjacencyError(HoleFillError, IndexError):
    """A hole pixel's neighbour falls outside the grid."""

    def __init__(self, message, point=None, neighbor=None):
        super().__init__(message, point)
        self.neighbor = neighbor


class EmptyBoundaryError(HoleFillError):
    """A hole pixel has no boundary pixel to take its value from."""


class InsufficientBoundaryError(EmptyBoundaryError):
    """Fewer boundary pixels than the requested sample size."""

    def __init__(self, message, point=None, available=0, requested=0):
        super().__init__(message, point)
        self.available = available
        self.requested = requested


class WeightingError(HoleFillError, ValueError):
    """Weighting function returned a negative or non-finite weight."""


class ImageLoadError(HoleFillError, IOError):
    """Image or mask file could not be read."""


class ImageSaveError(HoleFillError, IOError):
    """Result image could not be written."""
