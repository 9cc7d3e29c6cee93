"""
End-to-end hole filling on a single grid.
"""

from ..core.regions import RegionDetector
from ..core.weighting import as_weighting_function
from .exact import ExactFill

DEFAULT_CONNECTIVITY = 8


class HoleFiller:
    """
    Detects the hole and its boundary once, then fills the hole in place.

    Parameters:
    - grid: Grid with -1 marking hole pixels
    - connectivity: 4 or 8, used to find the boundary
    - weighting: WeightingFunction or callable (default weighting if None)
    - strategy: FillStrategy instance (ExactFill if None)
    - edge_policy: "skip" or "raise" for hole pixels on the image border
    """

    def __init__(self, grid, connectivity=DEFAULT_CONNECTIVITY, weighting=None,
                 strategy=None, edge_policy="skip"):
        self.grid = grid
        self.weighting = as_weighting_function(weighting)
        self.strategy = strategy if strategy is not None else ExactFill()
        self.regions = RegionDetector(connectivity, edge_policy).detect(grid)

    @property
    def hole(self):
        return self.regions.hole

    @property
    def boundary(self):
        return self.regions.boundary

    def fill_holes(self):
        """Fill every hole pixel and return the strategy's summary dict."""
        return self.strategy.fill(self.regions, self.weighting)

    def result(self, dtype=None):
        """Current grid intensities as a numpy array."""
        if dtype is None:
            return self.grid.to_array()
        return self.grid.to_array(dtype=dtype)
