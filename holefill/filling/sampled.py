"""
Sampled fill: each hole pixel averages a fresh random subset of the boundary.
"""

import numpy as np

from ..core.errors import InsufficientBoundaryError
from .base import FillStrategy

DEFAULT_SAMPLE_SIZE = 10

# What to do when the boundary has fewer pixels than the sample size
SMALL_BOUNDARY_POLICIES = ("clamp", "raise")


class SampledFill(FillStrategy):
    """
    O(|H| x k) approximation of :class:`ExactFill`.

    For every hole pixel ``k`` boundary pixels are drawn uniformly without
    replacement from a single ``numpy.random.Generator``; passing ``seed``
    makes a run reproducible. With the default ``"clamp"`` policy a boundary
    smaller than ``k`` is used whole.
    """

    name = "sampled"

    def __init__(self, sample_size=DEFAULT_SAMPLE_SIZE, seed=None,
                 on_small_boundary="clamp", on_empty="raise", show_progress=False):
        super().__init__(on_empty=on_empty, show_progress=show_progress)
        if sample_size < 1:
            raise ValueError(f"sample_size must be at least 1, got {sample_size}")
        if on_small_boundary not in SMALL_BOUNDARY_POLICIES:
            raise ValueError(
                f"on_small_boundary must be one of {SMALL_BOUNDARY_POLICIES}, "
                f"got {on_small_boundary!r}"
            )
        self.sample_size = int(sample_size)
        self.seed = seed
        self.on_small_boundary = on_small_boundary
        self._rng = None

    def _prepare(self, n_boundary):
        if n_boundary < self.sample_size and self.on_small_boundary == "raise":
            raise InsufficientBoundaryError(
                f"Boundary has {n_boundary} pixels, fewer than the sample size "
                f"{self.sample_size}",
                available=n_boundary,
                requested=self.sample_size,
            )
        self._rng = np.random.default_rng(self.seed)

    def _select(self, u, n_boundary):
        k = min(self.sample_size, n_boundary)
        if k == 0:
            return np.empty(0, dtype=np.intp)
        return self._rng.choice(n_boundary, size=k, replace=False)

    def __repr__(self):
        return (f"SampledFill(sample_size={self.sample_size}, seed={self.seed!r}, "
                f"on_small_boundary={self.on_small_boundary!r}, on_empty={self.on_empty!r})")
