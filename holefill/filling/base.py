"""
Shared accumulation loop for the hole fill strategies.
"""

import time
from abc import ABC, abstractmethod

import numpy as np
from tqdm import tqdm

from ..core.errors import EmptyBoundaryError, WeightingError
from ..core.weighting import as_weighting_function

EMPTY_POLICIES = ("raise", "skip")


def _row_major(points):
    return sorted(points, key=lambda p: (p.y, p.x))


class FillStrategy(ABC):
    """
    Computes a new intensity for every hole pixel from boundary pixels.

    For each hole pixel ``u`` the new value is
    ``sum(w(u, v) * I(v)) / sum(w(u, v))`` over the boundary pixels ``v``
    chosen by :meth:`_select`. Boundary intensities are copied before the
    pass starts, so the result does not depend on iteration order.
    """

    name = "base"

    def __init__(self, on_empty="raise", show_progress=False):
        if on_empty not in EMPTY_POLICIES:
            raise ValueError(f"on_empty must be one of {EMPTY_POLICIES}, got {on_empty!r}")
        self.on_empty = on_empty
        self.show_progress = show_progress

    @abstractmethod
    def _select(self, u, n_boundary):
        """Return the boundary indices contributing to ``u`` (None for all)."""

    def _prepare(self, n_boundary):
        """Hook run once per pass before any hole pixel is processed."""

    def fill(self, regions, weighting=None):
        """
        Overwrite the intensity of every hole pixel in ``regions``.

        Parameters:
        - regions: Regions snapshot from RegionDetector.detect
        - weighting: WeightingFunction or plain callable (default weighting if None)

        Returns:
        - summary: dict with 'filled', 'skipped' (list of (x, y)),
          'strategy' and 'elapsed' (seconds)
        """
        weighting = as_weighting_function(weighting)
        start_time = time.time()

        boundary = _row_major(regions.boundary)
        coords = np.array([p.coords for p in boundary], dtype=np.float64).reshape(-1, 2)
        values = np.array([p.intensity for p in boundary], dtype=np.float64)
        hole = _row_major(regions.hole)
        if not hole:
            return {'filled': 0, 'skipped': [], 'strategy': self.name,
                    'elapsed': time.time() - start_time}

        self._prepare(len(boundary))

        # Values are computed for all pixels first so a failure leaves the grid untouched
        new_values = []
        skipped = []
        pixels = tqdm(hole, desc=f"Filling ({self.name})") if self.show_progress else hole
        for u in pixels:
            idx = self._select(u, len(boundary))
            if idx is None:
                sel_points, sel_coords, sel_values = boundary, coords, values
            else:
                sel_points = [boundary[i] for i in idx]
                sel_coords, sel_values = coords[idx], values[idx]

            w = np.asarray(weighting.weights(u, sel_points, sel_coords), dtype=np.float64)
            if w.shape != sel_values.shape:
                raise WeightingError(
                    f"Weighting returned {w.shape} weights for {len(sel_values)} boundary pixels",
                    point=u.coords,
                )
            if not np.all(np.isfinite(w)) or np.any(w < 0):
                raise WeightingError(
                    f"Weighting produced a negative or non-finite weight for hole pixel "
                    f"(x={u.x}, y={u.y})",
                    point=u.coords,
                )

            denominator = w.sum()
            if denominator <= 0:
                if self.on_empty == "raise":
                    raise EmptyBoundaryError(
                        f"Hole pixel (x={u.x}, y={u.y}) has no contributing boundary pixels "
                        f"({len(sel_values)} candidates, total weight {denominator})",
                        point=u.coords,
                    )
                skipped.append(u.coords)
                continue

            value = float(np.dot(w, sel_values) / denominator)
            new_values.append((u, min(max(value, 0.0), 1.0)))

        for u, value in new_values:
            u.intensity = value

        return {
            'filled': len(new_values),
            'skipped': skipped,
            'strategy': self.name,
            'elapsed': time.time() - start_time,
        }

    def __repr__(self):
        return f"{type(self).__name__}(on_empty={self.on_empty!r})"
