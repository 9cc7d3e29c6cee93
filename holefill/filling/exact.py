"""
Exact fill: every boundary pixel contributes to every hole pixel.
"""

from .base import FillStrategy


class ExactFill(FillStrategy):
    """O(|H| x |B|) weighted average over the whole boundary."""

    name = "exact"

    def _select(self, u, n_boundary):
        return None
