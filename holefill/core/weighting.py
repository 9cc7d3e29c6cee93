"""
Weighting functions scoring how much a boundary pixel contributes to a hole pixel.
"""

from abc import ABC, abstractmethod

import numpy as np

DEFAULT_Z = 3
DEFAULT_EPSILON = 0.01


class WeightingFunction(ABC):
    """
    Pure mapping ``(u, v) -> non-negative float``.

    Implementations receive the real hole and boundary points and must not
    modify them.
    """

    @abstractmethod
    def __call__(self, u, v):
        """
        Weight of boundary point ``v`` for hole point ``u``.

        Args:
            u: the hole pixel whose value is being computed
            v: a boundary pixel

        Returns:
            non-negative float
        """

    def weights(self, u, points, coords=None):
        """
        Weights of ``u`` against many boundary points at once.

        Args:
            u: hole point
            points: sequence of N boundary points
            coords: optional (N, 2) array of their (x, y) coordinates,
                for implementations that vectorise over positions

        Returns:
            (N,) float64 array of weights
        """
        return np.fromiter(
            (self(u, v) for v in points),
            dtype=np.float64,
            count=len(points),
        )


class DefaultWeightingFunction(WeightingFunction):
    """``1 / (||u - v|| ** z + epsilon)`` with Euclidean distance."""

    def __init__(self, z=DEFAULT_Z, epsilon=DEFAULT_EPSILON):
        if z <= 0:
            raise ValueError(f"z must be positive, got {z}")
        if epsilon <= 0:
            raise ValueError(f"epsilon must be positive, got {epsilon}")
        self.z = z
        self.epsilon = epsilon

    def __call__(self, u, v):
        distance = np.hypot(float(u.x) - v.x, float(u.y) - v.y)
        return float(1.0 / (distance ** self.z + self.epsilon))

    def weights(self, u, points, coords=None):
        if coords is None:
            coords = [p.coords for p in points]
        coords = np.asarray(coords, dtype=np.float64).reshape(-1, 2)
        distances = np.hypot(coords[:, 0] - u.x, coords[:, 1] - u.y)
        return 1.0 / (distances ** self.z + self.epsilon)

    def __repr__(self):
        return f"DefaultWeightingFunction(z={self.z}, epsilon={self.epsilon})"


class CallableWeighting(WeightingFunction):
    """Wraps a plain ``fn(u, v) -> float``."""

    def __init__(self, fn):
        if not callable(fn):
            raise TypeError(f"Expected a callable, got {type(fn).__name__}")
        self.fn = fn

    def __call__(self, u, v):
        return float(self.fn(u, v))

    def __repr__(self):
        name = getattr(self.fn, "__name__", repr(self.fn))
        return f"CallableWeighting({name})"


def as_weighting_function(obj):
    """Return ``obj`` as a WeightingFunction, wrapping plain callables."""
    if obj is None:
        return DefaultWeightingFunction()
    if isinstance(obj, WeightingFunction):
        return obj
    if callable(obj):
        return CallableWeighting(obj)
    raise TypeError(f"Cannot use {type(obj).__name__} as a weighting function")
