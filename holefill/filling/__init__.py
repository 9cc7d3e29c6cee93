"""
Fill strategies for replacing hole pixels with weighted boundary averages.
"""
from .base import FillStrategy
from .exact import ExactFill
from .sampled import SampledFill, DEFAULT_SAMPLE_SIZE
from .hole_filler import HoleFiller, DEFAULT_CONNECTIVITY

STRATEGIES = {
    'exact': ExactFill,
    'sampled': SampledFill,
}


def get_strategy(name, **kwargs):
    """Build a fill strategy by name ('exact' or 'sampled')."""
    try:
        strategy_cls = STRATEGIES[name]
    except KeyError:
        raise ValueError(f"Unknown fill method {name!r}; choose from {sorted(STRATEGIES)}") from None
    return strategy_cls(**kwargs)


__all__ = [
    'FillStrategy',
    'ExactFill',
    'SampledFill',
    'HoleFiller',
    'get_strategy',
    'STRATEGIES',
    'DEFAULT_SAMPLE_SIZE',
    'DEFAULT_CONNECTIVITY',
]
