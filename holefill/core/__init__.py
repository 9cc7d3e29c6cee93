"""
Core data model, region detection, weighting and utilities for hole filling.
"""
from .errors import (
    HoleFillError,
    InvalidGridStateError,
    BoundaryAdjacencyError,
    EmptyBoundaryError,
    InsufficientBoundaryError,
    WeightingError,
    ImageLoadError,
    ImageSaveError,
)
from .grid import Grid, Point, HOLE_VALUE
from .regions import RegionDetector, Regions, find_hole, find_boundary
from .weighting import (
    WeightingFunction,
    DefaultWeightingFunction,
    CallableWeighting,
    as_weighting_function,
)
from .utils import (
    format_time,
    load_image,
    load_mask,
    apply_mask_to_image,
    build_grid,
    save_grayscale_image,
    weighted_hole_fill,
    compute_metrics,
)
from .metrics import calculate_psnr, calculate_ssim, hole_mae

__all__ = [
    'HoleFillError',
    'InvalidGridStateError',
    'BoundaryAdjacencyError',
    'EmptyBoundaryError',
    'InsufficientBoundaryError',
    'WeightingError',
    'ImageLoadError',
    'ImageSaveError',
    'Grid',
    'Point',
    'HOLE_VALUE',
    'RegionDetector',
    'Regions',
    'find_hole',
    'find_boundary',
    'WeightingFunction',
    'DefaultWeightingFunction',
    'CallableWeighting',
    'as_weighting_function',
    'format_time',
    'load_image',
    'load_mask',
    'apply_mask_to_image',
    'build_grid',
    'save_grayscale_image',
    'weighted_hole_fill',
    'compute_metrics',
    'calculate_psnr',
    'calculate_ssim',
    'hole_mae',
]
