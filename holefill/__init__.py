"""
Image Hole Filling - Source Code

This package contains:
- core: Grid model, hole/boundary detection, weighting functions, I/O and metrics
- filling: Exact and sampled fill strategies and the HoleFiller pipeline
- inpainting: Command-line tool for filling a single image/mask pair
- scripts: Analysis scripts (sampled vs exact study)
"""

__version__ = "1.0.0"
