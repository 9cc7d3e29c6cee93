"""
Utility functions for loading images and masks, filling holes and evaluation.
"""

import numpy as np
import cv2
from datetime import timedelta

from .errors import ImageLoadError, ImageSaveError
from .grid import Grid, HOLE_VALUE
from .metrics import calculate_psnr, calculate_ssim

DEFAULT_MASK_THRESHOLD = 0.5

# BGR order, matching cv2.imread
GRAY_WEIGHTS_BGR = np.array([0.114, 0.587, 0.299])


def format_time(seconds):
    """Format seconds into human-readable string."""
    return str(timedelta(seconds=int(seconds)))


def _read_bgr(path, kind):
    try:
        img = cv2.imread(str(path), cv2.IMREAD_COLOR)
    except cv2.error as exc:
        raise ImageLoadError(f"Could not read {kind} from {path}: {exc}") from exc
    if img is None:
        raise ImageLoadError(f"Could not read {kind} from {path}")
    return img


def to_gray(img):
    """
    Convert a BGR uint8 image to normalized grayscale.
    
    Parameters:
    - img: H x W x 3 BGR image (or H x W grayscale)
    
    Returns:
    - gray: H x W float32 array in [0, 1], luma truncated to whole levels
    """
    img = np.asarray(img, dtype=np.float64)
    if img.ndim == 3:
        luma = img[:, :, :3] @ GRAY_WEIGHTS_BGR
    else:
        luma = img
    # 1e-6 keeps exact gray levels from rounding down to the level below
    levels = np.floor(luma + 1e-6)
    return (levels / 255.0).astype(np.float32)


def load_image(image_path, target_size=None):
    """
    Load an image as normalized grayscale intensities.
    
    Parameters:
    - image_path: path to image file
    - target_size: optional (width, height) to resize to
    
    Returns:
    - img: H x W float32 array in [0, 1]
    """
    img = _read_bgr(image_path, "image")
    if target_size is not None and img.shape[1::-1] != tuple(target_size):
        img = cv2.resize(img, tuple(target_size))
    return to_gray(img)


def load_mask(mask_path, target_size=None, threshold=DEFAULT_MASK_THRESHOLD, hole_is_white=False):
    """
    Load binary hole mask from an image file.
    
    Parameters:
    - mask_path: path to the mask file
    - target_size: optional (width, height) to resize to
    - threshold: normalized gray level separating hole from known pixels
    - hole_is_white: if False, pixels darker than threshold are the hole;
      if True, pixels at or above threshold are the hole
    
    Returns:
    - mask: binary mask (True = hole pixel, False = known pixel)
    """
    mask_img = _read_bgr(mask_path, "mask")
    if target_size is not None and mask_img.shape[1::-1] != tuple(target_size):
        mask_img = cv2.resize(mask_img, tuple(target_size), interpolation=cv2.INTER_NEAREST)
    gray = to_gray(mask_img)
    if hole_is_white:
        return gray >= threshold
    return gray < threshold


def apply_mask_to_image(img, mask, fill_value=0.0):
    """
    Apply mask to image by setting hole pixels to ``fill_value``.
    
    Parameters:
    - img: H x W intensity array
    - mask: binary mask (True = hole pixel)
    - fill_value: value written into the hole (0 for display, -1 for filling)
    
    Returns:
    - masked_img: copy of img with hole pixels replaced
    """
    img = np.asarray(img)
    mask = np.asarray(mask, dtype=bool)
    if img.shape != mask.shape:
        raise ValueError(f"Image shape {img.shape} does not match mask shape {mask.shape}")
    masked_img = img.astype(np.float32, copy=True)
    masked_img[mask] = fill_value
    return masked_img


def build_grid(img, mask):
    """Build a Grid whose hole pixels carry the hole value."""
    return Grid.from_array(apply_mask_to_image(img, mask, fill_value=HOLE_VALUE))


def save_grayscale_image(values, out_path):
    """
    Write normalized intensities as an 8-bit grayscale image.
    
    Values are scaled by 255 and truncated; anything outside [0, 1]
    (e.g. unfilled hole pixels) is clipped first.
    """
    values = np.clip(np.asarray(values, dtype=np.float64), 0.0, 1.0)
    # 1e-4 absorbs float32 storage error so loaded levels are written back unchanged
    gray = np.floor(values * 255 + 1e-4).astype(np.uint8)
    img = cv2.merge([gray, gray, gray])
    try:
        ok = cv2.imwrite(str(out_path), img)
    except cv2.error as exc:
        raise ImageSaveError(f"Could not write image to {out_path}: {exc}") from exc
    if not ok:
        raise ImageSaveError(f"Could not write image to {out_path}")
    return out_path


def weighted_hole_fill(img, mask, connectivity=8, method='exact', weighting=None,
                       sample_size=10, seed=None, on_small_boundary='clamp', edge_policy='skip',
                       on_empty='raise', show_progress=False):
    """
    Fill masked regions with a distance-weighted average of the hole boundary.
    
    IMPORTANT: Only pixels bordering the hole contribute, never other hole pixels.
    
    Parameters:
    - img: H x W intensity array in [0, 1]
    - mask: binary mask (True = hole pixel)
    - connectivity: 4 or 8
    - method: 'exact' (all boundary pixels) or 'sampled' (sample_size random ones)
    - weighting: weighting function (default 1 / (d^3 + 0.01))
    - sample_size, seed, on_small_boundary: used by the sampled method only
      ('clamp' uses the whole boundary when it is smaller than sample_size,
      'raise' raises InsufficientBoundaryError)
    - edge_policy: 'skip' or 'raise' for holes touching the image border
    - on_empty: 'raise' or 'skip' when a hole pixel has no boundary
    
    Returns:
    - result: filled H x W float32 array
    - summary: dict returned by the fill strategy
    """
    from ..filling import HoleFiller, get_strategy

    if method == 'sampled':
        strategy = get_strategy(method, sample_size=sample_size, seed=seed,
                                on_small_boundary=on_small_boundary,
                                on_empty=on_empty, show_progress=show_progress)
    else:
        strategy = get_strategy(method, on_empty=on_empty, show_progress=show_progress)

    filler = HoleFiller(build_grid(img, mask), connectivity=connectivity,
                        weighting=weighting, strategy=strategy, edge_policy=edge_policy)
    summary = filler.fill_holes()
    return filler.result(), summary


def compute_metrics(original, reconstructed):
    """
    Compute PSNR and SSIM between original and reconstructed images.
    
    Parameters:
    - original: original image (values in [0, 1])
    - reconstructed: reconstructed image (values in [0, 1])
    
    Returns:
    - psnr_value: Peak Signal-to-Noise Ratio
    - ssim_value: Structural Similarity Index
    """
    psnr_value = calculate_psnr(original, reconstructed, data_range=1.0)
    ssim_value = calculate_ssim(original, reconstructed, data_range=1.0)
    return psnr_value, ssim_value
