import numpy as np
from skimage.metrics import structural_similarity as ssim
from skimage.metrics import peak_signal_noise_ratio as calculate_psnr_skimage


def _as_gray(img):
    img = np.asarray(img, dtype=np.float64)
    if img.ndim == 3 and img.shape[2] == 1:
        img = img[:, :, 0]
    if img.ndim != 2:
        raise ValueError(f"Expected a 2D grayscale image, got shape {img.shape}")
    return img


def calculate_psnr(img1, img2, data_range=1.0):
    """
    Calculate Peak Signal-to-Noise Ratio (PSNR) between two grayscale images using scikit-image.
    
    Args:
        img1: Reference image [H, W] in range [0, data_range]
        img2: Reconstructed image [H, W] in range [0, data_range]
        data_range: Maximum pixel value (default 1.0 for normalized intensities)
    
    Returns:
        PSNR value in dB (higher is better, inf for identical images)
    """
    img1 = _as_gray(img1)
    img2 = _as_gray(img2)
    if np.array_equal(img1, img2):
        return float('inf')
    return float(calculate_psnr_skimage(img1, img2, data_range=data_range))


def calculate_ssim(img1, img2, data_range=1.0):
    """
    Calculate Structural Similarity Index (SSIM) between two grayscale images.
    
    Args:
        img1: Reference image [H, W] in range [0, data_range]
        img2: Reconstructed image [H, W] in range [0, data_range]
        data_range: Maximum pixel value (default 1.0 for normalized intensities)
    
    Returns:
        SSIM value in range [-1, 1] (higher is better, 1.0 is perfect)
    """
    img1 = _as_gray(img1)
    img2 = _as_gray(img2)
    # skimage needs an odd window no larger than the image
    win_size = min(7, img1.shape[0], img1.shape[1])
    if win_size % 2 == 0:
        win_size -= 1
    if win_size < 3:
        raise ValueError(f"Image of shape {img1.shape} is too small for SSIM")
    return float(ssim(img1, img2, data_range=data_range, win_size=win_size))


def hole_mae(original, reconstructed, mask):
    """Mean absolute error restricted to the hole pixels (mask True)."""
    original = _as_gray(original)
    reconstructed = _as_gray(reconstructed)
    mask = np.asarray(mask, dtype=bool)
    if not mask.any():
        return 0.0
    return float(np.mean(np.abs(original[mask] - reconstructed[mask])))
