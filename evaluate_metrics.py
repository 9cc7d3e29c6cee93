"""
Evaluate exact and sampled hole filling on a directory of images.

Every image is paired with mask_XXXXX.png by sorted index (see
generate_masks.py); the ground truth is the image itself.
"""
import argparse
import os
import time

import numpy as np
from tqdm import tqdm

from holefill.core.errors import HoleFillError
from holefill.core.metrics import hole_mae
from holefill.core.utils import load_image, load_mask, compute_metrics, weighted_hole_fill

METHODS = ['exact', 'sampled']


def get_mask_filename(image_index):
    """Mask filename for a zero-based image index."""
    return f"mask_{image_index:05d}.png"


def evaluate_metrics(image_dir, mask_dir, connectivity=8, sample_size=10, seed=0, max_images=None):
    """
    Fill every image with both methods and collect PSNR, SSIM, hole MAE and time.
    
    Args:
        image_dir: Directory of ground-truth images
        mask_dir: Directory of mask_XXXXX.png files
        connectivity: 4 or 8
        sample_size: k for the sampled method
        seed: Seed for the sampled method
        max_images: Optional cap on the number of images
    
    Returns:
        results: {method: {'psnr': [...], 'ssim': [...], 'mae': [...], 'time': [...]}}
    """
    images = sorted(f for f in os.listdir(image_dir) if f.lower().endswith(('.png', '.jpg', '.jpeg')))
    if max_images is not None:
        images = images[:max_images]
    if not images:
        raise ValueError(f"No images found in {image_dir}")
    
    results = {m: {'psnr': [], 'ssim': [], 'mae': [], 'time': []} for m in METHODS}
    
    for idx, image_name in enumerate(tqdm(images, desc="Evaluating")):
        mask_path = os.path.join(mask_dir, get_mask_filename(idx))
        if not os.path.exists(mask_path):
            print(f"\nSkipping {image_name}: missing {mask_path}")
            continue
        
        original = load_image(os.path.join(image_dir, image_name))
        mask = load_mask(mask_path, target_size=original.shape[::-1])
        
        for method in METHODS:
            start_time = time.time()
            try:
                filled, _ = weighted_hole_fill(original, mask, connectivity=connectivity, method=method,
                                               sample_size=sample_size, seed=seed)
            except HoleFillError as e:
                print(f"\nSkipping {image_name} ({method}): {e}")
                continue
            results[method]['time'].append((time.time() - start_time) * 1000)
            
            psnr, ssim_val = compute_metrics(original, filled)
            results[method]['psnr'].append(psnr)
            results[method]['ssim'].append(ssim_val)
            results[method]['mae'].append(hole_mae(original, filled, mask))
    
    return results


def print_summary(results):
    print(f"\n{'='*60}")
    print("SUMMARY TABLE")
    print(f"{'='*60}")
    print(f"{'Method':<10} {'PSNR (dB)':<12} {'SSIM':<10} {'Hole MAE':<10} {'Time (ms)':<10}")
    print(f"{'-'*60}")
    for method in METHODS:
        r = results[method]
        if not r['psnr']:
            print(f"{method:<10} {'n/a':<12}")
            continue
        finite_psnr = [p for p in r['psnr'] if np.isfinite(p)]
        psnr = np.mean(finite_psnr) if finite_psnr else float('inf')
        print(f"{method:<10} {psnr:<12.2f} {np.mean(r['ssim']):<10.4f} "
              f"{np.mean(r['mae']):<10.4f} {np.mean(r['time']):<10.1f}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Evaluate hole filling quality")
    parser.add_argument("--image_dir", type=str, required=True)
    parser.add_argument("--mask_dir", type=str, default="masks")
    parser.add_argument("--connectivity", type=int, choices=[4, 8], default=8)
    parser.add_argument("--samples", type=int, default=10)
    parser.add_argument("--seed", type=int, default=0)
    parser.add_argument("--max_images", type=int, default=None)
    args = parser.parse_args()
    
    print("Starting evaluation of hole filling methods...")
    results = evaluate_metrics(args.image_dir, args.mask_dir, args.connectivity,
                               args.samples, args.seed, args.max_images)
    print_summary(results)
