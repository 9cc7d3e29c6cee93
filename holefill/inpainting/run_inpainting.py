"""
Fill the hole of a single grayscale image given a mask.

Usage:
    holefill <image> <mask> <connectivity> <output> [--method exact|sampled] ...

Dark mask pixels mark the hole (use --hole_is_white for the opposite
convention). The result is written as a grayscale PNG.
"""

import argparse
import sys
import time

from ..core.errors import HoleFillError
from ..core.utils import (
    load_image, load_mask, build_grid, save_grayscale_image, format_time,
    DEFAULT_MASK_THRESHOLD,
)
from ..core.weighting import DefaultWeightingFunction, DEFAULT_Z, DEFAULT_EPSILON
from ..filling import HoleFiller, get_strategy, DEFAULT_SAMPLE_SIZE


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Fill a hole in a grayscale image with a distance-weighted boundary average."
    )
    parser.add_argument("image", type=str, help="Path to the input image.")
    parser.add_argument("mask", type=str, help="Path to the mask marking the hole.")
    parser.add_argument("connectivity", type=int, choices=[4, 8],
                        help="Pixel connectivity used to find the hole boundary.")
    parser.add_argument("output", type=str, help="Path of the output image.")
    parser.add_argument("--method", type=str, choices=["exact", "sampled"], default="exact",
                        help="Use every boundary pixel (exact) or a random subset per hole pixel (sampled).")
    parser.add_argument("--samples", type=int, default=DEFAULT_SAMPLE_SIZE,
                        help=f"Boundary pixels sampled per hole pixel (default: {DEFAULT_SAMPLE_SIZE}).")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for the sampled method.")
    parser.add_argument("--on_small_boundary", type=str, choices=["clamp", "raise"], default="clamp",
                        help="Use the whole boundary or fail when it has fewer pixels than --samples.")
    parser.add_argument("--z", type=float, default=DEFAULT_Z,
                        help=f"Distance exponent of the weighting function (default: {DEFAULT_Z}).")
    parser.add_argument("--epsilon", type=float, default=DEFAULT_EPSILON,
                        help=f"Epsilon added to the weight denominator (default: {DEFAULT_EPSILON}).")
    parser.add_argument("--edge_policy", type=str, choices=["skip", "raise"], default="skip",
                        help="Ignore or reject hole pixels whose neighbours fall outside the image.")
    parser.add_argument("--on_empty", type=str, choices=["raise", "skip"], default="raise",
                        help="Fail or leave the pixel unfilled when no boundary pixel contributes.")
    parser.add_argument("--mask_threshold", type=float, default=DEFAULT_MASK_THRESHOLD,
                        help=f"Normalized gray level separating hole pixels (default: {DEFAULT_MASK_THRESHOLD}).")
    parser.add_argument("--hole_is_white", action="store_true",
                        help="Treat bright mask pixels as the hole instead of dark ones.")
    parser.add_argument("--progress", action="store_true",
                        help="Show a progress bar while filling.")
    return parser.parse_args(argv)


def run(args):
    """Load, fill and save one image. Returns the fill summary."""
    img = load_image(args.image)
    mask = load_mask(args.mask, threshold=args.mask_threshold, hole_is_white=args.hole_is_white)
    if img.shape != mask.shape:
        raise ValueError(f"Image shape {img.shape} does not match mask shape {mask.shape}")
    print(f"Loaded image {args.image} ({img.shape[1]}x{img.shape[0]}), hole pixels: {int(mask.sum())}")

    if args.method == "sampled":
        strategy = get_strategy("sampled", sample_size=args.samples, seed=args.seed,
                                on_small_boundary=args.on_small_boundary,
                                on_empty=args.on_empty, show_progress=args.progress)
    else:
        strategy = get_strategy("exact", on_empty=args.on_empty, show_progress=args.progress)

    filler = HoleFiller(
        build_grid(img, mask),
        connectivity=args.connectivity,
        weighting=DefaultWeightingFunction(z=args.z, epsilon=args.epsilon),
        strategy=strategy,
        edge_policy=args.edge_policy,
    )
    print(f"Hole: {len(filler.hole)} pixels, boundary: {len(filler.boundary)} pixels "
          f"({args.connectivity}-connectivity)")

    summary = filler.fill_holes()
    if summary['skipped']:
        print(f"Warning: {len(summary['skipped'])} hole pixels had no boundary contribution "
              f"and were left unfilled")

    save_grayscale_image(filler.result(), args.output)
    print(f"Image saved successfully to {args.output}")
    return summary


def main(argv=None):
    args = parse_args(argv)
    start_time = time.time()
    try:
        summary = run(args)
    except (HoleFillError, ValueError) as exc:
        print(f"Error processing image: {exc}", file=sys.stderr)
        return 1
    print(f"Processing complete ({summary['strategy']}, {summary['filled']} pixels filled) "
          f"in {format_time(time.time() - start_time)}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
