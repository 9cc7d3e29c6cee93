"""
Generate hole masks for hole filling experiments.

Each mask is white (known pixels) with one black hole shaped as a rectangle
or an ellipse, kept at least `margin` pixels away from the image border so
every hole pixel has a full ring of neighbours.
"""
import argparse
import os

import numpy as np
from PIL import Image


def parse_args(argv=None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Generate black-hole-on-white mask images.")
    parser.add_argument("--output_dir", type=str, default="masks",
                        help="Directory where mask_XXXXX.png files are written.")
    parser.add_argument("--num_masks", type=int, default=20, help="Number of masks to generate.")
    parser.add_argument("--width", type=int, default=256, help="Mask width in pixels.")
    parser.add_argument("--height", type=int, default=256, help="Mask height in pixels.")
    parser.add_argument("--shape", type=str, choices=["rectangle", "ellipse", "mixed"], default="mixed",
                        help="Hole shape.")
    parser.add_argument("--min_size", type=int, default=8, help="Minimum hole extent in pixels.")
    parser.add_argument("--max_size", type=int, default=48, help="Maximum hole extent in pixels.")
    parser.add_argument("--margin", type=int, default=2, help="Minimum distance from the border.")
    parser.add_argument("--seed", type=int, default=1337, help="RNG seed.")
    return parser.parse_args(argv)


def make_mask(width, height, shape, hole_w, hole_h, left, top):
    """
    Build a single mask.
    
    Returns:
    - mask: height x width uint8 array, 0 inside the hole and 255 elsewhere
    """
    mask = np.full((height, width), 255, dtype=np.uint8)
    if shape == "rectangle":
        mask[top:top + hole_h, left:left + hole_w] = 0
    else:
        ys, xs = np.mgrid[0:height, 0:width]
        cy = top + (hole_h - 1) / 2.0
        cx = left + (hole_w - 1) / 2.0
        inside = ((xs - cx) / (hole_w / 2.0)) ** 2 + ((ys - cy) / (hole_h / 2.0)) ** 2 <= 1.0
        mask[inside] = 0
    return mask


def random_mask(rng, width, height, shape, min_size, max_size, margin):
    limit_w = width - 2 * margin
    limit_h = height - 2 * margin
    if limit_w < min_size or limit_h < min_size:
        raise ValueError(f"A {width}x{height} mask cannot hold a {min_size}px hole with margin {margin}")
    if shape == "mixed":
        shape = rng.choice(["rectangle", "ellipse"])
    hole_w = int(rng.integers(min_size, min(max_size, limit_w) + 1))
    hole_h = int(rng.integers(min_size, min(max_size, limit_h) + 1))
    left = int(rng.integers(margin, width - margin - hole_w + 1))
    top = int(rng.integers(margin, height - margin - hole_h + 1))
    return make_mask(width, height, shape, hole_w, hole_h, left, top)


def main(argv=None):
    args = parse_args(argv)
    os.makedirs(args.output_dir, exist_ok=True)
    rng = np.random.default_rng(args.seed)

    for i in range(args.num_masks):
        mask = random_mask(rng, args.width, args.height, args.shape,
                           args.min_size, args.max_size, args.margin)
        hole_pct = 100.0 * np.mean(mask == 0)
        Image.fromarray(mask).save(os.path.join(args.output_dir, f"mask_{i:05d}.png"))
        print(f"  mask_{i:05d}.png: {hole_pct:.2f}% hole", end="\r")

    print(f"\n✅ {args.num_masks} masks written to {args.output_dir}")


if __name__ == "__main__":
    main()
