import argparse

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from holefill.core.utils import load_image, load_mask, apply_mask_to_image, weighted_hole_fill


def visualize(image_path, mask_path, output_path, connectivity=8, sample_size=10, seed=0):
    """Save original / mask / masked / exact / sampled side by side."""
    img = load_image(image_path)
    mask = load_mask(mask_path, target_size=img.shape[::-1])
    masked = apply_mask_to_image(img, mask)
    exact, _ = weighted_hole_fill(img, mask, connectivity=connectivity, method='exact')
    sampled, _ = weighted_hole_fill(img, mask, connectivity=connectivity, method='sampled',
                                    sample_size=sample_size, seed=seed)

    panels = [
        (img, "Original"),
        (mask, "Hole mask"),
        (masked, "Masked"),
        (exact, "Exact fill"),
        (sampled, f"Sampled fill (k={sample_size})"),
    ]
    fig, axes = plt.subplots(1, len(panels), figsize=(4 * len(panels), 4))
    for ax, (data, title) in zip(axes, panels):
        ax.imshow(data, cmap="gray", vmin=0, vmax=1)
        ax.set_title(title)
        ax.axis("off")

    plt.tight_layout()
    plt.savefig(output_path, dpi=150, bbox_inches='tight')
    plt.close(fig)
    print(f"✅ Visualization saved to {output_path}")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Visualize exact and sampled hole filling")
    parser.add_argument("image", type=str)
    parser.add_argument("mask", type=str)
    parser.add_argument("--output", type=str, default="fill_sample.png")
    parser.add_argument("--connectivity", type=int, choices=[4, 8], default=8)
    parser.add_argument("--samples", type=int, default=10)
    parser.add_argument("--seed", type=int, default=0)
    args = parser.parse_args()
    visualize(args.image, args.mask, args.output, args.connectivity, args.samples, args.seed)
