"""
Sampled vs exact study: how close does the sampled fill get as k grows?
"""

import numpy as np
import os
import argparse
import time
import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt

from ..core.utils import load_image, load_mask, format_time, weighted_hole_fill
from ..core.metrics import hole_mae

DEFAULT_OUTPUT_ROOT = "sampling_study"

# Study parameters
K_VALUES_TO_TEST = [1, 2, 5, 10, 20, 50, 100]
N_RUNS = 5
RANDOM_SEED = 42


def evaluate_sample_sizes(img, mask, k_values, n_runs=N_RUNS, connectivity=8, seed=RANDOM_SEED):
    """
    Compare sampled fills against the exact fill for every k.
    
    Parameters:
    - img: H x W intensity array
    - mask: binary hole mask
    - k_values: sample sizes to test
    - n_runs: sampled runs per k, each with its own seed
    - connectivity: 4 or 8
    - seed: base seed; run r of every k uses seed + r
    
    Returns:
    - results: dict with the exact fill, its time, and per-k lists of
      'mae' (one per run), 'times', and 'mean_mae' (error of the run average)
    """
    start_time = time.time()
    exact, _ = weighted_hole_fill(img, mask, connectivity=connectivity, method='exact')
    exact_time = time.time() - start_time

    results = {'exact': exact, 'exact_time': exact_time, 'k': {}}
    for k in k_values:
        runs = []
        k_results = {'mae': [], 'times': []}
        for run in range(n_runs):
            run_start = time.time()
            sampled, _ = weighted_hole_fill(img, mask, connectivity=connectivity, method='sampled',
                                            sample_size=k, seed=seed + run)
            k_results['times'].append(time.time() - run_start)
            k_results['mae'].append(hole_mae(exact, sampled, mask))
            runs.append(sampled)
        k_results['mean_mae'] = hole_mae(exact, np.mean(runs, axis=0), mask)
        results['k'][k] = k_results
    return results


def save_study_report(results, k_values, n_runs, output_root):
    """Save study results to a text report."""
    os.makedirs(output_root, exist_ok=True)
    report_path = os.path.join(output_root, "sampling_report.txt")
    
    with open(report_path, 'w') as f:
        f.write("SAMPLED VS EXACT REPORT\n")
        f.write("=" * 80 + "\n\n")
        
        f.write("Configuration:\n")
        f.write(f"  K values tested: {k_values}\n")
        f.write(f"  Runs per k: {n_runs}\n")
        f.write(f"  Base seed: {RANDOM_SEED}\n\n")
        
        f.write(f"Exact fill time: {results['exact_time']:.3f} s\n\n")
        
        f.write("Hole MAE against the exact fill:\n")
        for k in k_values:
            k_results = results['k'][k]
            f.write(f"  k={k:3d}: MAE={np.mean(k_results['mae']):.4f}±{np.std(k_results['mae']):.4f}, "
                    f"MAE of run average={k_results['mean_mae']:.4f}, "
                    f"time={np.mean(k_results['times']):.3f} s\n")
    
    print(f"\nSaved study report to: {report_path}")
    return report_path


def plot_study_results(results, k_values, output_root):
    """Plot error and time against sample size."""
    fig, axes = plt.subplots(1, 2, figsize=(14, 5))
    
    mae_means = [np.mean(results['k'][k]['mae']) for k in k_values]
    mae_stds = [np.std(results['k'][k]['mae']) for k in k_values]
    mean_mae = [results['k'][k]['mean_mae'] for k in k_values]
    
    axes[0].errorbar(k_values, mae_means, yerr=mae_stds,
                     marker='o', capsize=5, linewidth=2, markersize=8, label='Single run')
    axes[0].plot(k_values, mean_mae, marker='s', linewidth=2, markersize=8,
                 color='orange', label='Run average')
    axes[0].set_xscale('log')
    axes[0].set_xlabel('Sample size k', fontsize=12)
    axes[0].set_ylabel('Hole MAE vs exact', fontsize=12)
    axes[0].set_title('Sampled fill error', fontsize=14, fontweight='bold')
    axes[0].grid(True, alpha=0.3)
    axes[0].legend()
    
    time_means = [np.mean(results['k'][k]['times']) for k in k_values]
    axes[1].plot(k_values, time_means, marker='o', linewidth=2, markersize=8, label='Sampled')
    axes[1].axhline(results['exact_time'], color='r', linestyle='--',
                    label='Exact', linewidth=2)
    axes[1].set_xscale('log')
    axes[1].set_xlabel('Sample size k', fontsize=12)
    axes[1].set_ylabel('Time (s)', fontsize=12)
    axes[1].set_title('Fill time', fontsize=14, fontweight='bold')
    axes[1].grid(True, alpha=0.3)
    axes[1].legend()
    
    plt.tight_layout()
    
    os.makedirs(output_root, exist_ok=True)
    plot_path = os.path.join(output_root, "sampling_study.png")
    plt.savefig(plot_path, dpi=200, bbox_inches='tight')
    plt.close(fig)
    
    print(f"Saved study plot to: {plot_path}")
    return plot_path


def main(argv=None):
    """Main study function."""
    parser = argparse.ArgumentParser(description="Compare the sampled fill with the exact fill")
    parser.add_argument("image", type=str, help="Path to the input image")
    parser.add_argument("mask", type=str, help="Path to the hole mask (dark = hole)")
    parser.add_argument("--connectivity", type=int, choices=[4, 8], default=8)
    parser.add_argument("--k_values", type=int, nargs="+", default=K_VALUES_TO_TEST,
                        help=f"Sample sizes to test (default: {K_VALUES_TO_TEST})")
    parser.add_argument("--runs", type=int, default=N_RUNS,
                        help=f"Sampled runs per k (default: {N_RUNS})")
    parser.add_argument("--output_dir", type=str, default=DEFAULT_OUTPUT_ROOT,
                        help=f"Output directory for results (default: {DEFAULT_OUTPUT_ROOT})")
    
    args = parser.parse_args(argv)
    
    print("=" * 80)
    print("SAMPLED VS EXACT FILL STUDY")
    print("=" * 80)
    print(f"Image: {args.image}")
    print(f"Mask: {args.mask}")
    print(f"K values: {args.k_values}")
    print(f"Runs per k: {args.runs}\n")
    
    study_start = time.time()
    img = load_image(args.image)
    mask = load_mask(args.mask)
    results = evaluate_sample_sizes(img, mask, args.k_values, args.runs, args.connectivity)
    
    for k in args.k_values:
        k_results = results['k'][k]
        print(f"  k={k:3d}: MAE={np.mean(k_results['mae']):.4f}, "
              f"run-average MAE={k_results['mean_mae']:.4f}, "
              f"time={np.mean(k_results['times']):.3f} s")
    print(f"  exact: time={results['exact_time']:.3f} s")
    
    save_study_report(results, args.k_values, args.runs, args.output_dir)
    plot_study_results(results, args.k_values, args.output_dir)
    
    print(f"\nTotal study time: {format_time(time.time() - study_start)}")
    print("=" * 80)


if __name__ == "__main__":
    main()
