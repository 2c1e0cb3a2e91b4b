"""
Demo: how does rendezvous time grow with separation?

Runs the simulation over a range of separations (both signs), checks
the D <-> -D mirror relation, fits steps ∝ |D|^α and saves a plot.

Expected: α = 2 exactly, with prefactor 2 (steps = 2·D²).
"""

from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from railsim.analysis import (
    fit_power_law,
    is_mirror_image,
    measure_collision_steps,
    predicted_collision_steps,
    record_trajectory,
)
from railsim.viz import plot_collision_scaling, save_figure


def main():
    """Run the scaling sweep."""
    print("=" * 60)
    print("Scaling Test: ticks until collision vs separation")
    print("=" * 60)

    separations = [1, 2, 3, 5, 8, 13, 20, 35, 50, 75, 100]
    max_steps = 50000

    print(f"\nSeparations: {separations}")
    print(f"Budget per run: {max_steps} ticks\n")

    steps_pos = measure_collision_steps(separations, max_steps)
    steps_neg = measure_collision_steps([-d for d in separations], max_steps)

    print(f"{'D':>6} {'steps(D)':>10} {'steps(-D)':>10} {'2·D²':>10}")
    print("-" * 40)
    for d, sp, sn in zip(separations, steps_pos, steps_neg):
        print(f"{d:>6} {sp:>10.0f} {sn:>10.0f} {predicted_collision_steps(d):>10}")

    # Mirror relation on a few full trajectories
    print("\nMirror check (D vs -D):")
    for d in separations[:5]:
        ok = is_mirror_image(record_trajectory(d, max_steps), record_trajectory(-d, max_steps))
        print(f"  D={d:>3}: {'✓' if ok else '✗'}")

    fit = fit_power_law(separations, steps_pos)
    print(f"\nFit: steps ≈ {fit.prefactor:.3f}·|D|^{fit.exponent:.3f} (R²={fit.r_squared:.6f})")

    if np.isclose(fit.exponent, 2.0) and np.isclose(fit.prefactor, 2.0):
        print("✓ Quadratic law steps = 2·D² confirmed")
    else:
        print("? Fit deviates from 2·D²")

    fig, ax = plot_collision_scaling(separations, steps_pos, fit=fit)

    output_dir = Path("output/demo_scaling")
    output_path = output_dir / "collision_scaling.png"
    save_figure(fig, output_path)
    plt.close(fig)
    print(f"\nSaved to: {output_path}")


if __name__ == "__main__":
    main()
