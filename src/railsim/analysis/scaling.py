"""
How long does the rendezvous take?

For a separation D != 0 the leading train latches onto the trailing
train's parachute during cycle |D|, after 2|D|(|D| - 1) + |D| ticks.
The sweeping train then needs |D| more ticks to come home. Total:

    steps(D) = 2 * D**2

A zero separation collides on the first tick.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy import stats

from railsim.core.driver import DEFAULT_MAX_STEPS, run


@dataclass
class ScalingFit:
    """Power law steps = prefactor * |D| ** exponent fitted in log-log space."""

    exponent: float
    prefactor: float
    r_squared: float
    n_points: int

    def predict(self, separations: Sequence[int] | np.ndarray) -> np.ndarray:
        """Evaluate the fitted law at the given separations."""
        d = np.abs(np.asarray(separations, dtype=np.float64))
        return self.prefactor * d ** self.exponent


def predicted_collision_steps(separation: int) -> int:
    """Closed-form number of ticks until collision."""
    if separation == 0:
        return 1
    return 2 * separation * separation


def measure_collision_steps(
    separations: Sequence[int],
    max_steps: int = DEFAULT_MAX_STEPS,
) -> np.ndarray:
    """
    Run the simulation for each separation and record the ticks needed.

    Args:
        separations: Separations to test
        max_steps: Budget per run

    Returns:
        float64 array of step counts, NaN where the budget ran out
    """
    steps = np.full(len(separations), np.nan, dtype=np.float64)
    for i, d in enumerate(separations):
        world = run(int(d), max_steps)
        if world.has_collided:
            steps[i] = world.step_count
    return steps


def fit_power_law(
    separations: Sequence[int] | np.ndarray,
    steps: Sequence[float] | np.ndarray,
) -> ScalingFit:
    """
    Fit steps = prefactor * |D| ** exponent.

    Zero separations and runs without collision (NaN) are left out.

    Raises:
        ValueError: fewer than two distinct usable separations
    """
    d = np.abs(np.asarray(separations, dtype=np.float64))
    s = np.asarray(steps, dtype=np.float64)
    mask = (d > 0) & np.isfinite(s) & (s > 0)

    if len(np.unique(d[mask])) < 2:
        raise ValueError("Need at least two distinct nonzero separations with a collision")

    slope, intercept, r_value, _, _ = stats.linregress(np.log(d[mask]), np.log(s[mask]))

    return ScalingFit(
        exponent=float(slope),
        prefactor=float(np.exp(intercept)),
        r_squared=float(r_value ** 2),
        n_points=int(mask.sum()),
    )
