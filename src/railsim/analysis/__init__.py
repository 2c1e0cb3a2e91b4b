"""
Analysis layer: derived quantities for testing and plotting.

IMPORTANT: This is NOT seen by the engine. One-way derivation only.

- Trajectory: per-tick numpy record of a run
- check_invariants: audit a snapshot history against the world invariants
- mirror_trajectory / is_mirror_image: the D <-> -D relation
- measure_collision_steps / fit_power_law: how rendezvous time scales
"""

from railsim.analysis.trajectory import (
    Trajectory,
    check_invariants,
    is_mirror_image,
    mirror_trajectory,
    record_trajectory,
)
from railsim.analysis.scaling import (
    ScalingFit,
    fit_power_law,
    measure_collision_steps,
    predicted_collision_steps,
)

__all__ = [
    "Trajectory",
    "check_invariants",
    "is_mirror_image",
    "mirror_trajectory",
    "record_trajectory",
    "ScalingFit",
    "fit_power_law",
    "measure_collision_steps",
    "predicted_collision_steps",
]
