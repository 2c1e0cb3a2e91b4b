"""
Visualization utilities.

- Collision-time scaling plots
"""

from railsim.viz.scaling import plot_collision_scaling, save_figure

__all__ = [
    "plot_collision_scaling",
    "save_figure",
]
