"""
Plots of rendezvous time against separation.
"""

from __future__ import annotations
from pathlib import Path
from typing import TYPE_CHECKING, Sequence

import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

if TYPE_CHECKING:
    from railsim.analysis.scaling import ScalingFit


def plot_collision_scaling(
    separations: Sequence[int] | np.ndarray,
    steps: Sequence[float] | np.ndarray,
    fit: "ScalingFit | None" = None,
    title: str = "Ticks until collision",
    ax: Axes | None = None,
    figsize: tuple[float, float] = (8, 6),
    loglog: bool = True,
) -> tuple[Figure, Axes]:
    """
    Plot measured collision steps against |separation|.

    Args:
        separations: Separations that were run
        steps: Measured ticks (NaN where no collision happened)
        fit: Optional power-law fit to overlay
        title: Plot title
        ax: Existing axes (creates new if None)
        loglog: Use logarithmic axes

    Returns:
        (fig, ax) tuple
    """
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    d = np.abs(np.asarray(separations, dtype=np.float64))
    s = np.asarray(steps, dtype=np.float64)
    mask = (d > 0) & np.isfinite(s)

    ax.plot(d[mask], s[mask], "bo", markersize=6, label="Measured")

    if fit is not None and mask.any():
        d_line = np.linspace(d[mask].min(), d[mask].max(), 200)
        ax.plot(
            d_line, fit.predict(d_line), "r--", linewidth=2,
            label=f"{fit.prefactor:.2f}·|D|^{fit.exponent:.2f} (R²={fit.r_squared:.4f})",
        )

    if loglog:
        ax.set_xscale("log")
        ax.set_yscale("log")

    ax.set_xlabel("|Separation| D")
    ax.set_ylabel("Ticks")
    ax.set_title(title)
    ax.legend(loc="upper left")
    ax.grid(True, alpha=0.3, which="both")

    return fig, ax


def save_figure(fig: Figure, path: str | Path, dpi: int = 150, **kwargs) -> None:
    """Save figure to file, creating parent directories."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=dpi, bbox_inches="tight", **kwargs)
