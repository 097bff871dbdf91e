"""
Plotting utilities for calibrating the tolerance model.

The per-step tolerance constant is empirical. These helpers show how the
worst-case deviation from the analytical solution grows with the number of
steps for each backend, next to the linear tolerance bound.

Example:
    >>> from leapcheck import plotting
    >>> from leapcheck.integrators import HostLeapFrog
    >>> from leapcheck.verification import IntegrationParameters
    >>> params = IntegrationParameters(300, 0.001, (-2, 2, 0), (-1, 1, 2), 50)
    >>> plotting.error_growth_plot([HostLeapFrog()], params, show=False)
    >>> plotting.save("error_growth.png")
"""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

from .system import build_system
from .verification import LinearTolerance, analytical_solution

if TYPE_CHECKING:
    from .integrators import IntegratorBackend
    from .verification import IntegrationParameters

# Try to import matplotlib, but don't fail if not available
try:
    import matplotlib.pyplot as plt

    HAS_MATPLOTLIB = True
except ImportError:
    HAS_MATPLOTLIB = False
    plt = None


def _check_matplotlib():
    """Check if matplotlib is available."""
    if not HAS_MATPLOTLIB:
        raise ImportError(
            "matplotlib is required for plotting. "
            "Install it with: pip install matplotlib"
        )


def error_growth(
    backend: IntegratorBackend,
    params: IntegrationParameters,
) -> tuple[NDArray[np.integer], NDArray[np.floating], NDArray[np.floating]]:
    """
    Measure the worst deviation from the reference for 0..n_steps steps.

    A fresh system is built for every step count.

    Args:
        backend: Backend to measure.
        params: Scenario; ``params.n_steps`` is the largest step count.

    Returns:
        Tuple of (steps, max position error, max velocity error).
    """
    steps = np.arange(params.n_steps + 1)
    position_error = np.zeros(len(steps))
    velocity_error = np.zeros(len(steps))

    for i, n_steps in enumerate(steps):
        state = build_system(params.n_atoms, params.timestep, params.v0, params.f0)
        backend.advance(state, int(n_steps))
        reference = analytical_solution(state, int(n_steps))
        position_error[i] = np.max(np.abs(state.x - reference.positions))
        velocity_error[i] = np.max(np.abs(state.v - reference.velocities))

    return steps, position_error, velocity_error


def error_growth_plot(
    backends: Iterable[IntegratorBackend],
    params: IntegrationParameters,
    tolerance: LinearTolerance | None = None,
    show: bool = True,
    figsize: tuple[float, float] = (12, 5),
) -> None:
    """
    Plot worst-case position and velocity error against step count.

    Args:
        backends: Backends to compare.
        params: Scenario; ``params.n_steps`` is the largest step count.
        tolerance: Tolerance model drawn as a reference line.
        show: Whether to display the plot immediately.
        figsize: Figure size (width, height) in inches.
    """
    _check_matplotlib()
    tolerance = tolerance if tolerance is not None else LinearTolerance()

    fig, axes = plt.subplots(1, 2, figsize=figsize)
    bound = None

    for backend in backends:
        steps, position_error, velocity_error = error_growth(backend, params)
        axes[0].plot(steps, position_error, "o-", label=backend.name, ms=3, lw=1)
        axes[1].plot(steps, velocity_error, "o-", label=backend.name, ms=3, lw=1)
        bound = np.array([tolerance(int(s)) for s in steps])

    for ax, title in zip(axes, ["Position", "Velocity"]):
        if bound is not None:
            ax.plot(steps, bound, "k--", label="tolerance", lw=1)
        ax.set_xlabel("Steps")
        ax.set_ylabel("Max |actual - analytical|")
        ax.set_title(f"{title} Error (dt = {params.timestep:g})")
        ax.legend()
        ax.grid(True, alpha=0.3)

    plt.tight_layout()
    if show:
        plt.show()


def save(filename: str | Path, dpi: int = 150) -> None:
    """
    Save the current figure to a file.

    Args:
        filename: Output filename (e.g., "plot.png", "plot.pdf").
        dpi: Resolution in dots per inch.
    """
    _check_matplotlib()
    plt.savefig(filename, dpi=dpi, bbox_inches="tight")
    print(f"Saved plot to {filename}")


def show() -> None:
    """Display all pending plots."""
    _check_matplotlib()
    plt.show()
