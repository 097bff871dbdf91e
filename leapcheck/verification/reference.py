"""Closed-form reference for constant-force, constant-mass motion."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

import numpy as np
from numpy.typing import NDArray

if TYPE_CHECKING:
    from ..system import ParticleSystemState


@dataclass(frozen=True)
class AnalyticalSolution:
    """
    Expected positions and velocities after a given elapsed time.

    Attributes:
        positions: Expected positions, shape (N, 3).
        velocities: Expected velocities, shape (N, 3).
        total_time: Elapsed time T = n_steps * dt.
    """

    positions: NDArray[np.floating]
    velocities: NDArray[np.floating]
    total_time: float


def constant_force_motion(
    x0: NDArray[np.floating],
    v0: NDArray[np.floating],
    forces: NDArray[np.floating],
    inverse_masses: NDArray[np.floating],
    total_time: float,
) -> tuple[NDArray[np.floating], NDArray[np.floating]]:
    """
    Evaluate uniformly accelerated motion.

        x(T) = x0 + v0*T + 0.5*f*T^2/m
        v(T) = v0 + f*T/m

    Each atom only sees its own inverse mass.

    Args:
        x0: Initial positions, shape (N, 3).
        v0: Initial velocities, shape (N, 3).
        forces: Constant forces, shape (N, 3).
        inverse_masses: Inverse masses, shape (N,).
        total_time: Elapsed time.

    Returns:
        Tuple of (positions, velocities), each shape (N, 3).
    """
    inverse_masses = np.asarray(inverse_masses, dtype=np.float64)[:, np.newaxis]
    positions = x0 + v0 * total_time + 0.5 * forces * total_time**2 * inverse_masses
    velocities = v0 + forces * total_time * inverse_masses
    return positions, velocities


def analytical_solution(state: ParticleSystemState, n_steps: int) -> AnalyticalSolution:
    """
    Compute the reference solution for a system advanced ``n_steps`` steps.

    Only the original fields (``x0``, ``v0``), the forces and the masses
    are read, so the result does not depend on what a backend did to the
    current positions and velocities.
    """
    if n_steps < 0:
        raise ValueError(f"n_steps must be non-negative, got {n_steps}")
    total_time = n_steps * state.timestep
    positions, velocities = constant_force_motion(
        state.x0, state.v0, state.f, state.inverse_masses, total_time
    )
    return AnalyticalSolution(
        positions=positions, velocities=velocities, total_time=total_time
    )
