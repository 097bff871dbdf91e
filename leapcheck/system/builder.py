"""Deterministic synthetic particle systems."""

from __future__ import annotations

import numpy as np
from numpy.typing import ArrayLike, NDArray

from .box import Box
from .coupling import (
    BarostatMode,
    KineticEnergyScratch,
    TemperatureCouplingGroup,
    ThermostatMode,
)
from .state import ParticleSystemState

# Typical periodic box size is tens of nanometers
BOX_LENGTH = 10.0

# Atom masses span 1-100 g/mol
MASS_RANGE = 100


def _as_vector(name: str, values: ArrayLike) -> NDArray[np.floating]:
    vector = np.asarray(values, dtype=np.float64)
    if vector.shape != (3,):
        raise ValueError(f"{name} must have 3 components, got shape {vector.shape}")
    return vector


def synthetic_positions(n_atoms: int) -> NDArray[np.floating]:
    """
    Generate index-dependent positions, shape (n_atoms, 3).

    The coordinates cycle with different periods along x and y so that
    atoms rarely coincide, while z is always zero.
    """
    index = np.arange(n_atoms)
    positions = np.empty((n_atoms, 3), dtype=np.float64)
    positions[:, 0] = (index % 21) * 1.0
    positions[:, 1] = 6.5 + (index % 13) * (-1.0)
    positions[:, 2] = (index % 32) * 0.0
    return positions


def synthetic_inverse_masses(n_atoms: int) -> NDArray[np.floating]:
    """Return inverse masses 1 / (1 + i % 100) for each atom index i."""
    return 1.0 / (1.0 + np.arange(n_atoms) % MASS_RANGE)


def build_system(
    n_atoms: int,
    timestep: float,
    v0: ArrayLike,
    f0: ArrayLike,
) -> ParticleSystemState:
    """
    Build a fresh system of independent atoms.

    All atoms share the initial velocity ``v0`` and the constant force
    ``f0``. Positions and masses vary with the atom index. The coupling
    bookkeeping is set up for a single thread with no thermostat or barostat.

    Args:
        n_atoms: Number of atoms, at least 1.
        timestep: Integration timestep, strictly positive.
        v0: Initial velocity shared by all atoms, 3 components.
        f0: Constant force acting on every atom, 3 components.

    Returns:
        New ParticleSystemState with ``x == x0`` and ``v == v0``.

    Raises:
        ValueError: If ``n_atoms`` or ``timestep`` is out of range, or a
            vector does not have 3 components.
    """
    if int(n_atoms) != n_atoms or n_atoms < 1:
        raise ValueError(f"n_atoms must be a positive integer, got {n_atoms}")
    if not np.isfinite(timestep) or timestep <= 0.0:
        raise ValueError(f"timestep must be positive, got {timestep}")
    n_atoms = int(n_atoms)
    v0 = _as_vector("v0", v0)
    f0 = _as_vector("f0", f0)

    positions = synthetic_positions(n_atoms)
    velocities = np.tile(v0, (n_atoms, 1))
    forces = np.tile(f0, (n_atoms, 1))
    inverse_masses = synthetic_inverse_masses(n_atoms)

    return ParticleSystemState(
        x0=positions.copy(),
        x=positions,
        v0=velocities.copy(),
        v=velocities,
        f=forces,
        inverse_masses=inverse_masses,
        inverse_masses_per_dim=np.repeat(inverse_masses[:, np.newaxis], 3, axis=1),
        timestep=float(timestep),
        box=Box.cubic(BOX_LENGTH),
        pr_scaling_matrix=np.eye(3, dtype=np.float64),
        thermostat=ThermostatMode.NO,
        barostat=BarostatMode.NO,
        coupling_groups=[TemperatureCouplingGroup(scaling=1.0)],
        group_indices=np.zeros(n_atoms, dtype=np.int32),
        kinetic_scratch=KineticEnergyScratch(n_threads=1),
    )
