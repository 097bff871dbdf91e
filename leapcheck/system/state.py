"""Particle system state advanced by the integrator backends."""

from __future__ import annotations

import copy
from dataclasses import dataclass, field

import numpy as np
from numpy.typing import NDArray

from .box import Box
from .coupling import (
    BarostatMode,
    KineticEnergyScratch,
    TemperatureCouplingGroup,
    ThermostatMode,
)


def _vector_array(name: str, values: NDArray, n_atoms: int) -> NDArray[np.floating]:
    array = np.ascontiguousarray(values, dtype=np.float64)
    if array.shape != (n_atoms, 3):
        raise ValueError(
            f"{name} shape {array.shape} incompatible with {n_atoms} atoms"
        )
    return array


@dataclass
class ParticleSystemState:
    """
    Single source of truth for a system being integrated.

    Every per-atom buffer is a flat, C-contiguous float64 array owned by
    this object. Backends update ``x``, ``v``, ``step`` and ``time`` in
    place; ``x0`` and ``v0`` hold the initial condition and must never be
    written to after construction.

    Attributes:
        x0: Initial positions, shape (N, 3).
        x: Current positions, shape (N, 3).
        v0: Initial velocities, shape (N, 3).
        v: Current velocities, shape (N, 3).
        f: Constant forces, shape (N, 3).
        inverse_masses: Inverse masses, shape (N,).
        inverse_masses_per_dim: Per-dimension inverse masses, shape (N, 3).
        timestep: Integration timestep.
        box: Periodic box.
        pr_scaling_matrix: Parrinello-Rahman velocity scaling matrix.
        thermostat: Active thermostat.
        barostat: Active barostat.
        coupling_groups: Temperature coupling group table.
        group_indices: Coupling group index of each atom, shape (N,).
        kinetic_scratch: Per-thread kinetic energy buffers.
        step: Number of steps performed so far.
        time: Elapsed simulation time.
    """

    x0: NDArray[np.floating]
    x: NDArray[np.floating]
    v0: NDArray[np.floating]
    v: NDArray[np.floating]
    f: NDArray[np.floating]
    inverse_masses: NDArray[np.floating]
    inverse_masses_per_dim: NDArray[np.floating]
    timestep: float
    box: Box = field(default_factory=lambda: Box.cubic(10.0))
    pr_scaling_matrix: NDArray[np.floating] = field(
        default_factory=lambda: np.eye(3, dtype=np.float64)
    )
    thermostat: ThermostatMode = ThermostatMode.NO
    barostat: BarostatMode = BarostatMode.NO
    coupling_groups: list[TemperatureCouplingGroup] = field(
        default_factory=lambda: [TemperatureCouplingGroup()]
    )
    group_indices: NDArray[np.integer] | None = None
    kinetic_scratch: KineticEnergyScratch = field(default_factory=KineticEnergyScratch)
    step: int = 0
    time: float = 0.0

    def __post_init__(self) -> None:
        """Validate and convert arrays."""
        self.inverse_masses = np.ascontiguousarray(self.inverse_masses, dtype=np.float64)
        if self.inverse_masses.ndim != 1:
            raise ValueError(
                f"inverse_masses must be 1-D, got shape {self.inverse_masses.shape}"
            )
        n_atoms = len(self.inverse_masses)
        if n_atoms < 1:
            raise ValueError("System must contain at least one atom")
        if not np.all(np.isfinite(self.inverse_masses)) or np.any(
            self.inverse_masses <= 0.0
        ):
            raise ValueError("Inverse masses must be strictly positive and finite")
        if not np.isfinite(self.timestep) or self.timestep <= 0.0:
            raise ValueError(f"timestep must be positive, got {self.timestep}")

        self.x0 = _vector_array("x0", self.x0, n_atoms)
        self.x = _vector_array("x", self.x, n_atoms)
        self.v0 = _vector_array("v0", self.v0, n_atoms)
        self.v = _vector_array("v", self.v, n_atoms)
        self.f = _vector_array("f", self.f, n_atoms)
        self.inverse_masses_per_dim = _vector_array(
            "inverse_masses_per_dim", self.inverse_masses_per_dim, n_atoms
        )

        self.pr_scaling_matrix = np.asarray(self.pr_scaling_matrix, dtype=np.float64)
        if self.pr_scaling_matrix.shape != (3, 3):
            raise ValueError(
                f"pr_scaling_matrix must be (3, 3), got {self.pr_scaling_matrix.shape}"
            )

        if self.group_indices is None:
            self.group_indices = np.zeros(n_atoms, dtype=np.int32)
        self.group_indices = np.ascontiguousarray(self.group_indices, dtype=np.int32)
        if self.group_indices.shape != (n_atoms,):
            raise ValueError(
                f"group_indices shape {self.group_indices.shape} incompatible with "
                f"{n_atoms} atoms"
            )
        if np.any(self.group_indices < 0) or np.any(
            self.group_indices >= len(self.coupling_groups)
        ):
            raise ValueError("group_indices refer to a missing coupling group")

    @property
    def n_atoms(self) -> int:
        """Return number of atoms."""
        return len(self.inverse_masses)

    @property
    def displacement(self) -> NDArray[np.floating]:
        """Return displacement from the initial positions, shape (N, 3)."""
        return self.x - self.x0

    @property
    def group_scaling(self) -> NDArray[np.floating]:
        """Return the coupling-group velocity scaling factor of each atom."""
        scaling = np.array([g.scaling for g in self.coupling_groups], dtype=np.float64)
        return scaling[self.group_indices]

    def copy(self) -> ParticleSystemState:
        """Create a deep copy of this state that shares no buffers."""
        return copy.deepcopy(self)
