"""Scenario parameters and the parameter grid they are drawn from."""

from __future__ import annotations

import itertools
from collections.abc import Iterator
from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class IntegrationParameters:
    """
    Parameters of one verification scenario.

    Attributes:
        n_atoms: Number of atoms.
        timestep: Integration timestep.
        v0: Initial velocity shared by all atoms.
        f0: Constant force acting on every atom.
        n_steps: Number of leap-frog steps.
    """

    n_atoms: int
    timestep: float
    v0: tuple[float, float, float]
    f0: tuple[float, float, float]
    n_steps: int

    def __post_init__(self) -> None:
        """Validate parameters and normalize vectors to float tuples."""
        if int(self.n_atoms) != self.n_atoms or self.n_atoms < 1:
            raise ValueError(f"n_atoms must be a positive integer, got {self.n_atoms}")
        if not np.isfinite(self.timestep) or self.timestep <= 0.0:
            raise ValueError(f"timestep must be positive, got {self.timestep}")
        if int(self.n_steps) != self.n_steps or self.n_steps < 0:
            raise ValueError(
                f"n_steps must be a non-negative integer, got {self.n_steps}"
            )
        for name in ("v0", "f0"):
            vector = tuple(float(c) for c in getattr(self, name))
            if len(vector) != 3:
                raise ValueError(f"{name} must have 3 components, got {len(vector)}")
            object.__setattr__(self, name, vector)
        object.__setattr__(self, "n_atoms", int(self.n_atoms))
        object.__setattr__(self, "timestep", float(self.timestep))
        object.__setattr__(self, "n_steps", int(self.n_steps))

    @property
    def total_time(self) -> float:
        """Return elapsed time after all steps."""
        return self.n_steps * self.timestep

    def describe(self, backend_name: str) -> str:
        """Return a one-line description of this scenario on a backend."""
        vx, vy, vz = self.v0
        fx, fy, fz = self.f0
        return (
            f"Testing {backend_name} with {self.n_atoms} atoms for {self.n_steps} "
            f"timestep (dt = {self.timestep:f}, v0=({vx:f}, {vy:f}, {vz:f}), "
            f"f0=({fx:f}, {fy:f}, {fz:f}))"
        )

    def as_dict(self) -> dict[str, float | int]:
        """Return the nine scalar scenario parameters."""
        vx, vy, vz = self.v0
        fx, fy, fz = self.f0
        return {
            "n_atoms": self.n_atoms,
            "timestep": self.timestep,
            "vx": vx,
            "vy": vy,
            "vz": vz,
            "fx": fx,
            "fy": fy,
            "fz": fz,
            "n_steps": self.n_steps,
        }


@dataclass(frozen=True)
class ParameterGrid:
    """
    Axis values whose Cartesian product defines the scenario set.

    Attributes:
        n_atoms: Atom counts.
        timesteps: Timesteps.
        vx, vy, vz: Initial velocity components.
        fx, fy, fz: Force components.
        n_steps: Step counts.
    """

    n_atoms: tuple[int, ...] = (1, 10, 300)
    timesteps: tuple[float, ...] = (0.001, 0.0005)
    vx: tuple[float, ...] = (-2.0, 0.0)
    vy: tuple[float, ...] = (0.0, 2.0)
    vz: tuple[float, ...] = (0.0,)
    fx: tuple[float, ...] = (-1.0, 0.0)
    fy: tuple[float, ...] = (0.0, 1.0)
    fz: tuple[float, ...] = (2.0,)
    n_steps: tuple[int, ...] = (1, 10)

    def __post_init__(self) -> None:
        for name in self.__dataclass_fields__:
            values = tuple(getattr(self, name))
            if len(values) == 0:
                raise ValueError(f"Grid axis '{name}' must not be empty")
            object.__setattr__(self, name, values)

    def __len__(self) -> int:
        size = 1
        for name in self.__dataclass_fields__:
            size *= len(getattr(self, name))
        return size

    def __iter__(self) -> Iterator[IntegrationParameters]:
        """Yield every scenario in the grid, last axis varying fastest."""
        for n_atoms, dt, vx, vy, vz, fx, fy, fz, n_steps in itertools.product(
            self.n_atoms,
            self.timesteps,
            self.vx,
            self.vy,
            self.vz,
            self.fx,
            self.fy,
            self.fz,
            self.n_steps,
        ):
            yield IntegrationParameters(
                n_atoms=n_atoms,
                timestep=dt,
                v0=(vx, vy, vz),
                f0=(fx, fy, fz),
                n_steps=n_steps,
            )


DEFAULT_GRID = ParameterGrid()
