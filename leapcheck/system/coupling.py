"""Temperature and pressure coupling bookkeeping.

Integrators expect the system to describe which thermostat and barostat
are active, the per-group velocity scaling factors, and scratch space for
per-thread kinetic energy accumulation. Only the "no coupling" settings are
ever used here; the types exist so that every backend sees the same
interface a full engine would hand it.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np
from numpy.typing import NDArray


class ThermostatMode(Enum):
    """Temperature coupling algorithm."""

    NO = "no"
    BERENDSEN = "berendsen"
    NOSE_HOOVER = "nose-hoover"
    V_RESCALE = "v-rescale"


class BarostatMode(Enum):
    """Pressure coupling algorithm."""

    NO = "no"
    BERENDSEN = "berendsen"
    PARRINELLO_RAHMAN = "parrinello-rahman"


@dataclass
class TemperatureCouplingGroup:
    """
    Per-group thermostat state.

    Attributes:
        scaling: Velocity scaling factor (lambda) applied at each step.
    """

    scaling: float = 1.0


@dataclass
class KineticEnergyScratch:
    """
    Per-thread kinetic energy accumulation buffers.

    Attributes:
        n_threads: Number of threads the buffers are sized for.
        ekin_work: Half-step kinetic energy tensors, shape (n_threads, 3, 3).
        dekindl_work: dEkin/dlambda accumulators, shape (n_threads,).
    """

    n_threads: int = 1
    ekin_work: NDArray[np.floating] = field(init=False)
    dekindl_work: NDArray[np.floating] = field(init=False)

    def __post_init__(self) -> None:
        if self.n_threads < 1:
            raise ValueError(f"n_threads must be >= 1, got {self.n_threads}")
        self.ekin_work = np.zeros((self.n_threads, 3, 3), dtype=np.float64)
        self.dekindl_work = np.zeros(self.n_threads, dtype=np.float64)
