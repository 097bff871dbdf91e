"""Step-scaled absolute tolerance and component-wise comparison."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np
from numpy.typing import NDArray

# Expected rounding accumulation per step; calibrated empirically
DEFAULT_EPSILON_PER_STEP = 0.000005

DIMENSIONS = ("x", "y", "z")


class ValueKind(Enum):
    """Which quantity a comparison was made on."""

    POSITION = "position"
    VELOCITY = "velocity"


@dataclass(frozen=True)
class LinearTolerance:
    """
    Absolute error bound that grows linearly with the number of steps.

    Attributes:
        epsilon_per_step: Allowed error added by each step.
    """

    epsilon_per_step: float = DEFAULT_EPSILON_PER_STEP

    def __post_init__(self) -> None:
        if not np.isfinite(self.epsilon_per_step) or self.epsilon_per_step < 0.0:
            raise ValueError(
                f"epsilon_per_step must be non-negative, got {self.epsilon_per_step}"
            )

    def __call__(self, n_steps: int) -> float:
        """Return the admissible absolute error after ``n_steps`` steps."""
        if n_steps < 0:
            raise ValueError(f"n_steps must be non-negative, got {n_steps}")
        return n_steps * self.epsilon_per_step


@dataclass(frozen=True)
class ComponentMismatch:
    """A single component that differs from its reference by too much."""

    atom: int
    dimension: int
    kind: ValueKind
    actual: float
    expected: float
    tolerance: float

    @property
    def error(self) -> float:
        return abs(self.actual - self.expected)

    def describe(self) -> str:
        if self.kind is ValueKind.POSITION:
            what = f"Coordinate {self.dimension}"
        else:
            what = f"Velocity component {self.dimension}"
        return (
            f"{what} of atom {self.atom} is different from analytical solution: "
            f"expected {self.expected:.9g}, got {self.actual:.9g} "
            f"(|diff| = {self.error:.3e} > {self.tolerance:.3e})"
        )


def within_tolerance(actual: float, expected: float, tolerance: float) -> bool:
    """Absolute comparison ``|actual - expected| <= tolerance``. NaN never passes."""
    return bool(abs(actual - expected) <= tolerance)


def compare(
    actual: NDArray[np.floating],
    expected: NDArray[np.floating],
    tolerance: float,
    kind: ValueKind,
) -> list[ComponentMismatch]:
    """
    Compare every component of two (N, 3) arrays.

    The comparison is absolute rather than relative because reference
    values can be exactly zero.

    Args:
        actual: Backend output, shape (N, 3).
        expected: Reference values, shape (N, 3).
        tolerance: Admissible absolute error.
        kind: Quantity being compared.

    Returns:
        One mismatch per violating component, ordered by atom then dimension.
    """
    actual = np.asarray(actual, dtype=np.float64)
    expected = np.asarray(expected, dtype=np.float64)
    if actual.shape != expected.shape:
        raise ValueError(
            f"Shape mismatch: actual {actual.shape} vs expected {expected.shape}"
        )

    # Negated so that NaN differences count as violations
    violating = ~(np.abs(actual - expected) <= tolerance)

    return [
        ComponentMismatch(
            atom=int(atom),
            dimension=int(dim),
            kind=kind,
            actual=float(actual[atom, dim]),
            expected=float(expected[atom, dim]),
            tolerance=tolerance,
        )
        for atom, dim in np.argwhere(violating)
    ]
