"""Periodic box descriptor."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray


@dataclass(frozen=True)
class Box:
    """
    Periodic box descriptor.

    Integrators take the box as part of the system they advance, but the
    leap-frog update never wraps positions, so the box only has to be a
    well-formed 3x3 matrix.

    Attributes:
        vectors: 3x3 array where rows are box vectors [a, b, c].
    """

    vectors: NDArray[np.floating]

    def __post_init__(self) -> None:
        """Validate and convert vectors to proper shape."""
        vectors = np.array(self.vectors, dtype=np.float64)
        if vectors.shape == (3,):
            vectors = np.diag(vectors)
        if vectors.shape != (3, 3):
            raise ValueError(f"Box vectors must be (3,) or (3, 3), got {vectors.shape}")
        vectors.flags.writeable = False
        # Use object.__setattr__ since dataclass is frozen
        object.__setattr__(self, "vectors", vectors)

    @classmethod
    def cubic(cls, length: float) -> Box:
        """Create a cubic box with given side length."""
        return cls(np.array([length, length, length]))

    @property
    def lengths(self) -> NDArray[np.floating]:
        """Return box vector lengths [|a|, |b|, |c|]."""
        return np.linalg.norm(self.vectors, axis=1)

    @property
    def volume(self) -> float:
        """Return box volume."""
        return float(np.abs(np.linalg.det(self.vectors)))

    @property
    def is_orthorhombic(self) -> bool:
        """Check if box is orthorhombic (diagonal matrix)."""
        off_diag = self.vectors.copy()
        np.fill_diagonal(off_diag, 0)
        return np.allclose(off_diag, 0)
