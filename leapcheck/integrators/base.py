"""Base interface for integrator backends."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..system import ParticleSystemState


class IntegratorBackend(ABC):
    """
    Abstract base class for leap-frog backends.

    A backend advances a system in place by a requested number of steps.
    Backends are interchangeable: every one of them must produce the same
    trajectory up to floating-point rounding, and none may keep state
    between calls other than what is stored in the system itself.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Return backend name."""
        ...

    @abstractmethod
    def _integrate(self, state: ParticleSystemState, n_steps: int) -> None:
        """Perform ``n_steps`` (> 0) leap-frog updates of ``state.x``/``state.v``."""
        ...

    def advance(self, state: ParticleSystemState, n_steps: int) -> None:
        """
        Advance the system by ``n_steps`` sequential leap-frog steps.

        Only the current fields (``x``, ``v``, ``step``, ``time``) are
        modified; ``x0`` and ``v0`` are left untouched.

        Args:
            state: System to advance in place.
            n_steps: Number of steps, non-negative.

        Raises:
            ValueError: If ``n_steps`` is negative.
        """
        if int(n_steps) != n_steps or n_steps < 0:
            raise ValueError(f"n_steps must be a non-negative integer, got {n_steps}")
        n_steps = int(n_steps)
        if n_steps == 0:
            return

        self._integrate(state, n_steps)

        state.step += n_steps
        state.time += n_steps * state.timestep

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"
