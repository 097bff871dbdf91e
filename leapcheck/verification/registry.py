"""Suite-scoped capability state and the set of backends under test."""

from __future__ import annotations

from collections.abc import Callable, Iterator

from ..integrators import HostLeapFrog, IntegratorBackend, WarpLeapFrog, cuda_available


class SuiteContext:
    """
    State shared by every scenario of one verification suite.

    The accelerator probe is evaluated on first access and the answer is
    kept for the lifetime of the context.

    Example:
        >>> context = SuiteContext(probe=lambda: False)
        >>> context.accelerator_available
        False
    """

    def __init__(
        self,
        probe: Callable[[], bool] = cuda_available,
        accelerator_device: str = "cuda:0",
    ) -> None:
        """
        Initialize suite context.

        Args:
            probe: Callable reporting whether an accelerator is usable.
            accelerator_device: Warp device used by the accelerator backend.
        """
        self._probe = probe
        self._accelerator_device = accelerator_device
        self._accelerator_available: bool | None = None

    @property
    def accelerator_device(self) -> str:
        return self._accelerator_device

    @property
    def accelerator_available(self) -> bool:
        """Return the cached probe result, running the probe on first use."""
        if self._accelerator_available is None:
            self._accelerator_available = bool(self._probe())
        return self._accelerator_available

    @property
    def probed(self) -> bool:
        """Check whether the probe has already run."""
        return self._accelerator_available is not None


class BackendRegistry:
    """
    Immutable, ordered collection of backends with unique names.

    Example:
        >>> registry = BackendRegistry.from_context(SuiteContext(probe=lambda: False))
        >>> registry.names
        ('host',)
    """

    def __init__(
        self,
        backends: list[IntegratorBackend] | tuple[IntegratorBackend, ...],
        skipped: tuple[str, ...] = (),
    ) -> None:
        """
        Initialize registry.

        Args:
            backends: Backends to register, in evaluation order.
            skipped: Names of optional backends that were not registered.

        Raises:
            ValueError: If no backend is given or two share a name.
        """
        backends = tuple(backends)
        if len(backends) == 0:
            raise ValueError("At least one backend must be registered")
        names = [backend.name for backend in backends]
        duplicates = sorted({name for name in names if names.count(name) > 1})
        if duplicates:
            raise ValueError(f"Duplicate backend names: {', '.join(duplicates)}")

        self._backends = backends
        self._skipped = tuple(skipped)

    @classmethod
    def from_context(cls, context: SuiteContext) -> BackendRegistry:
        """
        Build the registry for a suite.

        The host backend is always present. The Warp backend is added only
        when the context reports an accelerator.
        """
        backends: list[IntegratorBackend] = [HostLeapFrog()]
        skipped: list[str] = []

        accelerator = WarpLeapFrog(device=context.accelerator_device)
        if context.accelerator_available:
            backends.append(accelerator)
        else:
            skipped.append(accelerator.name)

        return cls(backends, skipped=tuple(skipped))

    @property
    def backends(self) -> tuple[IntegratorBackend, ...]:
        return self._backends

    @property
    def names(self) -> tuple[str, ...]:
        return tuple(backend.name for backend in self._backends)

    @property
    def skipped(self) -> tuple[str, ...]:
        """Return names of optional backends that were unavailable."""
        return self._skipped

    def get(self, name: str) -> IntegratorBackend:
        """
        Look up a backend by name.

        Raises:
            KeyError: If no backend has this name.
        """
        for backend in self._backends:
            if backend.name == name:
                return backend
        raise KeyError(f"Unknown backend: {name}. Available: {', '.join(self.names)}")

    def __iter__(self) -> Iterator[IntegratorBackend]:
        return iter(self._backends)

    def __len__(self) -> int:
        return len(self._backends)

    def __contains__(self, name: object) -> bool:
        return name in self.names
