"""Runs every scenario on every registered backend."""

from __future__ import annotations

import sys
import time
from typing import TYPE_CHECKING, TextIO

from ..system import build_system
from .grid import DEFAULT_GRID, IntegrationParameters, ParameterGrid
from .reference import analytical_solution
from .registry import BackendRegistry, SuiteContext
from .report import ScenarioResult, VerificationReport
from .tolerance import ComponentMismatch, LinearTolerance, ValueKind, compare

if TYPE_CHECKING:
    from ..integrators import IntegratorBackend
    from ..system import ParticleSystemState


def check_state(
    state: ParticleSystemState,
    n_steps: int,
    tolerance: LinearTolerance,
) -> list[ComponentMismatch]:
    """
    Compare a system advanced ``n_steps`` steps against the analytical solution.

    Every position and velocity component of every atom is checked; the
    returned list holds position mismatches first, then velocity ones.
    """
    reference = analytical_solution(state, n_steps)
    bound = tolerance(n_steps)
    return compare(
        state.x, reference.positions, bound, ValueKind.POSITION
    ) + compare(state.v, reference.velocities, bound, ValueKind.VELOCITY)


class VerificationDriver:
    """
    Evaluates the parameter grid against all available backends.

    Each (scenario, backend) pair is independent: a fresh system is built,
    advanced once, compared and discarded. Pairs run one after another and
    a tolerance violation never stops the run.

    Example:
        >>> driver = VerificationDriver(SuiteContext())
        >>> report = driver.run()
        >>> report.raise_for_failures()
    """

    def __init__(
        self,
        context: SuiteContext,
        grid: ParameterGrid = DEFAULT_GRID,
        tolerance: LinearTolerance | None = None,
        registry: BackendRegistry | None = None,
        verbose: bool = False,
        file: TextIO | None = None,
    ) -> None:
        """
        Initialize driver.

        Args:
            context: Suite context holding the accelerator probe.
            grid: Parameter grid to evaluate.
            tolerance: Tolerance model (default: LinearTolerance()).
            registry: Backends to use (default: built from ``context``).
            verbose: Print progress while running.
            file: Output for progress lines (defaults to stdout).
        """
        self._context = context
        self._grid = grid
        self._tolerance = tolerance if tolerance is not None else LinearTolerance()
        self._registry = (
            registry if registry is not None else BackendRegistry.from_context(context)
        )
        self._verbose = verbose
        self._file = file if file is not None else sys.stdout

    @property
    def context(self) -> SuiteContext:
        return self._context

    @property
    def registry(self) -> BackendRegistry:
        return self._registry

    @property
    def grid(self) -> ParameterGrid:
        return self._grid

    @property
    def tolerance(self) -> LinearTolerance:
        return self._tolerance

    def run_scenario(
        self,
        backend: IntegratorBackend,
        params: IntegrationParameters,
    ) -> ScenarioResult:
        """
        Run a single scenario on a single backend.

        Args:
            backend: Backend under test.
            params: Scenario parameters.

        Returns:
            ScenarioResult with every mismatching component.
        """
        state = build_system(params.n_atoms, params.timestep, params.v0, params.f0)

        start = time.perf_counter()
        backend.advance(state, params.n_steps)
        elapsed = time.perf_counter() - start

        mismatches = check_state(state, params.n_steps, self._tolerance)
        return ScenarioResult(
            backend=backend.name,
            params=params,
            n_checks=2 * 3 * state.n_atoms,
            mismatches=mismatches,
            elapsed_s=elapsed,
        )

    def run(self) -> VerificationReport:
        """
        Run the whole grid on every registered backend.

        Returns:
            VerificationReport aggregating all scenario results.
        """
        report = VerificationReport(skipped_backends=self._registry.skipped)

        if self._verbose:
            print(
                f"Leap-frog parity: {len(self._grid)} scenarios x "
                f"{len(self._registry)} backend(s) ({', '.join(self._registry.names)})",
                file=self._file,
            )
            for name in self._registry.skipped:
                print(f"  {name} not available, skipping", file=self._file)

        for params in self._grid:
            for backend in self._registry:
                result = self.run_scenario(backend, params)
                report.add_result(result)
                if self._verbose and not result.passed:
                    print(
                        f"  FAIL {params.describe(backend.name)} "
                        f"({len(result.mismatches)} component(s))",
                        file=self._file,
                    )

        if self._verbose:
            status = "passed" if report.passed else "FAILED"
            print(
                f"Done: {len(report.results)} runs, {report.n_checks} checks, {status}",
                file=self._file,
            )

        return report
