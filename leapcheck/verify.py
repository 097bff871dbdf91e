"""
Simple high-level verification API.

Example:
    >>> from leapcheck import verify
    >>> report = verify.leapfrog_parity(verbose=False)
    >>> report.passed
    True
"""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

from .integrators import cuda_available
from .verification import (
    DEFAULT_EPSILON_PER_STEP,
    DEFAULT_GRID,
    LinearTolerance,
    ParameterGrid,
    SuiteContext,
    VerificationDriver,
    VerificationReport,
)


def leapfrog_parity(
    grid: ParameterGrid = DEFAULT_GRID,
    epsilon_per_step: float = DEFAULT_EPSILON_PER_STEP,
    probe: Callable[[], bool] = cuda_available,
    accelerator_device: str = "cuda:0",
    output: str | Path | None = None,
    verbose: bool = True,
) -> VerificationReport:
    """
    Check every available leap-frog backend against the analytical solution.

    Args:
        grid: Scenario grid (default: the standard 192-scenario grid).
        epsilon_per_step: Per-step tolerance increment.
        probe: Accelerator capability probe.
        accelerator_device: Warp device used when an accelerator is found.
        output: Optional path for a JSON copy of the report.
        verbose: Print progress and a summary table.

    Returns:
        VerificationReport with all results. Nothing is raised on failure;
        call ``report.raise_for_failures()`` for that.
    """
    context = SuiteContext(probe=probe, accelerator_device=accelerator_device)
    driver = VerificationDriver(
        context,
        grid=grid,
        tolerance=LinearTolerance(epsilon_per_step),
        verbose=verbose,
    )
    report = driver.run()

    if output is not None:
        report.save(output)
    if verbose:
        report.print_summary()

    return report
