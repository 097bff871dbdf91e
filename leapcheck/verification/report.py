"""Collection and reporting of verification results."""

from __future__ import annotations

import json
import sys
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any, TextIO

from .grid import IntegrationParameters
from .tolerance import DIMENSIONS, ComponentMismatch


class ParityError(AssertionError):
    """Raised when one or more backend outputs violate the tolerance."""


@dataclass(frozen=True)
class VerificationFailure:
    """
    A tolerance violation with everything needed to diagnose it.

    Attributes:
        backend: Name of the backend that produced the value.
        params: Scenario parameters.
        mismatch: The violating component.
    """

    backend: str
    params: IntegrationParameters
    mismatch: ComponentMismatch

    def describe(self) -> str:
        """Return a single-line description."""
        return f"{self.params.describe(self.backend)}: {self.mismatch.describe()}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a flat dictionary."""
        result: dict[str, Any] = {"backend": self.backend}
        result.update(self.params.as_dict())
        result.update(
            {
                "atom": self.mismatch.atom,
                "dimension": DIMENSIONS[self.mismatch.dimension],
                "kind": self.mismatch.kind.value,
                "actual": self.mismatch.actual,
                "expected": self.mismatch.expected,
                "tolerance": self.mismatch.tolerance,
            }
        )
        return result


@dataclass
class ScenarioResult:
    """
    Outcome of one scenario on one backend.

    Attributes:
        backend: Backend name.
        params: Scenario parameters.
        n_checks: Number of components compared.
        mismatches: Components outside tolerance.
        elapsed_s: Wall time spent in the backend call.
    """

    backend: str
    params: IntegrationParameters
    n_checks: int
    mismatches: list[ComponentMismatch] = field(default_factory=list)
    elapsed_s: float = 0.0

    @property
    def passed(self) -> bool:
        return len(self.mismatches) == 0

    @property
    def failures(self) -> list[VerificationFailure]:
        return [
            VerificationFailure(backend=self.backend, params=self.params, mismatch=m)
            for m in self.mismatches
        ]


class VerificationReport:
    """
    Aggregated results of a verification run.

    Failures are only collected; nothing is raised until the caller asks
    for it with ``raise_for_failures()``.

    Example:
        report = driver.run()
        report.print_summary()
        report.save("parity.json")
        report.raise_for_failures()
    """

    def __init__(
        self,
        name: str = "leapfrog_parity",
        skipped_backends: tuple[str, ...] = (),
    ) -> None:
        """
        Initialize report.

        Args:
            name: Name for this verification run.
            skipped_backends: Optional backends that were not available.
        """
        self.name = name
        self.skipped_backends = tuple(skipped_backends)
        self.results: list[ScenarioResult] = []
        self.start_time = datetime.now()

    def add_result(self, result: ScenarioResult) -> None:
        """Add a scenario result."""
        self.results.append(result)

    @property
    def backends(self) -> list[str]:
        """Return names of backends with at least one result, in run order."""
        return list(dict.fromkeys(r.backend for r in self.results))

    @property
    def failures(self) -> list[VerificationFailure]:
        return [f for r in self.results for f in r.failures]

    @property
    def n_checks(self) -> int:
        return sum(r.n_checks for r in self.results)

    @property
    def passed(self) -> bool:
        return all(r.passed for r in self.results)

    def results_for(self, backend: str) -> list[ScenarioResult]:
        """Get results of a single backend."""
        return [r for r in self.results if r.backend == backend]

    def to_dict(self) -> dict[str, Any]:
        """Convert the whole report to a dictionary."""
        return {
            "name": self.name,
            "timestamp": self.start_time.isoformat(),
            "backends": self.backends,
            "skipped_backends": list(self.skipped_backends),
            "n_scenarios": len(self.results),
            "n_checks": self.n_checks,
            "n_failed_scenarios": sum(1 for r in self.results if not r.passed),
            "passed": self.passed,
            "failures": [f.to_dict() for f in self.failures],
        }

    def to_json(self, indent: int = 2) -> str:
        """Convert to JSON string."""
        return json.dumps(self.to_dict(), indent=indent)

    def save(self, filepath: str | Path) -> None:
        """
        Save report to JSON file.

        Args:
            filepath: Output file path.
        """
        filepath = Path(filepath)
        filepath.parent.mkdir(parents=True, exist_ok=True)
        filepath.write_text(self.to_json())

    def print_summary(self, file: TextIO | None = None) -> None:
        """Print per-backend summary table (defaults to stdout)."""
        out = file if file is not None else sys.stdout

        print(f"\n{'=' * 60}", file=out)
        print(f"Verification Report: {self.name}", file=out)
        print(f"{'=' * 60}", file=out)
        print(f"Scenarios: {len(self.results)}", file=out)
        print(f"Checks: {self.n_checks}", file=out)
        print(f"Failures: {len(self.failures)}", file=out)
        for name in self.skipped_backends:
            print(f"Skipped: {name} (not available)", file=out)
        print(f"{'-' * 60}", file=out)

        print(f"{'Backend':<24} {'Status':<8} {'Scenarios':<12} {'Failed':<8}", file=out)
        print(f"{'-' * 60}", file=out)
        for backend in self.backends:
            results = self.results_for(backend)
            n_failed = sum(1 for r in results if not r.passed)
            status = "PASS" if n_failed == 0 else "FAIL"
            print(f"{backend:<24} {status:<8} {len(results):<12} {n_failed:<8}", file=out)

        failures = self.failures
        if failures:
            print(f"{'-' * 60}", file=out)
            for failure in failures:
                print(failure.describe(), file=out)

        print(f"{'=' * 60}\n", file=out)

    def raise_for_failures(self) -> None:
        """
        Raise if any component violated the tolerance.

        Raises:
            ParityError: Listing every failure, one per line.
        """
        failures = self.failures
        if failures:
            lines = "\n".join(f.describe() for f in failures)
            raise ParityError(
                f"{len(failures)} component(s) differ from the analytical solution:\n"
                f"{lines}"
            )
