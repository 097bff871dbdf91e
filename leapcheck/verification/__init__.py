"""Backend parity verification against the analytical solution."""

from .driver import VerificationDriver, check_state
from .grid import DEFAULT_GRID, IntegrationParameters, ParameterGrid
from .reference import AnalyticalSolution, analytical_solution, constant_force_motion
from .registry import BackendRegistry, SuiteContext
from .report import ParityError, ScenarioResult, VerificationFailure, VerificationReport
from .tolerance import (
    DEFAULT_EPSILON_PER_STEP,
    ComponentMismatch,
    LinearTolerance,
    ValueKind,
    compare,
    within_tolerance,
)

__all__ = [
    # Driver
    "VerificationDriver",
    "check_state",
    # Parameters
    "IntegrationParameters",
    "ParameterGrid",
    "DEFAULT_GRID",
    # Reference
    "AnalyticalSolution",
    "analytical_solution",
    "constant_force_motion",
    # Backends
    "BackendRegistry",
    "SuiteContext",
    # Tolerance
    "DEFAULT_EPSILON_PER_STEP",
    "LinearTolerance",
    "ComponentMismatch",
    "ValueKind",
    "compare",
    "within_tolerance",
    # Reporting
    "ParityError",
    "ScenarioResult",
    "VerificationFailure",
    "VerificationReport",
]
