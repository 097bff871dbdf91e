"""
leapcheck - Backend parity verification for leap-frog integrators.

Every registered integrator backend (a sequential host loop, and a Warp
kernel when an accelerator is present) is run over a grid of synthetic
constant-force systems and compared component by component with the
closed-form solution.

Quick Start:
    >>> from leapcheck import verify
    >>> report = verify.leapfrog_parity()
    >>> report.raise_for_failures()
"""

__version__ = "0.1.0"

from . import plotting, verify
from .integrators import HostLeapFrog, IntegratorBackend, WarpLeapFrog
from .system import ParticleSystemState, build_system
from .verification import (
    BackendRegistry,
    LinearTolerance,
    ParameterGrid,
    SuiteContext,
    VerificationDriver,
)

__all__ = [
    "verify",
    "plotting",
    "ParticleSystemState",
    "build_system",
    "IntegratorBackend",
    "HostLeapFrog",
    "WarpLeapFrog",
    "BackendRegistry",
    "SuiteContext",
    "ParameterGrid",
    "LinearTolerance",
    "VerificationDriver",
]
