"""Integrator backend implementations."""

from .base import IntegratorBackend
from .leapfrog import HostLeapFrog
from .warp_leapfrog import WarpLeapFrog, cuda_available

__all__ = [
    "IntegratorBackend",
    "HostLeapFrog",
    "WarpLeapFrog",
    "cuda_available",
]
