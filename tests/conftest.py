"""Shared fixtures for leapcheck tests."""

import pytest

from leapcheck.integrators import HostLeapFrog, WarpLeapFrog
from leapcheck.verification import BackendRegistry, SuiteContext


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "gpu: marks tests that require a CUDA device")
    config.addinivalue_line("markers", "gate: marks full-grid parity gates")


@pytest.fixture(scope="session")
def suite_context():
    """Suite context whose accelerator probe runs once per test session."""
    return SuiteContext()


@pytest.fixture(scope="session")
def cuda_available(suite_context):
    """Check if CUDA is available."""
    return suite_context.accelerator_available


@pytest.fixture(scope="session")
def registry(suite_context):
    """Backends available for this session."""
    return BackendRegistry.from_context(suite_context)


@pytest.fixture(params=["host", "warp-cpu", "warp-cuda"])
def backend(request, cuda_available):
    """
    Every backend implementation.

    The Warp kernel is exercised on the CPU device everywhere and on the
    GPU when one is present.
    """
    if request.param == "host":
        return HostLeapFrog()
    if request.param == "warp-cpu":
        return WarpLeapFrog(device="cpu")
    if not cuda_available:
        pytest.skip("CUDA not available")
    return WarpLeapFrog(device="cuda:0")
