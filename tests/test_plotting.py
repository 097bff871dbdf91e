"""Tests for error-growth measurement and plotting."""

import numpy as np
import pytest

from leapcheck import plotting
from leapcheck.integrators import HostLeapFrog
from leapcheck.verification import IntegrationParameters, LinearTolerance

matplotlib = pytest.importorskip("matplotlib")
matplotlib.use("Agg")


@pytest.fixture
def params():
    return IntegrationParameters(10, 0.001, (-2.0, 2.0, 0.0), (-1.0, 1.0, 2.0), 10)


class TestErrorGrowth:
    """Test the error measurement."""

    def test_shapes(self, params):
        steps, position_error, velocity_error = plotting.error_growth(
            HostLeapFrog(), params
        )

        assert np.array_equal(steps, np.arange(11))
        assert position_error.shape == (11,)
        assert velocity_error.shape == (11,)

    def test_zero_steps_exact(self, params):
        _, position_error, velocity_error = plotting.error_growth(HostLeapFrog(), params)
        assert position_error[0] == 0.0
        assert velocity_error[0] == 0.0

    def test_within_linear_bound(self, params):
        """Test the host error stays under the default tolerance at every step."""
        tolerance = LinearTolerance()
        steps, position_error, velocity_error = plotting.error_growth(
            HostLeapFrog(), params
        )
        bound = np.array([tolerance(int(s)) for s in steps])

        assert np.all(position_error <= bound)
        assert np.all(velocity_error <= bound)

    def test_position_error_grows(self, params):
        """Test the finite-step position deviation increases with step count."""
        _, position_error, _ = plotting.error_growth(HostLeapFrog(), params)
        assert np.all(np.diff(position_error) > 0.0)


class TestErrorGrowthPlot:
    """Test figure creation."""

    def test_plot_and_save(self, params, tmp_path):
        import matplotlib.pyplot as plt

        plotting.error_growth_plot([HostLeapFrog()], params, show=False)
        path = tmp_path / "growth.png"
        plotting.save(path)

        assert path.exists()
        assert len(plt.gcf().axes) == 2
        plt.close("all")
