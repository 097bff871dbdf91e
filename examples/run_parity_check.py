#!/usr/bin/env python
"""
Leap-frog backend parity check.

Runs every available backend over the standard scenario grid, prints a
summary, writes the full report to JSON, and plots how the error grows
with step count for the stress scenario.

Usage:
    python examples/run_parity_check.py
"""

import sys

import matplotlib

matplotlib.use("Agg")  # Non-interactive backend

from leapcheck import plotting, verify
from leapcheck.verification import (
    BackendRegistry,
    IntegrationParameters,
    SuiteContext,
)


def main():
    print("=" * 60)
    print("Leap-Frog Backend Parity")
    print("=" * 60)

    # 1. Full grid on every backend found on this machine
    context = SuiteContext()
    report = verify.leapfrog_parity(
        probe=lambda: context.accelerator_available,
        output="parity_report.json",
    )

    # 2. Error growth for 300 atoms over 50 steps
    print("\nError growth (300 atoms, 50 steps):")
    print("-" * 40)
    params = IntegrationParameters(
        n_atoms=300,
        timestep=0.001,
        v0=(-2.0, 2.0, 0.0),
        f0=(-1.0, 1.0, 2.0),
        n_steps=50,
    )
    registry = BackendRegistry.from_context(context)
    for backend in registry:
        steps, position_error, velocity_error = plotting.error_growth(backend, params)
        print(
            f"   {backend.name:<16} max position error {position_error[-1]:.2e}, "
            f"max velocity error {velocity_error[-1]:.2e}"
        )
    plotting.error_growth_plot(registry, params, show=False)
    plotting.save("error_growth.png")

    return 0 if report.passed else 1


if __name__ == "__main__":
    sys.exit(main())
