"""Sequential host implementation of the leap-frog step."""

from __future__ import annotations

from typing import TYPE_CHECKING

from ..system.coupling import BarostatMode
from .base import IntegratorBackend

if TYPE_CHECKING:
    from ..system import ParticleSystemState


class HostLeapFrog(IntegratorBackend):
    """
    Leap-frog integrator running as a plain loop on the host.

    Atoms and dimensions are visited one at a time, which makes this the
    reference every other backend is compared against.

    Algorithm (per atom i, dimension d):
        v(t + dt/2) = lambda_i * v(t - dt/2) + dt * f(t) / m_i,d
        r(t + dt)   = r(t) + dt * v(t + dt/2)

    With Parrinello-Rahman pressure coupling the velocity update also
    subtracts ``dt * M v(t - dt/2)``, where M is the velocity scaling matrix.
    """

    @property
    def name(self) -> str:
        """Return backend name."""
        return "host"

    def _integrate(self, state: ParticleSystemState, n_steps: int) -> None:
        dt = state.timestep
        n_atoms = state.n_atoms

        x = state.x.tolist()
        v = state.v.tolist()
        f = state.f.tolist()
        inverse_mass = state.inverse_masses_per_dim.tolist()
        scaling = state.group_scaling.tolist()
        pr_matrix = None
        if state.barostat is BarostatMode.PARRINELLO_RAHMAN:
            pr_matrix = state.pr_scaling_matrix.tolist()

        for _ in range(n_steps):
            for i in range(n_atoms):
                x_i, v_i, f_i, m_i = x[i], v[i], f[i], inverse_mass[i]
                v_old = list(v_i)
                for d in range(3):
                    v_new = scaling[i] * v_old[d] + f_i[d] * m_i[d] * dt
                    if pr_matrix is not None:
                        row = pr_matrix[d]
                        v_new -= dt * (
                            row[0] * v_old[0] + row[1] * v_old[1] + row[2] * v_old[2]
                        )
                    v_i[d] = v_new
                    x_i[d] += v_new * dt

        state.x[:] = x
        state.v[:] = v
