"""Accelerator implementation of the leap-frog step using NVIDIA Warp."""

from __future__ import annotations

from typing import TYPE_CHECKING

import warp as wp

from ..system.coupling import BarostatMode
from .base import IntegratorBackend

if TYPE_CHECKING:
    from ..system import ParticleSystemState


@wp.kernel(enable_backward=False)
def _leapfrog_step(
    x: wp.array(dtype=wp.vec3d),
    v: wp.array(dtype=wp.vec3d),
    f: wp.array(dtype=wp.vec3d),
    inverse_mass_per_dim: wp.array(dtype=wp.vec3d),
    group_scaling: wp.array(dtype=wp.float64),
    pr_matrix: wp.mat33d,
    apply_pr: wp.bool,
    dt: wp.float64,
) -> None:
    """Advance one atom by a single leap-frog step.

    Parameters
    ----------
    x : wp.array, shape (N,), dtype=wp.vec3d
        Positions, updated in place.
    v : wp.array, shape (N,), dtype=wp.vec3d
        Half-step velocities, updated in place.
    f : wp.array, shape (N,), dtype=wp.vec3d
        Forces, held constant.
    inverse_mass_per_dim : wp.array, shape (N,), dtype=wp.vec3d
        Per-dimension inverse masses.
    group_scaling : wp.array, shape (N,), dtype=wp.float64
        Thermostat velocity scaling factor of each atom's coupling group.
    pr_matrix : wp.mat33d
        Parrinello-Rahman velocity scaling matrix.
    apply_pr : wp.bool
        Whether the Parrinello-Rahman term is applied.
    dt : wp.float64
        Timestep.
    """
    tid = wp.tid()

    v_old = v[tid]
    v_new = group_scaling[tid] * v_old + wp.cw_mul(f[tid], inverse_mass_per_dim[tid]) * dt
    if apply_pr:
        v_new = v_new - dt * wp.mul(pr_matrix, v_old)

    v[tid] = v_new
    x[tid] = x[tid] + v_new * dt


def cuda_available() -> bool:
    """Return True if Warp can see at least one CUDA device."""
    wp.init()
    return wp.is_cuda_available()


class WarpLeapFrog(IntegratorBackend):
    """
    Leap-frog integrator offloaded to a Warp device.

    Each call copies the system to freshly allocated device buffers,
    launches one kernel per step and copies positions and velocities back
    once all steps are complete. The call blocks until the results are
    visible on the host.

    Attributes:
        device: Warp device name, e.g. ``"cuda:0"`` or ``"cpu"``.
    """

    def __init__(self, device: str = "cuda:0") -> None:
        """
        Initialize Warp backend.

        Args:
            device: Warp device to run on.
        """
        self._device = device

    @property
    def name(self) -> str:
        """Return backend name."""
        return f"warp-{self._device}"

    @property
    def device(self) -> str:
        return self._device

    def _integrate(self, state: ParticleSystemState, n_steps: int) -> None:
        wp.init()
        device = wp.get_device(self._device)

        x = wp.array(state.x, dtype=wp.vec3d, device=device)
        v = wp.array(state.v, dtype=wp.vec3d, device=device)
        f = wp.array(state.f, dtype=wp.vec3d, device=device)
        inverse_mass = wp.array(
            state.inverse_masses_per_dim, dtype=wp.vec3d, device=device
        )
        scaling = wp.array(state.group_scaling, dtype=wp.float64, device=device)
        pr_matrix = wp.mat33d(*state.pr_scaling_matrix.ravel().tolist())
        apply_pr = state.barostat is BarostatMode.PARRINELLO_RAHMAN
        dt = wp.float64(state.timestep)

        for _ in range(n_steps):
            wp.launch(
                _leapfrog_step,
                dim=state.n_atoms,
                inputs=[x, v, f, inverse_mass, scaling, pr_matrix, apply_pr, dt],
                device=device,
            )
        wp.synchronize_device(device)

        state.x[:] = x.numpy()
        state.v[:] = v.numpy()
