"""Tests for ParticleSystemState and the synthetic system builder."""

import numpy as np
import pytest

from leapcheck.system import (
    BarostatMode,
    KineticEnergyScratch,
    ParticleSystemState,
    TemperatureCouplingGroup,
    ThermostatMode,
    build_system,
)
from leapcheck.system.builder import synthetic_inverse_masses, synthetic_positions


def make_state(n_atoms=3, **overrides):
    """Create a minimal valid state."""
    positions = np.zeros((n_atoms, 3))
    kwargs = dict(
        x0=positions.copy(),
        x=positions,
        v0=np.zeros((n_atoms, 3)),
        v=np.zeros((n_atoms, 3)),
        f=np.zeros((n_atoms, 3)),
        inverse_masses=np.ones(n_atoms),
        inverse_masses_per_dim=np.ones((n_atoms, 3)),
        timestep=0.001,
    )
    kwargs.update(overrides)
    return ParticleSystemState(**kwargs)


class TestParticleSystemStateCreation:
    """Test state construction and validation."""

    def test_basic_creation(self):
        """Test creating a state with default auxiliary fields."""
        state = make_state(n_atoms=4)

        assert state.n_atoms == 4
        assert state.step == 0
        assert state.time == 0.0
        assert state.thermostat is ThermostatMode.NO
        assert state.barostat is BarostatMode.NO
        assert np.array_equal(state.pr_scaling_matrix, np.eye(3))
        assert state.group_indices.dtype == np.int32
        assert np.all(state.group_indices == 0)
        assert len(state.coupling_groups) == 1

    def test_arrays_converted_to_float64(self):
        """Test integer inputs become contiguous float64 buffers."""
        state = make_state(n_atoms=2, f=np.ones((2, 3), dtype=np.int64))
        assert state.f.dtype == np.float64
        assert state.f.flags.c_contiguous

    def test_wrong_shape(self):
        """Test that mismatched per-atom arrays raise."""
        with pytest.raises(ValueError, match="x shape"):
            make_state(n_atoms=3, x=np.zeros((2, 3)))

    def test_zero_atoms(self):
        """Test that an empty system is rejected."""
        with pytest.raises(ValueError, match="at least one atom"):
            make_state(n_atoms=0)

    @pytest.mark.parametrize("timestep", [0.0, -0.001, float("nan"), float("inf")])
    def test_invalid_timestep(self, timestep):
        """Test that non-positive or non-finite timesteps are rejected."""
        with pytest.raises(ValueError, match="timestep"):
            make_state(timestep=timestep)

    @pytest.mark.parametrize("bad", [0.0, -1.0, np.inf, np.nan])
    def test_invalid_inverse_mass(self, bad):
        """Test that inverse masses must be positive and finite."""
        inverse_masses = np.array([1.0, bad, 1.0])
        with pytest.raises(ValueError, match="Inverse masses"):
            make_state(inverse_masses=inverse_masses)

    def test_group_index_out_of_range(self):
        """Test that atoms must reference an existing coupling group."""
        with pytest.raises(ValueError, match="coupling group"):
            make_state(group_indices=np.array([0, 1, 0]))


class TestParticleSystemStateProperties:
    """Test derived quantities and copying."""

    def test_displacement(self):
        """Test displacement is measured from the original positions."""
        state = make_state(n_atoms=2)
        state.x[1] = [1.0, -2.0, 3.0]
        assert np.array_equal(state.displacement, [[0, 0, 0], [1.0, -2.0, 3.0]])

    def test_group_scaling(self):
        """Test per-atom scaling factors are looked up from the group table."""
        state = make_state(
            n_atoms=3,
            coupling_groups=[
                TemperatureCouplingGroup(1.0),
                TemperatureCouplingGroup(0.5),
            ],
            group_indices=np.array([1, 0, 1]),
        )
        assert np.array_equal(state.group_scaling, [0.5, 1.0, 0.5])

    def test_copy_is_independent(self):
        """Test that a copy shares no buffers with the original."""
        state = make_state(n_atoms=2)
        clone = state.copy()

        clone.x[0, 0] = 42.0
        clone.v[1, 2] = -1.0
        clone.kinetic_scratch.ekin_work[0, 0, 0] = 3.0

        assert state.x[0, 0] == 0.0
        assert state.v[1, 2] == 0.0
        assert state.kinetic_scratch.ekin_work[0, 0, 0] == 0.0
        assert not np.shares_memory(state.f, clone.f)


class TestKineticEnergyScratch:
    """Test per-thread scratch allocation."""

    def test_single_thread(self):
        scratch = KineticEnergyScratch()
        assert scratch.ekin_work.shape == (1, 3, 3)
        assert scratch.dekindl_work.shape == (1,)

    def test_invalid_thread_count(self):
        with pytest.raises(ValueError):
            KineticEnergyScratch(n_threads=0)


class TestBuildSystem:
    """Test the deterministic synthetic system builder."""

    def test_shapes_and_initial_condition(self):
        """Test that current fields start equal to the originals."""
        state = build_system(10, 0.001, [-2.0, 0.0, 0.0], [-1.0, 0.0, 2.0])

        assert state.n_atoms == 10
        assert state.timestep == 0.001
        assert np.array_equal(state.x, state.x0)
        assert np.array_equal(state.v, state.v0)
        assert not np.shares_memory(state.x, state.x0)
        assert not np.shares_memory(state.v, state.v0)
        assert np.all(state.v == [-2.0, 0.0, 0.0])
        assert np.all(state.f == [-1.0, 0.0, 2.0])

    def test_positions(self):
        """Test the index-dependent position pattern."""
        positions = synthetic_positions(40)

        assert np.array_equal(positions[0], [0.0, 6.5, 0.0])
        assert np.array_equal(positions[5], [5.0, 1.5, 0.0])
        assert np.array_equal(positions[21], [0.0, 6.5 - 8.0, 0.0])
        assert np.all(positions[:, 2] == 0.0)

    def test_positions_distinct(self):
        """Test that atoms in a 300-atom system rarely coincide."""
        positions = synthetic_positions(300)
        n_unique = len(np.unique(positions, axis=0))
        # x repeats every 21 and y every 13, so the pattern repeats every 273
        assert n_unique == 273

    def test_inverse_masses(self):
        """Test masses cycle through 1..100."""
        inverse_masses = synthetic_inverse_masses(300)

        assert inverse_masses[0] == 1.0
        assert inverse_masses[1] == 0.5
        assert inverse_masses[99] == pytest.approx(0.01)
        assert inverse_masses[100] == 1.0
        assert np.all(inverse_masses > 0.0)

    def test_inverse_masses_isotropic(self):
        """Test per-dimension inverse masses equal the scalar ones."""
        state = build_system(300, 0.0005, [0.0, 2.0, 0.0], [0.0, 1.0, 2.0])
        for d in range(3):
            assert np.array_equal(state.inverse_masses_per_dim[:, d], state.inverse_masses)

    def test_auxiliary_fields(self):
        """Test inert coupling bookkeeping is initialized."""
        state = build_system(5, 0.001, [0, 0, 0], [0, 0, 0])

        assert np.allclose(state.box.lengths, 10.0)
        assert np.array_equal(state.pr_scaling_matrix, np.eye(3))
        assert state.thermostat is ThermostatMode.NO
        assert state.barostat is BarostatMode.NO
        assert [g.scaling for g in state.coupling_groups] == [1.0]
        assert np.array_equal(state.group_indices, np.zeros(5))
        assert state.kinetic_scratch.n_threads == 1

    def test_deterministic(self):
        """Test that two builds with the same input are identical."""
        a = build_system(300, 0.001, [-2.0, 2.0, 0.0], [-1.0, 1.0, 2.0])
        b = build_system(300, 0.001, [-2.0, 2.0, 0.0], [-1.0, 1.0, 2.0])

        assert np.array_equal(a.x, b.x)
        assert np.array_equal(a.inverse_masses, b.inverse_masses)

    @pytest.mark.parametrize("n_atoms", [0, -1, 2.5])
    def test_invalid_atom_count(self, n_atoms):
        """Test construction fails before any state exists."""
        with pytest.raises(ValueError, match="n_atoms"):
            build_system(n_atoms, 0.001, [0, 0, 0], [0, 0, 0])

    @pytest.mark.parametrize("timestep", [0.0, -0.0005])
    def test_invalid_timestep(self, timestep):
        with pytest.raises(ValueError, match="timestep"):
            build_system(1, timestep, [0, 0, 0], [0, 0, 0])

    def test_invalid_vector(self):
        with pytest.raises(ValueError, match="v0"):
            build_system(1, 0.001, [0, 0], [0, 0, 0])
