import math

import pytest

from threebody.config import SimulationConfig
from threebody.data_models import Body
from threebody.physics import (
    NBodyPhysics,
    center_of_mass,
    circular_orbit_speed,
    total_momentum,
)
from threebody.vector_utils import ZERO, vec_add, vec_len, vec_neg


@pytest.fixture
def physics():
    return NBodyPhysics(SimulationConfig(g=1.0, dt=0.01, min_distance=0.1))


def test_force_points_from_a_toward_b(physics):
    a = Body("a", 1.0, (0.0, 0.0, 0.0))
    b = Body("b", 1.0, (2.0, 0.0, 0.0))
    f = physics.compute_force(a, b)
    assert f == pytest.approx((0.25, 0.0, 0.0))


def test_force_scales_with_g_and_masses():
    physics = NBodyPhysics(SimulationConfig(g=3.0))
    a = Body("a", 2.0, (0.0, 0.0, 0.0))
    b = Body("b", 5.0, (0.0, 0.0, -1.0))
    assert physics.compute_force(a, b) == pytest.approx((0.0, 0.0, -30.0))


def test_force_uses_distance_floor(physics):
    a = Body("a", 2.0, (0.0, 0.0, 0.0))
    b = Body("b", 3.0, (0.05, 0.0, 0.0))
    f = physics.compute_force(a, b)
    assert vec_len(f) == pytest.approx(1.0 * 2.0 * 3.0 / 0.1 ** 2)
    assert vec_len(f) < 1.0 * 2.0 * 3.0 / 0.05 ** 2
    assert f[0] > 0


def test_coincident_bodies_produce_zero_force(physics):
    a = Body("a", 1.0, (1.0, 1.0, 1.0))
    b = Body("b", 1.0, (1.0, 1.0, 1.0))
    f = physics.compute_force(a, b)
    assert f == ZERO
    assert all(math.isfinite(c) for c in f)


def test_pair_forces_are_exact_opposites(physics):
    a = Body("a", 1.5, (0.3, -0.2, 0.7))
    b = Body("b", 0.4, (-1.1, 0.9, 0.2))
    fa, fb = physics.compute_net_forces([a, b])
    assert fa == vec_neg(fb)


def test_net_forces_sum_to_zero(physics):
    bodies = [
        Body("a", 1.0, (0.0, 2.0, 0.0)),
        Body("b", 2.0, (1.0, 0.0, 1.0)),
        Body("c", 3.0, (-1.0, 0.0, 1.0)),
    ]
    total = ZERO
    for f in physics.compute_net_forces(bodies):
        total = vec_add(total, f)
    assert total == pytest.approx(ZERO, abs=1e-12)


def test_apply_forces_updates_velocity_before_position(physics):
    body = Body("a", 2.0, (1.0, 2.0, 3.0), velocity=(0.5, 0.0, -1.0))
    force = (4.0, -2.0, 0.0)
    dt = physics.config.dt
    physics.apply_forces([body], [force])

    expected_v = (0.5 + (4.0 / 2.0) * dt, 0.0 + (-2.0 / 2.0) * dt, -1.0 + 0.0 * dt)
    expected_p = (1.0 + expected_v[0] * dt, 2.0 + expected_v[1] * dt, 3.0 + expected_v[2] * dt)
    assert body.velocity == expected_v
    assert body.position == expected_p


def test_apply_forces_rejects_mismatched_lengths(physics):
    with pytest.raises(ValueError):
        physics.apply_forces([Body("a", 1.0, ZERO)], [])


def test_isolated_body_moves_in_straight_line(physics):
    body = Body("a", 1.0, (0.0, 0.0, 0.0), velocity=(1.0, 2.0, 3.0))
    physics.step([body])
    assert body.velocity == (1.0, 2.0, 3.0)
    assert body.position == pytest.approx((0.01, 0.02, 0.03))


def test_three_body_single_step_regression(physics):
    bodies = [
        Body("a", 1.0, (0.0, 0.0, 0.0)),
        Body("b", 1.0, (1.0, 0.0, 0.0)),
        Body("c", 1.0, (0.0, 1.0, 0.0)),
    ]
    physics.step(bodies)

    s = 0.35355339059327373  # 1 / (2 * sqrt(2))
    assert bodies[0].velocity == pytest.approx((0.01, 0.01, 0.0), rel=1e-12)
    assert bodies[0].position == pytest.approx((1e-4, 1e-4, 0.0), rel=1e-12)
    assert bodies[1].velocity == pytest.approx((-0.013535533905932737, 0.0035355339059327373, 0.0), rel=1e-12)
    assert bodies[1].position == pytest.approx((1.0 - 1e-4 * (1 + s), 1e-4 * s, 0.0), rel=1e-12)
    assert bodies[2].velocity == pytest.approx((0.0035355339059327373, -0.013535533905932737, 0.0), rel=1e-12)
    assert bodies[2].position == pytest.approx((1e-4 * s, 1.0 - 1e-4 * (1 + s), 0.0), rel=1e-12)


def test_step_conserves_momentum(physics):
    bodies = [
        Body("a", 1.0, (0.0, 2.0, 0.0), velocity=(0.3, 0.0, 0.0)),
        Body("b", 2.0, (1.0, 0.0, 1.0)),
        Body("c", 0.5, (-1.0, 0.0, 1.0), velocity=(0.0, -0.4, 0.1)),
    ]
    before = total_momentum(bodies)
    for _ in range(500):
        physics.step(bodies)
    assert total_momentum(bodies) == pytest.approx(before, abs=1e-10)


def test_energy_of_two_bodies(physics):
    bodies = [
        Body("a", 1.0, (0.0, 0.0, 0.0), velocity=(1.0, 0.0, 0.0)),
        Body("b", 1.0, (2.0, 0.0, 0.0)),
    ]
    assert physics.kinetic_energy(bodies) == pytest.approx(0.5)
    assert physics.potential_energy(bodies) == pytest.approx(-0.5)
    assert physics.total_energy(bodies) == pytest.approx(0.0)


def test_potential_energy_uses_distance_floor(physics):
    bodies = [Body("a", 1.0, ZERO), Body("b", 1.0, ZERO)]
    assert physics.potential_energy(bodies) == pytest.approx(-1.0 / 0.1)


def test_circular_orbit_keeps_energy_bounded():
    physics = NBodyPhysics(SimulationConfig(g=1.0, dt=0.0001))
    sun = Body("sun", 1000.0, ZERO)
    planet = Body("planet", 1e-6, (1.0, 0.0, 0.0), velocity=(0.0, circular_orbit_speed(1.0, 1000.0, 1.0), 0.0))
    bodies = [sun, planet]
    e0 = physics.total_energy(bodies)
    for _ in range(2000):
        physics.step(bodies)
    assert physics.total_energy(bodies) == pytest.approx(e0, rel=1e-2)
    assert vec_len(planet.position) == pytest.approx(1.0, rel=5e-2)


def test_center_of_mass():
    bodies = [Body("a", 1.0, (0.0, 0.0, 0.0)), Body("b", 3.0, (4.0, 0.0, 0.0))]
    assert center_of_mass(bodies) == pytest.approx((3.0, 0.0, 0.0))
    assert center_of_mass([]) == ZERO


def test_circular_orbit_speed():
    assert circular_orbit_speed(1.0, 1.0, 1.0) == 1.0
    assert circular_orbit_speed(1.0, 4.0, 1.0) == 2.0
    assert circular_orbit_speed(1.0, 1.0, 0.0) == 0.0
