#!/usr/bin/env python3
"""
Core Physics Engine for the three-body simulator

Responsibilities
- Compute pairwise Newtonian gravitational forces with a floor on the separation.
- Advance body states one fixed tick using semi-implicit (symplectic) Euler.
- Provide small diagnostics (energy, momentum, center of mass) and orbital helpers.

Units and conventions
- Normalized units; G, dt and the distance floor come from SimulationConfig.
- Forces are (fx, fy, fz) tuples; compute_force(a, b) is the force ON a BY b and
  points from a toward b.

Numerical notes
- Distance floor: r is clamped to min_distance before computing G*m1*m2/r^2. This is
  not physically exact but keeps close encounters from producing unbounded kicks.
  The direction still uses the true separation; coincident bodies get zero force.
- Newton's third law holds by construction: each unordered pair is evaluated once and
  applied as +F to one body and -F to the other.
- Semi-implicit Euler updates velocity first and then moves with the new velocity. It is
  symplectic, so energy oscillates rather than drifting the way explicit Euler does.
- Complexity: force computation is O(N^2) per tick (direct summation).

Threading
- This module is pure compute; the only state is the immutable config. Simulation
  guards the bodies with a lock while a tick runs.
"""

import math
from typing import List, Sequence

from .config import SimulationConfig
from .data_models import Body
from .vector_utils import (
    Vec3,
    ZERO,
    vec_add,
    vec_len,
    vec_neg,
    vec_norm,
    vec_scale,
    vec_sub,
)


class NBodyPhysics:
    """
    N-body gravitational physics engine with a clamped force law.

    The force exerted on body a by body b is:
    F = G * m_a * m_b / max(r, min_distance)^2 * normalize(p_b - p_a)
    """

    def __init__(self, config: SimulationConfig):
        self.config = config

    def compute_force(self, a: Body, b: Body) -> Vec3:
        """
        Gravitational force exerted on a by b.

        Args:
            a: Body the force acts on.
            b: Body exerting the force.

        Returns:
            Force vector pointing from a toward b; zero when the bodies coincide.
        """
        d = vec_sub(b.position, a.position)
        r = vec_len(d)
        if r == 0:
            return ZERO
        r = max(r, self.config.min_distance)
        magnitude = self.config.g * a.mass * b.mass / (r * r)
        return vec_scale(vec_norm(d), magnitude)

    def compute_net_forces(self, bodies: Sequence[Body]) -> List[Vec3]:
        """
        Net force on every body, same order as the input.

        Each unordered pair (i, j), i < j, is evaluated exactly once; the result is
        added to body i and its negation to body j. All forces are read from the
        current positions, so call this before moving any body.
        """
        n = len(bodies)
        forces: List[Vec3] = [ZERO] * n
        for i in range(n):
            for j in range(i + 1, n):
                f = self.compute_force(bodies[i], bodies[j])
                forces[i] = vec_add(forces[i], f)
                forces[j] = vec_add(forces[j], vec_neg(f))
        return forces

    def apply_forces(self, bodies: Sequence[Body], forces: Sequence[Vec3]) -> None:
        """
        Semi-implicit Euler update for one tick.

        velocity += (F / m) * dt, then position += velocity * dt using the new velocity.
        """
        if len(bodies) != len(forces):
            raise ValueError(f"got {len(forces)} forces for {len(bodies)} bodies")
        dt = self.config.dt
        for body, force in zip(bodies, forces):
            acceleration = vec_scale(force, 1.0 / body.mass)
            body.velocity = vec_add(body.velocity, vec_scale(acceleration, dt))
        for body in bodies:
            body.position = vec_add(body.position, vec_scale(body.velocity, dt))

    def step(self, bodies: Sequence[Body]) -> None:
        """Advance all bodies by exactly one tick of length config.dt."""
        forces = self.compute_net_forces(bodies)
        self.apply_forces(bodies, forces)

    # Diagnostics

    def kinetic_energy(self, bodies: Sequence[Body]) -> float:
        return sum(0.5 * b.mass * (vec_len(b.velocity) ** 2) for b in bodies)

    def potential_energy(self, bodies: Sequence[Body]) -> float:
        """Pairwise potential -G*m1*m2/r with the same distance floor as the force law."""
        total = 0.0
        n = len(bodies)
        for i in range(n):
            for j in range(i + 1, n):
                r = max(vec_len(vec_sub(bodies[j].position, bodies[i].position)), self.config.min_distance)
                total -= self.config.g * bodies[i].mass * bodies[j].mass / r
        return total

    def total_energy(self, bodies: Sequence[Body]) -> float:
        return self.kinetic_energy(bodies) + self.potential_energy(bodies)


def total_momentum(bodies: Sequence[Body]) -> Vec3:
    p = ZERO
    for b in bodies:
        p = vec_add(p, vec_scale(b.velocity, b.mass))
    return p


def center_of_mass(bodies: Sequence[Body]) -> Vec3:
    m_total = sum(b.mass for b in bodies)
    if m_total <= 0:
        return ZERO
    c = ZERO
    for b in bodies:
        c = vec_add(c, vec_scale(b.position, b.mass))
    return vec_scale(c, 1.0 / m_total)


def circular_orbit_speed(g: float, central_mass: float, orbital_radius: float) -> float:
    """
    Speed needed for a circular orbit around a stationary central mass.

    Gravity supplies exactly the centripetal force, G*M/r^2 = v^2/r, so
    v = sqrt(G * M / r).

    Args:
        g: Gravitational constant
        central_mass: Mass of the central body
        orbital_radius: Distance from the central body

    Returns:
        Orbital speed, or 0.0 for a non-positive radius
    """
    if orbital_radius <= 0:
        return 0.0

    return math.sqrt(g * central_mass / orbital_radius)
