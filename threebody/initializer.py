#!/usr/bin/env python3
"""
Initial conditions for the simulator.

Bodies are built from BodySpec seeds, then selected bodies get a tangential velocity
that would give a circular orbit around a reference body if the two were alone and
the reference were stationary. Every other body's influence is ignored at t=0, so
the resulting motion is only approximately circular and, with three mutually
attracting bodies, soon becomes chaotic.
"""
import logging
from typing import Dict, List, Optional, Sequence, Tuple

from .config import SimulationConfig
from .data_models import Body, BodySpec, color_from_hex
from .physics import circular_orbit_speed
from .vector_utils import Vec3, vec_dist, vec_norm, vec_scale, vec_sub

logger = logging.getLogger(__name__)

# Reference scene: three unit masses, all starting at rest.
DEFAULT_BODIES: Tuple[BodySpec, ...] = (
    BodySpec("A", (0.0, 2.0, 0.0), 1.0, color_from_hex(0xFF0000)),
    BodySpec("B", (1.0, 0.0, 1.0), 1.0, color_from_hex(0x00FF00)),
    BodySpec("C", (-1.0, 0.0, 1.0), 1.0, color_from_hex(0x0000FF)),
)

# (orbiting body, reference body); B keeps its supplied velocity.
DEFAULT_ORBITS: Tuple[Tuple[str, str], ...] = (("A", "B"), ("C", "B"))


def orbital_speed(p: Body, q: Body, g: float) -> float:
    """Circular-orbit speed for p around q: sqrt(G * m_q / |p - q|)."""
    r = vec_dist(p.position, q.position)
    if r == 0:
        raise ValueError(f"{p.name} coincides with {q.name}; orbital speed is undefined")
    return circular_orbit_speed(g, q.mass, r)


def orbital_velocity(p: Body, q: Body, g: float) -> Vec3:
    """
    Tangential velocity for p orbiting q in the XY plane.

    The radial unit vector u = normalize(p - q) is rotated by 90 degrees about the
    z axis, (-u.y, u.x, 0), and scaled by the circular-orbit speed. Any z component
    of u is dropped, so the vector is shorter than the speed when p and q are not
    level in z.
    """
    speed = orbital_speed(p, q, g)
    u = vec_norm(vec_sub(p.position, q.position))
    return vec_scale((-u[1], u[0], 0.0), speed)


class SimulationInitializer:
    """Builds fully initialized bodies for a SimulationConfig."""

    def __init__(self, config: Optional[SimulationConfig] = None):
        self.config = config or SimulationConfig()

    def create_bodies(self,
                      specs: Sequence[BodySpec] = DEFAULT_BODIES,
                      orbit_pairs: Optional[Sequence[Tuple[str, str]]] = DEFAULT_ORBITS) -> List[Body]:
        """
        Instantiate bodies and seed orbital velocities.

        Args:
            specs: Seeds in simulation order.
            orbit_pairs: (orbiting, reference) body names. Velocities are computed from
                the initial state of both bodies, in pair order.

        Returns:
            New Body instances with trails sized from the config.
        """
        bodies = [spec.build(self.config.max_trail_length) for spec in specs]
        by_name: Dict[str, Body] = {b.name: b for b in bodies}
        if len(by_name) != len(bodies):
            raise ValueError("body names must be unique")

        for orbiting, reference in orbit_pairs or ():
            p = by_name[orbiting]
            q = by_name[reference]
            p.velocity = orbital_velocity(p, q, self.config.g)
            logger.debug("Seeded %s around %s: velocity=%s", p.name, q.name, p.velocity)

        logger.info("Initialized %d bodies (%d orbit seeds)", len(bodies), len(orbit_pairs or ()))
        return bodies
