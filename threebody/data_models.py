#!/usr/bin/env python3
"""
Data models for the three-body simulator.

This module defines the Body dataclass shared between physics, rendering, and UI,
and the BodySpec seed record consumed by the initializer.

Units and usage
- Normalized units: positions, velocities and masses are plain floats scaled so G = 1.
- position and velocity are (x, y, z) tuples and are replaced, never mutated in place.
- trail stores past positions to render motion paths; it is mutated once per tick.
- Access to Body instances from other threads is coordinated by Simulation using a lock.
"""
import math
from dataclasses import dataclass, field
from typing import Tuple, Union

from .constants import MAX_TRAIL_LENGTH
from .trail import TrailBuffer
from .vector_utils import Vec3, ZERO, as_vec3

Color = Tuple[int, int, int]


class InvalidMassError(ValueError):
    """Raised when a body is created with a mass that is not strictly positive."""


def color_from_hex(value: Union[int, str]) -> Color:
    """Convert 0xRRGGBB (or '#rrggbb') into an RGB tuple."""
    if isinstance(value, str):
        value = int(value.lstrip("#"), 16)
    value = int(value)
    if not 0 <= value <= 0xFFFFFF:
        raise ValueError(f"color out of range: {value:#x}")
    return ((value >> 16) & 0xFF, (value >> 8) & 0xFF, value & 0xFF)


def _check_mass(name: str, mass: float) -> float:
    try:
        mass = float(mass)
    except (TypeError, ValueError):
        raise InvalidMassError(f"{name}: mass must be a number, got {mass!r}") from None
    if not math.isfinite(mass) or mass <= 0:
        raise InvalidMassError(f"{name}: mass must be finite and > 0, got {mass!r}")
    return mass


@dataclass
class Body:
    """
    A point mass in the simulation.

    Fields:
    - name: Identifier for the body
    - mass: Strictly positive, constant for the body's lifetime
    - position: 3D position (x, y, z)
    - velocity: 3D velocity (vx, vy, vz)
    - color: RGB tuple used for rendering
    - trail: Ring buffer of recent positions for drawing motion trails
    """
    name: str
    mass: float
    position: Vec3
    velocity: Vec3 = ZERO
    color: Color = (200, 200, 255)
    trail: TrailBuffer = field(default_factory=lambda: TrailBuffer(MAX_TRAIL_LENGTH))

    def __post_init__(self):
        self.mass = _check_mass(self.name, self.mass)
        self.position = as_vec3(self.position)
        self.velocity = as_vec3(self.velocity)
        self.color = tuple(int(c) for c in self.color)

    def add_trail_point(self) -> None:
        """Append the current position to the trail."""
        self.trail.append(self.position)


@dataclass(frozen=True)
class BodySpec:
    """Initial (name, position, mass, color, velocity) seed for one body."""
    name: str
    position: Vec3
    mass: float
    color: Color = (200, 200, 255)
    velocity: Vec3 = ZERO

    def __post_init__(self):
        object.__setattr__(self, "mass", _check_mass(self.name, self.mass))
        object.__setattr__(self, "position", as_vec3(self.position))
        object.__setattr__(self, "velocity", as_vec3(self.velocity))

    def build(self, trail_length: int = MAX_TRAIL_LENGTH) -> Body:
        return Body(
            name=self.name,
            mass=self.mass,
            position=self.position,
            velocity=self.velocity,
            color=self.color,
            trail=TrailBuffer(trail_length),
        )
