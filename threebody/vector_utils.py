#!/usr/bin/env python3
"""
Vector helper functions for 3D operations.

Vectors are plain (x, y, z) float tuples, so they are immutable values and can be
shared between bodies, trails and renderers without copying.
"""
import math
from typing import Sequence, Tuple

Vec3 = Tuple[float, float, float]

ZERO: Vec3 = (0.0, 0.0, 0.0)


def clamp(x: float, a: float, b: float) -> float:
    """Clamp x to the inclusive range [a, b]."""
    return max(a, min(b, x))


def as_vec3(v: Sequence[float]) -> Vec3:
    """Coerce a 3-element sequence into a float tuple."""
    if len(v) != 3:
        raise ValueError(f"expected 3 components, got {len(v)}")
    return (float(v[0]), float(v[1]), float(v[2]))


def vec_add(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] + b[0], a[1] + b[1], a[2] + b[2])


def vec_sub(a: Vec3, b: Vec3) -> Vec3:
    return (a[0] - b[0], a[1] - b[1], a[2] - b[2])


def vec_scale(a: Vec3, s: float) -> Vec3:
    return (a[0] * s, a[1] * s, a[2] * s)


def vec_neg(a: Vec3) -> Vec3:
    return (-a[0], -a[1], -a[2])


def vec_dot(a: Vec3, b: Vec3) -> float:
    return a[0] * b[0] + a[1] * b[1] + a[2] * b[2]


def vec_cross(a: Vec3, b: Vec3) -> Vec3:
    return (
        a[1] * b[2] - a[2] * b[1],
        a[2] * b[0] - a[0] * b[2],
        a[0] * b[1] - a[1] * b[0],
    )


def vec_len(a: Vec3) -> float:
    return math.sqrt(a[0] * a[0] + a[1] * a[1] + a[2] * a[2])


def vec_dist(a: Vec3, b: Vec3) -> float:
    return vec_len(vec_sub(a, b))


def vec_norm(a: Vec3) -> Vec3:
    """Unit vector along a; the zero vector has no direction and maps to ZERO."""
    l = vec_len(a)
    if l == 0:
        return ZERO
    return (a[0] / l, a[1] / l, a[2] / l)
