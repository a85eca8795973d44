#!/usr/bin/env python3
"""
Orbit camera for projecting 3D world coordinates onto the 2D viewport.
"""
import math
from typing import Optional, Tuple

from .constants import (
    CAMERA_DAMPING,
    CAMERA_FOV_DEG,
    CAMERA_MAX_DISTANCE,
    CAMERA_MAX_ELEVATION,
    CAMERA_MIN_DISTANCE,
    CAMERA_NEAR,
    CAMERA_START,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from .vector_utils import Vec3, ZERO, clamp, vec_add, vec_cross, vec_dot, vec_len, vec_norm, vec_sub

WORLD_UP: Vec3 = (0.0, 1.0, 0.0)


class OrbitCamera:
    """
    Perspective camera orbiting a target point, y axis up.

    The eye sits at spherical coordinates (distance, azimuth, elevation) around the
    target. rotate() and zoom() queue changes; with damping, update() applies a
    fraction of the pending rotation each frame so motion eases out.
    """

    def __init__(self, eye: Vec3 = CAMERA_START, target: Vec3 = ZERO,
                 fov_deg: float = CAMERA_FOV_DEG, damping: float = CAMERA_DAMPING):
        self.target = target
        offset = vec_sub(eye, target)
        self.distance = clamp(vec_len(offset), CAMERA_MIN_DISTANCE, CAMERA_MAX_DISTANCE)
        self.azimuth = math.atan2(offset[0], offset[2])
        self.elevation = clamp(math.asin(offset[1] / vec_len(offset)) if vec_len(offset) > 0 else 0.0,
                               -CAMERA_MAX_ELEVATION, CAMERA_MAX_ELEVATION)
        self.fov_deg = fov_deg
        self.damping = clamp(damping, 0.0, 1.0)
        self.viewport_size = (VIEW_WIDTH, VIEW_HEIGHT)
        self._pending_azimuth = 0.0
        self._pending_elevation = 0.0

    def set_viewport_size(self, w: int, h: int) -> None:
        self.viewport_size = (w, h)

    def eye(self) -> Vec3:
        ce = math.cos(self.elevation)
        offset = (
            self.distance * ce * math.sin(self.azimuth),
            self.distance * math.sin(self.elevation),
            self.distance * ce * math.cos(self.azimuth),
        )
        return vec_add(self.target, offset)

    def rotate(self, d_azimuth: float, d_elevation: float) -> None:
        if self.damping > 0:
            self._pending_azimuth += d_azimuth
            self._pending_elevation += d_elevation
        else:
            self._apply_rotation(d_azimuth, d_elevation)

    def zoom(self, factor: float) -> None:
        """factor > 1 moves the eye closer to the target."""
        factor = clamp(factor, 0.05, 20.0)
        self.distance = clamp(self.distance / factor, CAMERA_MIN_DISTANCE, CAMERA_MAX_DISTANCE)

    def update(self) -> None:
        """Apply one frame's share of any pending damped rotation."""
        if self.damping <= 0:
            return
        self._apply_rotation(self._pending_azimuth * self.damping, self._pending_elevation * self.damping)
        self._pending_azimuth *= (1.0 - self.damping)
        self._pending_elevation *= (1.0 - self.damping)

    def _apply_rotation(self, d_azimuth: float, d_elevation: float) -> None:
        self.azimuth = (self.azimuth + d_azimuth) % (2 * math.pi)
        self.elevation = clamp(self.elevation + d_elevation, -CAMERA_MAX_ELEVATION, CAMERA_MAX_ELEVATION)

    def project(self, point: Vec3) -> Optional[Tuple[float, float, float]]:
        """
        Project a world point to (screen_x, screen_y, depth).

        Returns None for points on or behind the near plane.
        """
        eye = self.eye()
        forward = vec_norm(vec_sub(self.target, eye))
        right = vec_norm(vec_cross(forward, WORLD_UP))
        up = vec_cross(right, forward)

        rel = vec_sub(point, eye)
        depth = vec_dot(rel, forward)
        if depth <= CAMERA_NEAR:
            return None

        w, h = self.viewport_size
        focal = (h / 2) / math.tan(math.radians(self.fov_deg) / 2)
        sx = w / 2 + vec_dot(rel, right) * focal / depth
        sy = h / 2 - vec_dot(rel, up) * focal / depth
        return (sx, sy, depth)

    def pixels_per_unit(self, depth: float) -> float:
        """Screen size of one world unit at the given depth."""
        if depth <= 0:
            return 0.0
        return (self.viewport_size[1] / 2) / math.tan(math.radians(self.fov_deg) / 2) / depth
