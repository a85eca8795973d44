import math

import pytest

from threebody.camera import OrbitCamera
from threebody.constants import CAMERA_MAX_DISTANCE, CAMERA_MAX_ELEVATION, CAMERA_MIN_DISTANCE
from threebody.vector_utils import vec_len


def test_starts_at_given_eye():
    camera = OrbitCamera(eye=(2.0, 2.0, 2.0), damping=0.0)
    assert camera.eye() == pytest.approx((2.0, 2.0, 2.0))
    assert camera.distance == pytest.approx(math.sqrt(12.0))


def test_target_projects_to_viewport_center():
    camera = OrbitCamera()
    camera.set_viewport_size(800, 600)
    sx, sy, depth = camera.project((0.0, 0.0, 0.0))
    assert sx == pytest.approx(400.0)
    assert sy == pytest.approx(300.0)
    assert depth == pytest.approx(camera.distance)


def test_points_behind_camera_are_not_projected():
    camera = OrbitCamera(eye=(0.0, 0.0, 5.0))
    assert camera.project((0.0, 0.0, 10.0)) is None
    assert camera.project(camera.eye()) is None


def test_screen_axes_follow_world_up():
    camera = OrbitCamera(eye=(0.0, 0.0, 5.0))
    camera.set_viewport_size(800, 600)
    above = camera.project((0.0, 1.0, 0.0))
    right = camera.project((1.0, 0.0, 0.0))
    assert above[1] < 300.0
    assert right[0] > 400.0


def test_zoom_is_clamped():
    camera = OrbitCamera(eye=(0.0, 0.0, 5.0))
    camera.zoom(2.0)
    assert camera.distance == pytest.approx(2.5)
    for _ in range(20):
        camera.zoom(2.0)
    assert camera.distance == CAMERA_MIN_DISTANCE
    for _ in range(20):
        camera.zoom(0.5)
    assert camera.distance == CAMERA_MAX_DISTANCE


def test_rotate_without_damping_is_immediate():
    camera = OrbitCamera(eye=(0.0, 0.0, 5.0), damping=0.0)
    camera.rotate(math.pi / 2, 0.0)
    assert camera.eye() == pytest.approx((5.0, 0.0, 0.0), abs=1e-9)
    assert vec_len(camera.eye()) == pytest.approx(5.0)


def test_elevation_is_clamped():
    camera = OrbitCamera(eye=(0.0, 0.0, 5.0), damping=0.0)
    camera.rotate(0.0, 10.0)
    assert camera.elevation == pytest.approx(CAMERA_MAX_ELEVATION)


def test_damped_rotation_eases_in():
    camera = OrbitCamera(eye=(0.0, 0.0, 5.0), damping=0.5)
    start = camera.azimuth
    camera.rotate(1.0, 0.0)
    assert camera.azimuth == start
    camera.update()
    assert camera.azimuth == pytest.approx(start + 0.5)
    camera.update()
    assert camera.azimuth == pytest.approx(start + 0.75)
