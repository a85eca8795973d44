#!/usr/bin/env python3
"""
Shared constants for the three-body simulator (normalized units).

Keeping constants in one place helps ensure values are consistent across the
codebase and makes tuning easier. Simulation code never reads these directly
during a run; they only seed SimulationConfig defaults.
"""
import math

# Physics controls
G = 1.0  # gravitational constant, normalized
DT = 0.01  # simulation time per tick
MIN_DISTANCE = 0.1  # floor on separation used by the force law
MAX_TRAIL_LENGTH = 100  # trail points kept per body

# Rendering (viewport)
VIEW_WIDTH = 1100
VIEW_HEIGHT = 800
BACKGROUND_COLOR = (0, 0, 0)
HUD_COLOR = (200, 200, 200)
BODY_RADIUS = 0.1  # world units, sphere radius used for drawing
TARGET_FPS = 60

# Camera
CAMERA_FOV_DEG = 75.0
CAMERA_NEAR = 0.1
CAMERA_START = (2.0, 2.0, 2.0)
CAMERA_MIN_DISTANCE = 2.0
CAMERA_MAX_DISTANCE = 20.0
CAMERA_DAMPING = 0.05
CAMERA_MAX_ELEVATION = math.pi / 2 - 0.01

# Safety: avoid drawing outside reasonable integer pixel ranges
SAFE_COORD_LIMIT = 30000
