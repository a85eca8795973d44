#!/usr/bin/env python3
"""
Three-body simulator application entry point and UI/renderer coordination.

What this module does
- Starts two event loops: a Pygame rendering thread (3D viewport with an orbit camera)
  and the Dear PyGui controls (running on the main thread).
- Both share one Simulation, which owns the bodies and guards them with a re-entrant
  lock. The viewport advances exactly one tick per rendered frame while playing and
  only reads positions and trails; nothing it draws feeds back into the physics.
- With --headless, runs a fixed number of ticks without opening any window and logs
  the final state.

Threading model
- PygameRenderer runs in a background thread: input handling for the viewport,
  one simulation tick per frame, drawing from Simulation.snapshot().
- The UI class runs in the main thread via Dear PyGui. It polls the simulation on a
  periodic frame callback and calls Simulation methods, which take the lock.

Running
1) Install dependencies: `pip install -e .`
2) Run this module: `python three_body_sim.py` (or `python three_body_sim.py --headless --ticks 1000`)

Controls
- Viewport: left-drag orbit, wheel zoom, Space play/pause, N single step, R reset.
- Two windows will open: the viewport (Pygame) and the controls (Dear PyGui). Closing
  either will shut down the application cleanly.
"""

import argparse
import logging
import math
import sys
import threading
import time
from typing import Optional

# GUI and Rendering libs
import pygame
from pygame import gfxdraw
import dearpygui.dearpygui as dpg

from threebody.camera import OrbitCamera
from threebody.config import ConfigError, SimulationConfig
from threebody.constants import (
    BACKGROUND_COLOR,
    BODY_RADIUS,
    HUD_COLOR,
    SAFE_COORD_LIMIT,
    TARGET_FPS,
    VIEW_HEIGHT,
    VIEW_WIDTH,
)
from threebody.physics import center_of_mass, total_momentum
from threebody.presets_loader import DEFAULT_TEMPLATE, PresetError, list_templates, load_template
from threebody.simulation import Simulation

logger = logging.getLogger("three_body_sim")

LOG_FORMAT = "%(asctime)s - %(levelname)s - %(filename)s:%(lineno)d - %(message)s"

# Radians of camera rotation per dragged pixel
ROTATE_SPEED = 0.01

# ============================================================
# Pygame Renderer Thread
# ============================================================

def _safe_point(pt):
    try:
        x, y = int(pt[0]), int(pt[1])
    except (TypeError, ValueError, OverflowError):
        return None
    if -SAFE_COORD_LIMIT <= x <= SAFE_COORD_LIMIT and -SAFE_COORD_LIMIT <= y <= SAFE_COORD_LIMIT:
        return (x, y)
    return None


class PygameRenderer(threading.Thread):
    """
    Pygame loop: ticks the simulation once per frame and draws bodies and trails.
    Handles camera orbit (left-drag) and zoom (wheel).
    """
    def __init__(self, sim: Simulation):
        super().__init__(daemon=True)
        self.sim = sim
        self.camera = OrbitCamera()
        self.surface = None
        self.clock = None
        self.font = None
        self.dragging = False
        self.running = True

    def run(self):
        pygame.init()
        pygame.display.set_caption("Three-Body Simulator - Viewport")
        self.surface = pygame.display.set_mode((VIEW_WIDTH, VIEW_HEIGHT), pygame.RESIZABLE)
        self.camera.set_viewport_size(VIEW_WIDTH, VIEW_HEIGHT)
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 20)

        while self.running:
            self.handle_events()

            with self.sim.lock:
                playing = self.sim.playing
            if playing:
                self.sim.step()

            self.camera.update()
            self.draw()
            self.clock.tick(TARGET_FPS)

        pygame.quit()

    def stop(self):
        self.running = False

    def handle_events(self):
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False

            elif event.type == pygame.VIDEORESIZE:
                self.surface = pygame.display.set_mode((event.w, event.h), pygame.RESIZABLE)
                self.camera.set_viewport_size(event.w, event.h)

            elif event.type == pygame.MOUSEWHEEL:
                self.camera.zoom(1.1 if event.y > 0 else 1.0 / 1.1)

            elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
                self.dragging = True

            elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
                self.dragging = False

            elif event.type == pygame.MOUSEMOTION and self.dragging:
                dx, dy = event.rel
                self.camera.rotate(-dx * ROTATE_SPEED, dy * ROTATE_SPEED)

            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_SPACE:
                    self.sim.toggle_playing()
                elif event.key == pygame.K_n:
                    self.sim.step()
                elif event.key == pygame.K_r:
                    self.sim.reset()

    def draw(self):
        surf = self.surface
        surf.fill(BACKGROUND_COLOR)

        bodies = self.sim.snapshot()

        # Trails first so bodies draw on top
        for b in bodies:
            pts = []
            for p in b.trail:
                projected = self.camera.project(p)
                sp = _safe_point(projected) if projected else None
                if sp:
                    pts.append(sp)
            if len(pts) > 1:
                pygame.draw.aalines(surf, b.color, False, pts)

        # Far-to-near so nearer spheres cover farther ones
        projected_bodies = []
        for b in bodies:
            projected = self.camera.project(b.position)
            if projected is not None:
                projected_bodies.append((projected, b))
        projected_bodies.sort(key=lambda item: item[0][2], reverse=True)

        for (sx, sy, depth), b in projected_bodies:
            sp = _safe_point((sx, sy))
            if sp is None:
                continue
            vis_r = int(clamp_radius(BODY_RADIUS * self.camera.pixels_per_unit(depth)))
            gfxdraw.filled_circle(surf, sp[0], sp[1], vis_r, b.color)
            gfxdraw.aacircle(surf, sp[0], sp[1], vis_r, b.color)

        with self.sim.lock:
            playing = self.sim.playing
            tick = self.sim.tick_count
            t = self.sim.time
        self.draw_text("Left-drag: orbit | Wheel: zoom | Space: Pause/Play | N: step | R: reset", 10, 10)
        self.draw_text(f"t = {t:.2f}  tick {tick}  [{'Playing' if playing else 'Paused'}]", 10, 30)

        pygame.display.flip()

    def draw_text(self, text, x, y):
        img = self.font.render(text, True, HUD_COLOR)
        self.surface.blit(img, (x, y))


def clamp_radius(r: float) -> float:
    if not math.isfinite(r):
        return 2
    return max(2, min(50, r))

# ============================================================
# Dear PyGui UI
# ============================================================

class UI:
    """
    Dear PyGui interface: preset selection, play/step/reset, the physics configuration
    applied on the next load, and a trail length that applies immediately.
    """
    def __init__(self, sim: Simulation, preset: str):
        self.sim = sim
        self.preset = preset
        self._template_map = {display: fn for fn, display in list_templates()}
        self._build_ui()
        self._schedule_sync()

    def _build_ui(self):
        dpg.create_context()
        dpg.create_viewport(title="Three-Body Simulator - Controls", width=460, height=520)

        cfg = self.sim.config
        with dpg.window(label="Controls", width=440, height=500, pos=(10, 10), tag="main_window"):
            with dpg.group(horizontal=True):
                dpg.add_text("Preset:")
                items = list(self._template_map.keys())
                current = next((d for d, fn in self._template_map.items() if fn == self.preset), None)
                dpg.add_combo(items, default_value=current or (items[0] if items else ""),
                              width=260, tag="preset_combo")
                dpg.add_button(label="Load", callback=self._on_load)

            dpg.add_separator()
            with dpg.group(horizontal=True):
                dpg.add_button(label="Play/Pause", callback=lambda: self.sim.toggle_playing())
                dpg.add_button(label="Step", callback=self._step_once)
                dpg.add_button(label="Reset", callback=self._reset)
                dpg.add_button(label="Clear trails", callback=lambda: self.sim.clear_trails())

            dpg.add_separator()
            dpg.add_text("Configuration (G, dt, min distance applied on load)")
            dpg.add_input_float(label="G", default_value=cfg.g, format="%.4f", tag="cfg_g")
            dpg.add_input_float(label="dt", default_value=cfg.dt, format="%.5f", step=0.001, tag="cfg_dt")
            dpg.add_input_float(label="Min distance", default_value=cfg.min_distance, format="%.4f",
                                step=0.01, tag="cfg_min_distance")
            dpg.add_input_int(label="Trail length", default_value=cfg.max_trail_length, tag="cfg_trail",
                              min_value=1, min_clamped=True, on_enter=True, callback=self._on_trail_length)

            dpg.add_separator()
            dpg.add_text("", tag="state_text")
            dpg.add_text("", tag="status_text", color=(180, 220, 180))

        dpg.setup_dearpygui()
        dpg.show_viewport()

    def _set_status(self, msg: str, color=(180, 220, 180)):
        dpg.set_value("status_text", msg)
        dpg.configure_item("status_text", color=color)

    def _set_error(self, msg: str):
        self._set_status(msg, color=(255, 120, 120))

    def _on_load(self):
        display = dpg.get_value("preset_combo")
        file_name = self._template_map.get(display, self.preset)
        overrides = {
            "g": dpg.get_value("cfg_g"),
            "dt": dpg.get_value("cfg_dt"),
            "min_distance": dpg.get_value("cfg_min_distance"),
            "max_trail_length": dpg.get_value("cfg_trail"),
        }
        try:
            scene = load_template(file_name, overrides=overrides)
        except (PresetError, ConfigError, ValueError) as e:
            logger.exception("Failed to load preset %s", file_name)
            self._set_error(f"Load failed: {e}")
            return
        self.preset = file_name
        self.sim.replace_bodies(scene.bodies, scene.config)
        self._set_status(f"Loaded '{scene.name}'.")

    def _on_trail_length(self, sender, app_data, user_data=None):
        try:
            self.sim.set_trail_length(app_data)
        except ConfigError as e:
            self._set_error(str(e))
            return
        self._set_status(f"Trail length: {app_data}")

    def _step_once(self):
        with self.sim.lock:
            self.sim.playing = False
        self.sim.step()

    def _reset(self):
        self.sim.reset()
        self._set_status("Reset to initial state.")

    def _schedule_sync(self):
        """Reschedule the periodic sync callback using frame callbacks (approx ~10Hz)."""
        dpg.set_frame_callback(dpg.get_frame_count() + 6, self._sync_ui_with_sim)

    def _sync_ui_with_sim(self):
        lines = []
        with self.sim.lock:
            lines.append(f"t = {self.sim.time:.3f}   ticks = {self.sim.tick_count}")
            lines.append(f"E = {self.sim.total_energy():.6f}")
            for b in self.sim.bodies:
                x, y, z = b.position
                lines.append(f"{b.name}: ({x:+.3f}, {y:+.3f}, {z:+.3f})")
        dpg.set_value("state_text", "\n".join(lines))
        self._schedule_sync()

# ============================================================
# Application Entry
# ============================================================

def run_headless(sim: Simulation, ticks: int) -> None:
    e0 = sim.total_energy()
    started = time.perf_counter()
    sim.run(ticks)
    elapsed = time.perf_counter() - started
    e1 = sim.total_energy()
    logger.info("Ran %d ticks (t=%.3f) in %.3fs", ticks, sim.time, elapsed)
    for b in sim.bodies:
        logger.info("%s: position=%s velocity=%s trail=%d", b.name, b.position, b.velocity, len(b.trail))
    logger.info("Energy %.9f -> %.9f (drift %.3e), momentum=%s, center of mass=%s",
                e0, e1, e1 - e0, total_momentum(sim.bodies), center_of_mass(sim.bodies))


def non_negative_int(text: str) -> int:
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"not an integer: {text!r}") from None
    if value < 0:
        raise argparse.ArgumentTypeError(f"must be >= 0, got {value}")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Newtonian three-body simulator")
    parser.add_argument("--preset", default=DEFAULT_TEMPLATE,
                        help="template file name, or a path containing a directory part (default: %(default)s)")
    parser.add_argument("--headless", action="store_true", help="run without opening any window")
    parser.add_argument("--ticks", type=non_negative_int, default=1000, help="ticks to run in headless mode")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    return parser


def main(argv: Optional[list] = None) -> int:
    args = build_arg_parser().parse_args(argv)
    logging.basicConfig(level=getattr(logging, args.log_level), format=LOG_FORMAT)

    try:
        scene = load_template(args.preset, base_config=SimulationConfig())
    except (PresetError, ConfigError, ValueError) as e:
        logger.error("Cannot load preset %s: %s", args.preset, e)
        return 1
    sim = Simulation(scene.config, scene.bodies)

    if args.headless:
        run_headless(sim, args.ticks)
        return 0

    renderer = PygameRenderer(sim)
    renderer.start()

    UI(sim, args.preset)

    with dpg.handler_registry():
        def key_press(sender, app_data):
            if app_data == dpg.mvKey_Spacebar:
                sim.toggle_playing()
        dpg.add_key_press_handler(callback=key_press)

    try:
        # Dear PyGui's loop with a check for the viewport window being closed
        while dpg.is_dearpygui_running() and renderer.is_alive():
            dpg.render_dearpygui_frame()
    finally:
        renderer.stop()
        renderer.join(timeout=2.0)
        dpg.destroy_context()
    return 0


if __name__ == "__main__":
    sys.exit(main())
