#!/usr/bin/env python3
"""
Simulation state and the per-tick orchestration.

One tick: compute all pairwise forces from a snapshot of positions, update every
velocity, move every body, then append each new position to its trail. The tick runs
under the simulation lock, so a reader thread (the viewport) sees either the state
before or after a tick, never a partially advanced one.
"""
import copy
import logging
import threading
from dataclasses import dataclass
from typing import List, Optional, Sequence, Tuple

from .config import SimulationConfig
from .data_models import Body, Color
from .physics import NBodyPhysics
from .trail import TrailBuffer
from .vector_utils import Vec3

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BodySnapshot:
    """Read-only view of one body handed to renderers."""
    name: str
    color: Color
    position: Vec3
    trail: Tuple[Vec3, ...]


class Simulation:
    """
    Owns the bodies and configuration for one run.

    The body set is fixed between replace_bodies() calls and its order defines the
    force summation order.
    """

    def __init__(self, config: Optional[SimulationConfig] = None, bodies: Sequence[Body] = ()):
        self.lock = threading.RLock()
        self.config = config or SimulationConfig()
        self.physics = NBodyPhysics(self.config)
        self.playing = True
        self.tick_count = 0
        self.time = 0.0
        self.bodies: List[Body] = []
        self._initial: List[Body] = []
        self.replace_bodies(bodies)

    def replace_bodies(self, bodies: Sequence[Body], config: Optional[SimulationConfig] = None) -> None:
        """Install a new body set (and optionally a new config) and restart the clock."""
        with self.lock:
            if config is not None:
                self.config = config
                self.physics = NBodyPhysics(config)
            self._initial = [copy.deepcopy(b) for b in bodies]
            self._restore_initial()
            logger.info("Simulation loaded with %d bodies, config=%s", len(self.bodies), self.config.to_dict())

    def reset(self) -> None:
        """Return to the bodies supplied by the last replace_bodies() call."""
        with self.lock:
            self._restore_initial()
            logger.info("Simulation reset")

    def _restore_initial(self) -> None:
        self.bodies = [copy.deepcopy(b) for b in self._initial]
        for b in self.bodies:
            b.trail = TrailBuffer(self.config.max_trail_length)
        self.tick_count = 0
        self.time = 0.0

    def step(self) -> None:
        """Advance exactly one tick."""
        with self.lock:
            self.physics.step(self.bodies)
            for b in self.bodies:
                b.add_trail_point()
            self.tick_count += 1
            self.time += self.config.dt
            if logger.isEnabledFor(logging.DEBUG):
                logger.debug("tick %d: %s", self.tick_count,
                             ", ".join(f"{b.name}={b.position}" for b in self.bodies))

    def run(self, ticks: int) -> None:
        if ticks < 0:
            raise ValueError(f"ticks must be >= 0, got {ticks}")
        for _ in range(ticks):
            self.step()

    def toggle_playing(self) -> bool:
        with self.lock:
            self.playing = not self.playing
            return self.playing

    def set_trail_length(self, n: int) -> None:
        """Resize every trail in place, keeping the most recent points."""
        with self.lock:
            self.config = self.config.with_overrides(max_trail_length=n)
            self.physics = NBodyPhysics(self.config)
            for b in self.bodies:
                b.trail.resize(self.config.max_trail_length)
            logger.info("Trail length set to %d", self.config.max_trail_length)

    def clear_trails(self) -> None:
        with self.lock:
            for b in self.bodies:
                b.trail.clear()

    def snapshot(self) -> List[BodySnapshot]:
        """Positions and trails of every body, consistent with a single tick boundary."""
        with self.lock:
            return [
                BodySnapshot(b.name, b.color, b.position, tuple(b.trail))
                for b in self.bodies
            ]

    def total_energy(self) -> float:
        with self.lock:
            return self.physics.total_energy(self.bodies)
