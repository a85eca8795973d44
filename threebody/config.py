#!/usr/bin/env python3
"""
Simulation configuration.

A SimulationConfig is passed explicitly to the initializer, physics engine and
simulation, so several independent simulations can run side by side.
"""
import dataclasses
import math
from dataclasses import dataclass
from typing import Any, Dict, Optional

from .constants import DT, G, MAX_TRAIL_LENGTH, MIN_DISTANCE


class ConfigError(ValueError):
    """Raised when a configuration value is out of range."""


# JSON presets use the camelCase names; Python callers may use field names.
_KEY_ALIASES = {
    "G": "g",
    "g": "g",
    "dt": "dt",
    "minDistance": "min_distance",
    "min_distance": "min_distance",
    "maxTrailLength": "max_trail_length",
    "max_trail_length": "max_trail_length",
}


@dataclass(frozen=True)
class SimulationConfig:
    g: float = G  # gravitational constant
    dt: float = DT  # tick duration
    min_distance: float = MIN_DISTANCE  # separation floor in the force law
    max_trail_length: int = MAX_TRAIL_LENGTH  # trail capacity per body

    def __post_init__(self):
        for name in ("g", "dt", "min_distance"):
            value = getattr(self, name)
            try:
                value = float(value)
            except (TypeError, ValueError):
                raise ConfigError(f"{name} must be a number, got {value!r}") from None
            if not math.isfinite(value):
                raise ConfigError(f"{name} must be finite, got {value!r}")
            object.__setattr__(self, name, value)
        if self.dt <= 0:
            raise ConfigError(f"dt must be > 0, got {self.dt}")
        if self.min_distance <= 0:
            raise ConfigError(f"min_distance must be > 0, got {self.min_distance}")
        try:
            trail = int(self.max_trail_length)
            whole = float(self.max_trail_length) == trail
        except (TypeError, ValueError, OverflowError):
            whole = False
        if not whole:
            raise ConfigError(f"max_trail_length must be a whole number, got {self.max_trail_length!r}")
        if trail < 1:
            raise ConfigError(f"max_trail_length must be >= 1, got {trail}")
        object.__setattr__(self, "max_trail_length", trail)

    @classmethod
    def from_dict(cls, data: Dict[str, Any], base: Optional["SimulationConfig"] = None) -> "SimulationConfig":
        """Build a config from a preset mapping; missing keys come from base (or defaults)."""
        overrides = {}
        for key, value in (data or {}).items():
            field_name = _KEY_ALIASES.get(key)
            if field_name is not None:
                overrides[field_name] = value
        return (base or cls()).with_overrides(**overrides)

    def with_overrides(self, **changes) -> "SimulationConfig":
        return dataclasses.replace(self, **changes)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "G": self.g,
            "dt": self.dt,
            "minDistance": self.min_distance,
            "maxTrailLength": self.max_trail_length,
        }
