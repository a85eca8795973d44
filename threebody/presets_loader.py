#!/usr/bin/env python3
"""
Scene preset JSON loading utilities.

Template JSON (threebody/templates/*.json):
{
  "name": "Human-friendly preset name",
  "description": "Optional description",
  "config": {"G": 1.0, "dt": 0.01, "minDistance": 0.1, "maxTrailLength": 100},   # optional
  "bodies": [
    {
      "name": "A",
      "mass": 1.0,
      "position": [0.0, 2.0, 0.0],
      "velocity": [0.0, 0.0, 0.0],      # optional, default at rest
      "color": "#ff0000"                # optional; [r, g, b], "#rrggbb" or 0xRRGGBB int
    }
  ],
  "orbits": [["A", "B"], ["C", "B"]]   # optional (orbiting, reference) pairs
}

Users can add their own JSON files into the templates folder and they'll be picked up
by the loader.
"""
import json
import logging
import os
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple

from .config import SimulationConfig
from .data_models import Body, BodySpec, Color, InvalidMassError, color_from_hex
from .initializer import SimulationInitializer

logger = logging.getLogger(__name__)

TEMPLATES_DIR = os.path.join(os.path.dirname(__file__), "templates")
DEFAULT_TEMPLATE = "three_body_default.json"


class PresetError(ValueError):
  """Raised when a preset file is missing or malformed."""


@dataclass
class Scene:
  name: str
  description: str
  config: SimulationConfig
  bodies: List[Body]


def _read_json(path: str) -> dict:
  try:
    with open(path, "r", encoding="utf-8") as f:
      data = json.load(f)
  except OSError as e:
    raise PresetError(f"cannot read {path}: {e}") from e
  except json.JSONDecodeError as e:
    raise PresetError(f"invalid JSON in {path}: {e}") from e
  if not isinstance(data, dict):
    raise PresetError(f"{path}: top level must be an object")
  return data


def _coerce_color(c: Any) -> Color:
  if isinstance(c, (str, int)):
    return color_from_hex(c)
  r, g, b = int(c[0]), int(c[1]), int(c[2])
  r = max(0, min(255, r)); g = max(0, min(255, g)); b = max(0, min(255, b))
  return (r, g, b)


def _parse_body(b: Any, index: int) -> BodySpec:
  if not isinstance(b, dict):
    raise PresetError(f"bodies[{index}] must be an object")
  try:
    return BodySpec(
      name=str(b.get("name", f"Body {index + 1}")),
      mass=b["mass"],
      position=b["position"],
      velocity=b.get("velocity", (0.0, 0.0, 0.0)),
      color=_coerce_color(b.get("color", [200, 200, 255])),
    )
  except InvalidMassError:
    raise
  except KeyError as e:
    raise PresetError(f"bodies[{index}] is missing {e}") from e
  except (TypeError, IndexError, ValueError) as e:
    raise PresetError(f"bodies[{index}] is malformed: {e}") from e


def _is_path(file_name: str) -> bool:
  """Absolute names or names with a directory part are paths; bare names live in the templates dir."""
  seps = [s for s in (os.sep, os.altsep) if s]
  return os.path.isabs(file_name) or any(s in file_name for s in seps)


def list_templates(directory: str = TEMPLATES_DIR) -> List[Tuple[str, str]]:
  """Return list of (file_name, display_name) for available templates."""
  items: List[Tuple[str, str]] = []
  if not os.path.isdir(directory):
    return items
  for fn in sorted(os.listdir(directory)):
    if not fn.lower().endswith(".json"):
      continue
    try:
      data = _read_json(os.path.join(directory, fn))
    except PresetError as e:
      logger.warning("Skipping template %s: %s", fn, e)
      continue
    display = data.get("name") or os.path.splitext(fn)[0]
    items.append((fn, display))
  return items


def load_template(file_name: str,
                  base_config: Optional[SimulationConfig] = None,
                  directory: str = TEMPLATES_DIR,
                  overrides: Optional[Dict[str, Any]] = None) -> Scene:
  """
  Load a template JSON by bare file name (looked up in directory) or by path
  (absolute, or containing a directory separator) and build its bodies.

  Config keys in the file override base_config, and overrides (SimulationConfig field
  names) win over both. Invalid masses raise InvalidMassError.
  """
  path = file_name if _is_path(file_name) else os.path.join(directory, file_name)
  data = _read_json(path)
  display_name = data.get("name") or os.path.splitext(os.path.basename(path))[0]

  raw_bodies = data.get("bodies")
  if not isinstance(raw_bodies, list) or not raw_bodies:
    raise PresetError(f"{path}: 'bodies' must be a non-empty list")
  specs = [_parse_body(b, i) for i, b in enumerate(raw_bodies)]

  raw_orbits = data.get("orbits", [])
  if not isinstance(raw_orbits, list):
    raise PresetError(f"{path}: 'orbits' must be a list")
  orbits = []
  for pair in raw_orbits:
    if not isinstance(pair, (list, tuple)) or len(pair) != 2:
      raise PresetError(f"{path}: orbit entries must be [orbiting, reference] pairs")
    orbits.append((str(pair[0]), str(pair[1])))

  raw_config = data.get("config", {})
  if not isinstance(raw_config, dict):
    raise PresetError(f"{path}: 'config' must be an object")
  try:
    config = SimulationConfig.from_dict(raw_config, base=base_config)
  except ValueError as e:
    raise PresetError(f"{path}: invalid config: {e}") from e
  if overrides:
    config = config.with_overrides(**overrides)
  try:
    bodies = SimulationInitializer(config).create_bodies(specs, orbits)
  except KeyError as e:
    raise PresetError(f"{path}: orbit refers to unknown body {e}") from e
  except ValueError as e:
    raise PresetError(f"{path}: {e}") from e

  logger.info("Loaded preset '%s' from %s", display_name, path)
  return Scene(display_name, data.get("description", ""), config, bodies)
