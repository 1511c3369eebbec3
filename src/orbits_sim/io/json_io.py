# MIT License (see LICENSE)
"""
JSON serialization for configuration, worlds and persisted stats.

Three small documents are supported. Each loader accepts missing keys (they
take defaults) and ignores unknown keys, so older files keep loading.

Config JSON:
------------
{
  "G": 0.4,
  "dt": 0.1,
  "thrust_accel": 0.2,
  "spawn_offset": [740.0, -300.0],
  ...                              # any SimConfig field, by name
}

World JSON:
-----------
{
  "bodies": [
    {
      "name": "sun",               # Required, unique
      "kind": "star",              # star | planet | moon | black_hole
      "mass": 280000.0,            # Required (> 0)
      "radius": 110.0,             # Required (>= 0)
      "position": [0.0, 0.0],      # Fixed bodies only, default [0, 0]
      "orbit_center": "sun",       # Name of an earlier body, omit for fixed bodies
      "orbit_radius": 500.0,
      "angular_speed": 0.003,      # rad per time unit
      "initial_angle": 0.0,
      "influence_radius": 1200.0   # Optional
    }
  ]
}

Stats JSON:
-----------
{"high_score": 12, "total_score": 40, "total_games": 7}
"""
from __future__ import annotations
import dataclasses
import json
from typing import Any

import numpy as np

from ..config import SimConfig
from ..episode import PersistedStats
from ..registry import BodyRegistry
from ..types import BodyKind, CelestialBody


def load_json_raw(path: str) -> dict[str, Any]:
    """Read a JSON document without interpreting it."""
    with open(path, "r", encoding="utf-8") as f:
        return json.load(f)


def _dump(data: dict[str, Any], path: str, indent: int) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=indent)


# =============================================================================
# Config
# =============================================================================

def config_to_json(config: SimConfig) -> dict[str, Any]:
    """All SimConfig fields, tuples written as lists."""
    result = {}
    for f in dataclasses.fields(config):
        value = getattr(config, f.name)
        result[f.name] = list(value) if isinstance(value, tuple) else value
    return result


def config_from_json(data: dict[str, Any]) -> SimConfig:
    """
    Build a SimConfig from a dict.

    Values are coerced to the type of the field's default.

    Raises:
        ValueError: If a value has the wrong shape or fails SimConfig validation.
    """
    kwargs = {}
    for f in dataclasses.fields(SimConfig):
        if f.name not in data:
            continue
        value = data[f.name]
        default = f.default
        if isinstance(default, tuple):
            if len(value) != len(default):
                raise ValueError(f"'{f.name}' must have {len(default)} components, got {value!r}")
            kwargs[f.name] = tuple(float(v) for v in value)
        elif isinstance(default, bool):
            kwargs[f.name] = bool(value)
        elif isinstance(default, int):
            kwargs[f.name] = int(value)
        else:
            kwargs[f.name] = float(value)
    return SimConfig(**kwargs)


def load_config(path: str) -> SimConfig:
    return config_from_json(load_json_raw(path))


def save_config(config: SimConfig, path: str, indent: int = 2) -> None:
    _dump(config_to_json(config), path, indent)


# =============================================================================
# World
# =============================================================================

def body_to_json(body: CelestialBody, registry: BodyRegistry) -> dict[str, Any]:
    """
    Serialize one body. Orbit centers are written by name, defaults are skipped.
    """
    result: dict[str, Any] = {
        "name": body.name,
        "kind": body.kind.label,
        "mass": body.mass,
        "radius": body.radius,
    }
    if body.is_orbiting:
        result["orbit_center"] = registry.get(body.orbit_center_id).name
        result["orbit_radius"] = body.orbit_radius
        result["angular_speed"] = body.angular_speed
        if body.initial_angle != 0.0:
            result["initial_angle"] = body.initial_angle
    else:
        result["position"] = _to_list(body.position)
    if body.influence_radius is not None:
        result["influence_radius"] = body.influence_radius
    return result


def body_from_json(d: dict[str, Any], registry: BodyRegistry) -> CelestialBody:
    """
    Parse one body definition. Its orbit center must already be in `registry`.

    Raises:
        ValueError: On missing required fields, an unknown kind or an unknown center.
    """
    for key in ("name", "mass", "radius"):
        if key not in d:
            raise ValueError(f"Body definition missing required '{key}' field.")

    center_id = None
    center_name = d.get("orbit_center")
    if center_name is not None:
        try:
            center_id = registry.by_name(center_name).id
        except KeyError:
            raise ValueError(f"{d['name']}: unknown orbit center '{center_name}'") from None

    influence = d.get("influence_radius")
    return CelestialBody(
        name=str(d["name"]),
        kind=BodyKind.from_label(d.get("kind", "planet")),
        mass=float(d["mass"]),
        radius=float(d["radius"]),
        position=tuple(d.get("position", [0.0, 0.0])),
        orbit_center_id=center_id,
        orbit_radius=float(d.get("orbit_radius", 0.0)),
        angular_speed=float(d.get("angular_speed", 0.0)),
        initial_angle=float(d.get("initial_angle", 0.0)),
        influence_radius=None if influence is None else float(influence),
    )


def world_to_json(registry: BodyRegistry) -> dict[str, Any]:
    """Bodies in dependency order, so every center precedes its satellites."""
    return {"bodies": [body_to_json(b, registry) for b in registry.orbit_order()]}


def world_from_json(data: dict[str, Any]) -> BodyRegistry:
    """
    Build a registry (orbits restored to their initial angles).

    Raises:
        ValueError: If the world has no star or a body is malformed.
    """
    registry = BodyRegistry()
    for body_data in data.get("bodies", []):
        registry.add(body_from_json(body_data, registry))
    registry.primary_star()
    registry.restore()
    return registry


def load_world(path: str) -> BodyRegistry:
    return world_from_json(load_json_raw(path))


def save_world(registry: BodyRegistry, path: str, indent: int = 2) -> None:
    _dump(world_to_json(registry), path, indent)


# =============================================================================
# Persisted stats
# =============================================================================

def stats_to_json(stats: PersistedStats) -> dict[str, int]:
    return {
        "high_score": stats.high_score,
        "total_score": stats.total_score,
        "total_games": stats.total_games,
    }


def stats_from_json(data: dict[str, Any]) -> PersistedStats:
    """Missing counters start at zero; negative ones are rejected."""
    stats = PersistedStats(
        high_score=int(data.get("high_score", 0)),
        total_score=int(data.get("total_score", 0)),
        total_games=int(data.get("total_games", 0)),
    )
    if min(stats.high_score, stats.total_score, stats.total_games) < 0:
        raise ValueError(f"Persisted stats must be >= 0, got {stats}")
    return stats


def load_stats(path: str) -> PersistedStats:
    return stats_from_json(load_json_raw(path))


def save_stats(stats: PersistedStats, path: str, indent: int = 2) -> None:
    _dump(stats_to_json(stats), path, indent)


def _to_list(arr: Any) -> list[float]:
    if isinstance(arr, np.ndarray):
        return arr.tolist()
    return list(arr)
