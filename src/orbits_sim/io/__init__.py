# MIT License (see LICENSE)
"""
Input/Output utilities.

This subpackage provides JSON round trips for:
    - SimConfig (tunables)
    - Worlds (body registries, orbit centers referenced by name)
    - PersistedStats (high score and counters)

Typical usage:
    from orbits_sim.io import load_world, load_stats, save_stats

    registry = load_world("worlds/binary.json")
    stats = load_stats("stats.json")
    ...
    save_stats(controller.state.stats, "stats.json")
"""
from .json_io import (
    body_from_json,
    body_to_json,
    config_from_json,
    config_to_json,
    load_config,
    load_json_raw,
    load_stats,
    load_world,
    save_config,
    save_stats,
    save_world,
    stats_from_json,
    stats_to_json,
    world_from_json,
    world_to_json,
)

__all__ = [
    # Loading
    "load_json_raw",
    "load_config",
    "load_world",
    "load_stats",
    # Saving
    "save_config",
    "save_world",
    "save_stats",
    # Serialization
    "config_to_json",
    "config_from_json",
    "body_to_json",
    "body_from_json",
    "world_to_json",
    "world_from_json",
    "stats_to_json",
    "stats_from_json",
]
