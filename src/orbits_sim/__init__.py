# MIT License (see LICENSE)
"""
orbits_sim - Game core of a 2D gravitational ship game.

A ship flies among kinematically orbiting planets, a drifting asteroid belt
and a few hazards, under inverse-square gravity integrated with
semi-implicit Euler. A forward projection predicts collisions for the HUD.
Rendering, input and storage are left to the caller.

Main entry points:
    - EpisodeController: Runs episodes tick by tick.
    - ControlInput / FrameSnapshot: Per-tick input and output.
    - SimConfig: All tunables.
    - BodyRegistry, CelestialBody, BodyKind: The massive bodies of a world.
    - default_solar_system(): The stock world.

Submodules:
    - core: Gravity field, orbit kinematics, integrator, diagnostics.
    - collision: Spatial hash and the soft/destructive resolver.
    - io: JSON serialization of config, worlds and stats.
    - renderer: Optional snapshot renderers.

Example:
    from orbits_sim import EpisodeController, ControlInput

    controller = EpisodeController(seed=7)
    snap = controller.tick(ControlInput(thrust=True))
    print(snap.fuel, snap.collision_warning)
"""
from .config import SimConfig
from .episode import ControlInput, EpisodeController, FrameSnapshot, PersistedStats, SimulationState
from .registry import BodyRegistry, default_solar_system
from .rng import DeterministicRNG
from .trajectory import TrajectoryProjector, TrajectoryResult
from .types import BodyKind, CelestialBody, GameOverReason, Ship

__all__ = [
    # Episode
    "EpisodeController",
    "ControlInput",
    "FrameSnapshot",
    "PersistedStats",
    "SimulationState",
    "SimConfig",
    # World
    "BodyRegistry",
    "BodyKind",
    "CelestialBody",
    "default_solar_system",
    "Ship",
    "GameOverReason",
    # Tools
    "DeterministicRNG",
    "TrajectoryProjector",
    "TrajectoryResult",
]
