# MIT License (see LICENSE)
"""
Tunable parameters for the game core.

SimConfig gathers every constant the systems read: integration step, gravity,
ship handling, collision response, trajectory projection, world generation
and gameplay rewards. It is immutable; build a new one with
dataclasses.replace() to change a value.

The collision threshold and bounce speed are empirical feel constants and
are meant to be tuned here rather than in the systems.
"""
from __future__ import annotations
from dataclasses import dataclass

from .constants import G as DEFAULT_G, DT, TIME_SCALES


@dataclass(frozen=True)
class SimConfig:
    """
    Game-core configuration.

    Attributes:
        G: Gravitational constant in game units.
        dt: Base tick length in simulation time units.
        thrust_accel: Thrust acceleration at multiplier 1.
        rotation_rate: Turn rate in radians per time unit at multiplier 1.
        fuel_burn_per_thrust: Fuel used per unit of thrust acceleration per time unit.
        initial_fuel, max_fuel, ship_radius: Ship starting state.
        spawn_offset: Ship spawn position relative to the primary star.
        grace_time: Spawn-immunity window shown on the HUD.
        disable_time: Duration of a flare hit.
        shield_duration: Duration of a shield upgrade.
        trail_duration: Age after which trail samples are dropped.
        soft_collision_threshold: Relative speed at or above which a contact is destructive.
        bounce_speed: Outward speed added on a soft bounce.
        bounce_margin: Gap left between surfaces after a soft bounce.
        trajectory_duration, trajectory_step: Projection horizon and coarse step.
        collectible_*: Pickup geometry and type probabilities.
        fuel_pickup: Fuel added by a fuel collectible.
        thruster_factor, maneuver_factor, fuel_tank_bonus: Upgrade effects.
        asteroid_count, comet_count, belt_inner, belt_outer, ...: Particle field generation.
        flare_*: Solar flare bursts.
        wormhole_*: Portal placement and fuel rebate.
        rescue_*, station_*: Rescue objective.
    """
    # Integration
    G: float = DEFAULT_G
    dt: float = DT

    # Ship handling
    thrust_accel: float = 0.2
    rotation_rate: float = 0.5
    fuel_burn_per_thrust: float = 0.25
    initial_fuel: float = 25.0
    max_fuel: float = 30.0
    ship_radius: float = 8.0
    spawn_offset: tuple[float, float] = (740.0, -300.0)
    grace_time: float = 20.0
    disable_time: float = 30.0
    shield_duration: float = 200.0
    trail_duration: float = 10.0

    # Collision response
    soft_collision_threshold: float = 2.0
    bounce_speed: float = 1.0
    bounce_margin: float = 0.5

    # Trajectory projection
    show_trajectory: bool = True
    trajectory_duration: float = 90.0
    trajectory_step: float = 0.2

    # Collectibles and upgrades
    collectible_radius: float = 7.0
    collectible_margin: float = 10.0
    collectible_spawn_radius: float = 1850.0
    collectible_max_attempts: int = 1000
    p_upgrade: float = 0.2
    p_fuel: float = 0.3
    fuel_pickup: float = 5.0
    thruster_factor: float = 1.4
    maneuver_factor: float = 1.2
    fuel_tank_bonus: float = 10.0

    # Particle field
    enable_asteroids: bool = True
    asteroid_count: int = 80
    comet_count: int = 10
    belt_inner: float = 1300.0
    belt_outer: float = 1800.0
    comet_min_extra: float = 300.0
    comet_max_extra: float = 1300.0
    comet_speed_factor: float = 0.6
    particle_min_radius: float = 5.0
    particle_max_radius: float = 8.0

    # Solar flares
    enable_flares: bool = True
    flare_interval: float = 30.0
    flare_count: int = 30
    flare_min_spread_deg: float = 5.0
    flare_max_spread_deg: float = 20.0
    flare_min_speed: float = 28.0
    flare_max_speed: float = 38.0
    flare_lifetime: float = 60.0
    flare_radius: float = 3.0

    # Wormhole
    enable_wormhole: bool = True
    wormhole_entry: tuple[float, float] = (600.0, -600.0)
    wormhole_exit: tuple[float, float] = (-600.0, 600.0)
    wormhole_radius: float = 20.0
    wormhole_clearance: float = 10.0
    wormhole_fuel_rebate: float = 3.0

    # Rescue objective
    enable_rescue: bool = True
    rescue_min_distance: float = 800.0
    rescue_max_distance: float = 1200.0
    rescue_drift: float = 0.2
    rescue_radius: float = 10.0
    rescue_tow_factor: float = 0.5
    rescue_score: int = 1
    delivery_score: int = 4
    station_position: tuple[float, float] = (600.0, 600.0)
    station_radius: float = 40.0

    def __post_init__(self) -> None:
        """Reject values that can only be programmer error."""
        if self.G <= 0 or self.dt <= 0:
            raise ValueError(f"G and dt must be positive, got G={self.G}, dt={self.dt}")
        if self.trajectory_step <= 0 or self.trajectory_duration < 0:
            raise ValueError("trajectory_step must be positive and trajectory_duration >= 0")
        for name in ("max_fuel", "initial_fuel", "ship_radius", "thrust_accel",
                     "rotation_rate", "fuel_burn_per_thrust", "collectible_radius",
                     "soft_collision_threshold", "bounce_speed", "bounce_margin"):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} must be >= 0, got {getattr(self, name)}")
        if not (0.0 <= self.p_upgrade <= 1.0 and 0.0 <= self.p_fuel <= 1.0):
            raise ValueError("collectible probabilities must lie in [0, 1]")
        if self.p_upgrade + self.p_fuel > 1.0:
            raise ValueError("p_upgrade + p_fuel must not exceed 1")
        if self.belt_outer < self.belt_inner:
            raise ValueError("belt_outer must be >= belt_inner")
        if self.asteroid_count < 0 or self.comet_count < 0 or self.flare_count < 0:
            raise ValueError("particle counts must be >= 0")
        if self.collectible_max_attempts < 1:
            raise ValueError("collectible_max_attempts must be >= 1")


def check_time_scale(level: int) -> int:
    """Validate a fast-forward level; only the discrete levels in TIME_SCALES are allowed."""
    if level not in TIME_SCALES:
        raise ValueError(f"time scale must be one of {TIME_SCALES}, got {level}")
    return int(level)
