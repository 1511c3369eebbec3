# MIT License (see LICENSE)
"""
Ship dynamics.

One call to ShipDynamics.step() advances the player's ship by one tick:

    1. Controls (skipped while disabled): rotate, then thrust along the
       facing direction if there is fuel. Fuel burn is proportional to the
       thrust acceleration and dt, and fuel stays within [0, max_fuel].
    2. Total acceleration = gravity at the current position + thrust.
    3. Semi-implicit Euler: velocity first, then position with the new velocity.
    4. Grace, disabled and shield timers count down by dt, clamped at 0.
    5. The new position is appended to the trail; samples older than
       `trail_duration` are pruned.

Thrust silently does nothing without fuel or while disabled.
"""
from __future__ import annotations
import math

import numpy as np

from .config import SimConfig
from .core.forces import GravityField
from .core.integrators import symplectic_euler_step
from .types import Ship
from .util import f64


def make_ship(config: SimConfig, star_position) -> Ship:
    """Fresh ship at the spawn offset from the star, at rest, with spawn grace."""
    return Ship(
        position=f64(star_position) + f64(config.spawn_offset),
        velocity=(0.0, 0.0),
        facing_angle=0.0,
        fuel=config.initial_fuel,
        max_fuel=config.max_fuel,
        radius=config.ship_radius,
        grace_timer=config.grace_time,
    )


class ShipDynamics:
    """
    Integrates the ship under gravity and thrust.

    Attributes:
        config: Handling constants (thrust, rotation, fuel burn, trail length).
        field: Gravity field queried at the ship position.
    """

    def __init__(self, config: SimConfig, field: GravityField) -> None:
        self.config = config
        self.field = field

    def thrust_vector(self, ship: Ship) -> np.ndarray:
        """Thrust acceleration the ship would get this tick, ignoring fuel."""
        mag = self.config.thrust_accel * ship.thrust_multiplier
        return np.array(
            [mag * math.cos(ship.facing_angle), mag * math.sin(ship.facing_angle)],
            dtype=np.float64,
        )

    def step(
        self,
        ship: Ship,
        dt: float,
        sim_time: float,
        thrust: bool = False,
        rotate_left: bool = False,
        rotate_right: bool = False,
        time_scale: float = 1.0,
    ) -> bool:
        """
        Advance the ship by one tick.

        Args:
            ship: Ship to update (modified in-place).
            dt: Base timestep; the effective step is dt * time_scale.
            sim_time: Simulation time stamped on the trail sample.
            thrust, rotate_left, rotate_right: Control intents for this tick.
            time_scale: Fast-forward multiplier (>= 1).

        Returns:
            True if thrust was actually applied this tick.
        """
        cfg = self.config
        dt_eff = dt * time_scale
        accel = np.zeros(2, dtype=np.float64)
        thrusting = False

        if not ship.disabled:
            turn = cfg.rotation_rate * ship.rotation_multiplier * dt_eff
            if rotate_left:
                ship.facing_angle -= turn
            if rotate_right:
                ship.facing_angle += turn
            if thrust and ship.fuel > 0.0:
                t = self.thrust_vector(ship)
                accel += t
                ship.add_fuel(-cfg.fuel_burn_per_thrust * math.hypot(t[0], t[1]) * dt_eff)
                thrusting = True

        accel += self.field.acceleration(ship.position)
        symplectic_euler_step(ship.position, ship.velocity, accel, dt_eff)

        ship.grace_timer = max(0.0, ship.grace_timer - dt_eff)
        ship.disabled_timer = max(0.0, ship.disabled_timer - dt_eff)
        ship.shield_timer = max(0.0, ship.shield_timer - dt_eff)

        ship.trail.append((float(ship.position[0]), float(ship.position[1]), sim_time))
        while ship.trail and sim_time - ship.trail[0][2] > cfg.trail_duration:
            ship.trail.popleft()

        return thrusting
