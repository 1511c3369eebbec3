# MIT License (see LICENSE)
"""
Ship collision resolution.

Evaluated once per tick after integration. For every overlap between the
ship and a massive body or particle:

- shield active          -> ignored entirely
- body kind is always destructive (the star) -> destructive, whatever the speed
- relative speed >= soft_collision_threshold -> destructive
- otherwise              -> soft bounce

A soft bounce puts the ship just outside the combined radius along the
separation vector and adds `bounce_speed` along that same unit vector.
Relative speed uses the body's own velocity: zero for fixed bodies, the
analytic orbital velocity for kinematic bodies, the integrated velocity for
particles.

Resolution stops at the first destructive contact. The resolver never ends
the episode itself; it reports an outcome the controller acts on.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Iterable

import numpy as np

from ..config import SimConfig
from ..core.orbits import orbital_velocity
from ..registry import BodyRegistry
from ..types import GameOverReason, Particle, Ship
from ..util import norm, unit


@dataclass
class CollisionOutcome:
    """
    Result of one resolution pass.

    Attributes:
        destructive: True if the episode must end.
        reason: Why, when destructive.
        other: Name of the body hit ("asteroid"/"comet" for particles).
        relative_speed: Relative speed of the destructive contact.
        soft_contacts: Number of soft bounces applied this pass.
    """
    destructive: bool = False
    reason: GameOverReason | None = None
    other: str | None = None
    relative_speed: float = 0.0
    soft_contacts: int = 0


class CollisionResolver:
    """Two-tier (soft/destructive) ship contact resolver."""

    def __init__(self, config: SimConfig) -> None:
        self.config = config

    def resolve(self, ship: Ship, registry: BodyRegistry, particles: Iterable[Particle] = ()) -> CollisionOutcome:
        """
        Classify and resolve every current overlap involving the ship.

        Args:
            ship: The player's ship (position/velocity may be modified by bounces).
            registry: Massive bodies.
            particles: Live asteroids and comets.
        """
        out = CollisionOutcome()
        if ship.shielded:
            return out

        for body in registry.bodies:
            if not _overlapping(ship, body.position, body.radius):
                continue
            body_vel = orbital_velocity(body, registry)
            rel = norm(ship.velocity - body_vel)
            if body.kind.always_destructive or rel >= self.config.soft_collision_threshold:
                reason = GameOverReason.SUN if body.kind.always_destructive else GameOverReason.BODY
                return CollisionOutcome(True, reason, body.name, rel, out.soft_contacts)
            self._bounce(ship, body.position, body.radius, body_vel)
            out.soft_contacts += 1

        for p in particles:
            if not _overlapping(ship, p.position, p.radius):
                continue
            rel = norm(ship.velocity - p.velocity)
            if rel >= self.config.soft_collision_threshold:
                name = "comet" if p.is_comet else "asteroid"
                return CollisionOutcome(True, GameOverReason.ASTEROID, name, rel, out.soft_contacts)
            self._bounce(ship, p.position, p.radius, p.velocity)
            out.soft_contacts += 1

        return out

    def _bounce(self, ship: Ship, other_pos: np.ndarray, other_radius: float, other_vel: np.ndarray) -> None:
        """Push the ship out of the other circle and kick it outward."""
        n = unit(ship.position - other_pos)
        if not n.any():
            # Coincident centers: back out along the approach direction, else the facing.
            n = unit(other_vel - ship.velocity)
            if not n.any():
                n = np.array([math.cos(ship.facing_angle), math.sin(ship.facing_angle)], dtype=np.float64)
        combined = ship.radius + other_radius
        ship.position[:] = other_pos + n * (combined + self.config.bounce_margin)
        ship.velocity += n * self.config.bounce_speed


def _overlapping(ship: Ship, position: np.ndarray, radius: float) -> bool:
    dx = ship.position[0] - position[0]
    dy = ship.position[1] - position[1]
    return math.sqrt(dx * dx + dy * dy) < ship.radius + radius
