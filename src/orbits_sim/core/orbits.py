# MIT License (see LICENSE)
"""
Kinematic orbits.

Orbiting bodies follow an analytic circle around their center:

    angle    += angular_speed * dt
    position  = center.position + orbit_radius * (cos(angle), sin(angle))

No force integration is involved. Centers must be advanced before their
satellites, so every function here walks BodyRegistry.orbit_order().

OrbitTable is a detached copy of the same data used by the trajectory
projector to move planets forward in time without touching live bodies.
"""
from __future__ import annotations
import math
from typing import TYPE_CHECKING

import numpy as np

from ..types import CelestialBody
from ..util import wrap_angle

if TYPE_CHECKING:
    from ..registry import BodyRegistry


def place(body: CelestialBody, center: np.ndarray) -> None:
    """Recompute an orbiting body's position from its current angle."""
    body.position[0] = center[0] + body.orbit_radius * math.cos(body.angle)
    body.position[1] = center[1] + body.orbit_radius * math.sin(body.angle)


def advance(body: CelestialBody, center: np.ndarray, dt: float) -> None:
    """
    Advance one orbiting body by dt.

    The angle is folded back periodically so it stays bounded over long
    sessions; positions are unaffected because cos/sin are 2π-periodic.
    """
    body.angle = wrap_angle(body.angle + body.angular_speed * dt)
    place(body, center)


def advance_orbits(registry: "BodyRegistry", dt: float) -> None:
    """Advance every orbiting body in dependency order."""
    for body in registry.orbit_order():
        if body.is_orbiting:
            advance(body, registry.get(body.orbit_center_id).position, dt)


def restore_orbits(registry: "BodyRegistry") -> None:
    """Reset every angle to its initial value and recompute positions."""
    for body in registry.orbit_order():
        if body.is_orbiting:
            body.angle = float(body.initial_angle)
            place(body, registry.get(body.orbit_center_id).position)


def orbital_velocity(body: CelestialBody, registry: "BodyRegistry") -> np.ndarray:
    """
    Inertial velocity of a body.

    Zero for fixed bodies. For an orbiting body it is the tangential velocity
    around its center, (-ω·(y - cy), ω·(x - cx)), plus the center's own velocity.
    """
    v = np.zeros(2, dtype=np.float64)
    while body.is_orbiting:
        center = registry.get(body.orbit_center_id)
        w = body.angular_speed
        v[0] += -w * (body.position[1] - center.position[1])
        v[1] += w * (body.position[0] - center.position[0])
        body = center
    return v


class OrbitTable:
    """
    Detached snapshot of all body positions and orbit parameters.

    Rows follow registry.orbit_order(), so a single forward pass in advance()
    respects center-before-satellite ordering. Live bodies are never touched.

    Attributes:
        ids: Body id per row.
        positions: [N, 2] current positions (owned copy).
        masses, radii: [N] arrays.
        influence: [N] influence radii (inf where unlimited).
    """

    def __init__(self, registry: "BodyRegistry") -> None:
        order = registry.orbit_order()
        row_of = {b.id: i for i, b in enumerate(order)}
        self.ids = [b.id for b in order]
        self.names = [b.name for b in order]
        self.positions = np.array([b.position for b in order], dtype=np.float64).reshape(-1, 2)
        self.masses = np.array([b.mass for b in order], dtype=np.float64)
        self.radii = np.array([b.radius for b in order], dtype=np.float64)
        self.influence = np.array(
            [math.inf if b.influence_radius is None else b.influence_radius for b in order],
            dtype=np.float64,
        )
        self._angles = [b.angle for b in order]
        # (row, center_row, orbit_radius, angular_speed) for orbiting rows only
        self._orbits = [
            (i, row_of[b.orbit_center_id], b.orbit_radius, b.angular_speed)
            for i, b in enumerate(order) if b.is_orbiting
        ]

    def __len__(self) -> int:
        return len(self.ids)

    def advance(self, dt: float) -> None:
        """Move the copy forward by dt using the same law as advance_orbits()."""
        pos = self.positions
        for row, center_row, r, w in self._orbits:
            a = wrap_angle(self._angles[row] + w * dt)
            self._angles[row] = a
            pos[row, 0] = pos[center_row, 0] + r * math.cos(a)
            pos[row, 1] = pos[center_row, 1] + r * math.sin(a)
