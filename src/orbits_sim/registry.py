# MIT License (see LICENSE)
"""
Entity table for massive bodies.

BodyRegistry owns every CelestialBody of a world. Orbit relations are stored
as foreign keys (`orbit_center_id`) and resolved here, never as object
back-pointers. The registry also computes the update order for kinematic
orbits: a body's center always comes before the bodies circling it.

Structure:
    - User creates a BodyRegistry (or calls default_solar_system()).
    - User adds bodies via add(); ids are assigned in insertion order.
    - Systems iterate `bodies` (id order) or `orbit_order()` (dependency order).
"""
from __future__ import annotations
import math

from .types import BodyKind, CelestialBody
from .core.orbits import restore_orbits


class BodyRegistry:
    """
    Table of massive bodies keyed by integer id.

    Example:
        reg = BodyRegistry()
        sun = reg.add(CelestialBody("sun", BodyKind.STAR, mass=1e5, radius=50))
        reg.add(CelestialBody("rock", BodyKind.PLANET, mass=100, radius=5,
                              orbit_center_id=sun, orbit_radius=300, angular_speed=0.01))
        reg.restore()
    """

    def __init__(self) -> None:
        self._bodies: dict[int, CelestialBody] = {}
        self._by_name: dict[str, int] = {}
        self._order: list[CelestialBody] | None = None
        self._next_id = 1

    def add(self, body: CelestialBody) -> int:
        """
        Add a body and return its assigned id.

        The orbit center, if any, must already be registered.

        Raises:
            ValueError: On duplicate names or an unknown orbit center.
        """
        if body.name in self._by_name:
            raise ValueError(f"Duplicate body name: '{body.name}'")
        if body.orbit_center_id is not None and body.orbit_center_id not in self._bodies:
            raise ValueError(f"{body.name}: unknown orbit center id {body.orbit_center_id}")
        body.id = self._next_id
        self._next_id += 1
        self._bodies[body.id] = body
        self._by_name[body.name] = body.id
        self._order = None
        return body.id

    def get(self, body_id: int) -> CelestialBody:
        return self._bodies[body_id]

    def by_name(self, name: str) -> CelestialBody:
        try:
            return self._bodies[self._by_name[name]]
        except KeyError:
            raise KeyError(f"No body named '{name}'") from None

    def __len__(self) -> int:
        return len(self._bodies)

    def __iter__(self):
        return iter(self.bodies)

    @property
    def bodies(self) -> list[CelestialBody]:
        """All bodies in id (insertion) order."""
        return list(self._bodies.values())

    def primary_star(self) -> CelestialBody:
        """The first STAR in the table; worlds are built around it."""
        for b in self._bodies.values():
            if b.kind is BodyKind.STAR:
                return b
        raise ValueError("Registry has no star")

    def orbit_order(self) -> list[CelestialBody]:
        """
        Bodies sorted by orbit depth (fixed bodies first, then their satellites, ...).

        Ties keep id order so the sequence is deterministic.

        Raises:
            ValueError: If orbit centers form a cycle.
        """
        if self._order is None:
            depth: dict[int, int] = {}
            for body_id in self._bodies:
                depth[body_id] = self._depth(body_id, depth)
            self._order = sorted(self._bodies.values(), key=lambda b: (depth[b.id], b.id))
        return self._order

    def _depth(self, body_id: int, memo: dict[int, int]) -> int:
        chain = []
        seen = set()
        cur = body_id
        while cur not in memo:
            if cur in seen:
                raise ValueError(f"Cyclic orbit centers involving '{self._bodies[cur].name}'")
            seen.add(cur)
            chain.append(cur)
            center = self._bodies[cur].orbit_center_id
            if center is None:
                memo[cur] = 0
                chain.pop()
                break
            if center not in self._bodies:
                raise ValueError(f"{self._bodies[cur].name}: unknown orbit center id {center}")
            cur = center
        base = memo[cur]
        for i, node in enumerate(reversed(chain)):
            memo[node] = base + i + 1
        return memo[body_id]

    def invalidate(self) -> None:
        """Drop the cached orbit order after editing orbit relations in place."""
        self._order = None

    def restore(self) -> None:
        """Put every orbiting body back at its initial angle and recompute positions."""
        restore_orbits(self)


def default_solar_system() -> BodyRegistry:
    """
    The stock world: a star, four planets, a moon and a satellite, plus a
    distant black hole with two small orbiters whose pull only reaches
    1200 units.

    Angular speeds are radians per time unit; positive is counterclockwise
    in a y-up frame (clockwise on a y-down screen).
    """
    reg = BodyRegistry()
    sun = reg.add(CelestialBody("sun", BodyKind.STAR, mass=280000.0, radius=110.0, position=(0.0, 0.0)))
    planet_a = reg.add(CelestialBody(
        "planetA", BodyKind.PLANET, mass=10000.0, radius=30.0,
        orbit_center_id=sun, orbit_radius=500.0, angular_speed=0.003, initial_angle=0.0,
    ))
    planet_b = reg.add(CelestialBody(
        "planetB", BodyKind.PLANET, mass=25000.0, radius=40.0,
        orbit_center_id=sun, orbit_radius=650.0, angular_speed=0.002, initial_angle=4 * math.pi / 3,
    ))
    reg.add(CelestialBody(
        "planetC", BodyKind.PLANET, mass=35000.0, radius=30.0,
        orbit_center_id=sun, orbit_radius=1050.0, angular_speed=0.001, initial_angle=-5 * math.pi / 3,
    ))
    reg.add(CelestialBody(
        "planetD", BodyKind.PLANET, mass=135000.0, radius=80.0,
        orbit_center_id=sun, orbit_radius=1650.0, angular_speed=0.0005, initial_angle=math.pi / 2,
    ))
    reg.add(CelestialBody(
        "moon", BodyKind.MOON, mass=3000.0, radius=15.0,
        orbit_center_id=planet_b, orbit_radius=80.0, angular_speed=0.01,
    ))
    reg.add(CelestialBody(
        "satelliteA", BodyKind.MOON, mass=2000.0, radius=10.0,
        orbit_center_id=planet_a, orbit_radius=50.0, angular_speed=0.015,
    ))
    black_hole = reg.add(CelestialBody(
        "blackHole", BodyKind.BLACK_HOLE, mass=3000000.0, radius=140.0,
        position=(5000.0, 5000.0), influence_radius=1200.0,
    ))
    reg.add(CelestialBody(
        "bhOrbiter1", BodyKind.MOON, mass=1000.0, radius=8.0,
        orbit_center_id=black_hole, orbit_radius=100.0, angular_speed=0.008,
    ))
    reg.add(CelestialBody(
        "bhOrbiter2", BodyKind.MOON, mass=1200.0, radius=10.0,
        orbit_center_id=black_hole, orbit_radius=140.0, angular_speed=0.005, initial_angle=math.pi / 3,
    ))
    reg.restore()
    return reg
