# MIT License (see LICENSE)
"""
Gravity field for the game core.

The acceleration at a point is the sum over every massive body b of

    a = G * m_b / d^2 * (p_b - p) / d,     d = |p_b - p|

with two cut-offs:
- inside a body (d < radius_b, or d == 0) its contribution is exactly zero.
  This is a hard clamp, not a softening; it keeps the field finite at
  body centers.
- beyond `influence_radius` (when set) the body is ignored.

Bodies are one-way attractors: particles and the ship feel the field but
do not contribute to it. Complexity is O(bodies) per query.
"""
from __future__ import annotations
import math
import numbers
from typing import TYPE_CHECKING, Iterable

import numpy as np

if TYPE_CHECKING:
    from ..registry import BodyRegistry


def point_gravity(
    px: float,
    py: float,
    bx: float,
    by: float,
    mass: float,
    radius: float,
    G: float,
    influence: float = math.inf,
) -> tuple[float, float]:
    """
    Acceleration at (px, py) due to a single body at (bx, by).

    Returns (0, 0) inside the body, at its exact center, or beyond its
    influence radius.
    """
    dx = bx - px
    dy = by - py
    dist_sq = dx * dx + dy * dy
    if dist_sq == 0.0:
        return 0.0, 0.0
    dist = math.sqrt(dist_sq)
    if dist < radius or dist > influence:
        return 0.0, 0.0
    f = G * mass / dist_sq
    return f * dx / dist, f * dy / dist


def table_acceleration(
    px: float,
    py: float,
    positions: np.ndarray,
    masses: np.ndarray,
    radii: np.ndarray,
    influence: np.ndarray,
    G: float,
) -> np.ndarray:
    """Acceleration at (px, py) from bodies given as parallel arrays (see OrbitTable)."""
    ax = ay = 0.0
    for i in range(len(masses)):
        gx, gy = point_gravity(
            px, py, positions[i, 0], positions[i, 1],
            masses[i], radii[i], G, influence[i],
        )
        ax += gx
        ay += gy
    return np.array([ax, ay], dtype=np.float64)


class GravityField:
    """
    Read-only view of the registry as a gravity field.

    Safe to query at hypothetical points; never mutates bodies.

    Example:
        field = GravityField(registry, G=0.4)
        a = field.acceleration(ship.position)
    """

    def __init__(self, registry: "BodyRegistry", G: float) -> None:
        if G <= 0:
            raise ValueError(f"G must be positive, got {G}")
        self.registry = registry
        self.G = float(G)

    def acceleration(self, point, excluding: int | Iterable[int] | None = None) -> np.ndarray:
        """
        Net acceleration at `point` from all registered bodies.

        Args:
            point: World position [x, y].
            excluding: Body id (or ids) to leave out of the sum.

        Returns:
            Acceleration vector [ax, ay]; always finite.
        """
        if excluding is None:
            skip: frozenset[int] = frozenset()
        elif isinstance(excluding, numbers.Integral):
            skip = frozenset((int(excluding),))
        else:
            skip = frozenset(int(i) for i in excluding)

        px, py = float(point[0]), float(point[1])
        ax = ay = 0.0
        for b in self.registry.bodies:
            if b.id in skip:
                continue
            influence = math.inf if b.influence_radius is None else b.influence_radius
            gx, gy = point_gravity(
                px, py, b.position[0], b.position[1], b.mass, b.radius, self.G, influence
            )
            ax += gx
            ay += gy
        return np.array([ax, ay], dtype=np.float64)
