# MIT License (see LICENSE)
"""
Forward trajectory projection.

Predicts where the ship will coast if the player stops touching the
controls: no thrust, same gravity and same semi-implicit Euler law as the
live simulation, but with a coarser step and a long horizon.

Per step:
    1. gravity from the projected body positions
    2. integrate the projected ship
    3. advance a private copy of the orbits (OrbitTable)
    4. coast a copy of the particles ballistically (no gravity)
    5. test overlap against every body and every particle

On the first overlap the step index is recorded and the projection stops.
Nothing live is mutated: ship state is copied, orbits use a detached table,
particles move in a copied array. Cost is bounded by ceil(duration / step) steps;
particle tests go through a spatial hash rebuilt every few steps with each
circle fattened by the distance it can travel before the next rebuild.
"""
from __future__ import annotations
from dataclasses import dataclass
import math
from typing import Sequence

import numpy as np

from .collision.broadphase import SpatialHash
from .core.forces import table_acceleration
from .core.integrators import symplectic_euler_step
from .core.orbits import OrbitTable
from .registry import BodyRegistry
from .types import Particle, Ship


@dataclass
class TrajectoryResult:
    """
    Output of one projection.

    Attributes:
        points: [K, 2] projected positions, one per step, up to and including
                the collision step.
        collision_step_index: Index into `points` of the first predicted
                overlap, or -1 when the horizon is clear.
        step_size: Step used, so callers can turn indices into times.
        hit: Name of the body predicted to be hit, if any.
    """
    points: np.ndarray
    collision_step_index: int = -1
    step_size: float = 0.0
    hit: str | None = None

    @property
    def collision_warning(self) -> bool:
        return self.collision_step_index >= 0

    @property
    def collision_point(self) -> np.ndarray | None:
        if self.collision_step_index < 0:
            return None
        return self.points[self.collision_step_index]

    @property
    def time_to_collision(self) -> float | None:
        """Simulation time from now until the predicted impact."""
        if self.collision_step_index < 0:
            return None
        return (self.collision_step_index + 1) * self.step_size


def step_count(duration: float, step_size: float) -> int:
    """Number of projection steps covering `duration` (rounding up partial steps)."""
    if step_size <= 0:
        raise ValueError(f"step_size must be positive, got {step_size}")
    if duration <= 0:
        return 0
    return int(math.ceil(duration / step_size - 1e-9))


class TrajectoryProjector:
    """
    Read-only forward simulator for the collision warning display.

    Example:
        projector = TrajectoryProjector(G=0.4, duration=90.0, step_size=0.2)
        result = projector.project(ship, registry, particles)
        if result.collision_warning:
            ...
    """

    def __init__(
        self,
        G: float,
        duration: float = 90.0,
        step_size: float = 0.2,
        cell_size: float = 64.0,
        rebuild_every: int = 10,
    ) -> None:
        if rebuild_every < 1:
            raise ValueError(f"rebuild_every must be >= 1, got {rebuild_every}")
        self.G = float(G)
        self.duration = float(duration)
        self.step_size = float(step_size)
        self.cell_size = float(cell_size)
        self.rebuild_every = int(rebuild_every)
        step_count(self.duration, self.step_size)

    def project(
        self,
        ship: Ship,
        registry: BodyRegistry,
        particles: Sequence[Particle] = (),
        duration: float | None = None,
        step_size: float | None = None,
    ) -> TrajectoryResult:
        """
        Coast the ship forward and look for the first collision.

        Args:
            ship: Live ship; only position, velocity and radius are read.
            registry: Massive bodies (copied into an OrbitTable).
            particles: Live particles; copies coast at constant velocity.
            duration: Horizon override in simulation time.
            step_size: Step override.
        """
        duration = self.duration if duration is None else float(duration)
        h = self.step_size if step_size is None else float(step_size)
        n = step_count(duration, h)

        pos = ship.position.copy()
        vel = ship.velocity.copy()
        r_ship = float(ship.radius)
        table = OrbitTable(registry)

        particles = list(particles)
        grid = None
        if particles:
            p_pos = np.array([p.position for p in particles], dtype=np.float64)
            p_vel = np.array([p.velocity for p in particles], dtype=np.float64)
            p_rad = np.array([p.radius for p in particles], dtype=np.float64)
            # slack covers the drift between the build step and the last step using it
            p_slack = p_rad + np.hypot(p_vel[:, 0], p_vel[:, 1]) * h * self.rebuild_every
            grid = SpatialHash(self.cell_size)

        points = np.empty((n, 2), dtype=np.float64)
        for i in range(n):
            acc = table_acceleration(
                pos[0], pos[1], table.positions, table.masses, table.radii, table.influence, self.G
            )
            symplectic_euler_step(pos, vel, acc, h)
            table.advance(h)
            points[i] = pos

            hit = self._hit_body(pos, r_ship, table)
            if grid is not None:
                p_pos += p_vel * h
                if i % self.rebuild_every == 0:
                    grid.build(p_pos, p_slack)
                if hit is None:
                    hit = self._hit_particle(pos, r_ship, grid, p_pos, p_rad, particles)
            if hit is not None:
                return TrajectoryResult(points[: i + 1].copy(), i, h, hit)

        return TrajectoryResult(points, -1, h, None)

    @staticmethod
    def _hit_body(pos: np.ndarray, r_ship: float, table: OrbitTable) -> str | None:
        for j in range(len(table)):
            dx = pos[0] - table.positions[j, 0]
            dy = pos[1] - table.positions[j, 1]
            if math.sqrt(dx * dx + dy * dy) < r_ship + table.radii[j]:
                return table.names[j]
        return None

    @staticmethod
    def _hit_particle(
        pos: np.ndarray,
        r_ship: float,
        grid: SpatialHash,
        p_pos: np.ndarray,
        p_rad: np.ndarray,
        particles: list[Particle],
    ) -> str | None:
        for k in grid.query(pos, r_ship):
            dx = pos[0] - p_pos[k, 0]
            dy = pos[1] - p_pos[k, 1]
            if math.sqrt(dx * dx + dy * dy) < r_ship + p_rad[k]:
                return "comet" if particles[k].is_comet else "asteroid"
        return None
