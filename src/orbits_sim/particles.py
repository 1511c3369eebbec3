# MIT License (see LICENSE)
"""
Asteroid belt and comets.

ParticleField holds the free bodies of an episode. They are spawned once
per episode from the injected DeterministicRNG, move under the gravity field
with the same semi-implicit Euler law as the ship, and are removed when they
hit a massive body. Ship contacts never remove them.

Generation (per particle, in draw order):
    belt:   r ~ U[belt_inner, belt_outer), θ ~ U[0, 2π), radius ~ U[5, 8)
            velocity = circular speed sqrt(G M / r), tangential
    comets: r ~ belt_outer + U[300, 1300), θ ~ U[0, 2π), radius ~ U[5, 8)
            velocity = 0.6 × circular speed (eccentric orbit)
"""
from __future__ import annotations
import logging
import math
from typing import Iterator

import numpy as np

from .config import SimConfig
from .core.forces import GravityField
from .core.integrators import symplectic_euler_step
from .registry import BodyRegistry
from .rng import DeterministicRNG
from .types import CelestialBody, Particle
from .util import TWO_PI, circles_overlap

logger = logging.getLogger(__name__)


class ParticleField:
    """
    Unordered collection of asteroids and comets.

    Example:
        field = ParticleField()
        field.spawn(rng, registry.primary_star(), config)
        field.update(gravity, registry, dt=0.1)
    """

    def __init__(self) -> None:
        self.particles: list[Particle] = []

    def __len__(self) -> int:
        return len(self.particles)

    def __iter__(self) -> Iterator[Particle]:
        return iter(self.particles)

    def clear(self) -> None:
        self.particles.clear()

    def spawn(self, rng: DeterministicRNG, star: CelestialBody, config: SimConfig) -> None:
        """Replace the field with a freshly generated belt plus comets."""
        self.particles.clear()
        gm = config.G * star.mass
        for _ in range(config.asteroid_count):
            r = rng.uniform(config.belt_inner, config.belt_outer)
            self.particles.append(self._orbiting(rng, star, r, math.sqrt(gm / r), is_comet=False, config=config))
        for _ in range(config.comet_count):
            r = config.belt_outer + rng.uniform(config.comet_min_extra, config.comet_max_extra)
            speed = math.sqrt(gm / r) * config.comet_speed_factor
            self.particles.append(self._orbiting(rng, star, r, speed, is_comet=True, config=config))

    @staticmethod
    def _orbiting(
        rng: DeterministicRNG,
        star: CelestialBody,
        r: float,
        speed: float,
        is_comet: bool,
        config: SimConfig,
    ) -> Particle:
        angle = rng.next() * TWO_PI
        c, s = math.cos(angle), math.sin(angle)
        return Particle(
            position=(star.position[0] + r * c, star.position[1] + r * s),
            velocity=(-s * speed, c * speed),
            radius=rng.uniform(config.particle_min_radius, config.particle_max_radius),
            is_comet=is_comet,
        )

    def update(self, field: GravityField, registry: BodyRegistry, dt: float) -> int:
        """
        Integrate every particle and drop those now overlapping a massive body.

        Returns:
            Number of particles removed this tick.
        """
        removed = 0
        bodies = registry.bodies
        for i in range(len(self.particles) - 1, -1, -1):
            p = self.particles[i]
            symplectic_euler_step(p.position, p.velocity, field.acceleration(p.position), dt)
            for b in bodies:
                if circles_overlap(p.position, p.radius, b.position, b.radius):
                    logger.debug("particle absorbed by %s at (%.1f, %.1f)", b.name, p.position[0], p.position[1])
                    del self.particles[i]
                    removed += 1
                    break
        return removed

    def positions(self) -> np.ndarray:
        """[N, 2] array of current positions (a copy)."""
        if not self.particles:
            return np.zeros((0, 2), dtype=np.float64)
        return np.array([p.position for p in self.particles], dtype=np.float64)
