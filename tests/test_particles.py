import math

import numpy as np
import pytest

from orbits_sim.config import SimConfig
from orbits_sim.core.forces import GravityField
from orbits_sim.particles import ParticleField
from orbits_sim.registry import BodyRegistry, default_solar_system
from orbits_sim.rng import DeterministicRNG
from orbits_sim.types import BodyKind, CelestialBody, Particle


def test_belt_and_comet_generation():
    """
    Belt: r in [1300, 1800), tangential speed sqrt(G M / r).
    Comets: r in [2100, 3100), 0.6 x circular speed.
    """
    cfg = SimConfig()
    reg = default_solar_system()
    star = reg.primary_star()
    field = ParticleField()
    field.spawn(DeterministicRNG(42), star, cfg)

    assert len(field) == cfg.asteroid_count + cfg.comet_count
    belt = [p for p in field if not p.is_comet]
    comets = [p for p in field if p.is_comet]
    assert len(belt) == 80 and len(comets) == 10

    gm = cfg.G * star.mass
    for p in belt:
        r = float(np.linalg.norm(p.position - star.position))
        assert 1300.0 <= r < 1800.0 + 1e-9
        assert 5.0 <= p.radius < 8.0
        assert abs(np.dot(p.position - star.position, p.velocity)) < 1e-6 * r
        assert np.linalg.norm(p.velocity) == pytest.approx(math.sqrt(gm / r), rel=1e-9)
    for p in comets:
        r = float(np.linalg.norm(p.position - star.position))
        assert 2100.0 <= r < 3100.0 + 1e-9
        assert np.linalg.norm(p.velocity) == pytest.approx(0.6 * math.sqrt(gm / r), rel=1e-9)


def test_same_seed_same_field():
    cfg = SimConfig()
    star = default_solar_system().primary_star()
    a, b = ParticleField(), ParticleField()
    a.spawn(DeterministicRNG(9), star, cfg)
    b.spawn(DeterministicRNG(9), star, cfg)
    assert np.array_equal(a.positions(), b.positions())

    c = ParticleField()
    c.spawn(DeterministicRNG(10), star, cfg)
    assert not np.array_equal(a.positions(), c.positions())


def test_removed_on_massive_body_overlap():
    reg = BodyRegistry()
    reg.add(CelestialBody("sun", BodyKind.STAR, mass=1000.0, radius=50.0))
    field = ParticleField()
    field.particles = [
        Particle(position=(40.0, 0.0), velocity=(0.0, 0.0), radius=5.0),      # inside the star
        Particle(position=(400.0, 0.0), velocity=(0.0, 1.0), radius=5.0),     # free
        Particle(position=(0.0, 55.05), velocity=(0.0, -1.0), radius=5.0),    # enters this tick
    ]
    removed = field.update(GravityField(reg, 0.4), reg, dt=0.1)
    assert removed == 2
    assert len(field) == 1
    assert field.particles[0].position[0] < 400.0


def test_particles_follow_gravity():
    reg = BodyRegistry()
    reg.add(CelestialBody("sun", BodyKind.STAR, mass=1000.0, radius=10.0))
    field = ParticleField()
    field.particles = [Particle(position=(200.0, 0.0), velocity=(0.0, 0.0), radius=5.0)]
    field.update(GravityField(reg, 0.4), reg, dt=0.1)
    a = 0.4 * 1000.0 / 200.0**2
    p = field.particles[0]
    assert p.velocity[0] == pytest.approx(-a * 0.1)
    assert p.position[0] == pytest.approx(200.0 - a * 0.1 * 0.1)


def test_positions_empty_and_clear():
    field = ParticleField()
    assert field.positions().shape == (0, 2)
    field.particles.append(Particle((1.0, 2.0), (0.0, 0.0), 5.0))
    assert field.positions().tolist() == [[1.0, 2.0]]
    field.clear()
    assert len(field) == 0
