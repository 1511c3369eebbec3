import numpy as np
import pytest

from orbits_sim.collision import CollisionResolver, SpatialHash, aabb_for_circle
from orbits_sim.config import SimConfig
from orbits_sim.registry import BodyRegistry
from orbits_sim.types import BodyKind, CelestialBody, GameOverReason, Particle, Ship


def _planet_at_origin():
    reg = BodyRegistry()
    reg.add(CelestialBody("sun", BodyKind.STAR, mass=1.0, radius=10.0, position=(5000.0, 0.0)))
    reg.add(CelestialBody("planet", BodyKind.PLANET, mass=100.0, radius=30.0, position=(0.0, 0.0)))
    return reg


def test_soft_bounce_below_threshold():
    """
    Ship r 8 at x = 35 overlaps the r 30 planet; relative speed 0.5 < 2.
    Ship goes to (30 + 8 + margin) along +x and gains bounce_speed outward.
    """
    cfg = SimConfig()
    ship = Ship(position=(35.0, 0.0), velocity=(-0.5, 0.0))
    out = CollisionResolver(cfg).resolve(ship, _planet_at_origin())
    assert not out.destructive
    assert out.soft_contacts == 1
    assert np.allclose(ship.position, [38.0 + cfg.bounce_margin, 0.0])
    assert np.linalg.norm(ship.position) > 38.0
    assert np.allclose(ship.velocity, [-0.5 + cfg.bounce_speed, 0.0])


def test_destructive_at_and_above_threshold():
    cfg = SimConfig()
    for vx in (-cfg.soft_collision_threshold, -3.0):
        ship = Ship(position=(35.0, 0.0), velocity=(vx, 0.0))
        out = CollisionResolver(cfg).resolve(ship, _planet_at_origin())
        assert out.destructive
        assert out.reason is GameOverReason.BODY
        assert out.other == "planet"
        assert out.relative_speed == pytest.approx(abs(vx))


def test_sun_always_destructive():
    """Touching the star ends the episode even at zero relative speed."""
    reg = BodyRegistry()
    reg.add(CelestialBody("sun", BodyKind.STAR, mass=280000.0, radius=110.0))
    ship = Ship(position=(115.0, 0.0))
    out = CollisionResolver(SimConfig()).resolve(ship, reg)
    assert out.destructive
    assert out.reason is GameOverReason.SUN
    assert out.relative_speed == 0.0


def test_shield_ignores_everything():
    reg = BodyRegistry()
    reg.add(CelestialBody("sun", BodyKind.STAR, mass=280000.0, radius=110.0))
    ship = Ship(position=(100.0, 0.0), velocity=(-9.0, 0.0), shield_timer=5.0)
    rock = Particle(position=(100.0, 0.0), velocity=(9.0, 0.0), radius=6.0)
    out = CollisionResolver(SimConfig()).resolve(ship, reg, [rock])
    assert not out.destructive and out.soft_contacts == 0
    assert np.allclose(ship.position, [100.0, 0.0])


def test_orbiting_body_uses_its_own_velocity():
    """
    Planet orbiting at r 100 with ω 0.03 moves at (0, 3). A ship riding along
    at the same velocity only bounces, even though its own speed is 3.
    """
    reg = BodyRegistry()
    sun = reg.add(CelestialBody("sun", BodyKind.STAR, mass=1.0, radius=10.0))
    reg.add(CelestialBody("planet", BodyKind.PLANET, mass=1.0, radius=30.0,
                          orbit_center_id=sun, orbit_radius=100.0, angular_speed=0.03))
    reg.restore()
    ship = Ship(position=(100.0, 35.0), velocity=(0.0, 3.0))
    out = CollisionResolver(SimConfig()).resolve(ship, reg)
    assert not out.destructive
    assert np.allclose(ship.position, [100.0, 38.5])
    assert np.allclose(ship.velocity, [0.0, 4.0])


def test_asteroid_and_comet_contacts():
    cfg = SimConfig()
    reg = _planet_at_origin()

    ship = Ship(position=(500.0, 0.0), velocity=(3.0, 0.0))
    out = CollisionResolver(cfg).resolve(ship, reg, [Particle((510.0, 0.0), (0.0, 0.0), 6.0)])
    assert out.destructive and out.reason is GameOverReason.ASTEROID and out.other == "asteroid"

    ship = Ship(position=(500.0, 0.0), velocity=(0.0, 0.0))
    out = CollisionResolver(cfg).resolve(ship, reg, [Particle((505.0, 0.0), (-2.5, 0.0), 6.0, is_comet=True)])
    assert out.destructive and out.other == "comet"

    # Slow graze: bounced away from the particle, particle kept.
    ship = Ship(position=(500.0, 0.0), velocity=(0.4, 0.0))
    rock = Particle((510.0, 0.0), (0.0, 0.0), 6.0)
    out = CollisionResolver(cfg).resolve(ship, reg, [rock])
    assert not out.destructive and out.soft_contacts == 1
    assert ship.position[0] == pytest.approx(510.0 - 14.0 - cfg.bounce_margin)
    assert ship.velocity[0] == pytest.approx(0.4 - cfg.bounce_speed)


def test_no_overlap_no_effect():
    ship = Ship(position=(300.0, 300.0), velocity=(7.0, 1.0))
    out = CollisionResolver(SimConfig()).resolve(ship, _planet_at_origin())
    assert not out.destructive and out.soft_contacts == 0
    assert np.allclose(ship.velocity, [7.0, 1.0])


def test_coincident_centers_bounce_along_facing():
    ship = Ship(position=(0.0, 0.0), velocity=(0.0, 0.0), facing_angle=0.0)
    CollisionResolver(SimConfig()).resolve(ship, _planet_at_origin())
    assert ship.position[0] == pytest.approx(38.5)
    assert ship.position[1] == pytest.approx(0.0)


def test_spatial_hash_candidates():
    positions = np.array([[0.0, 0.0], [100.0, 0.0], [130.0, 5.0], [-400.0, -400.0]])
    radii = [5.0, 6.0, 8.0, 5.0]
    grid = SpatialHash(cell_size=32.0)
    grid.build(positions, radii)

    found = grid.query((110.0, 0.0), 8.0)
    assert 1 in found and 3 not in found and 0 not in found
    assert found == sorted(found)
    assert grid.query((1000.0, 1000.0), 1.0) == []
    assert aabb_for_circle((1.0, 2.0), 3.0) == (-2.0, -1.0, 4.0, 5.0)
    with pytest.raises(ValueError):
        SpatialHash(cell_size=0.0)
