# MIT License (see LICENSE)
"""
Environmental features: the two-way wormhole and solar flares.

Wormhole: touching either portal moves the ship just outside the other one,
offset along its velocity heading (facing angle when at rest), and refunds
a little fuel. Velocity is kept.

Solar flares: every `flare_interval` the star fires a burst of short-lived
particles in a random narrow cone. They move ballistically (no gravity),
expire after `flare_lifetime`, and disable the ship's controls for
`disable_time` on contact. Flare timing lives on the SolarFlares object and
is decremented each tick; nothing is scheduled out of band.
"""
from __future__ import annotations
import logging
import math

from .config import SimConfig
from .rng import DeterministicRNG
from .types import FlareParticle, Portal, Ship, Wormhole
from .util import TWO_PI, circles_overlap

logger = logging.getLogger(__name__)


def build_wormhole(config: SimConfig) -> Wormhole:
    return Wormhole(
        entry=Portal(config.wormhole_entry, config.wormhole_radius),
        exit=Portal(config.wormhole_exit, config.wormhole_radius),
    )


def wormhole_jump(ship: Ship, wormhole: Wormhole, config: SimConfig) -> bool:
    """
    Teleport the ship if it touches a portal.

    Returns:
        True if a jump happened.
    """
    if circles_overlap(ship.position, ship.radius, wormhole.entry.position, wormhole.entry.radius):
        target = wormhole.exit
    elif circles_overlap(ship.position, ship.radius, wormhole.exit.position, wormhole.exit.radius):
        target = wormhole.entry
    else:
        return False

    vx, vy = float(ship.velocity[0]), float(ship.velocity[1])
    heading = math.atan2(vy, vx) if (vx != 0.0 or vy != 0.0) else ship.facing_angle
    offset = target.radius + ship.radius + config.wormhole_clearance
    ship.position[0] = target.position[0] + offset * math.cos(heading)
    ship.position[1] = target.position[1] + offset * math.sin(heading)
    ship.add_fuel(config.wormhole_fuel_rebate)
    logger.debug("wormhole jump to (%.1f, %.1f)", ship.position[0], ship.position[1])
    return True


class SolarFlares:
    """
    Flare emitter attached to the star.

    Attributes:
        timer: Time until the next burst.
        particles: Live flare particles.
    """

    def __init__(self, config: SimConfig) -> None:
        self.config = config
        self.timer = config.flare_interval
        self.particles: list[FlareParticle] = []

    def reset(self) -> None:
        self.timer = self.config.flare_interval
        self.particles.clear()

    def burst(self, origin, rng: DeterministicRNG) -> None:
        """Emit one cone of flare particles from `origin`."""
        cfg = self.config
        base = rng.next() * TWO_PI
        spread = math.radians(rng.uniform(cfg.flare_min_spread_deg, cfg.flare_max_spread_deg))
        half = spread / 2.0
        for _ in range(cfg.flare_count):
            angle = base + (rng.next() * spread - half)
            speed = rng.uniform(cfg.flare_min_speed, cfg.flare_max_speed)
            self.particles.append(FlareParticle(
                position=(origin[0], origin[1]),
                velocity=(speed * math.cos(angle), speed * math.sin(angle)),
                radius=cfg.flare_radius,
                lifetime=cfg.flare_lifetime,
            ))
        logger.debug("solar flare burst at heading %.2f rad", base)

    def update(self, ship: Ship, origin, rng: DeterministicRNG, dt: float) -> bool:
        """
        Advance the emitter and its particles by dt.

        Returns:
            True if a flare hit the ship this tick (the ship is then disabled).
        """
        self.timer -= dt
        if self.timer <= 0.0:
            self.burst(origin, rng)
            self.timer = self.config.flare_interval

        for i in range(len(self.particles) - 1, -1, -1):
            p = self.particles[i]
            p.position += p.velocity * dt
            p.lifetime -= dt
            if p.lifetime <= 0.0:
                del self.particles[i]

        for p in self.particles:
            if circles_overlap(ship.position, ship.radius, p.position, p.radius):
                ship.disabled_timer = self.config.disable_time
                return True
        return False
