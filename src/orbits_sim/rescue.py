# MIT License (see LICENSE)
"""
Rescue objective.

A disabled ship drifts somewhere between `rescue_min_distance` and
`rescue_max_distance` from the star. Touching it picks it up (stage 1):
it is then towed just behind the player, halving thrust. Touching the
station with it in tow delivers it (stage 2) and doubles thrust again.
Each stage transition is worth points.
"""
from __future__ import annotations
import logging

from .config import SimConfig
from .rng import DeterministicRNG
from .types import RescueShip, Ship, Station
from .util import TWO_PI, circles_overlap, from_angle

logger = logging.getLogger(__name__)

TOW_GAP = 5.0


def spawn_rescue(star_position, rng: DeterministicRNG, config: SimConfig) -> RescueShip:
    """Place the drifting ship at a random bearing and distance from the star."""
    angle = rng.next() * TWO_PI
    distance = rng.uniform(config.rescue_min_distance, config.rescue_max_distance)
    offset = from_angle(angle, distance)
    vx = (rng.next() - 0.5) * config.rescue_drift
    vy = (rng.next() - 0.5) * config.rescue_drift
    return RescueShip(
        position=(star_position[0] + offset[0], star_position[1] + offset[1]),
        velocity=(vx, vy),
        radius=config.rescue_radius,
    )


def build_station(config: SimConfig) -> Station:
    return Station(position=config.station_position, radius=config.station_radius)


def update_rescue(rescue: RescueShip, station: Station, ship: Ship, config: SimConfig, dt: float) -> int:
    """
    Advance the objective by one tick.

    Returns:
        Score earned this tick (0 when no stage changed).
    """
    if rescue.delivered:
        return 0

    if not rescue.rescued:
        rescue.position += rescue.velocity * dt
        if circles_overlap(ship.position, ship.radius, rescue.position, rescue.radius):
            rescue.rescued = True
            ship.thrust_multiplier *= config.rescue_tow_factor
            logger.debug("rescue ship picked up")
            return config.rescue_score
        return 0

    rescue.position[0] = ship.position[0]
    rescue.position[1] = ship.position[1] - ship.radius - rescue.radius - TOW_GAP
    if circles_overlap(ship.position, ship.radius, station.position, station.radius):
        rescue.delivered = True
        ship.thrust_multiplier /= config.rescue_tow_factor
        logger.debug("rescue ship delivered")
        return config.delivery_score
    return 0
