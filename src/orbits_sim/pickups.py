# MIT License (see LICENSE)
"""
Collectibles and upgrades.

Exactly one collectible exists at a time. It is placed by rejection sampling
inside `collectible_spawn_radius` of the origin, away from every massive body
(by `collectible_margin`), and its type is drawn afterwards:

    rnd < p_upgrade            -> upgrade (kind uniform over UpgradeKind)
    rnd < p_upgrade + p_fuel   -> fuel
    otherwise                  -> score

Upgrade effects compound: thruster and maneuver multiply, fuel tank adds
capacity, shield (re)starts the shield timer.
"""
from __future__ import annotations
import logging
import math

from .config import SimConfig
from .registry import BodyRegistry
from .rng import DeterministicRNG
from .types import Collectible, CollectibleKind, Ship, UpgradeKind
from .util import TWO_PI, circles_overlap

logger = logging.getLogger(__name__)

UPGRADE_OPTIONS: tuple[UpgradeKind, ...] = (
    UpgradeKind.THRUSTER,
    UpgradeKind.FUEL_TANK,
    UpgradeKind.MANEUVER,
    UpgradeKind.SHIELD,
)


def spawn_collectible(
    collectible: Collectible,
    registry: BodyRegistry,
    rng: DeterministicRNG,
    config: SimConfig,
) -> Collectible:
    """
    Move the collectible to a fresh valid spot and draw its type (in place).

    Raises:
        RuntimeError: If no free spot is found within collectible_max_attempts.
    """
    clearance = config.collectible_radius + config.collectible_margin
    for _ in range(config.collectible_max_attempts):
        angle = rng.next() * TWO_PI
        r = rng.next() * config.collectible_spawn_radius
        x, y = r * math.cos(angle), r * math.sin(angle)
        if not any(circles_overlap((x, y), clearance, b.position, b.radius) for b in registry.bodies):
            break
    else:
        raise RuntimeError(
            f"No free collectible position after {config.collectible_max_attempts} attempts"
        )

    collectible.position[0] = x
    collectible.position[1] = y
    collectible.radius = config.collectible_radius

    rnd = rng.next()
    if rnd < config.p_upgrade:
        collectible.kind = CollectibleKind.UPGRADE
        collectible.upgrade = rng.choice(UPGRADE_OPTIONS)
    elif rnd < config.p_upgrade + config.p_fuel:
        collectible.kind = CollectibleKind.FUEL
        collectible.upgrade = None
    else:
        collectible.kind = CollectibleKind.SCORE
        collectible.upgrade = None
    return collectible


def apply_upgrade(ship: Ship, kind: UpgradeKind, config: SimConfig) -> None:
    """Record the upgrade and apply its effect."""
    ship.upgrades.append(kind)
    if kind is UpgradeKind.THRUSTER:
        ship.thrust_multiplier *= config.thruster_factor
    elif kind is UpgradeKind.FUEL_TANK:
        ship.max_fuel += config.fuel_tank_bonus
        ship.add_fuel(config.fuel_tank_bonus)
    elif kind is UpgradeKind.MANEUVER:
        ship.rotation_multiplier *= config.maneuver_factor
    elif kind is UpgradeKind.SHIELD:
        ship.shield_timer = config.shield_duration
    logger.debug("upgrade %s applied (upgrades=%d)", kind.value, len(ship.upgrades))


def try_collect(ship: Ship, collectible: Collectible, config: SimConfig) -> CollectibleKind | None:
    """
    Apply the collectible's effect if the ship touches it.

    Returns:
        The kind collected, or None when there is no contact. The caller
        handles scoring and respawning.
    """
    if not circles_overlap(ship.position, ship.radius, collectible.position, collectible.radius):
        return None
    kind = collectible.kind
    if kind is CollectibleKind.FUEL:
        ship.add_fuel(config.fuel_pickup)
    elif kind is CollectibleKind.UPGRADE:
        apply_upgrade(ship, collectible.upgrade, config)
    logger.debug("collected %s at (%.1f, %.1f)", kind.value, collectible.position[0], collectible.position[1])
    return kind
