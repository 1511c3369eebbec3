# MIT License (see LICENSE)
"""
Core type definitions for the game core.

Defines the entities the systems operate on:
- BodyKind: tagged kind of a massive body, carrying its collision rule as data
- CelestialBody: fixed or kinematically orbiting mass (star, planets, moons, black hole)
- Ship: the controllable body with fuel, timers and upgrade multipliers
- Particle: free asteroid/comet moving under gravity
- Collectible, Wormhole, RescueShip, Station, FlareParticle: gameplay entities

Positions and velocities are float64 numpy arrays of shape (2,), converted
in __post_init__ so tuples and lists are accepted everywhere.
"""
from __future__ import annotations
from collections import deque
from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from .util import f64


# =============================================================================
# Enumerations
# =============================================================================

class BodyKind(Enum):
    """
    Kind of a massive body.

    Each member carries `always_destructive`: touching such a body ends the
    episode regardless of relative speed (only the star has it).
    """
    STAR = ("star", True)
    PLANET = ("planet", False)
    MOON = ("moon", False)
    BLACK_HOLE = ("black_hole", False)

    def __init__(self, label: str, always_destructive: bool) -> None:
        self.label = label
        self.always_destructive = always_destructive

    @classmethod
    def from_label(cls, label: str) -> "BodyKind":
        for kind in cls:
            if kind.label == label:
                return kind
        raise ValueError(f"Unknown body kind: '{label}'")


class CollectibleKind(Enum):
    SCORE = "score"
    FUEL = "fuel"
    UPGRADE = "upgrade"


class UpgradeKind(Enum):
    THRUSTER = "thruster"
    FUEL_TANK = "fuelTank"
    MANEUVER = "maneuver"
    SHIELD = "shield"


class GameOverReason(Enum):
    """Short enumerated reason surfaced to the HUD when an episode ends."""
    SUN = "collided-with-sun"
    BODY = "collided-with-body"
    ASTEROID = "collided-with-asteroid"


# =============================================================================
# Massive bodies
# =============================================================================

@dataclass
class CelestialBody:
    """
    A massive body contributing to the gravity field.

    Orbiting bodies are kinematic: their position is always

        center.position + orbit_radius * (cos(angle), sin(angle))

    and is never integrated from forces. Fixed bodies keep `position` as given.

    Attributes:
        name: Unique identifier within a registry.
        kind: BodyKind tag (decides the collision rule).
        mass: Gravitational mass (> 0).
        radius: Collision extent (>= 0). Gravity is clamped to zero inside it.
        position: Current position [x, y].
        orbit_center_id: Registry id of the body this one circles, or None if fixed.
        orbit_radius: Distance to the orbit center (>= 0).
        angular_speed: Signed angular speed in radians per time unit.
        initial_angle: Angle restored on episode reset.
        influence_radius: If set, gravity beyond this distance is ignored.
        angle: Current orbit angle (starts at initial_angle).
        id: Assigned by BodyRegistry.add().
    """
    name: str
    kind: BodyKind
    mass: float
    radius: float
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    orbit_center_id: int | None = None
    orbit_radius: float = 0.0
    angular_speed: float = 0.0
    initial_angle: float = 0.0
    influence_radius: float | None = None
    angle: float = field(init=False, default=0.0)
    id: int = -1

    def __post_init__(self) -> None:
        if not isinstance(self.kind, BodyKind):
            raise TypeError(f"kind must be a BodyKind, got {type(self.kind).__name__}")
        if self.mass <= 0:
            raise ValueError(f"{self.name}: mass must be positive, got {self.mass}")
        if self.radius < 0:
            raise ValueError(f"{self.name}: radius must be >= 0, got {self.radius}")
        if self.orbit_radius < 0:
            raise ValueError(f"{self.name}: orbit_radius must be >= 0, got {self.orbit_radius}")
        if self.influence_radius is not None and self.influence_radius <= 0:
            raise ValueError(f"{self.name}: influence_radius must be positive, got {self.influence_radius}")
        if self.orbit_center_id is not None and self.angular_speed == 0.0:
            raise ValueError(f"{self.name}: orbiting body needs a non-zero angular_speed")
        self.position = f64(self.position)
        self.angle = float(self.initial_angle)

    @property
    def is_orbiting(self) -> bool:
        return self.orbit_center_id is not None


# =============================================================================
# Ship
# =============================================================================

@dataclass
class Ship:
    """
    The controllable body.

    Timers count down in simulation time and clamp at zero. Multipliers start
    at 1 and compound with upgrades. `trail` holds (x, y, t) samples for
    rendering only; physics never reads it.
    """
    position: np.ndarray | tuple[float, float]
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    facing_angle: float = 0.0
    fuel: float = 25.0
    max_fuel: float = 30.0
    radius: float = 8.0
    grace_timer: float = 0.0
    disabled_timer: float = 0.0
    shield_timer: float = 0.0
    thrust_multiplier: float = 1.0
    rotation_multiplier: float = 1.0
    upgrades: list[UpgradeKind] = field(default_factory=list)
    trail: deque = field(default_factory=deque)

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        if self.max_fuel < 0 or self.radius < 0:
            raise ValueError("Ship max_fuel and radius must be >= 0")
        self.fuel = min(max(float(self.fuel), 0.0), self.max_fuel)

    @property
    def disabled(self) -> bool:
        return self.disabled_timer > 0.0

    @property
    def shielded(self) -> bool:
        return self.shield_timer > 0.0

    def add_fuel(self, amount: float) -> None:
        """Add (or remove) fuel, keeping it inside [0, max_fuel]."""
        self.fuel = min(max(self.fuel + amount, 0.0), self.max_fuel)


# =============================================================================
# Free bodies and gameplay entities
# =============================================================================

@dataclass
class Particle:
    """An asteroid or comet. `is_comet` is flavor only."""
    position: np.ndarray | tuple[float, float]
    velocity: np.ndarray | tuple[float, float]
    radius: float
    is_comet: bool = False

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)


@dataclass
class Collectible:
    """The single pickup present at any time."""
    position: np.ndarray | tuple[float, float] = (0.0, 0.0)
    radius: float = 7.0
    kind: CollectibleKind = CollectibleKind.SCORE
    upgrade: UpgradeKind | None = None

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        if self.kind is CollectibleKind.UPGRADE and self.upgrade is None:
            raise ValueError("Upgrade collectible needs an upgrade kind")


@dataclass
class Portal:
    position: np.ndarray | tuple[float, float]
    radius: float

    def __post_init__(self) -> None:
        self.position = f64(self.position)


@dataclass
class Wormhole:
    """Two linked portals; entering either one exits the other."""
    entry: Portal
    exit: Portal


@dataclass
class RescueShip:
    """Drifting ship: first picked up (rescued), then delivered to the station."""
    position: np.ndarray | tuple[float, float]
    velocity: np.ndarray | tuple[float, float] = (0.0, 0.0)
    radius: float = 10.0
    rescued: bool = False
    delivered: bool = False

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)


@dataclass
class Station:
    position: np.ndarray | tuple[float, float]
    radius: float = 40.0

    def __post_init__(self) -> None:
        self.position = f64(self.position)


@dataclass
class FlareParticle:
    """Short-lived solar flare particle. Touching one disables the ship."""
    position: np.ndarray | tuple[float, float]
    velocity: np.ndarray | tuple[float, float]
    radius: float
    lifetime: float

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
