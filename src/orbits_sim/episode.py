# MIT License (see LICENSE)
"""
Episode orchestration.

EpisodeController owns one SimulationState and advances it one tick at a
time from a ControlInput, returning a FrameSnapshot for the render layer.

State machine:
    Running --destructive collision--> GameOver --reset--> Running (new seed)
    Running <--pause toggle--> Paused

Per tick (while running):
    1. dt_eff = dt * time_scale, sim_time += dt_eff
    2. ship (controls, gravity, integrate, timers, trail)
    3. particles (gravity, integrate, removal on body overlap)
    4. orbits (topological order)
    5. interactions (collectible, wormhole, flares, rescue)
    6. collisions (soft bounce or game over)
    7. trajectory projection (when displayed)

Reset re-seeds the episode RNG, restores orbits to their initial angles,
and regenerates ship, particles, collectible and rescue ship, always in
that order so a seed reproduces the same world. High score and counters
live in PersistedStats and survive resets.
"""
from __future__ import annotations
from dataclasses import dataclass, field
import logging

import numpy as np

from .collision.resolver import CollisionOutcome, CollisionResolver
from .config import SimConfig, check_time_scale
from .constants import SEED_STREAM_SALT
from .core.forces import GravityField
from .core.orbits import advance_orbits
from .hazards import SolarFlares, build_wormhole, wormhole_jump
from .particles import ParticleField
from .pickups import spawn_collectible, try_collect
from .profiler import Profiler, timed
from .registry import BodyRegistry, default_solar_system
from .rescue import build_station, spawn_rescue, update_rescue
from .rng import DeterministicRNG, mix32
from .ship import ShipDynamics, make_ship
from .trajectory import TrajectoryProjector, TrajectoryResult
from .types import (
    Collectible,
    CollectibleKind,
    GameOverReason,
    RescueShip,
    Ship,
    Station,
    UpgradeKind,
    Wormhole,
)

logger = logging.getLogger(__name__)


@dataclass
class ControlInput:
    """
    Intents sampled once per tick from the input layer.

    Attributes:
        thrust, rotate_left, rotate_right: Held controls.
        toggle_pause: Flip Running/Paused.
        reset: Start a new episode before anything else this tick.
        time_scale: Fast-forward level, one of 1, 2, 4, 8, 16.
        toggle_trajectory: Flip the trajectory display.
    """
    thrust: bool = False
    rotate_left: bool = False
    rotate_right: bool = False
    toggle_pause: bool = False
    reset: bool = False
    time_scale: int = 1
    toggle_trajectory: bool = False


@dataclass
class PersistedStats:
    """Scalars kept by the external storage layer across episodes."""
    high_score: int = 0
    total_score: int = 0
    total_games: int = 0


@dataclass
class SimulationState:
    """
    Everything one episode mutates. Systems receive the pieces they need
    explicitly; there is no module-level game state.
    """
    registry: BodyRegistry
    ship: Ship
    particles: ParticleField
    collectible: Collectible
    rng: DeterministicRNG
    seed: int
    stats: PersistedStats
    wormhole: Wormhole | None = None
    flares: SolarFlares | None = None
    rescue: RescueShip | None = None
    station: Station | None = None
    score: int = 0
    sim_time: float = 0.0
    tick: int = 0
    game_over: bool = False
    game_over_reason: GameOverReason | None = None
    paused: bool = False
    show_trajectory: bool = True
    thrusting: bool = False
    trajectory: TrajectoryResult | None = None


@dataclass
class FrameSnapshot:
    """
    Read-only copy of what the render/HUD layer needs for one frame.

    Arrays are copies; mutating them never touches the simulation.
    """
    tick: int
    sim_time: float
    time_scale: int
    ship_position: np.ndarray
    ship_velocity: np.ndarray
    facing_angle: float
    fuel: float
    max_fuel: float
    thrusting: bool
    disabled: bool
    shielded: bool
    grace_timer: float
    upgrades: tuple[UpgradeKind, ...]
    trail: np.ndarray
    body_names: tuple[str, ...]
    body_positions: np.ndarray
    body_radii: np.ndarray
    particle_positions: np.ndarray
    particle_radii: np.ndarray
    collectible_position: np.ndarray
    collectible_kind: CollectibleKind
    collectible_upgrade: UpgradeKind | None
    trajectory: np.ndarray
    collision_warning: bool
    score: int
    high_score: int
    total_score: int
    total_games: int
    game_over: bool
    game_over_message: str | None
    paused: bool
    flare_positions: np.ndarray = field(default_factory=lambda: np.zeros((0, 2)))
    rescue_position: np.ndarray | None = None
    rescue_rescued: bool = False
    rescue_delivered: bool = False


class EpisodeController:
    """
    Runs episodes of the game core.

    Example:
        controller = EpisodeController(seed=42)
        snap = controller.tick(ControlInput(thrust=True))
        while not snap.game_over:
            snap = controller.tick()
        controller.reset()

    Args:
        config: Tunables (defaults to SimConfig()).
        registry: Massive bodies (defaults to default_solar_system()).
        seed: Seed of the first episode; later episodes draw theirs from a
              seed stream derived from (but not replaying) it.
        stats: Persisted scalars to continue from.
        profiler: Optional Profiler timing each tick phase.
    """

    def __init__(
        self,
        config: SimConfig | None = None,
        registry: BodyRegistry | None = None,
        seed: int = 0,
        stats: PersistedStats | None = None,
        profiler: Profiler | None = None,
    ) -> None:
        self.config = config if config is not None else SimConfig()
        self.registry = registry if registry is not None else default_solar_system()
        self.registry.primary_star()
        self.field = GravityField(self.registry, self.config.G)
        self.dynamics = ShipDynamics(self.config, self.field)
        self.resolver = CollisionResolver(self.config)
        self.projector = TrajectoryProjector(
            self.config.G, self.config.trajectory_duration, self.config.trajectory_step
        )
        self.profiler = profiler
        self.seeds = DeterministicRNG(int(seed) ^ SEED_STREAM_SALT)
        self.flares = SolarFlares(self.config) if self.config.enable_flares else None
        self.time_scale = 1
        self.state = self._new_state(seed, stats if stats is not None else PersistedStats(),
                                     self.config.show_trajectory)

    # ------------------------------------------------------------------
    # Episode lifecycle
    # ------------------------------------------------------------------

    def _new_state(self, seed: int, stats: PersistedStats, show_trajectory: bool) -> SimulationState:
        cfg = self.config
        seed = int(seed) % 2**32
        rng = DeterministicRNG(seed)
        self.registry.restore()
        star = self.registry.primary_star()

        ship = make_ship(cfg, star.position)
        particles = ParticleField()
        if cfg.enable_asteroids:
            particles.spawn(rng, star, cfg)
        collectible = spawn_collectible(Collectible(radius=cfg.collectible_radius), self.registry, rng, cfg)

        state = SimulationState(
            registry=self.registry,
            ship=ship,
            particles=particles,
            collectible=collectible,
            rng=rng,
            seed=seed,
            stats=stats,
            show_trajectory=show_trajectory,
        )
        if cfg.enable_rescue:
            state.rescue = spawn_rescue(star.position, rng, cfg)
            state.station = build_station(cfg)
        if cfg.enable_wormhole:
            state.wormhole = build_wormhole(cfg)
        if self.flares is not None:
            self.flares.reset()
            state.flares = self.flares
        if show_trajectory:
            state.trajectory = self.projector.project(ship, self.registry, particles.particles)
        return state

    def reset(self, seed: int | None = None) -> SimulationState:
        """
        Start a new episode.

        Args:
            seed: Episode seed; drawn from the session seed stream when None.
        """
        if seed is None:
            seed = mix32(self.seeds.next_u32())
        prev = self.state
        prev.stats.total_games += 1
        self.state = self._new_state(seed, prev.stats, prev.show_trajectory)
        logger.info("episode reset: seed=%d games=%d high_score=%d",
                    self.state.seed, prev.stats.total_games, prev.stats.high_score)
        return self.state

    def toggle_pause(self) -> bool:
        """Flip Running/Paused (ignored after game over). Returns the new paused flag."""
        st = self.state
        if not st.game_over:
            st.paused = not st.paused
        return st.paused

    def _end_episode(self, outcome: CollisionOutcome) -> None:
        st = self.state
        st.game_over = True
        st.game_over_reason = outcome.reason
        st.trajectory = None
        if st.score > st.stats.high_score:
            st.stats.high_score = st.score
        logger.info("game over: %s (%s, relative speed %.2f), score=%d high_score=%d",
                    outcome.reason.value, outcome.other, outcome.relative_speed,
                    st.score, st.stats.high_score)

    # ------------------------------------------------------------------
    # Tick
    # ------------------------------------------------------------------

    def tick(self, inputs: ControlInput | None = None) -> FrameSnapshot:
        """
        Advance one tick and return the frame to draw.

        Paused or finished episodes return the last state unchanged (aside
        from the toggles sampled this tick).
        """
        inp = inputs if inputs is not None else ControlInput()
        self.time_scale = check_time_scale(inp.time_scale)

        if inp.reset:
            self.reset()
            return self.snapshot()

        st = self.state
        if inp.toggle_trajectory:
            st.show_trajectory = not st.show_trajectory
            if not st.show_trajectory:
                st.trajectory = None
        if inp.toggle_pause:
            self.toggle_pause()
        if st.paused or st.game_over:
            return self.snapshot()

        cfg = self.config
        prof = self.profiler
        dt_eff = cfg.dt * self.time_scale
        st.sim_time += dt_eff
        st.tick += 1

        with timed(prof, "ship"):
            st.thrusting = self.dynamics.step(
                st.ship, cfg.dt, st.sim_time,
                thrust=inp.thrust, rotate_left=inp.rotate_left, rotate_right=inp.rotate_right,
                time_scale=self.time_scale,
            )
        with timed(prof, "particles"):
            st.particles.update(self.field, self.registry, dt_eff)
        with timed(prof, "orbits"):
            advance_orbits(self.registry, dt_eff)
        with timed(prof, "interactions"):
            self._interactions(dt_eff)
        with timed(prof, "collisions"):
            outcome = self.resolver.resolve(st.ship, self.registry, st.particles.particles)
        if outcome.destructive:
            self._end_episode(outcome)
        elif st.show_trajectory:
            with timed(prof, "trajectory"):
                st.trajectory = self.projector.project(st.ship, self.registry, st.particles.particles)

        return self.snapshot()

    def _interactions(self, dt_eff: float) -> None:
        st = self.state
        cfg = self.config
        ship = st.ship

        if try_collect(ship, st.collectible, cfg) is not None:
            self._add_score(1)
            spawn_collectible(st.collectible, self.registry, st.rng, cfg)

        if st.wormhole is not None:
            wormhole_jump(ship, st.wormhole, cfg)

        if st.flares is not None:
            st.flares.update(ship, self.registry.primary_star().position, st.rng, dt_eff)

        if st.rescue is not None:
            gained = update_rescue(st.rescue, st.station, ship, cfg, dt_eff)
            if gained:
                self._add_score(gained)

    def _add_score(self, points: int) -> None:
        self.state.score += points
        self.state.stats.total_score += points

    # ------------------------------------------------------------------
    # Output
    # ------------------------------------------------------------------

    def snapshot(self) -> FrameSnapshot:
        st = self.state
        ship = st.ship
        bodies = self.registry.bodies
        parts = st.particles.particles
        traj = st.trajectory
        if st.show_trajectory and traj is not None:
            traj_points = traj.points.copy()
            warning = traj.collision_warning
        else:
            traj_points = np.zeros((0, 2), dtype=np.float64)
            warning = False

        snap = FrameSnapshot(
            tick=st.tick,
            sim_time=st.sim_time,
            time_scale=self.time_scale,
            ship_position=ship.position.copy(),
            ship_velocity=ship.velocity.copy(),
            facing_angle=ship.facing_angle,
            fuel=ship.fuel,
            max_fuel=ship.max_fuel,
            thrusting=st.thrusting,
            disabled=ship.disabled,
            shielded=ship.shielded,
            grace_timer=ship.grace_timer,
            upgrades=tuple(ship.upgrades),
            trail=np.array([(x, y) for x, y, _ in ship.trail], dtype=np.float64).reshape(-1, 2),
            body_names=tuple(b.name for b in bodies),
            body_positions=np.array([b.position for b in bodies], dtype=np.float64).reshape(-1, 2),
            body_radii=np.array([b.radius for b in bodies], dtype=np.float64),
            particle_positions=st.particles.positions(),
            particle_radii=np.array([p.radius for p in parts], dtype=np.float64),
            collectible_position=st.collectible.position.copy(),
            collectible_kind=st.collectible.kind,
            collectible_upgrade=st.collectible.upgrade,
            trajectory=traj_points,
            collision_warning=warning,
            score=st.score,
            high_score=st.stats.high_score,
            total_score=st.stats.total_score,
            total_games=st.stats.total_games,
            game_over=st.game_over,
            game_over_message=st.game_over_reason.value if st.game_over_reason else None,
            paused=st.paused,
        )
        if st.flares is not None and st.flares.particles:
            snap.flare_positions = np.array([p.position for p in st.flares.particles], dtype=np.float64)
        if st.rescue is not None:
            snap.rescue_position = st.rescue.position.copy()
            snap.rescue_rescued = st.rescue.rescued
            snap.rescue_delivered = st.rescue.delivered
        return snap
