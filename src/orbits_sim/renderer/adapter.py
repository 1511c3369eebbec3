# MIT License (see LICENSE)
"""
Renderer adapters for FrameSnapshot consumers.

The game core has no rendering dependency. A render layer receives one
FrameSnapshot per tick; these adapters show the expected call pattern and
give headless runs something to draw into.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
import sys
from typing import TYPE_CHECKING, TextIO

if TYPE_CHECKING:
    from ..episode import FrameSnapshot


class RendererAdapter(ABC):
    """
    Base class for snapshot renderers.

    Usage:
        renderer = MyRenderer()
        renderer.render(controller.tick(inputs))
    """

    @abstractmethod
    def begin_frame(self, snapshot: "FrameSnapshot") -> None:
        ...

    @abstractmethod
    def draw_world(self, snapshot: "FrameSnapshot") -> None:
        """Bodies, particles, collectible, ship and trajectory."""
        ...

    @abstractmethod
    def draw_hud(self, snapshot: "FrameSnapshot") -> None:
        """Fuel, score, timers and the game-over message."""
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def render(self, snapshot: "FrameSnapshot") -> None:
        self.begin_frame(snapshot)
        self.draw_world(snapshot)
        self.draw_hud(snapshot)
        self.end_frame()


class DebugRenderer(RendererAdapter):
    """
    Text renderer for development.

    Output:
        === Frame 12 t=1.20 x1 ===
        ship @ (740.00, -299.10) v=(-0.02, 0.09) angle=0.00 fuel=25.0/30.0
        bodies=10 particles=90 collectible=fuel @ (-112.40, 873.10)
        trajectory=450 pts warning=no
        score=0 high=3 games=2
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, snapshot: "FrameSnapshot") -> None:
        state = " PAUSED" if snapshot.paused else ""
        self.output.write(
            f"=== Frame {snapshot.tick} t={snapshot.sim_time:.2f} x{snapshot.time_scale}{state} ===\n"
        )

    def draw_world(self, snapshot: "FrameSnapshot") -> None:
        p, v = snapshot.ship_position, snapshot.ship_velocity
        flags = "".join([
            " DISABLED" if snapshot.disabled else "",
            " SHIELD" if snapshot.shielded else "",
            " THRUST" if snapshot.thrusting else "",
        ])
        self.output.write(
            f"ship @ ({p[0]:.2f}, {p[1]:.2f}) v=({v[0]:.2f}, {v[1]:.2f}) "
            f"angle={snapshot.facing_angle:.2f} fuel={snapshot.fuel:.1f}/{snapshot.max_fuel:.1f}{flags}\n"
        )
        c = snapshot.collectible_position
        kind = snapshot.collectible_kind.value
        if snapshot.collectible_upgrade is not None:
            kind += f":{snapshot.collectible_upgrade.value}"
        self.output.write(
            f"bodies={len(snapshot.body_names)} particles={len(snapshot.particle_positions)} "
            f"collectible={kind} @ ({c[0]:.2f}, {c[1]:.2f})\n"
        )
        if self.verbose:
            for name, pos in zip(snapshot.body_names, snapshot.body_positions):
                self.output.write(f"  {name} @ ({pos[0]:.2f}, {pos[1]:.2f})\n")
        warn = "yes" if snapshot.collision_warning else "no"
        self.output.write(f"trajectory={len(snapshot.trajectory)} pts warning={warn}\n")

    def draw_hud(self, snapshot: "FrameSnapshot") -> None:
        self.output.write(
            f"score={snapshot.score} high={snapshot.high_score} games={snapshot.total_games}\n"
        )
        if snapshot.game_over:
            self.output.write(f"GAME OVER: {snapshot.game_over_message}\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullRenderer(RendererAdapter):
    """No-op renderer for benchmarks."""

    def begin_frame(self, snapshot: "FrameSnapshot") -> None:
        pass

    def draw_world(self, snapshot: "FrameSnapshot") -> None:
        pass

    def draw_hud(self, snapshot: "FrameSnapshot") -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedRenderer(RendererAdapter):
    """
    Records a plain-dict summary of every frame.

    Example:
        renderer = BufferedRenderer()
        for _ in range(100):
            renderer.render(controller.tick())
        print(renderer.frames[-1]["ship"])
    """

    def __init__(self):
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, snapshot: "FrameSnapshot") -> None:
        self._current_frame = {"tick": snapshot.tick, "time": snapshot.sim_time}

    def draw_world(self, snapshot: "FrameSnapshot") -> None:
        if self._current_frame is None:
            return
        self._current_frame.update({
            "ship": snapshot.ship_position.tolist(),
            "velocity": snapshot.ship_velocity.tolist(),
            "bodies": dict(zip(snapshot.body_names, snapshot.body_positions.tolist())),
            "particles": len(snapshot.particle_positions),
            "collectible": snapshot.collectible_position.tolist(),
            "collision_warning": snapshot.collision_warning,
        })

    def draw_hud(self, snapshot: "FrameSnapshot") -> None:
        if self._current_frame is None:
            return
        self._current_frame.update({
            "fuel": snapshot.fuel,
            "score": snapshot.score,
            "game_over": snapshot.game_over,
            "message": snapshot.game_over_message,
        })

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None

    def clear(self) -> None:
        self.frames.clear()
