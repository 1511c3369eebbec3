# MIT License (see LICENSE)
"""
Per-phase tick timing.

Measures how long each phase of an episode tick takes (ship, particles,
orbits, interactions, collisions, trajectory) so the projection cost can be
compared against the rest of the update.

Example:
    profiler = Profiler()
    controller = EpisodeController(profiler=profiler)
    for _ in range(600):
        controller.tick()
    print(profiler.report())
"""
from __future__ import annotations
from contextlib import nullcontext
import time
from dataclasses import dataclass, field


@dataclass
class ProfileStats:
    """
    Timing samples (seconds) per named section.
    """
    samples: dict[str, list[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        self.samples.setdefault(name, []).append(dt)

    def clear(self) -> None:
        self.samples.clear()

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Summary per section: 'n' (count), 'mean_ms', 'max_ms' and 'total_ms'.
        """
        out = {}
        for name, times in self.samples.items():
            n = len(times)
            total = sum(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * total / n,
                "max_ms": 1e3 * max(times),
                "total_ms": 1e3 * total,
            }
        return out


class _Section:
    def __init__(self, stats: ProfileStats, name: str) -> None:
        self.stats = stats
        self.name = name
        self.t0 = 0.0

    def __enter__(self) -> "_Section":
        self.t0 = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.stats.add(self.name, time.perf_counter() - self.t0)


class Profiler:
    """Context-manager based section timer."""

    def __init__(self) -> None:
        self.stats = ProfileStats()

    def section(self, name: str) -> _Section:
        return _Section(self.stats, name)

    def report(self) -> str:
        """One line per section, slowest total first."""
        rows = sorted(self.stats.summary().items(), key=lambda kv: -kv[1]["total_ms"])
        return "\n".join(
            f"{name:<14} n={s['n']:<6d} mean={s['mean_ms']:.3f}ms max={s['max_ms']:.3f}ms"
            for name, s in rows
        )


def timed(profiler: Profiler | None, name: str):
    """`profiler.section(name)` when profiling, else a no-op context."""
    if profiler is None:
        return nullcontext()
    return profiler.section(name)
