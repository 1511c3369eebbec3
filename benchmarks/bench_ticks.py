"""
Microbenchmark: time per tick with and without trajectory projection.
Run:
  python benchmarks/bench_ticks.py
"""
import time
from dataclasses import replace

from orbits_sim.config import SimConfig
from orbits_sim.episode import ControlInput, EpisodeController
from orbits_sim.profiler import Profiler


def run(show_trajectory: bool, asteroids: bool, ticks: int = 300):
    prof = Profiler()
    cfg = replace(SimConfig(), show_trajectory=show_trajectory, enable_asteroids=asteroids)
    ctl = EpisodeController(cfg, seed=12345, profiler=prof)

    # warmup
    for _ in range(20):
        ctl.tick()

    t0 = time.perf_counter()
    for i in range(ticks):
        snap = ctl.tick(ControlInput(thrust=(i % 4 == 0), rotate_left=(i % 9 == 0)))
        if snap.game_over:
            ctl.reset()
    t1 = time.perf_counter()

    per_tick = (t1 - t0) / ticks
    return per_tick, prof


if __name__ == "__main__":
    for show in (False, True):
        for asteroids in (False, True):
            per_tick, prof = run(show, asteroids)
            print(f"trajectory={show!s:5}  asteroids={asteroids!s:5}  "
                  f"tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}")
            print(prof.report())
            print()
