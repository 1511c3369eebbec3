from orbits_sim.episode import EpisodeController
from orbits_sim.profiler import Profiler, ProfileStats, timed


def test_sections_recorded_per_tick():
    prof = Profiler()
    ctl = EpisodeController(seed=4, profiler=prof)
    for _ in range(5):
        ctl.tick()

    summary = prof.stats.summary()
    for name in ("ship", "particles", "orbits", "interactions", "collisions", "trajectory"):
        assert summary[name]["n"] == 5
        assert summary[name]["max_ms"] >= summary[name]["mean_ms"] >= 0.0

    report = prof.report()
    print(report)
    lines = report.splitlines()
    assert len(lines) == len(summary)
    assert all("n=5" in line for line in lines)


def test_report_orders_by_total():
    prof = Profiler()
    prof.stats.add("fast", 0.001)
    prof.stats.add("slow", 0.004)
    prof.stats.add("slow", 0.004)
    lines = prof.report().splitlines()
    assert lines[0].startswith("slow")
    assert lines[1].startswith("fast")


def test_timed_without_profiler_is_noop():
    stats = ProfileStats()
    with timed(None, "ship"):
        pass
    assert stats.summary() == {}
