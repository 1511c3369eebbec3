import io
from dataclasses import replace

from orbits_sim.config import SimConfig
from orbits_sim.episode import EpisodeController
from orbits_sim.renderer import BufferedRenderer, DebugRenderer, NullRenderer


def _controller():
    cfg = replace(SimConfig(), enable_asteroids=False, show_trajectory=False)
    return EpisodeController(cfg, seed=4)


def test_debug_renderer_writes_frame():
    ctl = _controller()
    out = io.StringIO()
    DebugRenderer(output=out).render(ctl.tick())
    text = out.getvalue()
    print(text)
    assert "=== Frame 1" in text
    assert "ship @" in text
    assert "planetA @" in text
    assert "score=0" in text


def test_debug_renderer_game_over_line():
    ctl = _controller()
    ctl.state.ship.position[:] = ctl.registry.primary_star().position
    out = io.StringIO()
    DebugRenderer(output=out, verbose=False).render(ctl.tick())
    assert "GAME OVER: collided-with-sun" in out.getvalue()
    assert "planetA @" not in out.getvalue()


def test_buffered_renderer_records_frames():
    ctl = _controller()
    renderer = BufferedRenderer()
    for _ in range(5):
        renderer.render(ctl.tick())
    assert [f["tick"] for f in renderer.frames] == [1, 2, 3, 4, 5]
    last = renderer.frames[-1]
    assert set(last["bodies"]) >= {"sun", "planetA", "moon"}
    assert len(last["ship"]) == 2
    assert last["game_over"] is False
    renderer.clear()
    assert renderer.frames == []


def test_null_renderer():
    NullRenderer().render(_controller().tick())
