# examples/headless_run.py
import logging

from orbits_sim import ControlInput, EpisodeController
from orbits_sim.renderer import DebugRenderer

logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

controller = EpisodeController(seed=2024)
renderer = DebugRenderer(verbose=False)

# Burn prograde for a while, then coast at 4x and watch the warning.
for i in range(600):
    inputs = ControlInput(
        thrust=i < 40,
        rotate_left=i < 15,
        time_scale=1 if i < 100 else 4,
    )
    snap = controller.tick(inputs)
    if i % 100 == 0 or snap.game_over:
        renderer.render(snap)
    if snap.game_over:
        break

print("score:", snap.score, "high:", snap.high_score)
print("fuel:", round(snap.fuel, 2), "warning:", snap.collision_warning)
