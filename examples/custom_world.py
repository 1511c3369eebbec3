# examples/custom_world.py
from dataclasses import replace

from orbits_sim import ControlInput, EpisodeController, SimConfig
from orbits_sim.io import world_from_json, stats_to_json

# A binary-ish system: a heavy star and one planet with a moon.
world = world_from_json({
    "bodies": [
        {"name": "star", "kind": "star", "mass": 150000.0, "radius": 80.0},
        {"name": "giant", "kind": "planet", "mass": 40000.0, "radius": 45.0,
         "orbit_center": "star", "orbit_radius": 900.0, "angular_speed": 0.0015},
        {"name": "giant-moon", "kind": "moon", "mass": 2000.0, "radius": 12.0,
         "orbit_center": "giant", "orbit_radius": 120.0, "angular_speed": -0.01},
    ]
})

config = replace(SimConfig(), enable_rescue=False, enable_wormhole=False, asteroid_count=40, comet_count=4)
controller = EpisodeController(config, registry=world, seed=7)

snap = controller.tick()
for _ in range(300):
    snap = controller.tick(ControlInput(thrust=snap.collision_warning))
    if snap.game_over:
        print("game over:", snap.game_over_message)
        break

print("t:", round(snap.sim_time, 2), "ship:", snap.ship_position, "fuel:", round(snap.fuel, 2))
print("stats:", stats_to_json(controller.state.stats))
