# examples/reentry.py
import logging

from orbit_physics import SimulationRegistry, BodyConfig, BodyStatus
from orbit_physics.observers import BufferedObserver

logging.basicConfig(level=logging.INFO, format="%(name)s: %(message)s")

registry = SimulationRegistry()
recorder = BufferedObserver()
registry.subscribe(recorder)

# Sub-orbital launch: 300 km, 5 km/s at 45 degrees
registry.add_body(BodyConfig.from_launch(height=300_000.0, speed=5000.0, direction_deg=45.0))

while registry.bodies[0].status is not BodyStatus.CRASHED and registry.time < 10_000:
    registry.tick(0.016, time_scale=100.0)

peak = max(f["bodies"][0]["altitude"] for f in recorder.frames)
max_drag = max(f["bodies"][0]["drag_force"] for f in recorder.frames)
print(f"crashed at t={registry.time:.0f} s, apogee {peak / 1000:.0f} km, peak drag {max_drag:.1f} N")
