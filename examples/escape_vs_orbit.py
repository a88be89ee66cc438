# examples/escape_vs_orbit.py
from orbit_physics import SimulationRegistry, BodyConfig
from orbit_physics.observers import DebugObserver

registry = SimulationRegistry()
for speed in (7_700.0, 9_500.0, 12_000.0):
    registry.add_body(BodyConfig.from_launch(height=400_000.0, speed=speed))

registry.subscribe(DebugObserver(verbose=False))
for _ in range(3):
    registry.tick(0.016, time_scale=60.0)
