# examples/minimal_orbit.py
from orbit_physics import SimulationRegistry, BodyConfig

registry = SimulationRegistry()
registry.add_body(BodyConfig.from_launch(height=400_000.0, speed=7800.0))

# One simulated minute at 60 frames per second, 10x speed
for _ in range(360):
    report = registry.tick(1 / 60, time_scale=10.0)

t = report.bodies[0]
print("t:", registry.time)
print("status:", t.status.value)
print(f"altitude: {t.altitude_km:.1f} km  speed: {t.speed:.0f} m/s")
print("trail samples:", len(registry.trail(0)))
