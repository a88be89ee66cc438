"""
Microbenchmark: time per tick vs number of bodies.
Run:
  python benchmarks/bench_steps.py
"""
import time
import numpy as np
from orbit_physics import SimulationRegistry, BodyConfig
from orbit_physics.observers import NullObserver
from orbit_physics.profiler import Profiler


def run(n: int, ticks: int = 300):
    prof = Profiler()
    registry = SimulationRegistry(profiler=prof)
    registry.subscribe(NullObserver())

    rng = np.random.default_rng(12345)  # determinism (no randomness elsewhere)
    for _ in range(n):
        height = float(rng.uniform(150_000.0, 900_000.0))
        speed = float(rng.uniform(7_200.0, 8_000.0))
        direction = float(rng.uniform(80.0, 100.0))
        registry.add_body(BodyConfig.from_launch(height, speed, direction))

    # warmup
    for _ in range(30):
        registry.tick(1 / 60, 10.0)

    t0 = time.perf_counter()
    for _ in range(ticks):
        registry.tick(1 / 60, 10.0)
    t1 = time.perf_counter()

    per_tick = (t1 - t0) / ticks
    return per_tick, prof.stats.summary()


if __name__ == "__main__":
    for n in [1, 10, 50, 100, 500]:
        per_tick, summary = run(n)
        print(f"N={n:4d}  tick={1e3*per_tick:8.3f} ms  ticks/s={1/per_tick:8.1f}")
        for k in ["integrate", "trails", "observers"]:
            if k in summary:
                print(" ", k, summary[k])
        print()
