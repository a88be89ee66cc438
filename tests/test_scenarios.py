import math

import numpy as np
from orbit_physics.constants import EARTH_MASS, EARTH_RADIUS, G
from orbit_physics.core.invariants import escape_velocity
from orbit_physics.registry import SimulationRegistry
from orbit_physics.types import BodyConfig, BodyStatus

MU = G * EARTH_MASS


def test_single_frame_low_orbit():
    """
    400 km, 7.8 km/s tangential: one 16 ms frame moves the body ~125 m
    along +y and pulls it very slightly toward Earth (dx ~ -g·dt²).
    """
    reg = SimulationRegistry()
    p0 = np.array([EARTH_RADIUS + 400_000.0, 0.0, 0.0])
    reg.add_body(position=p0, velocity=(0.0, 7800.0, 0.0), mass=1000.0)

    report = reg.tick(0.016, 1.0)
    b = reg.body(0)
    disp = b.position - p0

    r = p0[0]
    g = MU / r**2
    print("displacement", disp, "expected dx", -g * 0.016**2)

    assert report.status_of(b.id) is BodyStatus.ORBITING
    assert math.isclose(disp[1], 7800.0 * 0.016, rel_tol=1e-6)
    assert disp[0] < 0.0
    assert math.isclose(disp[0], -g * 0.016**2, rel_tol=1e-3)
    assert disp[2] == 0.0

    # Drag is active at 400 km but negligible
    t = report.bodies[0]
    assert t.drag_active
    assert 0.0 < t.drag_force < 1e-9


def test_suborbital_launch_crashes():
    """300 km, 5 km/s at 45°: the trajectory intersects the atmosphere and crashes."""
    reg = SimulationRegistry()
    reg.add_body(BodyConfig.from_launch(height=300_000.0, speed=5000.0, direction_deg=45.0))

    crashed_at = None
    for i in range(20_000):
        report = reg.tick(0.016, 100.0)
        if report.status_of(1) is BodyStatus.CRASHED:
            crashed_at = i
            break

    print("crashed after", crashed_at, "ticks, t =", reg.time)
    assert crashed_at is not None
    b = reg.body(0)
    assert b.distance <= EARTH_RADIUS + 50_000.0

    frozen = (b.position.copy(), b.velocity.copy())
    for _ in range(50):
        reg.tick(0.016, 100.0)
    assert np.array_equal(b.position, frozen[0])
    assert np.array_equal(b.velocity, frozen[1])
    assert b.status is BodyStatus.CRASHED


def test_fast_launch_escapes_from_first_tick():
    """400 km, 12 km/s horizontal exceeds the ~10.85 km/s local escape speed."""
    reg = SimulationRegistry()
    reg.add_body(BodyConfig.from_launch(height=400_000.0, speed=12_000.0, direction_deg=90.0))

    b = reg.body(0)
    assert b.speed > escape_velocity(b.distance, MU)
    assert b.status is BodyStatus.ESCAPING

    for _ in range(200):
        report = reg.tick(0.016, 10.0)
        assert report.status_of(1) is BodyStatus.ESCAPING
    assert reg.body(0).distance > EARTH_RADIUS + 400_000.0


def test_circular_orbit_stays_bounded():
    """A default body (circular speed, above the drag ceiling) stays near its radius for one orbit."""
    reg = SimulationRegistry()
    reg.add_body(position=(EARTH_RADIUS + 600_000.0, 0.0, 0.0))
    r0 = reg.body(0).distance
    period = 2 * math.pi * math.sqrt(r0**3 / MU)

    steps = 2000
    radii = []
    for _ in range(steps):
        reg.tick(period / steps)
        radii.append(reg.body(0).distance)

    drift = max(abs(r - r0) for r in radii) / r0
    print("max radial drift", drift)
    assert drift < 0.01
    assert reg.body(0).status is BodyStatus.ORBITING


def test_trail_bounded_during_long_run():
    reg = SimulationRegistry()
    reg.add_body()
    for _ in range(3000):
        reg.tick(1.0)
    points = reg.trail(0)
    assert len(points) <= reg.config.max_trail_length
    gaps = [np.linalg.norm(b - a) for a, b in zip(points, points[1:])]
    assert min(gaps) >= 1000.0


def test_bodies_evolve_independently():
    """Adding a second body does not change the first body's trajectory."""
    solo = SimulationRegistry()
    solo.add_body()
    pair = SimulationRegistry()
    pair.add_body()
    pair.add_body(position=(EARTH_RADIUS + 450_000.0, 10.0, 0.0))

    for _ in range(100):
        solo.tick(0.5)
        pair.tick(0.5)
    assert np.array_equal(solo.body(0).position, pair.body(0).position)
