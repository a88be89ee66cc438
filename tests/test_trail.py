import numpy as np
import pytest
from orbit_physics.trail import TrailSampler


def test_first_sample_always_recorded():
    trails = TrailSampler()
    assert trails.record(1, np.array([7e6, 0.0, 0.0]))
    assert len(trails.trail(1)) == 1


def test_samples_closer_than_spacing_are_skipped():
    trails = TrailSampler(min_spacing=1000.0)
    trails.record(1, np.array([0.0, 0.0, 0.0]))
    assert not trails.record(1, np.array([999.0, 0.0, 0.0]))
    assert not trails.record(1, np.array([1000.0, 0.0, 0.0]))
    assert trails.record(1, np.array([1000.5, 0.0, 0.0]))
    assert len(trails.trail(1)) == 2


def test_spacing_measured_from_last_recorded_sample():
    trails = TrailSampler(min_spacing=1000.0)
    for x in np.arange(0.0, 10_000.0, 300.0):
        trails.record(7, np.array([x, 0.0, 0.0]))
    points = trails.trail(7)
    gaps = [np.linalg.norm(b - a) for a, b in zip(points, points[1:])]
    assert all(g > 1000.0 for g in gaps)


def test_fifo_eviction_at_capacity():
    trails = TrailSampler(max_length=5, min_spacing=1000.0)
    for i in range(12):
        trails.record(3, np.array([i * 2000.0, 0.0, 0.0]))
    points = trails.trail(3)
    assert len(points) == 5
    # Oldest samples were dropped; order is chronological
    assert [p[0] for p in points] == [14_000.0, 16_000.0, 18_000.0, 20_000.0, 22_000.0]


def test_recorded_samples_do_not_alias_input():
    trails = TrailSampler()
    pos = np.array([1.0, 2.0, 3.0])
    trails.record(1, pos)
    pos[0] = 99.0
    assert trails.trail(1)[0][0] == 1.0

    out = trails.trail(1)
    out[0][1] = -5.0
    assert trails.trail(1)[0][1] == 2.0


def test_clear_discard_and_clear_all():
    trails = TrailSampler()
    trails.record(1, np.zeros(3))
    trails.record(2, np.zeros(3))

    trails.clear(1)
    assert trails.trail(1) == []
    assert 1 in trails

    trails.discard(1)
    assert 1 not in trails
    assert len(trails) == 1

    trails.clear_all()
    assert len(trails) == 0
    assert trails.trail(2) == []


def test_as_array_shape():
    trails = TrailSampler()
    assert trails.as_array(1).shape == (0, 3)
    trails.record(1, np.zeros(3))
    trails.record(1, np.array([5000.0, 0.0, 0.0]))
    assert trails.as_array(1).shape == (2, 3)


def test_invalid_capacity():
    with pytest.raises(ValueError):
        TrailSampler(max_length=0)
