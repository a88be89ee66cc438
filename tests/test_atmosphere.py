import math
import threading

import numpy as np
from orbit_physics.atmosphere import (
    AtmosphericDensityModel,
    band_density,
    bucket_of,
    exponential_density,
)

BANDS = [
    (0, 11_000),
    (11_000, 20_000),
    (20_000, 32_000),
    (32_000, 47_000),
    (47_000, 51_000),
    (51_000, 71_000),
    (71_000, 100_000),
    (100_000, 200_000),
    (200_000, 500_000),
    (500_000, 1_000_000),
]


def test_negative_altitude_clamps_to_sea_level():
    model = AtmosphericDensityModel()
    rho0 = model.density(0.0)
    assert math.isclose(rho0, 1.225)
    for h in (-1.0, -49.0, -5_000.0, -1e7):
        assert model.density(h) == rho0


def test_zero_at_and_above_one_thousand_km():
    model = AtmosphericDensityModel()
    for h in (1_000_000.0, 1_000_001.0, 5e6, 1e9):
        assert model.density(h) == 0.0
    assert band_density(1_000_000.0) == 0.0


def test_band_formulas_at_band_starts():
    """Each band's closed form evaluated at its lower bound."""
    assert math.isclose(band_density(11_000), 0.3639)
    assert math.isclose(band_density(20_000), 0.088)
    assert math.isclose(band_density(32_000), 0.0132)
    assert math.isclose(band_density(47_000), 0.00143)
    assert math.isclose(band_density(51_000), 0.000086)
    assert math.isclose(band_density(71_000), 0.0000032)
    assert math.isclose(band_density(100_000), 1e-9)
    assert math.isclose(band_density(200_000), 1e-11)
    assert math.isclose(band_density(500_000), 1e-13)


def test_troposphere_formula():
    h = 5_000.0
    expected = 1.225 * (1 - 0.0065 * h / 288.15) ** 4.256
    assert band_density(h) == expected


def test_monotonic_within_each_band():
    model = AtmosphericDensityModel()
    for lo, hi in BANDS:
        heights = np.linspace(lo, hi - 100, 60)
        values = [model.density(h) for h in heights]
        raw = [band_density(h) for h in heights]
        assert all(b <= a for a, b in zip(values, values[1:])), (lo, hi)
        assert all(b <= a for a, b in zip(raw, raw[1:])), (lo, hi)
        assert all(v >= 0.0 for v in values)


def test_same_bucket_is_bit_identical():
    model = AtmosphericDensityModel()
    a = model.density(400_020.0)
    b = model.density(399_960.0)
    c = AtmosphericDensityModel().density(399_999.0)
    assert a == b == c
    assert a == band_density(400_000.0)


def test_bucket_rounds_half_up():
    assert bucket_of(149.9) == 100.0
    assert bucket_of(150.0) == 200.0
    assert bucket_of(250.0) == 300.0
    assert bucket_of(-49.0) == 0.0


def test_cache_is_bounded():
    model = AtmosphericDensityModel()
    for h in np.arange(-10_000.0, 1_200_000.0, 37.0):
        model.density(h)
    assert model.cache_size <= model.max_entries
    assert model.max_entries == 10_001

    model.clear_cache()
    assert model.cache_size == 0


def test_cache_shared_between_threads():
    model = AtmosphericDensityModel()
    results: list[list[float]] = []

    def worker():
        results.append([model.density(h) for h in range(0, 200_000, 250)])

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert all(r == results[0] for r in results)


def test_exponential_model():
    assert exponential_density(0.0) == 1.225
    assert math.isclose(exponential_density(8_500.0), 1.225 / math.e)
    assert exponential_density(-100.0) == 1.225
    assert exponential_density(500_000.0) == 0.0
    assert exponential_density(499_999.0) > 0.0
    assert exponential_density(10_000.0, surface_density=2.0, scale_height=5_000.0) == 2.0 * math.exp(-2.0)


def test_non_finite_altitudes():
    model = AtmosphericDensityModel()
    assert model.density(math.inf) == 0.0
    assert model.density(-math.inf) == model.density(0.0)
    assert model.density(math.nan) == 0.0
    assert model.density(999_960.0) == 0.0
    assert model.cache_size == 1

    assert band_density(math.inf) == 0.0
    assert band_density(-math.inf) == 1.225
    assert band_density(math.nan) == 0.0
    assert exponential_density(math.inf) == 0.0
    assert exponential_density(math.nan) == 0.0
