# MIT License (see LICENSE)
"""
Atmospheric density models.

Two models are provided:

- AtmosphericDensityModel: a piecewise approximation of the US Standard
  Atmosphere, one closed-form curve per altitude band, memoized per 100 m
  altitude bucket. Used for display and diagnostics, and optionally for drag
  (PhysicsConfig.drag_model = "banded").
- exponential_density: a single exponential, rho = rho0·exp(-h/H), cut off
  at the drag ceiling. This is what drives drag by default.

Both return kg/m³ and never return a negative value.

Reference:
    U.S. Standard Atmosphere, 1976 (NOAA-S/T 76-1562).
"""
from __future__ import annotations
import math
import threading
from typing import Callable

from . import constants as C

# (exclusive upper bound in m, density formula). Evaluated in order, first match wins.
_BANDS: tuple[tuple[float, Callable[[float], float]], ...] = (
    (11_000.0, lambda h: 1.225 * (1.0 - 0.0065 * h / 288.15) ** 4.256),
    (20_000.0, lambda h: 0.3639 * math.exp(-(h - 11_000.0) / 6341.6)),
    (32_000.0, lambda h: 0.088 * math.exp(-(h - 20_000.0) / 7360.0)),
    (47_000.0, lambda h: 0.0132 * math.exp(-(h - 32_000.0) / 8000.0)),
    (51_000.0, lambda h: 0.00143 * math.exp(-(h - 47_000.0) / 7500.0)),
    (71_000.0, lambda h: 0.000086 * math.exp(-(h - 51_000.0) / 10_000.0)),
    (100_000.0, lambda h: 0.0000032 * math.exp(-(h - 71_000.0) / 15_000.0)),
    (200_000.0, lambda h: 1e-9 * math.exp(-(h - 100_000.0) / 25_000.0)),
    (500_000.0, lambda h: 1e-11 * math.exp(-(h - 200_000.0) / 100_000.0)),
    (C.ATMOSPHERE_TOP, lambda h: 1e-13 * math.exp(-(h - 500_000.0) / 500_000.0)),
)


def band_density(altitude: float) -> float:
    """
    Uncached banded density at `altitude` meters.

    Altitude is clamped to >= 0. Returns 0 at and above 1000 km, and for NaN.
    """
    h = float(altitude)
    if math.isnan(h):
        return 0.0
    h = max(0.0, h)
    for upper, formula in _BANDS:
        if h < upper:
            return formula(h)
    return 0.0


def exponential_density(
    altitude: float,
    surface_density: float = C.SURFACE_DENSITY,
    scale_height: float = C.SCALE_HEIGHT,
    ceiling: float = C.DRAG_CEILING,
) -> float:
    """
    Single-exponential atmosphere: rho0·exp(-h/H) below `ceiling`, else 0.

    Altitude is clamped to >= 0. A non-positive scale height or a NaN
    altitude yields 0.
    """
    h = float(altitude)
    if math.isnan(h):
        return 0.0
    h = max(0.0, h)
    if h >= ceiling or scale_height <= 0.0:
        return 0.0
    return surface_density * math.exp(-h / scale_height)


def bucket_of(altitude: float) -> float:
    """Altitude rounded half-up to the nearest DENSITY_BUCKET meters."""
    return math.floor(altitude / C.DENSITY_BUCKET + 0.5) * C.DENSITY_BUCKET


class AtmosphericDensityModel:
    """
    Memoized banded density model.

    Lookups are keyed by altitude bucket and the density is evaluated at the
    bucket altitude itself, so every altitude in a bucket gets the same,
    bit-identical value regardless of call order. Buckets below ground share
    the sea-level entry and buckets at or above ATMOSPHERE_TOP are never
    stored, which bounds the cache to ATMOSPHERE_TOP / DENSITY_BUCKET + 1
    entries.

    The cache may be shared between threads; insertion holds a lock.

    Example:
        model = AtmosphericDensityModel()
        model.density(400_000)   # ~1.35e-12 kg/m³
    """

    max_entries = int(C.ATMOSPHERE_TOP / C.DENSITY_BUCKET) + 1

    def __init__(self) -> None:
        self._cache: dict[float, float] = {}
        self._lock = threading.Lock()

    def density(self, altitude: float) -> float:
        """
        Density in kg/m³ at `altitude` meters above the surface.

        Negative altitudes (down to -inf) read the sea-level value. Altitudes
        at or above ATMOSPHERE_TOP (up to +inf) and NaN read 0.
        """
        h = float(altitude)
        if math.isnan(h) or h >= C.ATMOSPHERE_TOP:
            return 0.0
        key = bucket_of(h) if h > 0.0 else 0.0
        if key >= C.ATMOSPHERE_TOP:
            return 0.0

        rho = self._cache.get(key)
        if rho is None:
            rho = band_density(key)
            with self._lock:
                rho = self._cache.setdefault(key, rho)
        return rho

    __call__ = density

    @property
    def cache_size(self) -> int:
        return len(self._cache)

    def clear_cache(self) -> None:
        with self._lock:
            self._cache.clear()


__all__ = [
    "AtmosphericDensityModel",
    "band_density",
    "bucket_of",
    "exponential_density",
]
