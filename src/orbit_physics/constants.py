# MIT License (see LICENSE)
"""
Physical constants and model thresholds used throughout the simulation.

All values are SI (meters, kilograms, seconds). Positions are measured
from Earth's center.
"""
from __future__ import annotations

# Newtonian constant of gravitation, N·m²/kg²
# Reference: https://physics.nist.gov/cgi-bin/cuu/Value?bg
G: float = 6.6743e-11

EARTH_MASS: float = 5.972e24
EARTH_RADIUS: float = 6_371_000.0

# A body closer than EARTH_RADIUS + CRASH_MARGIN to the center is crashed.
CRASH_MARGIN: float = 50_000.0

# Drag is only evaluated below this altitude.
DRAG_CEILING: float = 500_000.0

# Below this speed the velocity direction is undefined for drag purposes.
MIN_DRAG_SPEED: float = 1.0

# Sea-level density and scale height of the single-exponential atmosphere.
SURFACE_DENSITY: float = 1.225
SCALE_HEIGHT: float = 8_500.0

# Body defaults
DEFAULT_HEIGHT: float = 400_000.0
DEFAULT_MASS: float = 1000.0
DEFAULT_DRAG_COEFFICIENT: float = 2.2
DEFAULT_AREA: float = 4.0

# Trail sampling
MAX_TRAIL_LENGTH: int = 1000
TRAIL_MIN_SPACING: float = 1000.0

# Banded density cache resolution and the altitude above which density is 0.
DENSITY_BUCKET: float = 100.0
ATMOSPHERE_TOP: float = 1_000_000.0
