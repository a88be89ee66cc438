# MIT License (see LICENSE)
"""
Acceleration generators for orbital motion.

Each function returns an acceleration (m/s²) rather than a force, so the
result can be summed directly. Gravity is independent of the body's own
mass; drag is divided by it.

Key concepts:
- Gravity points from the body toward Earth's center, magnitude GM/r².
- Drag opposes the velocity, magnitude 0.5·rho·v²·Cd·A (force).
- Bodies do not attract each other.
"""
from __future__ import annotations

import numpy as np

from ..types import BodyState
from ..util import norm, unit, zeros3


def gravity_acceleration(position: np.ndarray, mu: float) -> np.ndarray:
    """
    Central gravitational acceleration a = -GM·r̂/|r|².

    Args:
        position: Position relative to Earth's center in meters.
        mu: Gravitational parameter G·M in m³/s².

    Returns:
        Acceleration vector in m/s². Zero vector if position is at the origin.
    """
    r = norm(position)
    if r <= 0.0:
        return zeros3()
    return -unit(position) * (mu / (r * r))


def drag_force_magnitude(density: float, speed: float, drag_coefficient: float, area: float) -> float:
    """Drag equation F = 0.5·rho·v²·Cd·A in newtons."""
    return 0.5 * density * speed * speed * drag_coefficient * area


def drag_acceleration(body: BodyState, density: float, min_speed: float) -> np.ndarray:
    """
    Aerodynamic drag acceleration opposing the body's velocity.

    Args:
        body: Body whose velocity, Cd, area and mass are used.
        density: Air density at the body's altitude in kg/m³.
        min_speed: Below this speed the drag is suppressed entirely.

    Returns:
        Acceleration vector in m/s². Zero when air is disabled, density is
        zero, the body is (nearly) at rest, or its mass is not positive.
    """
    speed = norm(body.velocity)
    if not body.air_enabled or density <= 0.0 or speed <= min_speed or body.mass <= 0.0:
        return zeros3()
    magnitude = drag_force_magnitude(density, speed, body.drag_coefficient, body.cross_sectional_area)
    return -(body.velocity / speed) * (magnitude / body.mass)
