# MIT License (see LICENSE)
"""
Orbital quantities and trajectory classification.

The integrator is first order and dissipative (drag), so none of these are
conserved exactly. They are used to classify trajectories and to populate
telemetry.
"""
from __future__ import annotations
import math

import numpy as np

from ..config import PhysicsConfig
from ..types import BodyState, BodyStatus
from ..util import norm, norm2


def altitude(position: np.ndarray, earth_radius: float) -> float:
    """Height above the surface in meters (negative below ground)."""
    return norm(position) - earth_radius


def escape_velocity(distance: float, mu: float) -> float:
    """
    Local escape speed v_esc = sqrt(2·GM/r).

    Returns inf at r <= 0.
    """
    if distance <= 0.0:
        return math.inf
    return math.sqrt(2.0 * mu / distance)


def circular_velocity(distance: float, mu: float) -> float:
    """Speed of a circular orbit at radius r, sqrt(GM/r)."""
    if distance <= 0.0:
        return math.inf
    return math.sqrt(mu / distance)


def specific_energy(position: np.ndarray, velocity: np.ndarray, mu: float) -> float:
    """
    Specific orbital energy eps = v²/2 - GM/r in J/kg.

    eps < 0 is a bound orbit, eps >= 0 is an escape trajectory.
    """
    r = norm(position)
    if r <= 0.0:
        return -math.inf
    return 0.5 * norm2(velocity) - mu / r


def is_crashed(position: np.ndarray, cfg: PhysicsConfig) -> bool:
    """True when position is inside the crash radius R + crash_margin."""
    return norm(position) <= cfg.crash_radius


def classify(body: BodyState, cfg: PhysicsConfig) -> BodyStatus:
    """
    Classify a body's trajectory from its current state.

    CRASHED is terminal: a crashed body stays crashed. Otherwise a body
    inside the crash radius is CRASHED, one faster than local escape
    velocity is ESCAPING, and everything else is ORBITING.
    """
    if body.status is BodyStatus.CRASHED or is_crashed(body.position, cfg):
        return BodyStatus.CRASHED
    if norm(body.velocity) > escape_velocity(norm(body.position), cfg.mu):
        return BodyStatus.ESCAPING
    return BodyStatus.ORBITING
