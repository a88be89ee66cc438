# MIT License (see LICENSE)
"""
Time stepping for orbital bodies.

A single scheme is used: semi-implicit (symplectic) Euler.

    v(t+dt) = v(t) + a(x(t), v(t))·dt
    x(t+dt) = x(t) + v(t+dt)·dt

Updating the velocity first and moving with the new velocity keeps orbits
bounded over long runs far better than forward Euler, at the same cost of
one acceleration evaluation per step. Energy is not conserved exactly.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations

import numpy as np

from ..atmosphere import AtmosphericDensityModel, exponential_density
from ..config import DEFAULT_CONFIG, PhysicsConfig
from ..types import BodyState, BodyStatus
from ..util import norm
from .forces import drag_acceleration, gravity_acceleration
from .invariants import classify, is_crashed


def semi_implicit_euler_step(body: BodyState, acceleration: np.ndarray, dt: float) -> None:
    """
    Advance body by dt with a precomputed acceleration (modified in-place).

    Args:
        body: Body to integrate.
        acceleration: Total acceleration at the start of the step in m/s².
        dt: Timestep in seconds.
    """
    body.velocity += acceleration * dt
    body.position += body.velocity * dt


class ForceIntegrator:
    """
    Computes gravity + drag for a body and advances it one step.

    Args:
        config: Physics parameters (G, M, radii, drag model).
        atmosphere: Banded density model, used for drag when
                    config.drag_model == "banded".
    """

    def __init__(
        self,
        config: PhysicsConfig = DEFAULT_CONFIG,
        atmosphere: AtmosphericDensityModel | None = None,
    ) -> None:
        self.config = config
        self.atmosphere = atmosphere or AtmosphericDensityModel()

    def air_density(self, body: BodyState, altitude: float) -> float:
        """Density used for drag at `altitude`, 0 above the drag ceiling."""
        cfg = self.config
        if altitude >= cfg.drag_ceiling:
            return 0.0
        if cfg.drag_model == "banded":
            return self.atmosphere.density(altitude)
        return exponential_density(
            altitude, body.surface_density, body.scale_height, ceiling=cfg.drag_ceiling
        )

    def accelerations(self, body: BodyState) -> tuple[np.ndarray, np.ndarray]:
        """
        Gravity and drag accelerations acting on body at its current state.

        Returns:
            Tuple (gravity, drag), each a 3-vector in m/s².
        """
        cfg = self.config
        a_grav = gravity_acceleration(body.position, cfg.mu)
        altitude = norm(body.position) - cfg.earth_radius
        rho = self.air_density(body, altitude) if body.air_enabled else 0.0
        a_drag = drag_acceleration(body, rho, cfg.min_drag_speed)
        return a_grav, a_drag

    def step(self, body: BodyState, dt: float) -> BodyStatus:
        """
        Advance body by dt seconds and update its status.

        A crashed body, or one already inside the crash radius, is frozen
        and marked CRASHED. dt == 0 leaves the body untouched.

        Args:
            body: Body to integrate (modified in-place).
            dt: Timestep in seconds, already multiplied by the time scale.

        Returns:
            The body's status after the step.

        Raises:
            ValueError: If dt is negative.
        """
        if dt < 0.0:
            raise ValueError(f"dt must be non-negative, got {dt}")
        if dt == 0.0 or body.crashed:
            return body.status

        if is_crashed(body.position, self.config):
            body.status = BodyStatus.CRASHED
            return body.status

        a_grav, a_drag = self.accelerations(body)
        semi_implicit_euler_step(body, a_grav + a_drag, dt)

        body.status = classify(body, self.config)
        return body.status
