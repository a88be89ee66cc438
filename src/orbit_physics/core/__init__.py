# MIT License (see LICENSE)
"""
Core orbital physics.

This subpackage provides:
    - Accelerations: central gravity and aerodynamic drag.
    - Integration: semi-implicit Euler and the ForceIntegrator driver.
    - Invariants: escape/circular velocity, specific energy, classification.

Typical usage:
    from orbit_physics.core import ForceIntegrator

    integrator = ForceIntegrator()
    status = integrator.step(body, dt=0.016)
"""
from .forces import drag_acceleration, drag_force_magnitude, gravity_acceleration
from .integrators import ForceIntegrator, semi_implicit_euler_step
from .invariants import (
    altitude,
    circular_velocity,
    classify,
    escape_velocity,
    is_crashed,
    specific_energy,
)

__all__ = [
    # Accelerations
    "gravity_acceleration",
    "drag_acceleration",
    "drag_force_magnitude",
    # Integration
    "ForceIntegrator",
    "semi_implicit_euler_step",
    # Invariants
    "altitude",
    "circular_velocity",
    "classify",
    "escape_velocity",
    "is_crashed",
    "specific_energy",
]
