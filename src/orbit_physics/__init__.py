# MIT License (see LICENSE)
"""
orbit_physics - Earth-orbit physics core for interactive simulators.

Advances satellites under Newtonian gravity and atmospheric drag with a
semi-implicit Euler step and classifies each trajectory as orbiting,
escaping or crashed. Rendering, camera and UI layers drive it once per
frame and read state, trails and telemetry back.

Main entry points:
    - SimulationRegistry: owns the bodies, trails and per-frame tick.
    - BodyConfig / BodyState / BodyStatus: body input, state and status.
    - AtmosphericDensityModel: banded US Standard Atmosphere densities.
    - PhysicsConfig: immutable simulation parameters.

Submodules:
    - core: Accelerations, integrator and orbital invariants.
    - observers: Optional TickReport subscribers (debug text, buffering).

Example:
    from orbit_physics import SimulationRegistry, BodyConfig

    registry = SimulationRegistry()
    registry.add_body(BodyConfig.from_launch(height=400_000, speed=7800))
    report = registry.tick(0.016, time_scale=10)
    print(report.bodies[0].status)
"""
from .atmosphere import AtmosphericDensityModel, exponential_density
from .config import PhysicsConfig, config_from_dict
from .core.integrators import ForceIntegrator
from .registry import SimulationRegistry
from .telemetry import BodyTelemetry, TickReport
from .trail import TrailSampler
from .types import BodyConfig, BodyState, BodyStatus

__all__ = [
    # Simulation
    "SimulationRegistry",
    "ForceIntegrator",
    "TrailSampler",
    # Bodies
    "BodyConfig",
    "BodyState",
    "BodyStatus",
    # Atmosphere
    "AtmosphericDensityModel",
    "exponential_density",
    # Configuration
    "PhysicsConfig",
    "config_from_dict",
    # Telemetry
    "BodyTelemetry",
    "TickReport",
]
