# MIT License (see LICENSE)
"""
Core type definitions for the orbital simulation.

Defines the fundamental data structures:
- BodyStatus: trajectory classification derived every tick.
- BodyConfig: partial, caller-supplied description of a new body.
- BodyState: the registry-owned mutable state of one simulated body.

Equations of motion (Earth-centred inertial frame):
  dx/dt = v
  dv/dt = -GM·x/|x|³ + a_drag
"""
from __future__ import annotations
import enum
import math
from dataclasses import dataclass, fields, replace
from typing import Any, Mapping

import numpy as np

from . import constants as C
from .util import f64, is_non_negative_finite, is_positive_finite, norm


class BodyStatus(str, enum.Enum):
    """Trajectory classification. CRASHED is terminal."""
    ORBITING = "Orbiting"
    ESCAPING = "Escaping"
    CRASHED = "Crashed"


# =============================================================================
# Caller-side configuration
# =============================================================================

@dataclass
class BodyConfig:
    """
    Partial description of a body to add to the registry.

    Every field is optional; None means "use the registry default".
    Vectors may be any array-like of length 2 or 3 and are copied when the
    registry builds the BodyState.
    """
    position: Any = None
    velocity: Any = None
    mass: float | None = None
    drag_coefficient: float | None = None
    cross_sectional_area: float | None = None
    air_enabled: bool | None = None
    surface_density: float | None = None
    scale_height: float | None = None

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "BodyConfig":
        """Build a config from a mapping, ignoring unknown keys."""
        names = {f.name for f in fields(cls)}
        return cls(**{k: v for k, v in data.items() if k in names})

    @classmethod
    def from_launch(
        cls,
        height: float,
        speed: float,
        direction_deg: float = 90.0,
        earth_radius: float = C.EARTH_RADIUS,
        **params: Any,
    ) -> "BodyConfig":
        """
        Launch-style config: start on the +x axis at `height` above the
        surface, moving at `speed` in the xy-plane.

        direction_deg is measured from +x, so 90° is a horizontal launch
        (perpendicular to the radius) and 0° is straight up.
        """
        theta = math.radians(direction_deg)
        return cls(
            position=(earth_radius + height, 0.0, 0.0),
            velocity=(speed * math.cos(theta), speed * math.sin(theta), 0.0),
            **params,
        )

    def merged(self, **overrides: Any) -> "BodyConfig":
        """Return a copy with the non-None overrides applied, ignoring unknown keys."""
        names = {f.name for f in fields(self)}
        return replace(
            self, **{k: v for k, v in overrides.items() if v is not None and k in names}
        )


# =============================================================================
# Simulation state
# =============================================================================

@dataclass
class BodyState:
    """
    State of one simulated body.

    Attributes:
        position: Position [x, y, z] in meters from Earth's center. Never zero.
        velocity: Velocity [vx, vy, vz] in m/s.
        mass: Mass in kg, always > 0.
        drag_coefficient: Dimensionless Cd, >= 0.
        cross_sectional_area: Reference area A in m², >= 0.
        air_enabled: When False drag is forced to zero at any altitude.
        surface_density: Sea-level density of the exponential atmosphere.
        scale_height: Scale height of the exponential atmosphere in m.
        status: Classification from the most recent integration step.
        id: Identifier assigned by SimulationRegistry.add_body().

    Note:
        Position and velocity are converted to fresh float64 arrays on init,
        so a BodyState never shares memory with the arrays it was built from.

    Raises:
        ValueError: On a zero or non-finite position, a non-finite velocity,
            a non-positive mass or negative drag parameters.
    """
    position: np.ndarray
    velocity: np.ndarray
    mass: float = C.DEFAULT_MASS
    drag_coefficient: float = C.DEFAULT_DRAG_COEFFICIENT
    cross_sectional_area: float = C.DEFAULT_AREA
    air_enabled: bool = True
    surface_density: float = C.SURFACE_DENSITY
    scale_height: float = C.SCALE_HEIGHT
    status: BodyStatus = BodyStatus.ORBITING
    id: int = -1

    def __post_init__(self) -> None:
        self.position = f64(self.position)
        self.velocity = f64(self.velocity)
        self.mass = float(self.mass)
        self.drag_coefficient = float(self.drag_coefficient)
        self.cross_sectional_area = float(self.cross_sectional_area)
        self.air_enabled = bool(self.air_enabled)

        if self.position.shape != (3,) or not np.all(np.isfinite(self.position)):
            raise ValueError(f"position must be a finite 3-vector, got {self.position}")
        if norm(self.position) == 0.0:
            raise ValueError("position must not be the zero vector")
        if self.velocity.shape != (3,) or not np.all(np.isfinite(self.velocity)):
            raise ValueError(f"velocity must be a finite 3-vector, got {self.velocity}")
        if not is_positive_finite(self.mass):
            raise ValueError(f"mass must be positive and finite, got {self.mass}")
        if not is_non_negative_finite(self.drag_coefficient):
            raise ValueError(f"drag_coefficient must be >= 0, got {self.drag_coefficient}")
        if not is_non_negative_finite(self.cross_sectional_area):
            raise ValueError(f"cross_sectional_area must be >= 0, got {self.cross_sectional_area}")

    @property
    def distance(self) -> float:
        """Distance from Earth's center in meters."""
        return norm(self.position)

    @property
    def speed(self) -> float:
        return norm(self.velocity)

    @property
    def crashed(self) -> bool:
        return self.status is BodyStatus.CRASHED

    def copy(self) -> "BodyState":
        """Deep copy (vectors included)."""
        return replace(self, position=self.position.copy(), velocity=self.velocity.copy())

    def to_dict(self) -> dict[str, Any]:
        """Plain-Python view for UI layers."""
        return {
            "id": self.id,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
            "mass": self.mass,
            "drag_coefficient": self.drag_coefficient,
            "cross_sectional_area": self.cross_sectional_area,
            "air_enabled": self.air_enabled,
            "surface_density": self.surface_density,
            "scale_height": self.scale_height,
            "status": self.status.value,
        }
