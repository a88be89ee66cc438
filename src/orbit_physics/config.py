# MIT License (see LICENSE)
"""
Simulation configuration.

PhysicsConfig gathers every tunable of the core in one immutable object.
The registry, integrator and trail sampler all read from it, so a single
config value describes a reproducible simulation.

Example:
    cfg = config_from_dict({"advance_mode": "first", "max_trail_length": 200})
    registry = SimulationRegistry(config=cfg)
"""
from __future__ import annotations
import math
from dataclasses import dataclass, fields
from typing import Any, Mapping

from . import constants as C

DRAG_MODELS = ("exponential", "banded")
ADVANCE_MODES = ("all", "first")


@dataclass(frozen=True)
class PhysicsConfig:
    """
    Immutable physics parameters.

    Attributes:
        gravitational_constant: G in N·m²/kg².
        earth_mass: Central mass M in kg.
        earth_radius: Central body radius in meters.
        crash_margin: Height above the surface at which a body counts as crashed.
        drag_ceiling: Altitude above which drag is not evaluated.
        min_drag_speed: Speed below which drag is suppressed.
        default_height: Altitude used for bodies added without a position.
        max_trail_length: Trail FIFO capacity per body.
        trail_min_spacing: Minimum distance between consecutive trail samples.
        drag_model: "exponential" (per-body exponential atmosphere) or
                    "banded" (detailed multi-band model).
        advance_mode: "all" advances every body each tick, "first" only the
                      first registered body.
    """
    gravitational_constant: float = C.G
    earth_mass: float = C.EARTH_MASS
    earth_radius: float = C.EARTH_RADIUS
    crash_margin: float = C.CRASH_MARGIN
    drag_ceiling: float = C.DRAG_CEILING
    min_drag_speed: float = C.MIN_DRAG_SPEED
    default_height: float = C.DEFAULT_HEIGHT
    max_trail_length: int = C.MAX_TRAIL_LENGTH
    trail_min_spacing: float = C.TRAIL_MIN_SPACING
    drag_model: str = "exponential"
    advance_mode: str = "all"

    def __post_init__(self) -> None:
        if self.drag_model not in DRAG_MODELS:
            raise ValueError(f"Unknown drag model: {self.drag_model}")
        if self.advance_mode not in ADVANCE_MODES:
            raise ValueError(f"Unknown advance mode: {self.advance_mode}")
        for name in ("gravitational_constant", "earth_mass", "earth_radius"):
            value = getattr(self, name)
            if not (math.isfinite(value) and value > 0):
                raise ValueError(f"{name} must be positive, got {value}")
        if self.max_trail_length < 1:
            raise ValueError("max_trail_length must be at least 1")
        if self.crash_margin < 0 or self.trail_min_spacing < 0:
            raise ValueError("crash_margin and trail_min_spacing must be non-negative")

    @property
    def mu(self) -> float:
        """Standard gravitational parameter G·M."""
        return self.gravitational_constant * self.earth_mass

    @property
    def crash_radius(self) -> float:
        return self.earth_radius + self.crash_margin


DEFAULT_CONFIG = PhysicsConfig()


def config_from_dict(data: Mapping[str, Any]) -> PhysicsConfig:
    """
    Build a PhysicsConfig from a plain mapping.

    Missing keys fall back to the defaults and unknown keys are ignored,
    so partially specified settings (e.g. from a UI form) are accepted.

    Raises:
        ValueError: If a value cannot be converted or is out of range.
    """
    kwargs: dict[str, Any] = {}
    for f in fields(PhysicsConfig):
        if f.name not in data:
            continue
        raw = data[f.name]
        try:
            if f.name in ("drag_model", "advance_mode"):
                kwargs[f.name] = str(raw)
            elif f.name == "max_trail_length":
                kwargs[f.name] = int(raw)
            else:
                kwargs[f.name] = float(raw)
        except (TypeError, ValueError) as exc:
            raise ValueError(f"Invalid value for {f.name}: {raw!r}") from exc
    return PhysicsConfig(**kwargs)


__all__ = ["ADVANCE_MODES", "DEFAULT_CONFIG", "DRAG_MODELS", "PhysicsConfig", "config_from_dict"]
