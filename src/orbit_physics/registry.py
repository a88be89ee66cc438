# MIT License (see LICENSE)
"""
The simulation registry and per-frame tick.

SimulationRegistry is the world container and simulation controller.
It manages:
- The ordered list of BodyState entries and their trails.
- Body lifecycle: add (with defaults and input cloning), remove, reset.
- The per-frame tick:
    1. Scale the wall-clock delta by the time multiplier.
    2. Integrate the tracked bodies (gravity + drag, semi-implicit Euler).
    3. Record trail samples.
    4. Build a TickReport and hand it to subscribed observers.

Structure:
    - Caller creates a SimulationRegistry.
    - Caller adds bodies via add_body().
    - The render loop calls registry.tick(dt, time_scale) once per frame.
"""
from __future__ import annotations
import contextlib
import logging
import math
from dataclasses import dataclass, field, fields
from typing import Any, Iterable, Mapping

import numpy as np

from . import constants as C
from .atmosphere import AtmosphericDensityModel
from .config import DEFAULT_CONFIG, PhysicsConfig
from .core.forces import drag_force_magnitude
from .core.integrators import ForceIntegrator
from .core.invariants import circular_velocity, classify, escape_velocity, specific_energy
from .observers import TickObserver
from .profiler import Profiler
from .telemetry import BodyTelemetry, TickReport
from .trail import TrailSampler
from .types import BodyConfig, BodyState, BodyStatus
from .util import as_vec3, is_non_negative_finite, is_positive_finite, norm

logger = logging.getLogger(__name__)

# Live-editable body parameters and their validators
_PARAM_CHECKS = {
    "mass": is_positive_finite,
    "drag_coefficient": is_non_negative_finite,
    "cross_sectional_area": is_non_negative_finite,
    "surface_density": is_non_negative_finite,
    "scale_height": is_positive_finite,
}
_PARAM_DEFAULTS = {
    "mass": C.DEFAULT_MASS,
    "drag_coefficient": C.DEFAULT_DRAG_COEFFICIENT,
    "cross_sectional_area": C.DEFAULT_AREA,
    "surface_density": C.SURFACE_DENSITY,
    "scale_height": C.SCALE_HEIGHT,
}

BodyInput = BodyConfig | Mapping[str, Any] | None

_CONFIG_FIELDS = frozenset(f.name for f in fields(BodyConfig))


def _warn_unknown(params: Mapping[str, Any]) -> None:
    for name in params:
        if name not in _CONFIG_FIELDS:
            logger.warning("Ignoring unknown body parameter %r", name)


@dataclass
class SimulationRegistry:
    """
    Orbital simulation world.

    Attributes:
        config: Physics parameters shared by integrator and trails.
        profiler: Optional Profiler timing the tick sections.
        atmosphere: Banded density model (display and "banded" drag).
        paused: When True, tick() reports state without advancing it.
        bodies: Registered bodies in insertion order.
        observers: Subscribers notified after every tick.
        time: Simulated seconds elapsed since the last reset().
    """
    config: PhysicsConfig = DEFAULT_CONFIG
    profiler: Profiler | None = None
    atmosphere: AtmosphericDensityModel = field(default_factory=AtmosphericDensityModel)
    paused: bool = False

    # Internal state
    bodies: list[BodyState] = field(default_factory=list)
    observers: list[TickObserver] = field(default_factory=list)
    time: float = 0.0

    def __post_init__(self) -> None:
        self.integrator = ForceIntegrator(self.config, self.atmosphere)
        self.trails = TrailSampler(self.config.max_trail_length, self.config.trail_min_spacing)
        self._next_id = 1

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def add_body(self, config: BodyInput = None, **overrides: Any) -> int:
        """
        Add a body built from a partial configuration.

        Vectors are copied into registry-owned arrays. Missing fields take
        defaults: 400 km above the surface on +x, circular-orbit speed
        perpendicular to the position, 1000 kg, Cd 2.2, A 4 m², air on.
        Invalid fields are replaced by their defaults (logged, not raised).

        Args:
            config: A BodyConfig, a mapping with the same keys, or None.
            **overrides: Field values applied on top of `config`.

        Returns:
            The new body's id.
        """
        state = self._build_state(self._as_config(config, overrides))
        state.id = self._next_id
        self._next_id += 1
        state.status = classify(state, self.config)
        self.bodies.append(state)
        logger.debug("Added body %d at r=%.0f m (%s)", state.id, state.distance, state.status.value)
        return state.id

    def remove_body(self, index: int) -> None:
        """
        Remove the body at `index` and its trail.

        Out-of-range (including negative) or non-integer indices are ignored.
        """
        if not self._valid_index(index):
            return
        body = self.bodies.pop(index)
        self.trails.discard(body.id)
        logger.debug("Removed body %d", body.id)

    def reset(self) -> None:
        """Remove all bodies and trails and rewind simulated time."""
        self.bodies.clear()
        self.trails.clear_all()
        self.time = 0.0
        logger.debug("Registry reset")

    def restore(self, configs: Iterable[BodyInput]) -> list[int]:
        """Reset, then add every config in order. Returns the new ids."""
        self.reset()
        return [self.add_body(c) for c in configs]

    def relaunch(self, index: int, config: BodyInput = None, **overrides: Any) -> bool:
        """
        Re-initialise the body at `index` in place, keeping its id.

        The new state is built exactly as add_body() would build it; the
        body's trail is cleared and a CRASHED status is lifted.

        Returns:
            False if the index is out of range.
        """
        if not self._valid_index(index):
            return False
        old = self.bodies[index]
        state = self._build_state(self._as_config(config, overrides))
        state.id = old.id
        state.status = classify(state, self.config)
        self.bodies[index] = state
        self.trails.clear(old.id)
        logger.debug("Relaunched body %d (%s)", state.id, state.status.value)
        return True

    def update_body(self, index: int, **params: Any) -> bool:
        """
        Change physical parameters of a live body.

        Accepted keys: mass, drag_coefficient, cross_sectional_area,
        air_enabled, surface_density, scale_height. Invalid values are
        skipped with a warning; position and velocity are not editable here
        (use relaunch()).

        Returns:
            False if the index is out of range.
        """
        if not self._valid_index(index):
            return False
        body = self.bodies[index]
        for name, value in params.items():
            if name == "air_enabled":
                body.air_enabled = bool(value)
            elif name in _PARAM_CHECKS:
                if _PARAM_CHECKS[name](value):
                    setattr(body, name, float(value))
                else:
                    logger.warning("Ignoring invalid %s=%r for body %d", name, value, body.id)
            else:
                logger.warning("Ignoring unknown body parameter %r", name)
        return True

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    def __len__(self) -> int:
        return len(self.bodies)

    def body(self, index: int) -> BodyState | None:
        return self.bodies[index] if self._valid_index(index) else None

    def index_of(self, body_id: int) -> int | None:
        for i, b in enumerate(self.bodies):
            if b.id == body_id:
                return i
        return None

    def trail(self, index: int) -> list[np.ndarray]:
        """Chronological trail samples of the body at `index`."""
        body = self.body(index)
        return [] if body is None else self.trails.trail(body.id)

    def density(self, altitude: float) -> float:
        """Banded atmospheric density at `altitude` meters (kg/m³)."""
        return self.atmosphere.density(altitude)

    def telemetry(self, index: int) -> BodyTelemetry | None:
        body = self.body(index)
        return None if body is None else self._telemetry(body)

    def subscribe(self, observer: TickObserver) -> None:
        if observer not in self.observers:
            self.observers.append(observer)

    def unsubscribe(self, observer: TickObserver) -> None:
        if observer in self.observers:
            self.observers.remove(observer)

    # ------------------------------------------------------------------
    # Simulation
    # ------------------------------------------------------------------

    def tick(self, dt_seconds: float, time_scale: float = 1.0) -> TickReport:
        """
        Advance the simulation by one frame.

        Args:
            dt_seconds: Wall-clock frame delta in seconds.
            time_scale: Simulation speed multiplier.

        Returns:
            TickReport with telemetry for every body.

        Raises:
            ValueError: If dt_seconds or time_scale is negative or not finite.
        """
        dt_seconds = float(dt_seconds)
        time_scale = float(time_scale)
        if not (math.isfinite(dt_seconds) and dt_seconds >= 0.0):
            raise ValueError(f"dt_seconds must be finite and non-negative, got {dt_seconds}")
        if not (math.isfinite(time_scale) and time_scale >= 0.0):
            raise ValueError(f"time_scale must be finite and non-negative, got {time_scale}")

        dt = 0.0 if self.paused else dt_seconds * time_scale
        advanced: tuple[int, ...] = ()

        if dt > 0.0:
            targets = self._tracked()
            with self._section("integrate"):
                for b in targets:
                    before = b.status
                    after = self.integrator.step(b, dt)
                    if after is not before:
                        logger.info("Body %d: %s -> %s", b.id, before.value, after.value)
            with self._section("trails"):
                for b in targets:
                    self.trails.record(b.id, b.position)
            advanced = tuple(b.id for b in targets)
            self.time += dt

        report = TickReport(
            time=self.time,
            dt=dt,
            advanced=advanced,
            bodies=tuple(self._telemetry(b) for b in self.bodies),
        )
        if self.observers:
            with self._section("observers"):
                for observer in list(self.observers):
                    observer.observe(report)
        return report

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _tracked(self) -> list[BodyState]:
        if self.config.advance_mode == "first":
            return self.bodies[:1]
        return list(self.bodies)

    def _section(self, name: str):
        if self.profiler is None:
            return contextlib.nullcontext()
        return self.profiler.section(name)

    def _valid_index(self, index: Any) -> bool:
        return (
            isinstance(index, (int, np.integer))
            and not isinstance(index, bool)
            and 0 <= index < len(self.bodies)
        )

    @staticmethod
    def _as_config(config: BodyInput, overrides: Mapping[str, Any]) -> BodyConfig:
        if config is None:
            base = BodyConfig()
        elif isinstance(config, BodyConfig):
            base = config
        else:
            _warn_unknown(config)
            base = BodyConfig.from_mapping(config)
        _warn_unknown(overrides)
        return base.merged(**overrides)

    def _build_state(self, cfg: BodyConfig) -> BodyState:
        """Resolve a partial config into a fully valid BodyState."""
        phys = self.config

        position = as_vec3(cfg.position)
        if position is None or norm(position) == 0.0:
            if cfg.position is not None:
                logger.warning("Invalid position %r, using default", cfg.position)
            position = np.array([phys.earth_radius + phys.default_height, 0.0, 0.0])

        velocity = as_vec3(cfg.velocity)
        if velocity is None:
            if cfg.velocity is not None:
                logger.warning("Invalid velocity %r, using circular speed", cfg.velocity)
            velocity = self._circular_velocity_vector(position)

        params: dict[str, float] = {}
        for name, check in _PARAM_CHECKS.items():
            value = getattr(cfg, name)
            if value is None:
                params[name] = _PARAM_DEFAULTS[name]
            elif check(value):
                params[name] = float(value)
            else:
                logger.warning("Invalid %s=%r, using default %s", name, value, _PARAM_DEFAULTS[name])
                params[name] = _PARAM_DEFAULTS[name]

        air = True if cfg.air_enabled is None else bool(cfg.air_enabled)
        # BodyState copies the vectors
        return BodyState(position=position, velocity=velocity, air_enabled=air, **params)

    def _circular_velocity_vector(self, position: np.ndarray) -> np.ndarray:
        """Circular-orbit velocity perpendicular to position, in the xy-plane when possible."""
        r = norm(position)
        direction = np.cross([0.0, 0.0, 1.0], position)
        if norm(direction) < 1e-9 * r:
            direction = np.array([0.0, 1.0, 0.0])
        direction = direction / norm(direction)
        return direction * circular_velocity(r, self.config.mu)

    def _telemetry(self, body: BodyState) -> BodyTelemetry:
        cfg = self.config
        r = body.distance
        alt = r - cfg.earth_radius
        speed = body.speed
        drag_active = (
            body.air_enabled
            and body.status is not BodyStatus.CRASHED
            and alt < cfg.drag_ceiling
            and speed > cfg.min_drag_speed
        )
        rho = self.integrator.air_density(body, alt) if drag_active else 0.0
        drag = (
            drag_force_magnitude(rho, speed, body.drag_coefficient, body.cross_sectional_area)
            if drag_active else 0.0
        )
        return BodyTelemetry(
            id=body.id,
            status=body.status,
            altitude=alt,
            distance=r,
            speed=speed,
            escape_velocity=escape_velocity(r, cfg.mu),
            density=rho,
            drag_force=drag,
            drag_active=drag_active,
            specific_energy=specific_energy(body.position, body.velocity, cfg.mu),
        )
