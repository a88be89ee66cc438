# MIT License (see LICENSE)
"""
Per-tick status and telemetry records.

The registry returns a TickReport from every tick() instead of writing to
any display. UI layers poll the report or subscribe an observer.
"""
from __future__ import annotations
from dataclasses import asdict, dataclass, field

from .types import BodyStatus


@dataclass(frozen=True)
class BodyTelemetry:
    """
    Derived quantities for one body at the end of a tick.

    Attributes:
        id: Body identifier.
        status: Trajectory classification.
        altitude: Height above the surface in m.
        distance: Distance from Earth's center in m.
        speed: |v| in m/s.
        escape_velocity: Local escape speed in m/s.
        density: Air density used for drag in kg/m³ (0 when drag is inactive).
        drag_force: Drag force magnitude in N.
        drag_active: Whether drag contributed this tick.
        specific_energy: v²/2 - GM/r in J/kg.
    """
    id: int
    status: BodyStatus
    altitude: float
    distance: float
    speed: float
    escape_velocity: float
    density: float
    drag_force: float
    drag_active: bool
    specific_energy: float

    @property
    def altitude_km(self) -> float:
        return self.altitude / 1000.0

    @property
    def distance_km(self) -> float:
        return self.distance / 1000.0

    def to_dict(self) -> dict:
        d = asdict(self)
        d["status"] = self.status.value
        return d


@dataclass(frozen=True)
class TickReport:
    """
    Result of one SimulationRegistry.tick() call.

    Attributes:
        time: Simulated time after the tick in seconds.
        dt: Simulated seconds advanced (wall delta × time scale).
        advanced: Ids of the bodies integrated this tick.
        bodies: Telemetry for every registered body, in registry order.
    """
    time: float
    dt: float
    advanced: tuple[int, ...] = ()
    bodies: tuple[BodyTelemetry, ...] = field(default_factory=tuple)

    def status_of(self, body_id: int) -> BodyStatus | None:
        for t in self.bodies:
            if t.id == body_id:
                return t.status
        return None
