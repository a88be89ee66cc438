# MIT License (see LICENSE)
"""
Tick observers: the boundary between the physics core and presentation.

A rendering or UI layer subscribes an observer to the registry and receives
a TickReport after every tick. The core itself has no display dependency;
these adapters are optional.
"""
from __future__ import annotations
import sys
from abc import ABC, abstractmethod
from typing import TextIO

from .telemetry import BodyTelemetry, TickReport


class TickObserver(ABC):
    """
    Base class for tick subscribers.

    Subclasses implement the per-frame hooks; observe() drives them:

        observer.begin_frame(report.time)
        for telemetry in report.bodies:
            observer.on_body(telemetry)
        observer.end_frame()
    """

    @abstractmethod
    def begin_frame(self, time: float) -> None:
        """Start a frame for simulated time `time` (seconds)."""
        ...

    @abstractmethod
    def on_body(self, telemetry: BodyTelemetry) -> None:
        ...

    @abstractmethod
    def end_frame(self) -> None:
        ...

    def observe(self, report: TickReport) -> None:
        self.begin_frame(report.time)
        for telemetry in report.bodies:
            self.on_body(telemetry)
        self.end_frame()


class DebugObserver(TickObserver):
    """
    Writes a text line per body to a stream (stdout by default).

    Output:
        === Frame t=0.0160 ===
        [1] Orbiting alt=400.0 km v=7800 m/s rho=1.353e-12 drag=3.4e-04 N
    """

    def __init__(self, output: TextIO | None = None, verbose: bool = True):
        self.output = output or sys.stdout
        self.verbose = verbose

    def begin_frame(self, time: float) -> None:
        self.output.write(f"=== Frame t={time:.4f} ===\n")

    def on_body(self, telemetry: BodyTelemetry) -> None:
        t = telemetry
        line = f"[{t.id}] {t.status.value} alt={t.altitude_km:.1f} km v={t.speed:.0f} m/s"
        if self.verbose:
            line += f" rho={t.density:.3e} drag={t.drag_force:.1e} N"
        self.output.write(line + "\n")

    def end_frame(self) -> None:
        self.output.write("\n")
        self.output.flush()


class NullObserver(TickObserver):
    """No-op observer, for benchmarking the notification path."""

    def begin_frame(self, time: float) -> None:
        pass

    def on_body(self, telemetry: BodyTelemetry) -> None:
        pass

    def end_frame(self) -> None:
        pass


class BufferedObserver(TickObserver):
    """
    Records frames as plain dicts for playback, plotting or export.

    Args:
        max_frames: Keep only the most recent frames when set.

    Example:
        recorder = BufferedObserver()
        registry.subscribe(recorder)
        for _ in range(100):
            registry.tick(0.016)
        altitudes = [f["bodies"][0]["altitude"] for f in recorder.frames]
    """

    def __init__(self, max_frames: int | None = None):
        self.max_frames = max_frames
        self.frames: list[dict] = []
        self._current_frame: dict | None = None

    def begin_frame(self, time: float) -> None:
        self._current_frame = {"time": time, "bodies": []}

    def on_body(self, telemetry: BodyTelemetry) -> None:
        if self._current_frame is None:
            return
        self._current_frame["bodies"].append(telemetry.to_dict())

    def end_frame(self) -> None:
        if self._current_frame is not None:
            self.frames.append(self._current_frame)
            self._current_frame = None
            if self.max_frames is not None and len(self.frames) > self.max_frames:
                del self.frames[0]

    def clear(self) -> None:
        self.frames.clear()
