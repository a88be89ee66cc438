# MIT License (see LICENSE)
"""
Lightweight section timing for the simulation tick.

Each section keeps only its most recent samples, so a profiler attached to
a long-running interactive session uses constant memory.

Example:
    profiler = Profiler()
    registry = SimulationRegistry(profiler=profiler)
    registry.tick(0.016)
    print(profiler.stats.summary()["integrate"]["mean_ms"])
"""
from __future__ import annotations
import time
from collections import deque
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator


@dataclass
class ProfileStats:
    """Rolling timing samples (seconds) per named section."""
    window: int = 1000
    samples: dict[str, deque[float]] = field(default_factory=dict)

    def add(self, name: str, dt: float) -> None:
        series = self.samples.get(name)
        if series is None:
            series = self.samples[name] = deque(maxlen=self.window)
        series.append(dt)

    def summary(self) -> dict[str, dict[str, float]]:
        """
        Per-section statistics over the current window.

        Returns:
            Dict mapping section name to {'n', 'mean_ms', 'max_ms'}.
        """
        out = {}
        for name, times in self.samples.items():
            if not times:
                continue
            n = len(times)
            out[name] = {
                "n": n,
                "mean_ms": 1e3 * (sum(times) / n),
                "max_ms": 1e3 * max(times),
            }
        return out

    def clear(self) -> None:
        self.samples.clear()


class Profiler:
    """Context-manager based profiler for timing code sections."""

    def __init__(self, window: int = 1000) -> None:
        self.stats = ProfileStats(window=window)

    @contextmanager
    def section(self, name: str) -> Iterator[None]:
        t0 = time.perf_counter()
        try:
            yield
        finally:
            self.stats.add(name, time.perf_counter() - t0)
