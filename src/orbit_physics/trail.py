# MIT License (see LICENSE)
"""
Bounded position history per body, used to draw trajectories.

A sample is kept only once the body has moved more than `min_spacing`
from the previous sample, so memory and update cost depend on the distance
travelled rather than on the tick rate. Each trail is a FIFO of at most
`max_length` samples; the oldest sample is evicted first.
"""
from __future__ import annotations
from collections import deque

import numpy as np

from . import constants as C
from .util import distance, f64


class TrailSampler:
    """
    Distance-thresholded, length-capped trails keyed by body id.

    Example:
        trails = TrailSampler(max_length=500)
        trails.record(body.id, body.position)
        points = trails.trail(body.id)
    """

    def __init__(self, max_length: int = C.MAX_TRAIL_LENGTH, min_spacing: float = C.TRAIL_MIN_SPACING) -> None:
        if max_length < 1:
            raise ValueError("max_length must be at least 1")
        self.max_length = int(max_length)
        self.min_spacing = float(min_spacing)
        self._trails: dict[int, deque[np.ndarray]] = {}

    def record(self, body_id: int, position: np.ndarray) -> bool:
        """
        Append a copy of position to the body's trail if it is far enough
        from the last sample.

        Returns:
            True if a sample was appended.
        """
        trail = self._trails.get(body_id)
        if trail is None:
            trail = self._trails[body_id] = deque(maxlen=self.max_length)
        if trail and distance(position, trail[-1]) <= self.min_spacing:
            return False
        # deque(maxlen) drops the oldest entry on overflow
        trail.append(f64(position))
        return True

    def trail(self, body_id: int) -> list[np.ndarray]:
        """Chronological copy of the body's samples (empty if unknown)."""
        return [p.copy() for p in self._trails.get(body_id, ())]

    def as_array(self, body_id: int) -> np.ndarray:
        """Samples stacked into an (N, 3) array for line rendering."""
        samples = self._trails.get(body_id)
        if not samples:
            return np.zeros((0, 3), dtype=np.float64)
        return np.stack(samples)

    def clear(self, body_id: int) -> None:
        """Empty a body's trail but keep tracking it."""
        trail = self._trails.get(body_id)
        if trail is not None:
            trail.clear()

    def discard(self, body_id: int) -> None:
        """Forget a body's trail entirely."""
        self._trails.pop(body_id, None)

    def clear_all(self) -> None:
        self._trails.clear()

    def __contains__(self, body_id: object) -> bool:
        return body_id in self._trails

    def __len__(self) -> int:
        return len(self._trails)
