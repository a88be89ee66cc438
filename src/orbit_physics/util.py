# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

All vectors are 3D numpy float64 arrays of shape (3,). Helpers here never
return NaN: normalizing a (near) zero vector yields the zero vector.
"""
from __future__ import annotations
import math

import numpy as np


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a new float64 numpy array.

    Always copies, so the result never aliases the caller's buffer.
    """
    return np.array(x, dtype=np.float64)


def zeros3() -> np.ndarray:
    return np.zeros(3, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 3D vector."""
    return float(v[0] * v[0] + v[1] * v[1] + v[2] * v[2])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 3D vector."""
    return math.sqrt(norm2(v))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit vector in the same direction as v.

    Returns the zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return zeros3()
    return v / n


def distance(a: np.ndarray, b: np.ndarray) -> float:
    """Euclidean distance between two points."""
    return norm(a - b)


def as_vec3(value) -> np.ndarray | None:
    """
    Coerce value to a finite float64 3-vector.

    2D input is padded with z=0. Returns None when the value cannot be
    interpreted as a vector (wrong shape, non-numeric, NaN/inf) so that
    callers can substitute a default instead of failing.
    """
    if value is None:
        return None
    try:
        arr = np.array(value, dtype=np.float64).reshape(-1)
    except (TypeError, ValueError):
        return None
    if arr.shape == (2,):
        arr = np.append(arr, 0.0)
    if arr.shape != (3,) or not np.all(np.isfinite(arr)):
        return None
    return arr


def is_positive_finite(x) -> bool:
    if isinstance(x, (bool, np.bool_)):
        return False
    try:
        x = float(x)
    except (TypeError, ValueError):
        return False
    return math.isfinite(x) and x > 0.0


def is_non_negative_finite(x) -> bool:
    if isinstance(x, (bool, np.bool_)):
        return False
    try:
        x = float(x)
    except (TypeError, ValueError):
        return False
    return math.isfinite(x) and x >= 0.0
