# MIT License (see LICENSE)
"""
Utility functions for vector math and numeric operations.

Provides low-level 2D vector operations used by the game core: normalization,
overlap tests and angle helpers. Vectors are numpy arrays of shape (2,).
"""
from __future__ import annotations
import math

import numpy as np


TWO_PI = 2.0 * math.pi


def f64(x) -> np.ndarray:
    """
    Convert any array-like to a float64 numpy array.

    Used throughout the codebase to ensure consistent numeric precision
    and allow tuple/list inputs for positions and velocities.
    """
    return np.array(x, dtype=np.float64)


def norm2(v: np.ndarray) -> float:
    """Squared magnitude of a 2D vector. Avoids sqrt for performance."""
    return float(v[0] * v[0] + v[1] * v[1])


def norm(v: np.ndarray) -> float:
    """Magnitude (length) of a 2D vector."""
    return math.sqrt(norm2(v))


def unit(v: np.ndarray, eps: float = 1e-12) -> np.ndarray:
    """
    Return a unit (normalized) vector in the same direction as v.

    Returns zero vector if |v| < eps to avoid division by zero.
    """
    n = norm(v)
    if n < eps:
        return np.zeros(2, dtype=np.float64)
    return v / n


def from_angle(angle: float, length: float = 1.0) -> np.ndarray:
    """Vector of the given length pointing along `angle` (radians, CCW from +x)."""
    return np.array([length * math.cos(angle), length * math.sin(angle)], dtype=np.float64)


def circles_overlap(p0, r0: float, p1, r1: float) -> bool:
    """True when two circles strictly overlap: |p0 - p1| < r0 + r1."""
    dx = p0[0] - p1[0]
    dy = p0[1] - p1[1]
    return math.sqrt(dx * dx + dy * dy) < (r0 + r1)


def wrap_angle(angle: float) -> float:
    """Fold an angle into (-2π, 2π) so long sessions don't grow it without bound."""
    return math.fmod(angle, TWO_PI) if abs(angle) >= TWO_PI else angle
