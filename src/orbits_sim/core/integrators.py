# MIT License (see LICENSE)
"""
Time stepping for free bodies (ship, asteroids, projected ship).

The game uses semi-implicit (symplectic) Euler everywhere:

    v(t+dt) = v(t) + a(t) * dt
    x(t+dt) = x(t) + v(t+dt) * dt

The velocity update strictly precedes the position update, and the position
uses the *updated* velocity. Live simulation and trajectory projection share
this one function so their paths agree when stepped at the same dt.

Reference:
    https://en.wikipedia.org/wiki/Semi-implicit_Euler_method
"""
from __future__ import annotations

import numpy as np


def symplectic_euler_step(
    position: np.ndarray,
    velocity: np.ndarray,
    acceleration: np.ndarray,
    dt: float,
) -> None:
    """
    Advance position and velocity in place by dt.

    Args:
        position: [x, y] array (modified in-place).
        velocity: [vx, vy] array (modified in-place).
        acceleration: Total acceleration held constant over the step.
        dt: Timestep in simulation time units.
    """
    velocity += acceleration * dt
    position += velocity * dt
