# MIT License (see LICENSE)
"""
Diagnostic quantities for checking integration quality.

With a static field and no thrust, specific orbital energy should stay
close to constant under the symplectic stepper (it oscillates instead of
drifting). Used by tests; the game loop never reads it.
"""
from __future__ import annotations
import math

import numpy as np

from .forces import GravityField


def specific_orbital_energy(position: np.ndarray, velocity: np.ndarray, field: GravityField) -> float:
    """
    Kinetic plus potential energy per unit mass.

    E = v²/2 - Σ G m_b / max(d_b, r_b)

    Inside a body the potential is held at its surface value, matching the
    zero-force clamp of the field. Bodies out of their influence radius add nothing.
    """
    v2 = float(np.dot(velocity, velocity))
    potential = 0.0
    for b in field.registry.bodies:
        d = math.hypot(float(b.position[0] - position[0]), float(b.position[1] - position[1]))
        if b.influence_radius is not None and d > b.influence_radius:
            continue
        d = max(d, b.radius)
        if d > 0.0:
            potential -= field.G * b.mass / d
    return 0.5 * v2 + potential
