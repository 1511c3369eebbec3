# MIT License (see LICENSE)
"""
Core physics components.

This subpackage provides:
    - Gravity field: clamped inverse-square attraction from massive bodies.
    - Orbits: analytic circular motion of kinematic bodies.
    - Integrators: semi-implicit Euler shared by every free body.
    - Invariants: diagnostic orbital energy.

Typical usage:
    from orbits_sim.core import GravityField, symplectic_euler_step

    a = GravityField(registry, G=0.4).acceleration(ship.position)
    symplectic_euler_step(ship.position, ship.velocity, a, dt=0.1)
"""
from .forces import GravityField, point_gravity, table_acceleration
from .orbits import (
    OrbitTable,
    advance,
    advance_orbits,
    orbital_velocity,
    place,
    restore_orbits,
)
from .integrators import symplectic_euler_step
from .invariants import specific_orbital_energy

__all__ = [
    # Forces
    "GravityField",
    "point_gravity",
    "table_acceleration",
    # Orbits
    "OrbitTable",
    "advance",
    "advance_orbits",
    "orbital_velocity",
    "place",
    "restore_orbits",
    # Integrators
    "symplectic_euler_step",
    # Invariants
    "specific_orbital_energy",
]
