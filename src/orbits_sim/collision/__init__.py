# MIT License (see LICENSE)
"""
Collision handling subsystem.

This subpackage provides:
    - Broadphase: Spatial hashing for culling particle candidates.
    - Resolver: Soft/destructive classification of ship contacts.

Typical usage:
    from orbits_sim.collision import CollisionResolver

    outcome = CollisionResolver(config).resolve(ship, registry, particles)
    if outcome.destructive:
        # end the episode
"""
from .broadphase import SpatialHash, aabb_for_circle
from .resolver import CollisionOutcome, CollisionResolver

__all__ = [
    # Broadphase
    "SpatialHash",
    "aabb_for_circle",
    # Resolver
    "CollisionOutcome",
    "CollisionResolver",
]
