# MIT License (see LICENSE)
"""
Simulation constants used throughout the game core.

These are game units, not SI: distances in world units, time in simulation
time units (one default tick is 0.1 time units). G is tuned for feel, not physics.
"""
from __future__ import annotations

# Gravitational constant in game units.
G: float = 0.4

# Base tick length in simulation time units.
DT: float = 0.1

# Allowed fast-forward multipliers. Scaling happens on dt, never by running extra ticks.
TIME_SCALES: tuple[int, ...] = (1, 2, 4, 8, 16)

# LCG parameters (Numerical Recipes). State is kept modulo 2^32.
LCG_MULTIPLIER: int = 1664525
LCG_INCREMENT: int = 1013904223
LCG_MODULUS: int = 2 ** 32

# XORed into the session seed before it drives the reset seed stream.
SEED_STREAM_SALT: int = 0x5F3759DF
