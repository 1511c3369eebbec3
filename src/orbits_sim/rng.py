# MIT License (see LICENSE)
"""
Seeded linear congruential generator.

All gameplay randomness (asteroid field, collectible placement and type,
flare directions, rescue ship drift) is drawn from one of these instances,
passed explicitly to whatever needs it. A fixed seed therefore reproduces an
identical episode as long as draws happen in the same order.

    state = (state * 1664525 + 1013904223) mod 2^32
    next  = state / 2^32            # in [0, 1)
"""
from __future__ import annotations
from typing import Sequence, TypeVar

from .constants import LCG_MULTIPLIER, LCG_INCREMENT, LCG_MODULUS

T = TypeVar("T")


class DeterministicRNG:
    """
    32-bit LCG with a handful of convenience draws.

    Example:
        rng = DeterministicRNG(1234)
        x = rng.uniform(-1.0, 1.0)
    """

    def __init__(self, seed: int = 0) -> None:
        self.state = 0
        self.seed(seed)

    def seed(self, seed: int) -> None:
        """Reset the generator state. Any integer is accepted and folded to u32."""
        self.state = int(seed) % LCG_MODULUS

    def next(self) -> float:
        """Advance the state and return a float in [0, 1)."""
        self.state = (self.state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return self.state / LCG_MODULUS

    def uniform(self, lo: float, hi: float) -> float:
        """Float in [lo, hi). Consumes exactly one draw."""
        return lo + self.next() * (hi - lo)

    def choice(self, options: Sequence[T]) -> T:
        """Uniform pick from a non-empty sequence. Consumes exactly one draw."""
        if not options:
            raise ValueError("choice() from an empty sequence")
        idx = int(self.next() * len(options))
        return options[min(idx, len(options) - 1)]

    def next_u32(self) -> int:
        """Advance and return the raw 32-bit state (used to derive child seeds)."""
        self.next()
        return self.state


def mix32(x: int) -> int:
    """
    32-bit avalanche (MurmurHash3 finalizer).

    Consecutive LCG states are strongly correlated: seeding a generator with
    state k just replays the sequence from position k. Passing derived seeds
    through this jumps each one to an unrelated point of the cycle.
    """
    x = int(x) % LCG_MODULUS
    x ^= x >> 16
    x = (x * 0x85EBCA6B) % LCG_MODULUS
    x ^= x >> 13
    x = (x * 0xC2B2AE35) % LCG_MODULUS
    x ^= x >> 16
    return x
