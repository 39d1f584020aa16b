"""Seedable random source — uniform draws, Bernoulli trials, weighted sampling.

The engine's reproducibility rests on one rule: every decision consumes draws
from a single stream, in a fixed order.  A string seed is hashed into a NumPy
``Generator`` seed; without one, the wall clock supplies the seed string and
``RandomSource.seed`` records it so the run can be replayed.  An empty
seed string counts as no seed.

Draws are generated in blocks for speed and handed out strictly in order, so
the block size never changes the sequence the caller sees.
"""

from __future__ import annotations

import hashlib
import time
from collections.abc import Sequence
from typing import TypeVar

import numpy as np

T = TypeVar("T")

_BLOCK_SIZE = 8192


def seed_to_int(seed: str) -> int:
    """Stable 64-bit integer derived from a seed string."""
    digest = hashlib.sha256(seed.encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "little")


class RandomSource:
    """Deterministic uniform generator plus the two derived operations."""

    def __init__(self, seed: str | None = None):
        self.seed = seed or str(time.time_ns())
        self._rng = np.random.default_rng(seed_to_int(self.seed))
        self._block: list[float] = []
        self._pos = 0

    def uniform(self) -> float:
        """Next float in [0, 1)."""
        if self._pos >= len(self._block):
            self._block = self._rng.random(_BLOCK_SIZE).tolist()
            self._pos = 0
        value = self._block[self._pos]
        self._pos += 1
        return value

    def bernoulli(self, p: float) -> bool:
        """True with probability *p* (one draw)."""
        return self.uniform() < p

    def sample(self, items: Sequence[tuple[T, float]]) -> T:
        """Inverse-transform sample from ``(value, probability)`` pairs.

        Returns the first value whose cumulative probability reaches the
        draw.  If rounding leaves the draw above the final cumulative sum the
        last value is returned.
        """
        r = self.uniform()
        cumulative = 0.0
        for value, probability in items:
            cumulative += probability
            if r <= cumulative:
                return value
        return items[-1][0]
