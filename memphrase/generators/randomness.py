#!/usr/bin/env python3
"""
Random Source
=============
Single place every generator draws randomness from.

By default backed by ``secrets.SystemRandom`` (the OS entropy pool). Pass a
seed to get a reproducible ``random.Random`` instead; tests use this.

Selection helpers:
- choice / weighted_choice for single draws
- sample: k distinct items by partial Fisher-Yates
- shuffle: full Fisher-Yates, in place
"""

import random as _random
import secrets
from typing import Any, List, Optional, Sequence, Tuple


class RandomSource:
    """
    Uniform random draws for the generators.

    Parameters
    ----------
    seed : int, optional
        If given, use a deterministic PRNG seeded with it.
    rng : random.Random, optional
        Use this generator as-is (takes precedence over ``seed``).
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[_random.Random] = None):
        if rng is not None:
            self._rng = rng
        elif seed is not None:
            self._rng = _random.Random(seed)
        else:
            self._rng = secrets.SystemRandom()

    def random(self) -> float:
        """Return random float in [0.0, 1.0)."""
        return self._rng.random()

    def randbelow(self, n: int) -> int:
        """Return random integer in [0, n)."""
        if n <= 0:
            raise ValueError("upper bound must be positive")
        return self._rng.randrange(n)

    def choice(self, seq: Sequence) -> Any:
        """Return a random element from non-empty sequence."""
        if not seq:
            raise IndexError("Cannot choose from empty sequence")
        return seq[self.randbelow(len(seq))]

    def weighted_choice(self, items: List[Tuple[Any, float]]) -> Any:
        """
        Choose from items with weights.

        Args:
            items: List of (item, weight) tuples

        Returns:
            Randomly selected item based on weights
        """
        if not items:
            raise IndexError("Cannot choose from empty sequence")

        total = sum(w for _, w in items)
        r = self.random() * total

        cumulative = 0
        for item, weight in items:
            cumulative += weight
            if r < cumulative:
                return item

        return items[-1][0]

    def sample(self, population: Sequence, k: int) -> list:
        """
        Return ``k`` items drawn from ``population`` without replacement.

        Partial Fisher-Yates: only the first ``k`` slots of a copy are
        shuffled, so the cost is O(len(population)) to copy plus O(k) swaps.
        ``k`` larger than the population returns a full permutation.
        """
        pool = list(population)
        k = min(max(k, 0), len(pool))
        for i in range(k):
            j = i + self.randbelow(len(pool) - i)
            pool[i], pool[j] = pool[j], pool[i]
        return pool[:k]

    def shuffle(self, seq: list) -> None:
        """Shuffle list in place (Fisher-Yates)."""
        for i in range(len(seq) - 1, 0, -1):
            j = self.randbelow(i + 1)
            seq[i], seq[j] = seq[j], seq[i]


_default_source = None


def get_rng() -> RandomSource:
    """Get the shared OS-backed random source."""
    global _default_source
    if _default_source is None:
        _default_source = RandomSource()
    return _default_source


__all__ = ["RandomSource", "get_rng"]
