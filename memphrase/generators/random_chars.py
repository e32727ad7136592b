#!/usr/bin/env python3
"""
Random Character Generator
==========================
Uniform draws from the enabled character classes.
"""

import string
from typing import Optional

from memphrase.errors import NO_CHARACTER_TYPES
from memphrase.generators.randomness import RandomSource, get_rng

LOWERCASE = string.ascii_lowercase
UPPERCASE = string.ascii_uppercase
DIGITS = string.digits


def character_pool(include_lowercase: bool = True,
                   include_uppercase: bool = True,
                   include_digits: bool = True,
                   symbols: str = '') -> str:
    """Concatenate the enabled classes; ``symbols`` empty means no symbols."""
    pool = ''
    if include_lowercase:
        pool += LOWERCASE
    if include_uppercase:
        pool += UPPERCASE
    if include_digits:
        pool += DIGITS
    return pool + symbols


class RandomCharGenerator:
    """Random-character passwords."""

    def __init__(self, rng: Optional[RandomSource] = None):
        self.rng = rng or get_rng()

    def generate(self, length: int, pool: str) -> str:
        """
        ``length`` characters drawn with replacement from ``pool``.

        Returns the NO_CHARACTER_TYPES sentinel when the pool is empty or
        the length is zero.
        """
        if not pool or length <= 0:
            return NO_CHARACTER_TYPES
        chars = [self.rng.choice(pool) for _ in range(length)]
        self.rng.shuffle(chars)
        return ''.join(chars)


__all__ = ["RandomCharGenerator", "character_pool", "LOWERCASE", "UPPERCASE", "DIGITS"]
