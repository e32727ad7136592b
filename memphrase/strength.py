#!/usr/bin/env python3
"""
Strength Scorer
===============
Estimates entropy of a generated secret and maps it to one of five tiers.

The produced string itself is the primary input: its character classes
give the character space and ``entropy = length * log2(space)``. Only when
there is no string to look at (empty input) does the scorer fall back to
a per-mode estimate from the options.

Tiers use half-open intervals over the configured thresholds. With the
default ``[25, 40, 60, 80]``:

    [0, 25)   Very Weak     0
    [25, 40)  Weak          1
    [40, 60)  Medium        2
    [60, 80)  Strong        3
    [80, inf) Very Strong   4

Usage:
    scorer = StrengthScorer()
    result = scorer.score("Swift-Amber-Otter-Run", options)
    print(result.label, result.entropy_bits)
"""

from __future__ import annotations

import logging
import math
import re
from bisect import bisect_right
from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence

from memphrase.cache import BoundedCache
from memphrase.errors import is_sentinel
from memphrase.options import GenerationMode, GenerationOptions
from memphrase.settings import require_setting

logger = logging.getLogger(__name__)

_LOWER = re.compile(r'[a-z]')
_UPPER = re.compile(r'[A-Z]')
_DIGIT = re.compile(r'[0-9]')
_OTHER = re.compile(r'[^a-zA-Z0-9]')


@dataclass(frozen=True)
class StrengthResult:
    """Strength of one secret."""
    score: int
    label: str
    entropy_bits: float
    style: str = ""

    def to_dict(self) -> dict:
        return {
            'score': self.score,
            'label': self.label,
            'entropy_bits': self.entropy_bits,
            'style': self.style,
        }


@dataclass(frozen=True)
class Tier:
    label: str
    style: str


# =============================================================================
# Entropy Estimates
# =============================================================================

def character_space(text: str, min_symbol_space: int = 10) -> int:
    """Size of the character space the classes present in ``text`` span."""
    space = 0
    if _LOWER.search(text):
        space += 26
    if _UPPER.search(text):
        space += 26
    if _DIGIT.search(text):
        space += 10
    others = set(_OTHER.findall(text))
    if others:
        space += max(len(others), min_symbol_space)
    return space


def string_entropy(text: str, min_symbol_space: int = 10) -> float:
    """``len(text) * log2(space)``; 0.0 for an empty string."""
    space = character_space(text, min_symbol_space)
    if space <= 1:
        return 0.0
    return len(text) * math.log2(space)


def _extras_entropy(options: GenerationOptions) -> float:
    bits = 0.0
    if options.num_digits > 0:
        bits += options.num_digits * math.log2(10)
    symbols = options.symbol_set
    if options.num_symbols > 0 and symbols:
        bits += options.num_symbols * math.log2(len(symbols))
    return bits


def options_entropy(options: GenerationOptions, word_pool_size: int = 0) -> float:
    """
    Estimate entropy from the options alone.

    ``word_pool_size`` is the number of distinct words the selected
    categories hold; only word mode uses it.
    """
    mode = options.generation_mode

    if mode is GenerationMode.PRONOUNCEABLE:
        per_syllable = require_setting(f"strength.syllable_bits.{options.complexity.value}")
        bits = options.syllables * per_syllable + _extras_entropy(options)
        if options.capitalize:
            bits += 1
        return bits

    if mode is GenerationMode.RANDOM_CHARS:
        pool = 0
        if options.include_lowercase:
            pool += 26
        if options.include_uppercase:
            pool += 26
        if options.include_digits:
            pool += 10
        if options.include_symbols:
            pool += len(options.symbol_set)
        if pool > 0 and options.length > 0:
            return options.length * math.log2(pool)
        return 0.0

    bits = 0.0
    if options.num_words > 0 and word_pool_size > 1:
        bits += options.num_words * math.log2(word_pool_size)
    if options.capitalize and options.num_words > 0:
        bits += options.num_words
    return bits + _extras_entropy(options)


# =============================================================================
# Scorer
# =============================================================================

def _load_tiers() -> List[Tier]:
    return [Tier(label=t['label'], style=t.get('style', '')) for t in require_setting("strength.tiers")]


class StrengthScorer:
    """
    Entropy-based strength scoring with an optional result cache.

    Parameters
    ----------
    cache : BoundedCache, optional
        Memoizes results by string (or by options when scoring without one).
    word_pool_size : callable, optional
        ``f(selected_categories) -> int``; needed only for word-mode
        estimates without a string.
    thresholds : sequence of float, optional
        Tier boundaries, strictly increasing; from app.yaml by default.
    """

    def __init__(self,
                 cache: Optional[BoundedCache] = None,
                 word_pool_size: Optional[Callable[[frozenset], int]] = None,
                 thresholds: Optional[Sequence[float]] = None,
                 tiers: Optional[Sequence[Tier]] = None):
        self.cache = cache
        self.word_pool_size = word_pool_size
        self.thresholds = list(thresholds if thresholds is not None
                               else require_setting("strength.thresholds"))
        self.tiers = list(tiers if tiers is not None else _load_tiers())
        if any(a >= b for a, b in zip(self.thresholds, self.thresholds[1:])):
            raise ValueError("strength.thresholds must be strictly increasing")
        if len(self.tiers) != len(self.thresholds) + 1:
            raise ValueError(
                f"Need {len(self.thresholds) + 1} strength tiers for "
                f"{len(self.thresholds)} thresholds, got {len(self.tiers)}"
            )
        self.sentinel = Tier(label=require_setting("strength.sentinel_label"),
                             style=require_setting("strength.sentinel_style"))
        self.min_symbol_space = require_setting("strength.min_symbol_space")
        self.round_digits = require_setting("strength.round_digits")

    def tier_for(self, entropy: float) -> int:
        """Tier index for ``entropy``; a value equal to a threshold goes up."""
        return bisect_right(self.thresholds, entropy)

    def result_for(self, entropy: float) -> StrengthResult:
        index = self.tier_for(entropy)
        tier = self.tiers[index]
        return StrengthResult(
            score=index,
            label=tier.label,
            entropy_bits=round(entropy, self.round_digits),
            style=tier.style,
        )

    def entropy(self, produced: str, options: GenerationOptions) -> float:
        bits = string_entropy(produced or '', self.min_symbol_space)
        if bits > 0:
            return bits
        pool_size = 0
        if options.generation_mode is GenerationMode.WORDS and self.word_pool_size is not None:
            pool_size = self.word_pool_size(options.selected_categories)
        logger.debug("No string to inspect, estimating from options")
        return options_entropy(options, pool_size)

    def score(self, produced: str, options: GenerationOptions) -> StrengthResult:
        """Score ``produced``; an error sentinel scores 0 with the '-' label."""
        if is_sentinel(produced):
            return StrengthResult(score=0, label=self.sentinel.label,
                                  entropy_bits=0.0, style=self.sentinel.style)

        def compute():
            return self.result_for(self.entropy(produced, options))

        if self.cache is None:
            return compute()
        key = ('string', produced) if produced else ('options', options)
        return self.cache.get_or_compute(key, compute)


__all__ = [
    "StrengthResult",
    "StrengthScorer",
    "Tier",
    "character_space",
    "string_entropy",
    "options_entropy",
]
