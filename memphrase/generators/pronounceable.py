#!/usr/bin/env python3
"""
Syllable Generator
==================
Builds pronounceable letter strings from the phoneme tables in
``phonemes/pronounceable.yaml``.

A request for N syllables becomes ceil(N/2) pseudo-words. Each syllable
takes a weighted shape (CV, CVC, V, VC) that depends on where it sits in
its pseudo-word, then a cleanup pass repairs clusters that read badly.

Usage:
    gen = SyllableGenerator(rng=RandomSource(seed=7))
    gen.generate(4, "balanced")   # e.g. 'taberlomik'
"""

import logging
import math
import re
from typing import List, Optional

from memphrase.options import Complexity
from memphrase.generators.phonemes import PronounceableConfig, load_pronounceable
from memphrase.generators.randomness import RandomSource, get_rng
from memphrase.settings import require_setting

logger = logging.getLogger(__name__)

SIMPLE_VOWELS = ('a', 'e', 'i', 'o', 'u')

_VOWEL_END = re.compile(r'[aeiou]$')
_VOWEL_CLUSTER_END = re.compile(r'[aeiou]{2,}$')

# Cleanup rules, applied in order
_H_BETWEEN_VOWELS = re.compile(r'([aeiou])h(?=[aeiou])')
_LEADING_H = re.compile(r'^h(?=[aeiou])')
_REPEATED_Y = re.compile(r'yy+')
_Y_BETWEEN_VOWELS = re.compile(r'([aeiou])y(?=[aeiou])')
_VOWEL_RUN = re.compile(r'[aeiou]{3,}')
_CONSONANT_RUN = re.compile(r'([bcdfghjklmnpqrstvwxyz])\1{2,}')


def cleanup_word(word: str) -> str:
    """
    Repair awkward letter clusters.

    - ``qq`` becomes ``qu``
    - ``h`` between vowels, or before a vowel at the start, is dropped
    - ``yy``... becomes ``y``, and ``y`` between vowels is dropped
    - a run of 3+ vowels keeps its first two letters
    - a consonant repeated 3+ times is cut to two
    """
    word = word.replace('qq', 'qu')
    word = _H_BETWEEN_VOWELS.sub(r'\1', word)
    word = _LEADING_H.sub('', word)
    word = _REPEATED_Y.sub('y', word)
    word = _Y_BETWEEN_VOWELS.sub(r'\1', word)
    # dropping an h or y can join two vowel runs, so keep collapsing
    while _VOWEL_RUN.search(word):
        word = _VOWEL_RUN.sub(lambda m: m.group(0)[:2], word)
    word = _CONSONANT_RUN.sub(r'\1\1', word)
    return word


def split_syllables(syllables: int) -> List[int]:
    """Distribute ``syllables`` over ceil(n/2) pseudo-words, as evenly as possible."""
    if syllables <= 0:
        return []
    words = math.ceil(syllables / 2)
    base, extra = divmod(syllables, words)
    return [base + 1 if i < extra else base for i in range(words)]


def syllable_position(index: int, count: int) -> str:
    if index == 0:
        return 'start'
    if index == count - 1:
        return 'end'
    return 'middle'


class SyllableGenerator:
    """
    Pronounceable string generator.

    Parameters
    ----------
    rng : RandomSource, optional
        Source of randomness.
    tables : PronounceableConfig, optional
        Phoneme tables; loaded from YAML when omitted.
    """

    def __init__(self,
                 rng: Optional[RandomSource] = None,
                 tables: Optional[PronounceableConfig] = None):
        self.rng = rng or get_rng()
        self.tables = tables or load_pronounceable()
        self.connector_probability = require_setting("pronounceable.connector_probability")
        self.simple_vowel_after_vowel = require_setting("pronounceable.simple_vowel_after_vowel")
        self.min_syllables = require_setting("pronounceable.min_syllables")
        self.max_syllables = require_setting("pronounceable.max_syllables")

    # -------------------------------------------------------------------------
    # Letters
    # -------------------------------------------------------------------------

    def onset(self, complexity: Complexity) -> str:
        consonants = [c for c in self.tables.consonants_for(complexity)
                      if c not in self.tables.avoid_onsets]
        return self.rng.choice(consonants)

    def coda(self, complexity: Complexity) -> str:
        return self.rng.choice(self.tables.ending_consonants_for(complexity))

    def select_vowel(self, context: str, complexity: Complexity) -> str:
        """
        Pick a vowel that reads well after ``context``.

        ``context`` is everything generated so far in the current pseudo-word;
        only its last two letters matter.
        """
        complexity = Complexity(complexity)

        if _VOWEL_CLUSTER_END.search(context):
            return self.rng.choice(SIMPLE_VOWELS)

        if _VOWEL_END.search(context):
            if complexity is Complexity.SIMPLE or self.rng.random() < self.simple_vowel_after_vowel:
                followers = self.tables.vowel_followers.get(context[-1])
                return self.rng.choice(followers or SIMPLE_VOWELS)

        if context.endswith('q'):
            return 'u'

        candidates = self.tables.weighted_vowels(complexity)
        tail = context[-2:]
        if len(tail) == 2:
            candidates = [(v, w) for v, w in candidates if not self.tables.is_awkward(tail + v)]

        if not candidates:
            logger.debug("No vowel fits after %r, using a plain vowel", tail)
            return self.rng.choice(SIMPLE_VOWELS)
        return self.rng.weighted_choice(candidates)

    # -------------------------------------------------------------------------
    # Syllables and words
    # -------------------------------------------------------------------------

    def generate_syllable(self, complexity: Complexity, position: str, context: str = '') -> str:
        """One syllable for ``position`` ('start', 'middle' or 'end')."""
        shape = self.rng.weighted_choice(self.tables.shape_weights(position))
        syllable = ''
        for i, slot in enumerate(shape):
            if slot == 'C':
                syllable += self.onset(complexity) if i == 0 else self.coda(complexity)
            else:
                syllable += self.select_vowel(context + syllable, complexity)
        return syllable

    def generate_word(self, syllables: int, complexity: Complexity) -> str:
        word = ''
        for i in range(syllables):
            word += self.generate_syllable(complexity, syllable_position(i, syllables), word)
        return cleanup_word(word)

    def generate(self, syllables: int, complexity: Complexity = Complexity.BALANCED) -> str:
        """
        Lowercase pronounceable string of ``syllables`` syllables.

        The count is clamped to the configured bounds (2..8 by default).
        """
        complexity = Complexity(complexity)
        syllables = min(max(syllables, self.min_syllables), self.max_syllables)

        counts = split_syllables(syllables)
        parts = []
        for index, count in enumerate(counts):
            parts.append(self.generate_word(count, complexity))
            is_last = index == len(counts) - 1
            if (not is_last and complexity is not Complexity.SIMPLE
                    and self.rng.random() < self.connector_probability):
                parts.append(self.rng.choice(self.tables.connectors))

        # pseudo-word joins can create new clusters
        return cleanup_word(''.join(parts))


__all__ = [
    "SIMPLE_VOWELS",
    "SyllableGenerator",
    "cleanup_word",
    "split_syllables",
]
