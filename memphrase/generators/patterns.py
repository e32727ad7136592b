#!/usr/bin/env python3
"""
Pattern Composer
================
Picks words in grammatical templates that are easy to remember:

    1 word   Noun                          "Otter"
    2 words  Adjective Noun                "Swift-Otter"
    3 words  Adjective Adjective Noun      "Swift-Amber-Otter"
    4 words  Adjective Adjective Noun Verb "Swift-Amber-Otter-Dives"
    5+ words ~40% adjectives, ~40% nouns, the rest verbs

When a role has too few words, each template falls back to the next,
ending with "any distinct words from everything selected". The template
order is kept in the output; words are never reshuffled.
"""

from __future__ import annotations

import logging
import math
from typing import List, Optional, Sequence, Tuple

from memphrase.generators.lexical import RolePools
from memphrase.generators.randomness import RandomSource, get_rng
from memphrase.settings import require_setting

logger = logging.getLogger(__name__)


def normalize_case(word: str, capitalize: bool) -> str:
    """'oTTer' -> 'Otter' when capitalizing, else 'otter'."""
    if capitalize:
        return word[:1].upper() + word[1:].lower()
    return word.lower()


class PatternComposer:
    """
    Fills a word template from role pools.

    Parameters
    ----------
    rng : RandomSource, optional
        Source of randomness (defaults to the shared OS-backed one).
    memorable_range : (int, int), optional
        Word lengths preferred when a pool has any; from app.yaml by default.
    distinct_attempts : int, optional
        Re-draws allowed when a template slot repeats an earlier word.
    """

    def __init__(self,
                 rng: Optional[RandomSource] = None,
                 memorable_range: Optional[Tuple[int, int]] = None,
                 distinct_attempts: Optional[int] = None):
        self.rng = rng or get_rng()
        if memorable_range is None:
            memorable_range = (
                require_setting("words.memorable_min_length"),
                require_setting("words.memorable_max_length"),
            )
        self.min_length, self.max_length = memorable_range
        if distinct_attempts is None:
            distinct_attempts = require_setting("words.distinct_attempts")
        self.distinct_attempts = distinct_attempts
        self.adjective_share = require_setting("words.share_adjectives")
        self.noun_share = require_setting("words.share_nouns")

    # -------------------------------------------------------------------------
    # Selection helpers
    # -------------------------------------------------------------------------

    def memorable_word(self, words: Sequence[str]) -> str:
        """Random word, preferring ones of memorable length."""
        short = [w for w in words if self.min_length <= len(w) <= self.max_length]
        return self.rng.choice(short or words)

    def pick_distinct(self, words: Sequence[str], count: int) -> List[str]:
        """``count`` distinct words; repeats only once the pool runs out."""
        picked = self.rng.sample(words, count)
        while len(picked) < count:
            picked.append(self.rng.choice(words))
        return picked

    def distinct_word(self, words: Sequence[str], taken: Sequence[str]) -> str:
        """Memorable word, re-drawn a bounded number of times while it is in ``taken``."""
        word = self.memorable_word(words)
        attempts = 0
        while word in taken and attempts < self.distinct_attempts:
            word = self.memorable_word(words)
            attempts += 1
        return word

    def two_adjectives(self, adjectives: Sequence[str]) -> List[str]:
        first = self.memorable_word(adjectives)
        if len(adjectives) < 2:
            return [first, first]
        return [first, self.distinct_word(adjectives, [first])]

    def fill(self, picked: List[str], *pools: Sequence[str]) -> List[str]:
        """Append one word from each pool, avoiding words already picked."""
        for pool in pools:
            picked.append(self.distinct_word(pool, picked))
        return picked

    # -------------------------------------------------------------------------
    # Composition
    # -------------------------------------------------------------------------

    def compose(self, num_words: int, pools: RolePools) -> List[str]:
        """
        Return exactly ``num_words`` lowercase words.

        An empty list means there was nothing to choose from (or nothing
        was asked for).
        """
        union = pools.union
        if num_words <= 0 or not union:
            return []

        adjectives, nouns, verbs = pools.adjectives, pools.nouns, pools.verbs

        if num_words == 1:
            for pool in (nouns, adjectives, verbs):
                if pool:
                    return [self.memorable_word(pool)]

        if num_words == 2:
            if adjectives and nouns:
                return self.fill([], adjectives, nouns)
            logger.debug("No adjective+noun pair available, using any two words")
            return self.pick_distinct(union, 2)

        if num_words == 3:
            if len(adjectives) >= 2 and nouns:
                return self.fill(self.two_adjectives(adjectives), nouns)
            if adjectives and nouns and verbs:
                logger.debug("Too few adjectives, using adjective+noun+verb")
                return self.fill([], adjectives, nouns, verbs)
            logger.debug("No three-word template fits, using any three words")
            return self.pick_distinct(union, 3)

        if num_words == 4:
            if len(adjectives) >= 2 and nouns and verbs:
                return self.fill(self.two_adjectives(adjectives), nouns, verbs)
            logger.debug("No four-word template fits, cycling available roles")
            return self._round_robin(num_words, [adjectives, nouns, verbs])

        return self._apportion(num_words, pools)

    def _round_robin(self, num_words: int, pools: List[Sequence[str]]) -> List[str]:
        available = [p for p in pools if p]
        words = []
        while len(words) < num_words:
            words.append(self.memorable_word(available[len(words) % len(available)]))
        return words

    def _apportion(self, num_words: int, pools: RolePools) -> List[str]:
        num_adj = min(math.ceil(num_words * self.adjective_share), len(pools.adjectives))
        num_noun = min(math.ceil(num_words * self.noun_share), len(pools.nouns))
        num_verb = min(max(num_words - num_adj - num_noun, 0), len(pools.verbs))

        words = self.rng.sample(pools.adjectives, num_adj)
        words += self.rng.sample(pools.nouns, num_noun)
        words += self.rng.sample(pools.verbs, num_verb)

        union = pools.union
        while len(words) < num_words:
            unused = [w for w in union if w not in words]
            words.append(self.memorable_word(unused or union))
        return words[:num_words]


# =============================================================================
# Template Descriptions
# =============================================================================

def describe_pattern(num_words: int, pools: RolePools) -> str:
    """Human-readable name of the template ``compose`` would use."""
    adjectives, nouns, verbs = pools.adjectives, pools.nouns, pools.verbs

    if num_words == 1:
        if nouns:
            return 'Single descriptive word'
        return 'Single word'
    if num_words == 2:
        if adjectives and nouns:
            return 'Adjective + Noun (e.g., "RedCar")'
        return 'Two related words'
    if num_words == 3:
        if len(adjectives) >= 2 and nouns:
            return 'Adjective + Adjective + Noun (e.g., "BigRedCar")'
        if adjectives and nouns and verbs:
            return 'Adjective + Noun + Verb (e.g., "BigDogRuns")'
        return 'Three related words'
    if num_words == 4:
        if len(adjectives) >= 2 and nouns and verbs:
            return 'Adjective + Adjective + Noun + Verb'
        return 'Four diverse words'
    if num_words >= 5:
        return f'{num_words} words in logical patterns'
    return f'{num_words} words'


__all__ = ["PatternComposer", "describe_pattern", "normalize_case"]
