#!/usr/bin/env python3
"""
Lexical Selector
================
Turns a set of selected category names into word pools per grammatical role.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional, Tuple

from memphrase.cache import BoundedCache
from memphrase.words import ADJECTIVES, NOUNS, ROLES, VERBS, Taxonomy


@dataclass(frozen=True)
class RolePools:
    """Deduplicated words available for each role."""
    adjectives: Tuple[str, ...] = ()
    nouns: Tuple[str, ...] = ()
    verbs: Tuple[str, ...] = ()

    @property
    def union(self) -> Tuple[str, ...]:
        return _dedupe(self.adjectives + self.nouns + self.verbs)

    @property
    def is_empty(self) -> bool:
        return not (self.adjectives or self.nouns or self.verbs)


def _dedupe(words: Iterable[str]) -> Tuple[str, ...]:
    return tuple(dict.fromkeys(words))


class LexicalSelector:
    """Resolves selected categories against a taxonomy, by explicit role."""

    def __init__(self, taxonomy: Taxonomy, cache: Optional[BoundedCache] = None):
        self.taxonomy = taxonomy
        self._cache = cache

    def pool(self, role: str, selected: Iterable[str]) -> Tuple[str, ...]:
        """Union of the words of every selected leaf whose role is ``role``."""
        if role not in ROLES:
            raise ValueError(f"Unknown role '{role}'")
        selected = frozenset(selected)
        if self._cache is None:
            return self._build_pool(role, selected)
        return self._cache.get_or_compute(
            ("pool", role, selected),
            lambda: self._build_pool(role, selected),
        )

    def _build_pool(self, role: str, selected: frozenset) -> Tuple[str, ...]:
        words = []
        for leaf in self.taxonomy.resolve(selected):
            if self.taxonomy.role_of(leaf) == role:
                words.extend(self.taxonomy.words(leaf))
        return _dedupe(words)

    def pools(self, selected: Iterable[str]) -> RolePools:
        selected = frozenset(selected)
        return RolePools(
            adjectives=self.pool(ADJECTIVES, selected),
            nouns=self.pool(NOUNS, selected),
            verbs=self.pool(VERBS, selected),
        )

    def union(self, selected: Iterable[str]) -> Tuple[str, ...]:
        """All selected words regardless of role."""
        return self.pools(selected).union


__all__ = ["LexicalSelector", "RolePools"]
