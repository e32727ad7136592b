#!/usr/bin/env python3
"""
Phoneme Configuration Loader
============================
Loads the phoneme tables used by the pronounceable generator.

Usage:
    from memphrase.generators.phonemes import load_pronounceable

    tables = load_pronounceable()
    tables.consonants_for("balanced")
"""

import re
import yaml
from pathlib import Path
from typing import Dict, List, Tuple, Any
from dataclasses import dataclass
from functools import lru_cache

from memphrase.options import Complexity
from memphrase.settings import require_setting, resolve_path


# =============================================================================
# Data Classes for Typed Access
# =============================================================================

@dataclass(frozen=True)
class PronounceableConfig:
    """Container for the pronounceable phoneme tables."""
    consonants: Dict[str, List[str]]
    vowels: Dict[str, Dict[str, float]]
    ending_consonants: Dict[str, List[str]]
    shapes: Dict[str, Dict[str, float]]
    avoid_onsets: Tuple[str, ...]
    vowel_followers: Dict[str, List[str]]
    awkward_triples: Tuple["re.Pattern", ...]
    connectors: Tuple[str, ...]

    def consonants_for(self, complexity: Complexity) -> List[str]:
        return self.consonants[Complexity(complexity).value]

    def ending_consonants_for(self, complexity: Complexity) -> List[str]:
        return self.ending_consonants[Complexity(complexity).value]

    def weighted_vowels(self, complexity: Complexity) -> List[Tuple[str, float]]:
        """(vowel, weight) pairs for weighted selection."""
        return list(self.vowels[Complexity(complexity).value].items())

    def shape_weights(self, position: str) -> List[Tuple[str, float]]:
        return list(self.shapes[position].items())

    def is_awkward(self, window: str) -> bool:
        return any(p.search(window) for p in self.awkward_triples)


# =============================================================================
# Loader Functions
# =============================================================================

def _load_yaml(path: Path) -> Dict[str, Any]:
    """Load a phoneme YAML file."""
    if not path.exists():
        raise FileNotFoundError(f"Phoneme config not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        return yaml.safe_load(f) or {}


def _require(raw: Dict[str, Any], key: str) -> Any:
    value = raw.get(key)
    if value is None:
        raise ValueError(f"pronounceable.yaml missing '{key}'")
    return value


@lru_cache(maxsize=1)
def load_pronounceable() -> PronounceableConfig:
    """Load the pronounceable phoneme tables."""
    raw = _load_yaml(resolve_path(require_setting("pronounceable.phonemes_file")))

    tables = {}
    for key in ('consonants', 'vowels', 'ending_consonants'):
        table = _require(raw, key)
        missing = [c.value for c in Complexity if not table.get(c.value)]
        if missing:
            raise ValueError(f"pronounceable.yaml '{key}' missing levels: {', '.join(missing)}")
        tables[key] = table

    shapes = _require(raw, 'shapes')
    for position in ('start', 'middle', 'end'):
        if not shapes.get(position):
            raise ValueError(f"pronounceable.yaml missing 'shapes.{position}'")

    return PronounceableConfig(
        consonants=tables['consonants'],
        vowels={level: {v: float(w) for v, w in table.items()}
                for level, table in tables['vowels'].items()},
        ending_consonants=tables['ending_consonants'],
        shapes=shapes,
        avoid_onsets=tuple(raw.get('avoid_onsets', [])),
        vowel_followers=_require(raw, 'vowel_followers'),
        awkward_triples=tuple(re.compile(p) for p in _require(raw, 'awkward_triples')),
        connectors=tuple(_require(raw, 'connectors')),
    )


def reload_configs():
    """Clear cached phoneme tables (e.g. after editing the YAML)."""
    load_pronounceable.cache_clear()


__all__ = [
    'PronounceableConfig',
    'load_pronounceable',
    'reload_configs',
]
