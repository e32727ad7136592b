#!/usr/bin/env python3
"""
Generation Options
==================
The single value object a caller hands to the engine.

Every field left as ``None`` is filled from the ``defaults`` section of
``app.yaml``. Instances are frozen and hashable, so they can key caches.

Usage:
    from memphrase.options import GenerationOptions, GenerationMode

    opts = GenerationOptions(num_words=3, separator=".", capitalize=False)
    pronounceable = GenerationOptions(generation_mode="pronounceable", syllables=6)
"""

from __future__ import annotations

from dataclasses import dataclass, fields, replace
from enum import Enum
from typing import Any, Iterable, Optional

from memphrase.settings import get_setting, require_setting


class GenerationMode(Enum):
    """Which generator produces the core of the secret."""
    WORDS = "words"
    PRONOUNCEABLE = "pronounceable"
    RANDOM_CHARS = "randomChars"


class SymbolPosition(Enum):
    """Where digits/symbols go relative to the core."""
    APPEND = "append"
    PREPEND = "prepend"
    INTERSPERSED = "interspersed"


class CharGrouping(Enum):
    """Whether digits and symbols travel as one block or two."""
    TOGETHER = "together"
    SEPARATE = "separate"


class Complexity(Enum):
    """Phoneme table size for pronounceable mode."""
    SIMPLE = "simple"
    BALANCED = "balanced"
    COMPLEX = "complex"


# camelCase keys used by saved browser settings -> field names
_KEY_ALIASES = {
    "generationMode": "generation_mode",
    "numWords": "num_words",
    "numDigits": "num_digits",
    "numSymbols": "num_symbols",
    "numSymPosition": "num_sym_position",
    "charGrouping": "char_grouping",
    "selectedCategories": "selected_categories",
    "customSymbols": "custom_symbols",
    "pronounceableSyllables": "syllables",
    "pronounceableComplexity": "complexity",
    "randomPasswordLength": "length",
    "randomIncludeLowercase": "include_lowercase",
    "randomIncludeUppercase": "include_uppercase",
    "randomIncludeNumbers": "include_digits",
    "randomIncludeSymbols": "include_symbols",
}

_ENUM_FIELDS = {
    "generation_mode": GenerationMode,
    "num_sym_position": SymbolPosition,
    "char_grouping": CharGrouping,
    "complexity": Complexity,
}

_COUNT_FIELDS = ("num_words", "num_digits", "num_symbols", "length")
_BOOL_FIELDS = (
    "capitalize",
    "include_lowercase",
    "include_uppercase",
    "include_digits",
    "include_symbols",
)


def _normalize_symbols(value: Any) -> Optional[tuple]:
    if value is None:
        return None
    seen = []
    for ch in "".join(str(v) for v in value):
        if ch not in seen:
            seen.append(ch)
    return tuple(seen) or None


@dataclass(frozen=True)
class GenerationOptions:
    """Immutable request for one generated secret."""
    # common
    generation_mode: Optional[GenerationMode] = None
    num_digits: Optional[int] = None
    num_symbols: Optional[int] = None
    num_sym_position: Optional[SymbolPosition] = None
    char_grouping: Optional[CharGrouping] = None
    capitalize: Optional[bool] = None
    custom_symbols: Optional[tuple] = None

    # words mode
    num_words: Optional[int] = None
    separator: Optional[str] = None
    selected_categories: Optional[frozenset] = None

    # pronounceable mode
    syllables: Optional[int] = None
    complexity: Optional[Complexity] = None

    # randomChars mode
    length: Optional[int] = None
    include_lowercase: Optional[bool] = None
    include_uppercase: Optional[bool] = None
    include_digits: Optional[bool] = None
    include_symbols: Optional[bool] = None

    def __post_init__(self):
        defaults = get_setting("defaults", {}) or {}

        def _set(name, value):
            object.__setattr__(self, name, value)

        for f in fields(self):
            if getattr(self, f.name) is None and f.name != "custom_symbols":
                if f.name not in defaults:
                    raise ValueError(f"defaults.{f.name} must be set in app.yaml")
                _set(f.name, defaults[f.name])

        for name, enum_cls in _ENUM_FIELDS.items():
            value = getattr(self, name)
            if not isinstance(value, enum_cls):
                _set(name, enum_cls(value))

        for name in _COUNT_FIELDS:
            _set(name, max(0, int(getattr(self, name))))
        for name in _BOOL_FIELDS:
            _set(name, bool(getattr(self, name)))

        low = require_setting("pronounceable.min_syllables")
        high = require_setting("pronounceable.max_syllables")
        _set("syllables", min(high, max(low, int(self.syllables))))

        _set("separator", str(self.separator))
        categories = self.selected_categories
        if isinstance(categories, str):
            categories = [categories]
        _set("selected_categories", frozenset(str(c) for c in categories))
        _set("custom_symbols", _normalize_symbols(self.custom_symbols))

    @property
    def symbol_set(self) -> str:
        """Active symbol alphabet: custom symbols if given, else the default table."""
        if self.custom_symbols:
            return "".join(self.custom_symbols)
        return require_setting("symbols.default")

    def evolve(self, **changes) -> "GenerationOptions":
        """Return a copy with ``changes`` applied; camelCase keys are accepted."""
        changes = {_KEY_ALIASES.get(key, key): value for key, value in changes.items()}
        return replace(self, **changes)

    def to_dict(self) -> dict:
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            if isinstance(value, Enum):
                value = value.value
            elif isinstance(value, frozenset):
                value = sorted(value)
            elif isinstance(value, tuple):
                value = list(value)
            data[f.name] = value
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "GenerationOptions":
        """
        Build options from a plain mapping.

        Accepts field names as well as the camelCase keys of saved browser
        settings (``numWords``, ``randomPasswordLength``, ...). Unknown keys
        are ignored.
        """
        known = {f.name for f in fields(cls)}
        kwargs = {}
        for key, value in data.items():
            name = _KEY_ALIASES.get(key, key)
            if name in known:
                kwargs[name] = value
        return cls(**kwargs)


def default_categories() -> Iterable[str]:
    return tuple(get_setting("defaults.selected_categories", []) or [])


__all__ = [
    "GenerationOptions",
    "GenerationMode",
    "SymbolPosition",
    "CharGrouping",
    "Complexity",
    "default_categories",
]
