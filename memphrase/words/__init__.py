#!/usr/bin/env python3
"""
Category Taxonomy
=================
Two-level word taxonomy: grammatical role -> leaf word list.

The structure (which leaves exist, and which role each belongs to) is read
once from ``categories.yaml``. The word lists themselves are loaded lazily,
one YAML file per leaf, the first time a leaf is asked for.

Usage:
    from memphrase.words import load_taxonomy

    taxonomy = load_taxonomy()
    taxonomy.role_of("Animals")          # "Nouns"
    taxonomy.words("Colors")             # ('amber', 'azure', ...)
    taxonomy.resolve(["Adjectives"])     # every adjective leaf
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import Future, ThreadPoolExecutor
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import yaml

from memphrase.settings import require_setting, resolve_path

logger = logging.getLogger(__name__)

ADJECTIVES = "Adjectives"
NOUNS = "Nouns"
VERBS = "Verbs"
ROLES = (ADJECTIVES, NOUNS, VERBS)


# =============================================================================
# Data Classes
# =============================================================================

@dataclass(frozen=True)
class CategoryNode:
    """A role (with children) or a leaf category (with words)."""
    name: str
    words: Optional[Tuple[str, ...]] = None
    children: Optional[Tuple["CategoryNode", ...]] = None
    role: Optional[str] = None

    def __post_init__(self):
        if (self.words is None) == (self.children is None):
            raise ValueError(
                f"category '{self.name}' must have exactly one of words/children"
            )

    @property
    def is_leaf(self) -> bool:
        return self.words is not None


# =============================================================================
# Word List Loader
# =============================================================================

class WordListLoader:
    """
    Thread-safe lazy loader for leaf word lists.

    Each list is read at most once. Concurrent requests for a list that is
    still being read wait on the same in-flight future instead of reading
    the file again.
    """

    def __init__(self, sources: Dict[str, Path], max_workers: Optional[int] = None):
        self._sources = dict(sources)
        self._max_workers = max_workers
        self._cache: Dict[str, Tuple[str, ...]] = {}
        self._in_flight: Dict[str, Future] = {}
        self._lock = threading.Lock()

    def load_words(self, name: str) -> Tuple[str, ...]:
        """Return the words of leaf ``name``; unknown names give ``()``."""
        if name not in self._sources:
            logger.debug("Unknown word category: %s", name)
            return ()

        with self._lock:
            cached = self._cache.get(name)
            if cached is not None:
                return cached
            future = self._in_flight.get(name)
            owner = future is None
            if owner:
                future = Future()
                self._in_flight[name] = future

        if not owner:
            return future.result()

        try:
            words = self._read(name)
            with self._lock:
                self._cache[name] = words
        except BaseException as exc:
            # waiters must be released even on KeyboardInterrupt/SystemExit
            future.set_exception(exc)
            raise
        finally:
            with self._lock:
                self._in_flight.pop(name, None)

        future.set_result(words)
        return words

    def _read(self, name: str) -> Tuple[str, ...]:
        path = self._sources[name]
        if not path.exists():
            raise FileNotFoundError(f"Word list for '{name}' not found: {path}")
        with open(path, 'r', encoding='utf-8') as f:
            data = yaml.safe_load(f) or {}
        raw = data.get('words') if isinstance(data, dict) else data
        if not isinstance(raw, list):
            raise ValueError(f"{path}: expected a 'words' list")
        words = tuple(str(w).strip().lower() for w in raw if str(w).strip())
        logger.debug("Loaded %d words for %s", len(words), name)
        return words

    def preload(self, names: Iterable[str]) -> None:
        """Load several lists concurrently."""
        names = [n for n in names if n in self._sources and not self.is_loaded(n)]
        if not names:
            return
        workers = self._max_workers or require_setting("words.preload_workers")
        with ThreadPoolExecutor(max_workers=workers) as executor:
            for future in [executor.submit(self.load_words, n) for n in names]:
                future.result()

    def is_loaded(self, name: str) -> bool:
        with self._lock:
            return name in self._cache

    def is_loading(self, name: str) -> bool:
        with self._lock:
            return name in self._in_flight

    def loading_progress(self, names: Iterable[str]) -> dict:
        """Loaded/total counts for ``names`` (for progress display)."""
        names = list(names)
        loaded = sum(1 for n in names if self.is_loaded(n))
        total = len(names)
        return {
            'loaded': loaded,
            'total': total,
            'percentage': round(loaded / total * 100) if total else 100,
        }

    def clear(self) -> None:
        with self._lock:
            self._cache.clear()


# =============================================================================
# Taxonomy
# =============================================================================

class Taxonomy:
    """
    Read-only category tree.

    Each leaf records its parent role, so role lookups are a dict access.
    Selecting a role name stands for all of that role's leaves.
    """

    def __init__(self, structure: Dict[str, List[str]], loader: WordListLoader):
        self._loader = loader
        self._leaves_by_role: Dict[str, Tuple[str, ...]] = {}
        self._role_of: Dict[str, str] = {}

        for role, leaves in structure.items():
            if role not in ROLES:
                raise ValueError(f"Unknown role '{role}' (expected one of {', '.join(ROLES)})")
            for leaf in leaves:
                if leaf in ROLES:
                    raise ValueError(f"Leaf category may not reuse role name '{leaf}'")
                if leaf in self._role_of:
                    raise ValueError(f"Leaf category '{leaf}' listed under more than one role")
                self._role_of[leaf] = role
            self._leaves_by_role[role] = tuple(leaves)

        for role in ROLES:
            self._leaves_by_role.setdefault(role, ())

    @property
    def loader(self) -> WordListLoader:
        return self._loader

    @property
    def roles(self) -> Tuple[str, ...]:
        return ROLES

    def leaf_names(self) -> List[str]:
        return [leaf for role in ROLES for leaf in self._leaves_by_role[role]]

    def leaves_of(self, role: str) -> Tuple[str, ...]:
        return self._leaves_by_role.get(role, ())

    def role_of(self, name: str) -> Optional[str]:
        """Parent role of a leaf, or None for unknown names and roles."""
        return self._role_of.get(name)

    def is_role(self, name: str) -> bool:
        return name in self._leaves_by_role

    def words(self, name: str) -> Tuple[str, ...]:
        """Words of one leaf (empty for unknown names)."""
        if name not in self._role_of:
            return ()
        return self._loader.load_words(name)

    def resolve(self, names: Iterable[str]) -> Tuple[str, ...]:
        """
        Expand requested names into known leaves, in taxonomy order.

        Role names expand to all their leaves; unknown names are dropped.
        """
        wanted = set()
        for name in names:
            if self.is_role(name):
                wanted.update(self._leaves_by_role[name])
            elif name in self._role_of:
                wanted.add(name)
            else:
                logger.debug("Ignoring unknown category: %s", name)
        return tuple(leaf for leaf in self.leaf_names() if leaf in wanted)

    def get_category(self, name: str) -> Optional[CategoryNode]:
        """Node for a role or leaf name, or None."""
        if self.is_role(name):
            children = tuple(self.get_category(leaf) for leaf in self._leaves_by_role[name])
            return CategoryNode(name=name, children=children)
        role = self._role_of.get(name)
        if role is None:
            return None
        return CategoryNode(name=name, words=self.words(name), role=role)

    def categories(self) -> List[CategoryNode]:
        """The full tree (loads every word list)."""
        return [self.get_category(role) for role in ROLES]


# =============================================================================
# Loader Functions
# =============================================================================

def _load_structure(path: Path) -> Dict[str, List[str]]:
    if not path.exists():
        raise FileNotFoundError(f"Category taxonomy not found: {path}")
    with open(path, 'r', encoding='utf-8') as f:
        raw = yaml.safe_load(f) or {}
    if not isinstance(raw, dict):
        raise ValueError(f"{path}: expected a mapping of role -> leaf categories")
    return raw


@lru_cache(maxsize=1)
def load_taxonomy() -> Taxonomy:
    """Load the bundled taxonomy (structure now, word lists on demand)."""
    taxonomy_path = resolve_path(require_setting("words.taxonomy_file"))
    lists_dir = resolve_path(require_setting("words.lists_dir"))

    raw = _load_structure(taxonomy_path)
    structure: Dict[str, List[str]] = {}
    sources: Dict[str, Path] = {}
    for role, leaves in raw.items():
        leaves = leaves or {}
        structure[role] = list(leaves.keys())
        for leaf, filename in leaves.items():
            sources[leaf] = lists_dir / filename

    return Taxonomy(structure, WordListLoader(sources))


__all__ = [
    'ADJECTIVES',
    'NOUNS',
    'VERBS',
    'ROLES',
    'CategoryNode',
    'WordListLoader',
    'Taxonomy',
    'load_taxonomy',
]
