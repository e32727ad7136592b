#!/usr/bin/env python3
"""
Memphrase - Memorable Passphrase Generator
==========================================

Generates passphrases from categorized word lists, pronounceable
syllable strings, or random-character passwords, and scores how hard the
result is to guess.

Quick Start
-----------
    from memphrase import Memphrase, GenerationOptions

    engine = Memphrase()

    # Four words, adjective-adjective-noun-verb
    secret = engine.generate(num_words=4, separator="-")

    # Pronounceable, two digits appended
    secret = engine.generate(generation_mode="pronounceable", syllables=6, num_digits=2)

    # Strength of the result
    result = engine.score(secret)
    print(result.label, result.entropy_bits)

Modules
-------
    memphrase.words      - Category taxonomy and lazy word-list loading
    memphrase.generators - Word patterns, syllables, random chars, assembler
    memphrase.strength   - Entropy estimate and strength tiers
    memphrase.options    - GenerationOptions and its enums
    memphrase.settings   - app.yaml access

CLI Usage
---------
    python -m memphrase generate -n 5
    python -m memphrase generate --mode pronounceable --syllables 6 --digits 2
    python -m memphrase score "Swift-Amber-Otter-Run"
"""

__version__ = "0.1.0"
__author__ = "Memphrase"

import logging
from typing import Iterable, Optional, Union

from .cache import BoundedCache
from .errors import NO_CATEGORIES_SELECTED, is_sentinel
from .generators import (
    Assembler,
    LexicalSelector,
    PatternComposer,
    RandomCharGenerator,
    RandomSource,
    SyllableGenerator,
    character_pool,
    describe_pattern as _describe_pools,
    get_rng,
    normalize_case,
)
from .options import (
    CharGrouping,
    Complexity,
    GenerationMode,
    GenerationOptions,
    SymbolPosition,
    default_categories,
)
from .strength import StrengthResult, StrengthScorer
from .words import Taxonomy, load_taxonomy

logger = logging.getLogger(__name__)

OptionsLike = Union[GenerationOptions, dict, None]


def _coerce_options(options: OptionsLike, overrides: dict) -> GenerationOptions:
    if options is None:
        return GenerationOptions.from_dict(overrides)
    if isinstance(options, dict):
        return GenerationOptions.from_dict({**options, **overrides})
    if overrides:
        return options.evolve(**overrides)
    return options


class Memphrase:
    """
    Main interface for generating and scoring secrets.

    Owns the taxonomy, the random source and the memoization caches, so two
    engines never share mutable state.

    Parameters
    ----------
    taxonomy : Taxonomy, optional
        Category tree; the bundled one by default.
    rng : RandomSource, optional
        Randomness for every generator. Defaults to the OS-backed source,
        or a seeded PRNG when ``seed`` is given.
    seed : int, optional
        Seed for reproducible output (tests, demos).
    cache_capacity : int, optional
        Entries per cache; ``cache.capacity`` in app.yaml by default.
    cache_policy : str, optional
        ``"fifo"`` or ``"lru"``; ``cache.policy`` in app.yaml by default.

    Examples
    --------
        >>> engine = Memphrase(seed=42)
        >>> secret = engine.generate(num_words=3, capitalize=False, separator=".")
        >>> engine.score(secret).label
    """

    def __init__(self,
                 taxonomy: Optional[Taxonomy] = None,
                 rng: Optional[RandomSource] = None,
                 seed: Optional[int] = None,
                 cache_capacity: Optional[int] = None,
                 cache_policy: Optional[str] = None):
        self._taxonomy = taxonomy or load_taxonomy()
        if rng is None:
            rng = RandomSource(seed=seed) if seed is not None else get_rng()
        self._rng = rng

        self.pool_cache = BoundedCache(cache_capacity, cache_policy)
        self.strength_cache = BoundedCache(cache_capacity, cache_policy)

        self._selector = LexicalSelector(self._taxonomy, cache=self.pool_cache)
        self._composer = PatternComposer(rng=rng)
        self._syllable_gen = None  # Lazy-loaded (reads phoneme tables)
        self._random_gen = RandomCharGenerator(rng=rng)
        self._assembler = Assembler(rng=rng)
        self._scorer = StrengthScorer(cache=self.strength_cache,
                                      word_pool_size=self._word_pool_size)

    # -------------------------------------------------------------------------
    # Properties
    # -------------------------------------------------------------------------

    @property
    def taxonomy(self) -> Taxonomy:
        return self._taxonomy

    @property
    def rng(self) -> RandomSource:
        return self._rng

    @property
    def scorer(self) -> StrengthScorer:
        return self._scorer

    def _get_syllable_gen(self) -> SyllableGenerator:
        if self._syllable_gen is None:
            self._syllable_gen = SyllableGenerator(rng=self._rng)
        return self._syllable_gen

    def _word_pool_size(self, selected: Iterable[str]) -> int:
        return len(self._selector.union(selected))

    # -------------------------------------------------------------------------
    # Generation
    # -------------------------------------------------------------------------

    def generate(self, options: OptionsLike = None, **overrides) -> str:
        """
        Generate one secret.

        Parameters
        ----------
        options : GenerationOptions or dict, optional
            Full request; any field not given comes from app.yaml defaults.
        **overrides
            Field values applied on top of ``options``.

        Returns
        -------
        str
            The secret, or an ``"Error: ..."`` sentinel when word mode has
            no categories to draw from or random mode has no characters.
        """
        options = _coerce_options(options, overrides)
        mode = options.generation_mode

        if mode is GenerationMode.RANDOM_CHARS:
            return self._generate_random(options)
        if mode is GenerationMode.PRONOUNCEABLE:
            return self._generate_pronounceable(options)
        return self._generate_words(options)

    def _generate_words(self, options: GenerationOptions) -> str:
        tokens = []
        if options.num_words > 0:
            if not options.selected_categories:
                return NO_CATEGORIES_SELECTED
            pools = self._selector.pools(options.selected_categories)
            if pools.is_empty:
                logger.debug("Selected categories %s hold no words",
                             sorted(options.selected_categories))
                return NO_CATEGORIES_SELECTED
            words = self._composer.compose(options.num_words, pools)
            tokens = [normalize_case(w, options.capitalize) for w in words]
        return self._assembler.assemble(tokens, options)

    def _generate_pronounceable(self, options: GenerationOptions) -> str:
        core = self._get_syllable_gen().generate(options.syllables, options.complexity)
        core = normalize_case(core, options.capitalize)
        return self._assembler.assemble(list(core), options, separator='')

    def _generate_random(self, options: GenerationOptions) -> str:
        pool = character_pool(
            include_lowercase=options.include_lowercase,
            include_uppercase=options.include_uppercase,
            include_digits=options.include_digits,
            symbols=options.symbol_set if options.include_symbols else '',
        )
        return self._random_gen.generate(options.length, pool)

    # -------------------------------------------------------------------------
    # Scoring and description
    # -------------------------------------------------------------------------

    def score(self, produced: str, options: OptionsLike = None, **overrides) -> StrengthResult:
        """Strength of ``produced``; options only matter when it is empty."""
        return self._scorer.score(produced, _coerce_options(options, overrides))

    def describe_pattern(self, num_words: int,
                         selected_categories: Optional[Iterable[str]] = None) -> str:
        """
        Name of the word template ``num_words`` would use.

        Deterministic; empty string when the selection holds no words.
        """
        if selected_categories is None:
            selected_categories = default_categories()
        if isinstance(selected_categories, str):
            selected_categories = [selected_categories]
        pools = self._selector.pools(selected_categories)
        if pools.is_empty:
            return ''
        return _describe_pools(num_words, pools)

    # -------------------------------------------------------------------------
    # Taxonomy helpers
    # -------------------------------------------------------------------------

    def categories(self) -> dict:
        """Role -> leaf category names."""
        return {role: list(self._taxonomy.leaves_of(role)) for role in self._taxonomy.roles}

    def preload(self, names: Optional[Iterable[str]] = None) -> None:
        """Load word lists ahead of time (all leaves by default)."""
        names = self._taxonomy.resolve(names) if names is not None else self._taxonomy.leaf_names()
        self._taxonomy.loader.preload(names)

    def loading_progress(self, names: Optional[Iterable[str]] = None) -> dict:
        names = self._taxonomy.resolve(names) if names is not None else self._taxonomy.leaf_names()
        return self._taxonomy.loader.loading_progress(names)

    def clear_caches(self) -> None:
        self.pool_cache.clear()
        self.strength_cache.clear()


# =============================================================================
# Convenience Functions
# =============================================================================

_default_engine = None


def get_engine() -> Memphrase:
    """Shared engine used by the module-level helpers."""
    global _default_engine
    if _default_engine is None:
        _default_engine = Memphrase()
    return _default_engine


def generate(options: OptionsLike = None, **overrides) -> str:
    """
    Quick generation using the default engine.

    See Memphrase.generate() for full documentation.
    """
    return get_engine().generate(options, **overrides)


def score(produced: str, options: OptionsLike = None, **overrides) -> StrengthResult:
    """Quick scoring using the default engine."""
    return get_engine().score(produced, options, **overrides)


def describe_pattern(num_words: int, selected_categories: Optional[Iterable[str]] = None) -> str:
    return get_engine().describe_pattern(num_words, selected_categories)


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Version
    '__version__',

    # Main class
    'Memphrase',
    'get_engine',

    # Options
    'GenerationOptions',
    'GenerationMode',
    'SymbolPosition',
    'CharGrouping',
    'Complexity',

    # Results
    'StrengthResult',
    'is_sentinel',

    # Convenience functions
    'generate',
    'score',
    'describe_pattern',
]
