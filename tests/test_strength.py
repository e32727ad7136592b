"""
Tests for the Strength Scorer
=============================
Entropy estimates, tier mapping, sentinel handling and result caching.
"""

import math
import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from memphrase.cache import BoundedCache
from memphrase.errors import NO_CATEGORIES_SELECTED, NO_CHARACTER_TYPES
from memphrase.options import GenerationOptions
from memphrase.strength import (
    StrengthResult,
    StrengthScorer,
    Tier,
    character_space,
    options_entropy,
    string_entropy,
)


@pytest.fixture
def scorer():
    return StrengthScorer()


@pytest.fixture
def options():
    return GenerationOptions()


class TestCharacterSpace:
    """Tests for class detection in the produced string."""

    @pytest.mark.parametrize("text,space", [
        ("abc", 26),
        ("ABC", 26),
        ("123", 10),
        ("aB1", 62),
        ("a!", 36),
        ("a!@#$%^&*()-+", 38),
        ("", 0),
    ])
    def test_space(self, text, space):
        assert character_space(text) == space

    def test_entropy_formula(self):
        assert string_entropy("Swift-Otter") == pytest.approx(11 * math.log2(62))

    def test_empty_string(self):
        assert string_entropy("") == 0.0

    def test_monotonic_in_length(self):
        previous = 0.0
        for n in range(1, 40):
            bits = string_entropy("aB3!" * n)
            assert bits >= previous
            previous = bits


class TestTiers:
    """Tests for threshold handling."""

    @pytest.mark.parametrize("entropy,tier", [
        (0, 0),
        (24.99, 0),
        (25, 1),
        (39.9, 1),
        (40, 2),
        (59.99, 2),
        (60, 3),
        (80, 4),
        (500, 4),
    ])
    def test_half_open_intervals(self, scorer, entropy, tier):
        assert scorer.tier_for(entropy) == tier

    def test_labels_and_styles(self, scorer):
        labels = [scorer.result_for(e).label for e in (0, 30, 50, 70, 90)]
        assert labels == ["Very Weak", "Weak", "Medium", "Strong", "Very Strong"]
        assert scorer.result_for(90).style == "bright_green"

    def test_boundary_not_rounded_up(self, scorer):
        result = scorer.result_for(24.96)
        assert result.score == 0
        assert result.entropy_bits == 25.0

    def test_thresholds_must_increase(self):
        with pytest.raises(ValueError):
            StrengthScorer(thresholds=[40, 25, 60, 80])

    def test_tier_count_must_match(self):
        with pytest.raises(ValueError):
            StrengthScorer(thresholds=[25, 40], tiers=[Tier("Weak", "red")])

    def test_custom_thresholds(self):
        scorer = StrengthScorer(thresholds=[15, 22, 35, 50])
        assert scorer.result_for(30).label == "Medium"


class TestScore:
    """Tests for scoring produced strings."""

    def test_sentinels(self, scorer, options):
        for sentinel in (NO_CATEGORIES_SELECTED, NO_CHARACTER_TYPES, "Error: anything"):
            result = scorer.score(sentinel, options)
            assert result == StrengthResult(score=0, label="-", entropy_bits=0.0, style="red")

    def test_passphrase(self, scorer, options):
        result = scorer.score("Swift-Amber-Otter-Run", options)
        assert result.entropy_bits == round(21 * math.log2(62), 1)
        assert result.label == "Very Strong"

    def test_short_lowercase(self, scorer, options):
        result = scorer.score("otter", options)
        assert result.score == 0
        assert result.entropy_bits == round(5 * math.log2(26), 1)

    def test_string_wins_over_options(self, scorer):
        random_opts = GenerationOptions(generation_mode="randomChars", length=64)
        assert scorer.score("otter", random_opts).entropy_bits == round(5 * math.log2(26), 1)

    def test_to_dict(self, scorer, options):
        data = scorer.score("otter", options).to_dict()
        assert set(data) == {'score', 'label', 'entropy_bits', 'style'}


class TestFallback:
    """Tests for estimates made from options alone."""

    def test_words(self):
        scorer = StrengthScorer(word_pool_size=lambda selected: 1024)
        opts = GenerationOptions(num_words=4, capitalize=True, num_digits=0, num_symbols=0)
        result = scorer.score("", opts)
        assert result.entropy_bits == 44.0
        assert result.label == "Medium"

    def test_words_with_extras(self):
        opts = GenerationOptions(num_words=3, capitalize=False, num_digits=2,
                                 num_symbols=1, custom_symbols="!#$%")
        expected = 3 * math.log2(512) + 2 * math.log2(10) + 2
        assert options_entropy(opts, word_pool_size=512) == pytest.approx(expected)

    def test_words_without_pool(self):
        opts = GenerationOptions(num_words=4, capitalize=True, num_digits=0, num_symbols=0)
        assert options_entropy(opts, word_pool_size=0) == 4

    def test_pronounceable(self, scorer):
        opts = GenerationOptions(generation_mode="pronounceable", syllables=4, complexity="balanced",
                                 capitalize=False, num_digits=0, num_symbols=0)
        assert scorer.score("", opts).entropy_bits == 42.2

    def test_pronounceable_extras_and_caps(self):
        opts = GenerationOptions(generation_mode="pronounceable", syllables=2, complexity="simple",
                                 capitalize=True, num_digits=1, num_symbols=0)
        assert options_entropy(opts) == pytest.approx(2 * 8.35 + math.log2(10) + 1)

    def test_random_chars(self, scorer):
        opts = GenerationOptions(generation_mode="randomChars", length=16)
        expected = 16 * math.log2(26 + 26 + 10 + 13)
        assert scorer.score("", opts).entropy_bits == round(expected, 1)

    def test_random_chars_nothing_enabled(self, scorer):
        opts = GenerationOptions(generation_mode="randomChars", include_lowercase=False,
                                 include_uppercase=False, include_digits=False, include_symbols=False)
        result = scorer.score("", opts)
        assert result.entropy_bits == 0.0
        assert result.label == "Very Weak"


class TestCaching:
    """Tests for result memoization."""

    def test_string_results_cached(self, options):
        cache = BoundedCache(capacity=10)
        scorer = StrengthScorer(cache=cache)
        first = scorer.score("otter", options)
        second = scorer.score("otter", options.evolve(num_words=2))
        assert first == second
        assert cache.hits == 1

    def test_option_results_keyed_by_options(self):
        cache = BoundedCache(capacity=10)
        scorer = StrengthScorer(cache=cache)
        short = GenerationOptions(generation_mode="randomChars", length=8)
        long = GenerationOptions(generation_mode="randomChars", length=32)
        assert scorer.score("", short).entropy_bits < scorer.score("", long).entropy_bits
        assert len(cache) == 2

    def test_sentinels_not_cached(self, options):
        cache = BoundedCache(capacity=10)
        scorer = StrengthScorer(cache=cache)
        scorer.score(NO_CHARACTER_TYPES, options)
        assert len(cache) == 0
