"""
Tests for Word Selection
========================
Tests for the lexical selector and the pattern composer.
"""

import sys
from pathlib import Path

import pytest

# Ensure repo root is on path
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from memphrase.cache import BoundedCache
from memphrase.generators import (
    LexicalSelector,
    PatternComposer,
    RandomSource,
    RolePools,
    describe_pattern,
    normalize_case,
)
from memphrase.words import ADJECTIVES, NOUNS, VERBS, load_taxonomy

ADJ = ("swift", "amber", "quiet")
NOUN = ("otter", "badger")
VERB = ("run", "jump")


@pytest.fixture
def pools():
    return RolePools(adjectives=ADJ, nouns=NOUN, verbs=VERB)


@pytest.fixture
def composer():
    return PatternComposer(rng=RandomSource(seed=42), distinct_attempts=50)


class TestRolePools:
    """Tests for RolePools helpers."""

    def test_union_dedupes_in_order(self):
        pools = RolePools(adjectives=("orange", "red"), nouns=("orange", "otter"))
        assert pools.union == ("orange", "red", "otter")

    def test_is_empty(self):
        assert RolePools().is_empty
        assert not RolePools(verbs=("run",)).is_empty


class TestLexicalSelector:
    """Tests for role pools built from the bundled taxonomy."""

    @pytest.fixture
    def selector(self):
        return LexicalSelector(load_taxonomy())

    def test_pool_by_role(self, selector):
        taxonomy = load_taxonomy()
        assert selector.pool(NOUNS, ["Animals", "Colors"]) == taxonomy.words("Animals")
        assert selector.pool(ADJECTIVES, ["Animals"]) == ()

    def test_role_name_selects_all_leaves(self, selector):
        taxonomy = load_taxonomy()
        adjectives = set(selector.pool(ADJECTIVES, [ADJECTIVES]))
        assert set(taxonomy.words("Colors")) <= adjectives
        assert set(taxonomy.words("Emotions")) <= adjectives

    def test_unknown_names_contribute_nothing(self, selector):
        assert selector.pool(VERBS, ["Dinosaurs"]) == ()
        assert selector.pools(["Dinosaurs"]).is_empty

    def test_pool_is_deduplicated(self, selector):
        words = selector.pool(NOUNS, [NOUNS])
        assert len(words) == len(set(words))

    def test_unknown_role(self, selector):
        with pytest.raises(ValueError):
            selector.pool("Adverbs", ["Animals"])

    def test_pools_are_cached(self):
        cache = BoundedCache(capacity=10)
        selector = LexicalSelector(load_taxonomy(), cache=cache)
        selector.pool(NOUNS, ["Animals"])
        selector.pool(NOUNS, ["Animals"])
        assert cache.hits == 1


class TestMemorableWords:
    """Tests for word choice helpers."""

    def test_prefers_memorable_length(self, composer):
        words = ["hippopotamus", "ox", "cat"]
        assert all(composer.memorable_word(words) == "cat" for _ in range(20))

    def test_falls_back_to_any_word(self, composer):
        assert composer.memorable_word(["hippopotamus"]) == "hippopotamus"

    def test_pick_distinct(self, composer):
        picked = composer.pick_distinct(["a", "b", "c", "d"], 3)
        assert len(set(picked)) == 3

    def test_pick_distinct_repeats_when_exhausted(self, composer):
        picked = composer.pick_distinct(["a", "b"], 3)
        assert len(picked) == 3
        assert set(picked) == {"a", "b"}

    def test_two_adjectives_distinct(self, composer):
        for _ in range(30):
            first, second = composer.two_adjectives(ADJ)
            assert first != second

    def test_two_adjectives_single_pool_repeats(self, composer):
        assert composer.two_adjectives(["swift"]) == ["swift", "swift"]


class TestCompose:
    """Tests for template selection and fallbacks."""

    def test_one_word_prefers_noun(self, composer, pools):
        assert composer.compose(1, pools)[0] in NOUN

    def test_one_word_falls_back_to_adjective(self, composer):
        pools = RolePools(adjectives=ADJ, verbs=VERB)
        assert composer.compose(1, pools)[0] in ADJ

    def test_one_word_falls_back_to_verb(self, composer):
        assert composer.compose(1, RolePools(verbs=VERB))[0] in VERB

    def test_two_words(self, composer, pools):
        adjective, noun = composer.compose(2, pools)
        assert adjective in ADJ
        assert noun in NOUN

    def test_two_words_shared_word_not_repeated(self, composer):
        """A word listed under both roles is not used twice."""
        pools = RolePools(adjectives=("lemon", "olive"), nouns=("lemon", "peach"))
        for _ in range(50):
            adjective, noun = composer.compose(2, pools)
            assert adjective != noun

    def test_three_and_four_words_shared_word_not_repeated(self, composer):
        pools = RolePools(adjectives=("lemon", "olive", "amber"),
                          nouns=("lemon", "olive", "peach"), verbs=("run", "jump"))
        for num_words in (3, 4):
            for _ in range(50):
                words = composer.compose(num_words, pools)
                assert len(set(words)) == num_words

    def test_distinct_word_gives_up_when_exhausted(self, composer):
        assert composer.distinct_word(("lemon",), ["lemon"]) == "lemon"

    def test_two_words_without_pair(self, composer):
        words = composer.compose(2, RolePools(verbs=("run", "jump", "swim")))
        assert len(set(words)) == 2

    def test_three_words(self, composer, pools):
        for _ in range(20):
            first, second, noun = composer.compose(3, pools)
            assert first in ADJ and second in ADJ
            assert first != second
            assert noun in NOUN

    def test_three_words_single_adjective(self, composer):
        pools = RolePools(adjectives=("swift",), nouns=NOUN, verbs=VERB)
        adjective, noun, verb = composer.compose(3, pools)
        assert adjective == "swift"
        assert noun in NOUN
        assert verb in VERB

    def test_three_words_from_union(self, composer):
        words = composer.compose(3, RolePools(nouns=("otter", "badger", "heron", "lynx")))
        assert len(set(words)) == 3

    def test_four_words(self, composer, pools):
        first, second, noun, verb = composer.compose(4, pools)
        assert first in ADJ and second in ADJ and first != second
        assert noun in NOUN
        assert verb in VERB

    def test_four_words_round_robin(self, composer):
        words = composer.compose(4, RolePools(nouns=NOUN, verbs=VERB))
        assert [w in NOUN for w in words] == [True, False, True, False]
        assert [w in VERB for w in words] == [False, True, False, True]

    def test_five_plus_apportions(self, composer, pools):
        words = composer.compose(6, pools)
        assert len(words) == 6
        assert all(w in ADJ for w in words[:3])
        assert all(w in NOUN for w in words[3:5])
        assert words[5] in VERB

    def test_five_plus_fills_shortfall(self, composer, pools):
        words = composer.compose(10, pools)
        assert len(words) == 10
        assert set(words) == set(pools.union)

    def test_five_plus_with_missing_role(self, composer):
        words = composer.compose(5, RolePools(nouns=NOUN))
        assert len(words) == 5
        assert set(words) <= set(NOUN)

    def test_nothing_to_choose(self, composer, pools):
        assert composer.compose(0, pools) == []
        assert composer.compose(3, RolePools()) == []


class TestDescribePattern:
    """Tests for template descriptions."""

    @pytest.mark.parametrize("num_words,pools,expected", [
        (1, RolePools(nouns=NOUN), "Single descriptive word"),
        (1, RolePools(adjectives=ADJ), "Single word"),
        (2, RolePools(adjectives=ADJ, nouns=NOUN), 'Adjective + Noun (e.g., "RedCar")'),
        (2, RolePools(nouns=NOUN), "Two related words"),
        (3, RolePools(adjectives=ADJ, nouns=NOUN), 'Adjective + Adjective + Noun (e.g., "BigRedCar")'),
        (3, RolePools(adjectives=("swift",), nouns=NOUN, verbs=VERB),
         'Adjective + Noun + Verb (e.g., "BigDogRuns")'),
        (3, RolePools(nouns=NOUN), "Three related words"),
        (4, RolePools(adjectives=ADJ, nouns=NOUN, verbs=VERB), "Adjective + Adjective + Noun + Verb"),
        (4, RolePools(adjectives=ADJ, nouns=NOUN), "Four diverse words"),
        (7, RolePools(nouns=NOUN), "7 words in logical patterns"),
        (0, RolePools(nouns=NOUN), "0 words"),
    ])
    def test_descriptions(self, num_words, pools, expected):
        assert describe_pattern(num_words, pools) == expected


class TestNormalizeCase:
    """Tests for case normalization."""

    def test_capitalize(self):
        assert normalize_case("oTTer", True) == "Otter"

    def test_lower(self):
        assert normalize_case("OTTER", False) == "otter"

    def test_empty(self):
        assert normalize_case("", True) == ""
