"""Tests for per-entry relevance scoring."""

import pytest

from buzzword_translator.config.settings import MatchWeights
from buzzword_translator.exceptions import EntryScoringError
from buzzword_translator.search.matcher import (
    EntryMatcher,
    fuzzy_similarity,
    levenshtein_distance,
)
from buzzword_translator.search.models import (
    DictionaryEntry,
    MatchType,
    SecondaryMeaning,
)


@pytest.fixture
def matcher():
    """Create EntryMatcher with default weights."""
    return EntryMatcher(MatchWeights())


@pytest.fixture
def synergy():
    """Entry with a phrase and four keywords."""
    return DictionaryEntry(
        phrase="synergy",
        translation="working together effectively",
        keywords=("teamwork", "collaboration", "cooperation", "together"),
        category="collaboration",
    )


def score(matcher, entry, query):
    return matcher.score(entry, query, query.split())


class TestLevenshteinDistance:
    """Test cases for edit distance."""

    def test_classic_example(self):
        assert levenshtein_distance("kitten", "sitting") == 3

    def test_identical_strings(self):
        assert levenshtein_distance("synergy", "synergy") == 0

    def test_case_insensitive(self):
        assert levenshtein_distance("SYNERGY", "synergy") == 0

    def test_empty_strings(self):
        """Distance to an empty string is the other length."""
        assert levenshtein_distance("", "abc") == 3
        assert levenshtein_distance("abc", "") == 3
        assert levenshtein_distance("", "") == 0

    def test_symmetric(self):
        assert levenshtein_distance("pivot", "pilot") == levenshtein_distance(
            "pilot", "pivot"
        )

    def test_transposition_costs_two(self):
        assert levenshtein_distance("teamwork", "teamwrok") == 2


class TestFuzzySimilarity:
    """Test cases for normalized similarity with prefix bonus."""

    def test_identical_strings_capped_at_one(self):
        assert fuzzy_similarity("synergy", "synergy") == 1.0

    def test_both_empty(self):
        assert fuzzy_similarity("", "") == 1.0

    def test_prefix_bonus_applied(self):
        """Two shared leading characters add 0.2."""
        assert fuzzy_similarity("abcd", "abxy") == pytest.approx(0.7)

    def test_no_prefix_bonus(self):
        assert fuzzy_similarity("abcd", "xbcd") == pytest.approx(0.75)

    def test_custom_prefix_bonus(self):
        assert fuzzy_similarity("abcd", "abxy", prefix_bonus=0.0) == pytest.approx(
            0.5
        )

    def test_unrelated_strings(self):
        assert fuzzy_similarity("synergy", "kumquat") == pytest.approx(0.0)


class TestKeywordScore:
    """Test cases for keyword scoring."""

    def test_exact_keyword(self, matcher):
        score_value, matched = matcher.keyword_score(
            ["teamwork", "collaboration"], ["teamwork"]
        )
        assert score_value == pytest.approx(0.625)
        assert matched == ["teamwork"]

    def test_term_contained_in_keyword(self, matcher):
        score_value, _ = matcher.keyword_score(["collaboration"], ["collab"])
        assert score_value == pytest.approx(0.76)

    def test_keyword_contained_in_term(self, matcher):
        score_value, _ = matcher.keyword_score(["team"], ["teamwork"])
        assert score_value == pytest.approx(0.715)

    def test_fuzzy_keyword(self, matcher):
        """A transposed keyword still contributes half its similarity."""
        score_value, matched = matcher.keyword_score(["teamwork"], ["teamwrok"])
        assert score_value == pytest.approx(0.625)
        assert matched == ["teamwrok"]

    def test_full_match_reaches_cap(self, matcher):
        score_value, _ = matcher.keyword_score(["teamwork"], ["teamwork"])
        assert score_value == pytest.approx(0.85)

    def test_divides_by_larger_of_terms_and_keywords(self, matcher):
        score_value, matched = matcher.keyword_score(
            ["teamwork"], ["teamwork", "kumquat"]
        )
        assert score_value == pytest.approx(0.625)
        assert matched == ["teamwork"]

    def test_no_match(self, matcher):
        assert matcher.keyword_score(["teamwork"], ["kumquat"]) == (0.0, [])

    def test_no_keywords(self, matcher):
        assert matcher.keyword_score([], ["teamwork"]) == (0.0, [])

    def test_keywords_compared_case_insensitively(self, matcher):
        score_value, _ = matcher.keyword_score(["TeamWork"], ["teamwork"])
        assert score_value == pytest.approx(0.85)


class TestEntryMatcher:
    """Test cases for rule selection in EntryMatcher.score."""

    def test_exact_match(self, matcher, synergy):
        result = score(matcher, synergy, "synergy")

        assert result.match_type is MatchType.EXACT
        assert result.relevance_score == 1.0
        assert result.matched_terms == ("synergy",)
        assert result.translation == "working together effectively"

    def test_phrase_contains_query(self, matcher):
        entry = DictionaryEntry("low hanging fruit", "easy wins")
        result = score(matcher, entry, "hanging")

        assert result.match_type is MatchType.PHRASE_CONTAINS
        assert result.relevance_score == 0.95
        assert result.matched_terms == ("hanging",)

    def test_query_contains_phrase(self, matcher):
        entry = DictionaryEntry("pivot", "change direction")
        result = score(matcher, entry, "pivot now")

        assert result.match_type is MatchType.QUERY_CONTAINS
        assert result.relevance_score == 0.90
        assert result.matched_terms == ("pivot",)

    def test_trailing_typo_is_query_contains(self, matcher, synergy):
        """A query with an extra letter still contains the phrase."""
        result = score(matcher, synergy, "synergyy")

        assert result.match_type is MatchType.QUERY_CONTAINS
        assert result.relevance_score == 0.90

    def test_keyword_match(self, matcher, synergy):
        result = score(matcher, synergy, "teamwork")

        assert result.match_type is MatchType.KEYWORD
        assert result.relevance_score == pytest.approx(0.5125)
        assert result.matched_terms == ("teamwork",)

    def test_exact_beats_keyword(self, matcher):
        entry = DictionaryEntry("synergy", "working together", keywords=("synergy",))
        result = score(matcher, entry, "synergy")

        assert result.match_type is MatchType.EXACT

    def test_fuzzy_match(self, matcher):
        entry = DictionaryEntry("synergy", "working together")
        result = score(matcher, entry, "synergi")

        assert result.match_type is MatchType.FUZZY
        assert result.relevance_score == pytest.approx(0.6)
        assert result.matched_terms == ("synergi",)

    def test_fuzzy_below_cutoff(self, matcher):
        entry = DictionaryEntry("synergy", "working together")
        assert score(matcher, entry, "kumquat") is None

    def test_fuzzy_only_when_keywords_score_nothing(self, matcher, synergy):
        """A weak keyword hit wins over a strong fuzzy similarity."""
        result = score(matcher, synergy, "synergi teamwork")

        assert result.match_type is MatchType.KEYWORD

    def test_phrase_with_apostrophe_matches_exactly(self, matcher):
        """Phrases are sanitized like queries before comparison."""
        entry = DictionaryEntry("let's take this offline", "discuss privately")
        result = score(matcher, entry, "lets take this offline")

        assert result.match_type is MatchType.EXACT

    def test_custom_weights(self, synergy):
        matcher = EntryMatcher(MatchWeights(exact=0.99))
        assert score(matcher, synergy, "synergy").relevance_score == 0.99

    def test_secondary_meanings_carried(self, matcher):
        entry = DictionaryEntry(
            "bandwidth",
            "time or capacity",
            secondary_meanings=(SecondaryMeaning("network throughput"),),
        )
        result = score(matcher, entry, "bandwidth")

        assert result.secondary_meanings[0].translation == "network throughput"

    def test_missing_phrase_raises(self, matcher):
        entry = DictionaryEntry(phrase="", translation="nothing")

        with pytest.raises(EntryScoringError) as exc_info:
            score(matcher, entry, "synergy")

        assert exc_info.value.reason == "phrase is missing"

    def test_malformed_keywords_raise(self, matcher):
        entry = DictionaryEntry("synergy", "working together", keywords=None)

        with pytest.raises(EntryScoringError):
            score(matcher, entry, "kumquat")
