"""Unit tests for query sanitization and validation."""

import pytest

from buzzword_translator.config.settings import SearchConfig
from buzzword_translator.search.models import InvalidReason, SearchStatus
from buzzword_translator.search.query_processor import (
    QueryProcessor,
    match_key,
    normalize_query,
    sanitize_input,
    split_terms,
)


@pytest.fixture
def query_processor():
    """Create query processor instance for testing."""
    return QueryProcessor(SearchConfig())


class TestSanitizeInput:
    """Test cases for input sanitization."""

    def test_strips_markup_characters(self):
        assert (
            sanitize_input("<script>alert(1)</script>synergy")
            == "scriptalert(1)/scriptsynergy"
        )

    def test_strips_quotes_and_ampersand(self):
        assert sanitize_input("\"deep\" & 'dive'") == "deep dive"

    def test_collapses_whitespace(self):
        assert sanitize_input("  circle \t\n  back  ") == "circle back"

    def test_strips_control_characters(self):
        assert sanitize_input("syn\x00ergy\x7f") == "synergy"

    @pytest.mark.parametrize("separator", ["\x1c", "\x1d", "\x1e", "\x1f"])
    def test_strips_separator_control_characters(self, separator):
        assert sanitize_input(f"syn{separator}ergy") == "synergy"

    def test_collapses_unicode_spaces(self):
        assert sanitize_input("deep\u00a0 \u2003dive\ufeff") == "deep dive"

    def test_non_string_input(self):
        assert sanitize_input(None) == ""
        assert sanitize_input(42) == ""

    def test_idempotent(self):
        once = sanitize_input(" <b>low  hanging</b> fruit ")
        assert sanitize_input(once) == once


class TestNormalization:
    """Test cases for normalization helpers."""

    def test_normalize_query(self):
        assert normalize_query("  Deep Dive ") == "deep dive"

    def test_split_terms(self):
        assert split_terms("move the needle") == ["move", "the", "needle"]
        assert split_terms("") == []

    def test_match_key(self):
        assert match_key("Let's Take This Offline") == "lets take this offline"


class TestQueryProcessor:
    """Test cases for query validation."""

    @pytest.mark.parametrize("raw", ["", "   ", "<>", None, "\x00\x01"])
    def test_empty(self, query_processor, raw):
        validation = query_processor.validate(raw)

        assert validation.status is SearchStatus.EMPTY
        assert validation.reason is None
        assert not validation.is_valid

    def test_too_short(self, query_processor):
        validation = query_processor.validate("a")

        assert validation.status is SearchStatus.INVALID
        assert validation.reason is InvalidReason.TOO_SHORT

    def test_too_long(self, query_processor):
        validation = query_processor.validate("a" * 101)

        assert validation.status is SearchStatus.INVALID
        assert validation.reason is InvalidReason.TOO_LONG

    def test_maximum_length_accepted(self, query_processor):
        assert query_processor.validate("a" * 100).is_valid

    @pytest.mark.parametrize("raw", ["123", "!!", "42 %"])
    def test_no_letters(self, query_processor, raw):
        validation = query_processor.validate(raw)

        assert validation.status is SearchStatus.INVALID
        assert validation.reason is InvalidReason.NO_LETTERS

    def test_length_checked_after_sanitization(self, query_processor):
        """Stripped characters do not count toward the length."""
        validation = query_processor.validate("<a>")

        assert validation.reason is InvalidReason.TOO_SHORT
        assert validation.sanitized == "a"

    def test_valid_query(self, query_processor):
        validation = query_processor.validate("  Synergy ")

        assert validation.is_valid
        assert validation.sanitized == "Synergy"

    def test_custom_limits(self):
        processor = QueryProcessor(SearchConfig(min_query_length=4))

        assert processor.validate("abc").reason is InvalidReason.TOO_SHORT
        assert processor.hint_for(InvalidReason.TOO_SHORT) == (
            "Please enter at least 4 characters to search"
        )

    def test_hints(self, query_processor):
        assert query_processor.hint_for(InvalidReason.TOO_SHORT) == (
            "Please enter at least 2 characters to search"
        )
        assert "too long" in query_processor.hint_for(InvalidReason.TOO_LONG)
        assert "letters" in query_processor.hint_for(InvalidReason.NO_LETTERS)
