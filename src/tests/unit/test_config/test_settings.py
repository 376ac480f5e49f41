"""Tests for application settings."""

from pathlib import Path

import pytest

from buzzword_translator.config.settings import (
    DEFAULT_EXAMPLE_PHRASES,
    DEFAULT_NO_RESULTS_PHRASES,
    DEFAULT_POPULAR_PHRASES,
    MatchWeights,
    SearchConfig,
    Settings,
    load_settings,
)
from buzzword_translator.exceptions import ConfigurationError


class TestDefaults:
    """Test cases for default configuration values."""

    def test_search_defaults(self):
        config = SearchConfig()

        assert config.min_query_length == 2
        assert config.max_query_length == 100
        assert config.relevance_threshold == 0.1
        assert config.tie_tolerance == 0.01
        assert config.max_results == 10
        assert config.cache_size == 100

    def test_match_weights_defaults(self):
        weights = MatchWeights()

        assert (weights.exact, weights.phrase_contains, weights.query_contains) == (
            1.0,
            0.95,
            0.90,
        )
        assert (weights.keyword_base, weights.keyword_span, weights.keyword_cap) == (
            0.4,
            0.45,
            0.85,
        )
        assert weights.fuzzy_cutoff == 0.3
        assert weights.fuzzy_factor == 0.6

    def test_suggestion_defaults(self):
        settings = Settings()

        assert settings.suggestions.max_suggestions == 6
        assert settings.suggestions.popular_phrases == DEFAULT_POPULAR_PHRASES
        assert settings.suggestions.example_phrases == DEFAULT_EXAMPLE_PHRASES
        assert settings.suggestions.no_results_phrases == DEFAULT_NO_RESULTS_PHRASES
        assert settings.get_dictionary_path() is None

    def test_environment_override(self, monkeypatch):
        monkeypatch.setenv("SEARCH_MAX_RESULTS", "5")
        monkeypatch.setenv("SUGGEST_MAX_SUGGESTIONS", "3")

        settings = Settings()

        assert settings.search.max_results == 5
        assert settings.suggestions.max_suggestions == 3


class TestLoadSettings:
    """Test cases for loading settings from YAML."""

    def test_without_file(self):
        assert load_settings().search.max_results == 10

    def test_yaml_sections(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "search:\n"
            "  max_results: 3\n"
            "  weights:\n"
            "    exact: 0.9\n"
            "suggestions:\n"
            "  max_suggestions: 4\n",
            encoding="utf-8",
        )

        settings = load_settings(config_file)

        assert settings.search.max_results == 3
        assert settings.search.weights.exact == 0.9
        assert settings.search.weights.phrase_contains == 0.95
        assert settings.suggestions.max_suggestions == 4

    def test_overrides_merge_with_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text(
            "dictionary:\n  max_invalid_ratio: 0.2\n", encoding="utf-8"
        )

        settings = load_settings(config_file, {"dictionary": {"path": "words.json"}})

        assert settings.dictionary.max_invalid_ratio == 0.2
        assert settings.get_dictionary_path() == Path("words.json")

    def test_empty_file(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("", encoding="utf-8")

        assert load_settings(config_file).search.max_results == 10

    def test_missing_file(self, tmp_path):
        with pytest.raises(ConfigurationError):
            load_settings(tmp_path / "missing.yaml")

    def test_invalid_yaml(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("search: [unclosed", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(config_file)

        assert "Invalid configuration file" in exc_info.value.message

    def test_not_a_mapping(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("- search\n- suggestions\n", encoding="utf-8")

        with pytest.raises(ConfigurationError):
            load_settings(config_file)

    def test_invalid_values(self, tmp_path):
        config_file = tmp_path / "config.yaml"
        config_file.write_text("search:\n  max_results: lots\n", encoding="utf-8")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(config_file)

        assert exc_info.value.to_dict()["error_type"] == "ConfigurationError"
