"""Pytest configuration and shared fixtures."""

import random
from typing import Any, Dict, List

import pytest

from buzzword_translator.config.settings import SearchConfig, SuggestionConfig
from buzzword_translator.search import BuzzwordSearchEngine, build_dictionary


@pytest.fixture
def sample_entries() -> List[Dict[str, Any]]:
    """Provide a small raw dictionary covering several categories."""
    return [
        {
            "phrase": "synergy",
            "translation": "working together effectively",
            "keywords": ["teamwork", "collaboration", "cooperation", "together"],
            "category": "collaboration",
            "alternatives": ["collaboration", "teamwork"],
            "context": "Used when teams are expected to produce more together",
        },
        {
            "phrase": "circle back",
            "translation": "discuss this later",
            "keywords": ["follow up", "revisit", "return"],
            "category": "communication",
        },
        {
            "phrase": "touch base",
            "translation": "talk briefly",
            "keywords": ["contact", "check in", "meet"],
            "category": "communication",
        },
        {
            "phrase": "deep dive",
            "translation": "detailed analysis",
            "keywords": ["analysis", "investigate", "research"],
            "category": "analysis",
        },
        {
            "phrase": "low hanging fruit",
            "translation": "easy wins",
            "keywords": ["easy", "quick win", "simple"],
            "category": "strategy",
        },
        {
            "phrase": "pivot",
            "translation": "change direction",
            "keywords": ["change", "shift", "redirect"],
            "category": "strategy",
        },
        {
            "phrase": "move the needle",
            "translation": "make a noticeable difference",
            "keywords": ["impact", "progress", "difference"],
            "category": "strategy",
        },
        {
            "phrase": "bandwidth",
            "translation": "time or capacity",
            "keywords": ["capacity", "availability"],
            "category": "resources",
            "multipleMeanings": [
                {
                    "translation": "network throughput",
                    "context": "In a technical discussion",
                }
            ],
        },
    ]


@pytest.fixture
def dictionary(sample_entries):
    """Validated dictionary built from the sample entries."""
    return build_dictionary(sample_entries, source="fixture")


@pytest.fixture
def search_config() -> SearchConfig:
    """Default search configuration."""
    return SearchConfig()


@pytest.fixture
def suggestion_config() -> SuggestionConfig:
    """Default suggestion configuration."""
    return SuggestionConfig()


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(42)


@pytest.fixture
def engine(dictionary, search_config, suggestion_config, rng):
    """Search engine over the sample dictionary."""
    return BuzzwordSearchEngine(
        dictionary, search_config, suggestion_config, rng=rng
    )
