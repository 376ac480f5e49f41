"""Configuration package for the buzzword translator."""

from .settings import (
    DictionaryConfig,
    LoggingConfig,
    MatchWeights,
    SearchConfig,
    Settings,
    SuggestionConfig,
    load_settings,
)

__all__ = [
    "DictionaryConfig",
    "LoggingConfig",
    "MatchWeights",
    "SearchConfig",
    "Settings",
    "SuggestionConfig",
    "load_settings",
]
