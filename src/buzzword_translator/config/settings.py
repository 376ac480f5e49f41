"""Application configuration settings."""

from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings

from ..exceptions import ConfigurationError


class LoggingConfig(BaseSettings):
    """Logging configuration settings."""

    level: str = Field(default="WARNING", description="Log level")
    file_path: Optional[str] = Field(default=None, description="Log file path")
    json_format: bool = Field(default=True, description="Use JSON log format")
    enable_performance: bool = Field(
        default=True, description="Enable performance logging"
    )

    class Config:
        env_prefix = "LOG_"


class MatchWeights(BaseSettings):
    """Scores and cutoffs used when matching one entry against a query."""

    exact: float = Field(default=1.0, description="Score for an exact phrase match")
    phrase_contains: float = Field(
        default=0.95, description="Score when the phrase contains the query"
    )
    query_contains: float = Field(
        default=0.90, description="Score when the query contains the phrase"
    )

    keyword_exact: float = Field(default=1.0, description="Keyword equals term")
    keyword_contains_term: float = Field(
        default=0.8, description="Keyword contains term"
    )
    term_contains_keyword: float = Field(
        default=0.7, description="Term contains keyword"
    )
    keyword_fuzzy_cutoff: float = Field(
        default=0.6, description="Minimum keyword/term similarity"
    )
    keyword_fuzzy_factor: float = Field(
        default=0.5, description="Multiplier for fuzzy keyword similarity"
    )
    keyword_base: float = Field(default=0.4, description="Keyword score floor")
    keyword_span: float = Field(
        default=0.45, description="Keyword score range above the floor"
    )
    keyword_cap: float = Field(default=0.85, description="Keyword score ceiling")

    fuzzy_cutoff: float = Field(
        default=0.3, description="Minimum phrase/query similarity"
    )
    fuzzy_factor: float = Field(
        default=0.6, description="Multiplier for phrase/query similarity"
    )
    prefix_bonus: float = Field(
        default=0.1, description="Similarity bonus per shared leading character"
    )

    class Config:
        env_prefix = "SEARCH_WEIGHTS_"


class SearchConfig(BaseSettings):
    """Search configuration settings."""

    min_query_length: int = Field(default=2, description="Shortest valid query")
    max_query_length: int = Field(default=100, description="Longest valid query")
    relevance_threshold: float = Field(
        default=0.1, description="Results must score strictly above this"
    )
    tie_tolerance: float = Field(
        default=0.01, description="Scores closer than this are treated as tied"
    )
    max_results: int = Field(default=10, description="Top-K result limit")

    cache_enabled: bool = Field(default=True, description="Enable result cache")
    cache_size: int = Field(default=100, description="Cached query capacity")

    slow_search_ms: float = Field(
        default=100.0, description="Latency target per search in milliseconds"
    )
    performance_history: int = Field(
        default=20, description="Number of recent search timings kept"
    )

    weights: MatchWeights = Field(default_factory=MatchWeights)

    class Config:
        env_prefix = "SEARCH_"


DEFAULT_POPULAR_PHRASES = [
    "synergy",
    "pivot",
    "leverage",
    "bandwidth",
    "actionable insights",
    "game changer",
    "scalable",
    "streamline",
    "optimize",
    "paradigm shift",
]

DEFAULT_NO_RESULTS_PHRASES = [
    "synergy",
    "pivot",
    "low hanging fruit",
    "circle back",
    "leverage",
    "bandwidth",
    "deep dive",
    "move the needle",
]

DEFAULT_EXAMPLE_PHRASES = [
    "synergy",
    "pivot",
    "low hanging fruit",
    "circle back",
    "deep dive",
    "move the needle",
    "think outside the box",
    "leverage",
    "bandwidth",
    "actionable insights",
    "game changer",
    "touch base",
]


class SuggestionConfig(BaseSettings):
    """Suggestion generator configuration."""

    max_suggestions: int = Field(default=6, description="Suggestions per call")
    per_category: int = Field(
        default=2, description="Related suggestions taken per result category"
    )
    max_length_difference: int = Field(
        default=3, description="Keyword/query length slack for partial matches"
    )
    example_count: int = Field(
        default=8, description="Example phrases shown in the browsing view"
    )
    popular_phrases: List[str] = Field(
        default_factory=lambda: list(DEFAULT_POPULAR_PHRASES),
        description="Fallback phrases for related suggestions",
    )
    example_phrases: List[str] = Field(
        default_factory=lambda: list(DEFAULT_EXAMPLE_PHRASES),
        description="Pool of phrases for the browsing view",
    )
    no_results_phrases: List[str] = Field(
        default_factory=lambda: list(DEFAULT_NO_RESULTS_PHRASES),
        description="Popular terms offered when a search finds nothing or is rejected",
    )

    class Config:
        env_prefix = "SUGGEST_"


class DictionaryConfig(BaseSettings):
    """Dictionary loading configuration."""

    path: Optional[str] = Field(
        default=None, description="Dictionary file (bundled data when unset)"
    )
    max_invalid_ratio: float = Field(
        default=0.5, description="Refuse to load above this share of bad entries"
    )

    class Config:
        env_prefix = "DICTIONARY_"


class Settings(BaseSettings):
    """Main application settings."""

    # Sub-configurations
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)
    suggestions: SuggestionConfig = Field(default_factory=SuggestionConfig)
    dictionary: DictionaryConfig = Field(default_factory=DictionaryConfig)

    debug: bool = Field(default=False, description="Enable debug mode")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        extra = "ignore"

    def get_dictionary_path(self) -> Optional[Path]:
        """Get the configured dictionary file path, if any."""
        if self.dictionary.path:
            return Path(self.dictionary.path)
        return None


def load_settings(
    config_file: Optional[Union[str, Path]] = None,
    overrides: Optional[Dict[str, Any]] = None,
) -> Settings:
    """Build settings from environment, an optional YAML file and overrides.

    Values from the YAML file replace environment defaults section by section;
    ``overrides`` are applied last.

    Args:
        config_file: Optional YAML configuration file
        overrides: Optional mapping of section -> values

    Returns:
        Settings: Validated settings

    Raises:
        ConfigurationError: If the file cannot be read or values are invalid
    """
    data: Dict[str, Any] = {}

    if config_file:
        path = Path(config_file)
        try:
            with open(path, "r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            raise ConfigurationError(
                f"Invalid configuration file: {e}", {"path": str(path)}
            ) from e
        if not isinstance(loaded, dict):
            raise ConfigurationError(
                "Configuration file must contain a mapping",
                {"path": str(path), "type": type(loaded).__name__},
            )
        data.update(loaded)

    for section, values in (overrides or {}).items():
        if isinstance(values, dict) and isinstance(data.get(section), dict):
            data[section] = {**data[section], **values}
        else:
            data[section] = values

    try:
        return Settings(**data)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration values are invalid", {"errors": e.errors()}
        ) from e
