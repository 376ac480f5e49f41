"""High-level search engine interface for the buzzword translator.

This module provides :class:`BuzzwordSearchEngine`, the single entry point a
presentation layer uses: it validates queries, consults the result cache,
ranks dictionary entries and proposes suggestions. The engine performs no I/O
and keeps no state between calls other than the bounded result cache.
"""

import random
import time
from typing import Any, Dict, List, Optional, Sequence

from ..config.logging import get_logger, log_search, truncate_for_log
from ..config.settings import SearchConfig, Settings, SuggestionConfig
from ..exceptions import DictionaryLoadError
from .cache import SearchResultCache
from .dictionary import (
    Dictionary,
    build_dictionary,
    load_default_dictionary,
    load_dictionary_file,
)
from .matcher import EntryMatcher
from .models import DictionaryEntry, MatchResult, SearchOutcome, SearchStatus, Suggestion
from .performance_monitor import SearchPerformanceMonitor
from .query_processor import QueryProcessor, normalize_query, split_terms
from .ranker import RelevanceRanker
from .suggestions import SuggestionGenerator

logger = get_logger(__name__)

UNEXPECTED_ERROR_MESSAGE = "An unexpected error occurred. Please try again."


class BuzzwordSearchEngine:
    """Search, suggestion and random-pick operations over one dictionary."""

    def __init__(
        self,
        dictionary: Dictionary,
        config: Optional[SearchConfig] = None,
        suggestion_config: Optional[SuggestionConfig] = None,
        rng: Optional[random.Random] = None,
        cache: Optional[SearchResultCache] = None,
    ):
        """Initialize the search engine.

        Args:
            dictionary: Validated dictionary, shared read-only
            config: Search configuration (thresholds, limits, cache)
            suggestion_config: Suggestion configuration
            rng: Random source for random picks and suggestion fill
            cache: Result cache; built from ``config`` when omitted

        Raises:
            DictionaryLoadError: If the dictionary holds no entries
        """
        if dictionary is None or len(dictionary) == 0:
            raise DictionaryLoadError("Dictionary has no usable entries")

        self.dictionary = dictionary
        self.config = config or SearchConfig()
        self.rng = rng or random.Random()

        self.query_processor = QueryProcessor(self.config)
        self.ranker = RelevanceRanker(
            dictionary, self.config, EntryMatcher(self.config.weights)
        )
        self.suggestions = SuggestionGenerator(
            dictionary, suggestion_config or SuggestionConfig(), self.rng
        )
        self.performance = SearchPerformanceMonitor(self.config)

        if cache is not None:
            self.cache: Optional[SearchResultCache] = cache
        elif self.config.cache_enabled:
            self.cache = SearchResultCache(self.config.cache_size)
        else:
            self.cache = None

    @classmethod
    def from_settings(
        cls, settings: Settings, rng: Optional[random.Random] = None
    ) -> "BuzzwordSearchEngine":
        """Build an engine from settings, loading the configured dictionary."""
        path = settings.get_dictionary_path()
        ratio = settings.dictionary.max_invalid_ratio
        if path is not None:
            dictionary = load_dictionary_file(path, max_invalid_ratio=ratio)
        else:
            dictionary = load_default_dictionary(max_invalid_ratio=ratio)
        return cls(dictionary, settings.search, settings.suggestions, rng=rng)

    @classmethod
    def from_raw(
        cls,
        raw_entries: Any,
        config: Optional[SearchConfig] = None,
        suggestion_config: Optional[SuggestionConfig] = None,
        rng: Optional[random.Random] = None,
        max_invalid_ratio: float = 0.5,
    ) -> "BuzzwordSearchEngine":
        """Validate raw entries and build an engine over them."""
        dictionary = build_dictionary(raw_entries, max_invalid_ratio=max_invalid_ratio)
        return cls(dictionary, config, suggestion_config, rng=rng)

    def search(self, raw_query: Any) -> SearchOutcome:
        """Search the dictionary for a raw, user-typed query.

        Args:
            raw_query: Text as typed by the user

        Returns:
            SearchOutcome: ``empty`` for a blank query, ``invalid`` with a
            reason for a rejected query, ``ok`` with ranked results (possibly
            none), or ``error`` when an unexpected fault occurred
        """
        start = time.perf_counter()
        validation = self.query_processor.validate(raw_query)

        if validation.status is SearchStatus.EMPTY:
            return SearchOutcome(status=SearchStatus.EMPTY)

        if validation.status is SearchStatus.INVALID:
            return SearchOutcome(
                status=SearchStatus.INVALID,
                query=validation.sanitized,
                reason=validation.reason,
                hint=self.query_processor.hint_for(validation.reason),
            )

        normalized = normalize_query(validation.sanitized)
        cache_hit = False

        try:
            results = self.cache.get(normalized) if self.cache is not None else None
            if results is not None:
                cache_hit = True
            else:
                results = self.ranker.rank(normalized, split_terms(normalized))
                if self.cache is not None:
                    self.cache.put(normalized, results)
        except Exception:
            logger.exception(
                "Search failed unexpectedly", query=truncate_for_log(normalized)
            )
            return SearchOutcome(
                status=SearchStatus.ERROR,
                query=validation.sanitized,
                message=UNEXPECTED_ERROR_MESSAGE,
            )

        duration_ms = (time.perf_counter() - start) * 1000
        self.performance.record(duration_ms, cache_hit=cache_hit)
        log_search(
            logger,
            normalized,
            SearchStatus.OK.value,
            len(results),
            cache_hit=cache_hit,
            duration_ms=round(duration_ms, 3),
        )

        return SearchOutcome(
            status=SearchStatus.OK,
            query=validation.sanitized,
            results=results,
            cache_hit=cache_hit,
            duration_ms=duration_ms,
        )

    def suggest_similar(self, raw_query: Any) -> List[Suggestion]:
        """Suggest similar phrases for a query that found nothing (at most 6)."""
        return self.suggestions.similar(raw_query)

    def suggest_related(
        self, results: Sequence[MatchResult], raw_query: Any
    ) -> List[Suggestion]:
        """Suggest related phrases to show next to results (at most 6)."""
        return self.suggestions.related(results, raw_query)

    def random_entry(self) -> DictionaryEntry:
        """Uniformly random dictionary entry."""
        return self.rng.choice(self.dictionary.entries)

    def example_phrases(self, count: Optional[int] = None) -> List[str]:
        """Example phrases for the browsing view shown on an empty query."""
        return self.suggestions.examples(count)

    def popular_phrases(self) -> List[str]:
        """Popular terms shown when a search finds nothing or is rejected."""
        return self.suggestions.popular()

    def clear_cache(self) -> None:
        if self.cache is not None:
            self.cache.clear()

    def stats(self) -> Dict[str, Any]:
        """Dictionary, cache and latency statistics."""
        return {
            "entries": len(self.dictionary),
            "dropped_entries": self.dictionary.dropped,
            "categories": len(self.dictionary.categories),
            "cache": self.cache.stats() if self.cache is not None else None,
            "performance": self.performance.summary(),
        }

