"""Ranking of dictionary entries for a normalized query.

The ranker runs the matcher over every candidate entry, keeps results above
the relevance threshold, orders them and truncates to the top-K. The
dictionary is small, so a linear scan per query is intended.
"""

from functools import cmp_to_key
from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..config.logging import get_logger
from ..config.settings import SearchConfig
from ..exceptions import EntryScoringError
from .matcher import EntryMatcher
from .models import DictionaryEntry, MatchResult, MatchType
from .query_processor import match_key

logger = get_logger(__name__)


class RelevanceRanker:
    """Scores, filters, orders and truncates matches for a query."""

    def __init__(
        self,
        entries: Sequence[DictionaryEntry],
        config: SearchConfig,
        matcher: Optional[EntryMatcher] = None,
    ):
        """Initialize the ranker.

        Args:
            entries: Dictionary entries, shared read-only
            config: Search configuration with ranking parameters
            matcher: Entry matcher (built from ``config.weights`` if omitted)
        """
        self.entries = entries
        self.config = config
        self.matcher = matcher or EntryMatcher(config.weights)
        self._compare_key = cmp_to_key(self._compare)
        self._charsets = [self._entry_charset(entry) for entry in entries]

    @staticmethod
    def _entry_charset(entry: DictionaryEntry) -> Optional[FrozenSet[str]]:
        """Characters appearing in the phrase or keywords of an entry.

        None marks an entry whose fields cannot be read; it is always handed
        to the matcher, which reports it.
        """
        try:
            chars = set(match_key(entry.phrase))
            for keyword in entry.keywords:
                chars.update(keyword.lower())
        except (AttributeError, TypeError):
            return None
        return frozenset(chars)

    def candidates(self, normalized_query: str) -> List[DictionaryEntry]:
        """Entries sharing at least one character with the query.

        Any rule of the matcher needs a shared substring between the query and
        the phrase or a keyword, and a single character is the shortest such
        substring, so this never drops an entry that could score.
        """
        query_chars = set(normalized_query)
        return [
            entry
            for entry, charset in zip(self.entries, self._charsets)
            if charset is None or not query_chars.isdisjoint(charset)
        ]

    def rank(
        self, normalized_query: str, query_terms: Sequence[str]
    ) -> Tuple[MatchResult, ...]:
        """Rank dictionary entries for a query.

        Args:
            normalized_query: Sanitized, lower-cased, trimmed query
            query_terms: Whitespace-separated terms of the query

        Returns:
            Up to ``max_results`` results, most relevant first
        """
        if not normalized_query or not query_terms:
            return ()

        results: List[MatchResult] = []
        for entry in self.candidates(normalized_query):
            try:
                result = self.matcher.score(entry, normalized_query, query_terms)
            except EntryScoringError as e:
                logger.warning(
                    "Skipping entry that could not be scored",
                    phrase=e.details.get("phrase"),
                    reason=e.reason,
                )
                continue

            if result is not None and result.relevance_score > self.config.relevance_threshold:
                results.append(result)

        results.sort(key=self._compare_key)
        return tuple(results[: self.config.max_results])

    def _compare(self, a: MatchResult, b: MatchResult) -> int:
        """Ordering: score (with tolerance), exact, phraseContains, length."""
        score_diff = b.relevance_score - a.relevance_score
        if abs(score_diff) > self.config.tie_tolerance:
            return -1 if score_diff < 0 else 1

        for match_type in (MatchType.EXACT, MatchType.PHRASE_CONTAINS):
            a_is = a.match_type is match_type
            b_is = b.match_type is match_type
            if a_is != b_is:
                return -1 if a_is else 1

        return len(a.phrase) - len(b.phrase)
