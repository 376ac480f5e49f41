"""Relevance scoring of a single dictionary entry against a query.

Rules are evaluated in order and the first one that produces a score wins:

1. exact          phrase equals the query
2. phraseContains phrase contains the query
3. queryContains  query contains the phrase
4. keyword        query terms matched against the entry keywords
5. fuzzy          edit-distance similarity between phrase and query,
                  only when rules 1-4 scored nothing

All scores and cutoffs come from :class:`MatchWeights`.
"""

from functools import lru_cache
from typing import List, Optional, Sequence, Tuple

from ..config.settings import MatchWeights
from ..exceptions import EntryScoringError
from .models import DictionaryEntry, MatchResult, MatchType
from .query_processor import match_key


def levenshtein_distance(first: str, second: str) -> int:
    """Classic dynamic-programming edit distance, case-insensitive.

    Substitution, insertion and deletion each cost 1.

    Examples:
        >>> levenshtein_distance("kitten", "sitting")
        3
        >>> levenshtein_distance("Synergy", "synergy")
        0
    """
    first = first.lower()
    second = second.lower()

    if first == second:
        return 0
    if not first:
        return len(second)
    if not second:
        return len(first)

    # Two rolling rows of the (len(second)+1) x (len(first)+1) matrix
    previous = list(range(len(first) + 1))
    for i, second_char in enumerate(second, start=1):
        current = [i] + [0] * len(first)
        for j, first_char in enumerate(first, start=1):
            if first_char == second_char:
                current[j] = previous[j - 1]
            else:
                current[j] = min(
                    previous[j - 1] + 1,  # substitution
                    current[j - 1] + 1,  # insertion
                    previous[j] + 1,  # deletion
                )
        previous = current

    return previous[-1]


def fuzzy_similarity(first: str, second: str, prefix_bonus: float = 0.1) -> float:
    """Normalized edit similarity with a bonus for a shared prefix.

    ``1 - distance / max(len)`` plus ``prefix_bonus`` for every leading
    character the two strings share, capped at 1.0.
    """
    first = first.lower()
    second = second.lower()

    max_length = max(len(first), len(second))
    if max_length == 0:
        return 1.0

    similarity = 1 - levenshtein_distance(first, second) / max_length

    bonus = 0.0
    for first_char, second_char in zip(first, second):
        if first_char != second_char:
            break
        bonus += prefix_bonus

    return min(1.0, similarity + bonus)


@lru_cache(maxsize=4096)
def _phrase_key(phrase: str) -> str:
    return match_key(phrase)


class EntryMatcher:
    """Scores dictionary entries against normalized queries."""

    def __init__(self, weights: Optional[MatchWeights] = None):
        """Initialize the matcher.

        Args:
            weights: Scores and cutoffs for each rule
        """
        self.weights = weights or MatchWeights()

    def score(
        self,
        entry: DictionaryEntry,
        normalized_query: str,
        query_terms: Sequence[str],
    ) -> Optional[MatchResult]:
        """Score one entry against one query.

        Args:
            entry: Dictionary entry to score
            normalized_query: Sanitized, lower-cased, trimmed query
            query_terms: Whitespace-separated terms of ``normalized_query``

        Returns:
            MatchResult, or None when the entry does not match at all

        Raises:
            EntryScoringError: If the entry is malformed
        """
        if not isinstance(entry.phrase, str) or not entry.phrase.strip():
            raise EntryScoringError(entry.phrase, "phrase is missing")

        try:
            return self._score(entry, normalized_query, query_terms)
        except (AttributeError, TypeError) as e:
            raise EntryScoringError(entry.phrase, str(e)) from e

    def _score(
        self,
        entry: DictionaryEntry,
        normalized_query: str,
        query_terms: Sequence[str],
    ) -> Optional[MatchResult]:
        w = self.weights
        phrase = _phrase_key(entry.phrase)

        if phrase == normalized_query:
            return MatchResult.from_entry(
                entry, w.exact, MatchType.EXACT, (normalized_query,)
            )

        if normalized_query in phrase:
            return MatchResult.from_entry(
                entry, w.phrase_contains, MatchType.PHRASE_CONTAINS, (normalized_query,)
            )

        if phrase and phrase in normalized_query:
            return MatchResult.from_entry(
                entry, w.query_contains, MatchType.QUERY_CONTAINS, (phrase,)
            )

        keyword_score, matched = self.keyword_score(entry.keywords, query_terms)
        if keyword_score > 0:
            return MatchResult.from_entry(
                entry, keyword_score, MatchType.KEYWORD, tuple(matched)
            )

        similarity = fuzzy_similarity(phrase, normalized_query, w.prefix_bonus)
        if similarity > w.fuzzy_cutoff:
            return MatchResult.from_entry(
                entry,
                similarity * w.fuzzy_factor,
                MatchType.FUZZY,
                (normalized_query,),
            )

        return None

    def keyword_score(
        self, keywords: Sequence[str], query_terms: Sequence[str]
    ) -> Tuple[float, List[str]]:
        """Score query terms against entry keywords.

        Each term contributes its best match over all keywords; the summed
        contributions are scaled by ``max(len(query_terms), len(keywords))``.

        Returns:
            Tuple of (score, terms that contributed)
        """
        w = self.weights
        lowered = [keyword.lower() for keyword in keywords]

        total = 0.0
        matched: List[str] = []

        for term in query_terms:
            best = 0.0
            for keyword in lowered:
                best = max(best, self._keyword_contribution(keyword, term))
            if best > 0:
                total += best
                matched.append(term)

        if total <= 0:
            return 0.0, []

        scale = max(len(query_terms), len(lowered))
        score = min(w.keyword_cap, w.keyword_base + (total / scale) * w.keyword_span)
        return score, matched

    def _keyword_contribution(self, keyword: str, term: str) -> float:
        w = self.weights
        if keyword == term:
            return w.keyword_exact
        if term in keyword:
            return w.keyword_contains_term
        if keyword in term:
            return w.term_contains_keyword

        similarity = fuzzy_similarity(keyword, term, w.prefix_bonus)
        if similarity > w.keyword_fuzzy_cutoff:
            return similarity * w.keyword_fuzzy_factor
        return 0.0
