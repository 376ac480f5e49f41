"""Suggestion generation for weak, empty and successful searches.

Randomness comes from an injected :class:`random.Random`, so callers (and
tests) control the selection by seeding it.
"""

import random
from typing import Dict, List, Optional, Sequence

from ..config.settings import SuggestionConfig
from .dictionary import Dictionary
from .models import MatchResult, Suggestion
from .query_processor import match_key, normalize_query, sanitize_input

# Relevance weights for similar-term suggestions
PREFIX_WEIGHT = 3
CONTAINS_WEIGHT = 2
PARTIAL_WEIGHT = 1


class SuggestionGenerator:
    """Proposes alternative and related phrases from the dictionary."""

    def __init__(
        self,
        dictionary: Dictionary,
        config: Optional[SuggestionConfig] = None,
        rng: Optional[random.Random] = None,
    ):
        """Initialize the suggestion generator.

        Args:
            dictionary: Loaded dictionary
            config: Suggestion limits and phrase lists
            rng: Random source for random fill and example selection
        """
        self.dictionary = dictionary
        self.config = config or SuggestionConfig()
        self.rng = rng or random.Random()

    def similar(self, raw_query: str) -> List[Suggestion]:
        """Suggest entries that resemble a query which found nothing.

        An entry qualifies when a keyword and the query are prefixes of one
        another (weight 3), when the phrase and the query contain one another
        (weight 2), or when a keyword contains the query and their lengths
        differ by at most ``max_length_difference`` (weight 1).

        Returns:
            At most ``max_suggestions`` suggestions, highest weight first
        """
        query = normalize_query(sanitize_input(raw_query))
        if len(query) < 2:
            return []

        slack = self.config.max_length_difference
        suggestions: List[Suggestion] = []

        for entry in self.dictionary:
            phrase = match_key(entry.phrase)
            keywords = [k.lower() for k in entry.keywords]

            if any(k.startswith(query) or query.startswith(k) for k in keywords):
                weight = PREFIX_WEIGHT
            elif query in phrase or (phrase and phrase in query):
                weight = CONTAINS_WEIGHT
            elif any(query in k and abs(len(k) - len(query)) <= slack for k in keywords):
                weight = PARTIAL_WEIGHT
            else:
                continue

            suggestions.append(Suggestion.from_entry(entry, "similar", weight))

        suggestions.sort(key=lambda s: s.relevance, reverse=True)
        return suggestions[: self.config.max_suggestions]

    def related(
        self, results: Sequence[MatchResult], raw_query: str
    ) -> List[Suggestion]:
        """Suggest entries to show alongside a non-empty result list.

        Three passes fill the list in order: entries sharing a category with
        a result (``per_category`` per category), the configured popular
        phrases, then random entries. Already shown phrases and the query
        itself are never suggested.
        """
        limit = self.config.max_suggestions
        query = normalize_query(sanitize_input(raw_query))
        shown = {r.phrase.lower() for r in results}
        selected: Dict[str, Suggestion] = {}

        def excluded(entry) -> bool:
            key = entry.phrase.lower()
            return key in shown or key in selected or match_key(entry.phrase) == query

        def add(entry, source: str) -> None:
            if not excluded(entry):
                selected[entry.phrase.lower()] = Suggestion.from_entry(entry, source)

        categories = dict.fromkeys(r.category for r in results if r.category)
        for category in categories:
            same_category = [
                entry
                for entry in self.dictionary
                if entry.category == category and not excluded(entry)
            ]
            for entry in same_category[: self.config.per_category]:
                add(entry, "category")

        for phrase in self.config.popular_phrases:
            if len(selected) >= limit:
                break
            entry = self.dictionary.lookup(phrase)
            if entry is not None:
                add(entry, "popular")

        if len(selected) < limit:
            remaining = [entry for entry in self.dictionary if not excluded(entry)]
            count = min(limit - len(selected), len(remaining))
            for entry in self.rng.sample(remaining, count):
                add(entry, "random")

        return list(selected.values())[:limit]

    def examples(self, count: Optional[int] = None) -> List[str]:
        """Random selection of example phrases for the browsing view.

        Only phrases present in the dictionary are offered.
        """
        count = self.config.example_count if count is None else count
        pool = [p for p in self.config.example_phrases if p in self.dictionary]
        return self.rng.sample(pool, min(max(count, 0), len(pool)))

    def popular(self) -> List[str]:
        """Fixed popular terms offered after a fruitless or rejected search.

        The configured order is kept and phrases missing from the dictionary
        are skipped.
        """
        return [p for p in self.config.no_results_phrases if p in self.dictionary]
