"""Search module for the buzzword translator.

Main components:
- BuzzwordSearchEngine: High-level search interface
- RelevanceRanker: Candidate filtering, ordering and truncation
- EntryMatcher: Per-entry relevance scoring (exact, substring, keyword, fuzzy)
- SuggestionGenerator: Similar, related and example phrases
- SearchResultCache: Bounded cache keyed by normalized query
"""

from .cache import SearchResultCache
from .dictionary import (
    Dictionary,
    build_dictionary,
    load_default_dictionary,
    load_dictionary_file,
)
from .highlight import highlight_matches, highlight_partial
from .matcher import EntryMatcher, fuzzy_similarity, levenshtein_distance
from .models import (
    DictionaryEntry,
    InvalidReason,
    MatchResult,
    MatchType,
    SearchOutcome,
    SearchStatus,
    SecondaryMeaning,
    Suggestion,
)
from .query_processor import QueryProcessor, sanitize_input
from .ranker import RelevanceRanker
from .search_engine import BuzzwordSearchEngine
from .suggestions import SuggestionGenerator

__all__ = [
    "BuzzwordSearchEngine",
    "Dictionary",
    "DictionaryEntry",
    "EntryMatcher",
    "InvalidReason",
    "MatchResult",
    "MatchType",
    "QueryProcessor",
    "RelevanceRanker",
    "SearchOutcome",
    "SearchResultCache",
    "SearchStatus",
    "SecondaryMeaning",
    "Suggestion",
    "SuggestionGenerator",
    "build_dictionary",
    "fuzzy_similarity",
    "highlight_matches",
    "highlight_partial",
    "levenshtein_distance",
    "load_default_dictionary",
    "load_dictionary_file",
    "sanitize_input",
]
