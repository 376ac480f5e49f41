"""Data models shared by the matcher, ranker and suggestion generator."""

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Any, Dict, Optional, Tuple


class MatchType(str, Enum):
    """Why an entry matched a query, strongest first."""

    EXACT = "exact"
    PHRASE_CONTAINS = "phraseContains"
    QUERY_CONTAINS = "queryContains"
    KEYWORD = "keyword"
    FUZZY = "fuzzy"


class SearchStatus(str, Enum):
    """Outcome classification for a search call."""

    EMPTY = "empty"
    INVALID = "invalid"
    OK = "ok"
    ERROR = "error"


class InvalidReason(str, Enum):
    """Why a non-empty query was rejected before scoring."""

    TOO_SHORT = "tooShort"
    TOO_LONG = "tooLong"
    NO_LETTERS = "noLetters"


INVALID_REASON_HINTS: Dict[InvalidReason, str] = {
    InvalidReason.TOO_SHORT: "Please enter at least {min_length} characters to search",
    InvalidReason.TOO_LONG: "Search query is too long. Please try a shorter term.",
    InvalidReason.NO_LETTERS: "Please enter letters to search for buzzwords.",
}


@dataclass(frozen=True)
class SecondaryMeaning:
    """An additional valid interpretation of a phrase."""

    translation: str
    context: Optional[str] = None


@dataclass(frozen=True)
class DictionaryEntry:
    """One phrase-to-translation record. Immutable once loaded."""

    phrase: str
    translation: str
    keywords: Tuple[str, ...] = ()
    category: str = ""
    alternatives: Tuple[str, ...] = ()
    context: Optional[str] = None
    secondary_meanings: Tuple[SecondaryMeaning, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        """Convert entry to a JSON-serializable mapping."""
        data = asdict(self)
        data["keywords"] = list(self.keywords)
        data["alternatives"] = list(self.alternatives)
        data["secondary_meanings"] = [asdict(m) for m in self.secondary_meanings]
        return data


@dataclass(frozen=True)
class MatchResult:
    """A scored match of one entry against one query."""

    phrase: str
    translation: str
    category: str
    context: Optional[str]
    alternatives: Tuple[str, ...]
    secondary_meanings: Tuple[SecondaryMeaning, ...]
    relevance_score: float
    match_type: MatchType
    matched_terms: Tuple[str, ...]

    @classmethod
    def from_entry(
        cls,
        entry: DictionaryEntry,
        relevance_score: float,
        match_type: MatchType,
        matched_terms: Tuple[str, ...],
    ) -> "MatchResult":
        """Build a result carrying the display fields of ``entry``."""
        return cls(
            phrase=entry.phrase,
            translation=entry.translation,
            category=entry.category,
            context=entry.context,
            alternatives=entry.alternatives,
            secondary_meanings=entry.secondary_meanings,
            relevance_score=relevance_score,
            match_type=match_type,
            # ordered de-duplication
            matched_terms=tuple(dict.fromkeys(matched_terms)),
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serializable mapping."""
        return {
            "phrase": self.phrase,
            "translation": self.translation,
            "category": self.category,
            "context": self.context,
            "alternatives": list(self.alternatives),
            "secondary_meanings": [asdict(m) for m in self.secondary_meanings],
            "relevance_score": self.relevance_score,
            "match_type": self.match_type.value,
            "matched_terms": list(self.matched_terms),
        }


@dataclass(frozen=True)
class Suggestion:
    """A phrase proposed as an alternative or related search."""

    phrase: str
    translation: str
    category: str = ""
    relevance: int = 0
    source: str = "similar"  # 'similar', 'category', 'popular', 'random'

    @classmethod
    def from_entry(
        cls, entry: DictionaryEntry, source: str, relevance: int = 0
    ) -> "Suggestion":
        return cls(
            phrase=entry.phrase,
            translation=entry.translation,
            category=entry.category,
            relevance=relevance,
            source=source,
        )

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class QueryValidation:
    """Result of sanitizing and validating a raw query."""

    sanitized: str
    status: SearchStatus
    reason: Optional[InvalidReason] = None

    @property
    def is_valid(self) -> bool:
        return self.status is SearchStatus.OK


@dataclass(frozen=True)
class SearchOutcome:
    """Typed outcome of a search call.

    ``results`` is only meaningful for ``ok``; ``reason`` only for
    ``invalid``; ``message`` only for ``error``.
    """

    status: SearchStatus
    query: str = ""
    results: Tuple[MatchResult, ...] = ()
    reason: Optional[InvalidReason] = None
    message: Optional[str] = None
    hint: Optional[str] = None
    cache_hit: bool = False
    duration_ms: float = 0.0

    @property
    def ok(self) -> bool:
        return self.status is SearchStatus.OK

    @property
    def has_results(self) -> bool:
        return self.ok and len(self.results) > 0

    def to_dict(self) -> Dict[str, Any]:
        """Convert outcome to a JSON-serializable mapping."""
        data: Dict[str, Any] = {"status": self.status.value, "query": self.query}
        if self.status is SearchStatus.OK:
            data["results"] = [r.to_dict() for r in self.results]
        if self.reason is not None:
            data["reason"] = self.reason.value
        if self.hint:
            data["hint"] = self.hint
        if self.message:
            data["message"] = self.message
        return data
