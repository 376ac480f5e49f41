"""Query sanitization, validation and normalization.

Every raw query passes through :func:`sanitize_input` before any other
component sees it. Sanitization removes markup-significant characters so that
nothing typed by the user can reach the highlighting layer as markup.
"""

import re
from typing import List

from ..config.settings import SearchConfig
from .models import INVALID_REASON_HINTS, InvalidReason, QueryValidation, SearchStatus

MARKUP_CHARS_RE = re.compile(r"[<>\"'&]")
# Unicode spaces and line terminators; the \x1c-\x1f separators are
# control characters and are stripped rather than collapsed.
WHITESPACE_RE = re.compile(
    r"[\t\n\v\f\r \u00a0\u1680\u2000-\u200a\u2028\u2029\u202f\u205f\u3000\ufeff]+"
)
CONTROL_CHARS_RE = re.compile(r"[\x00-\x1F\x7F]")
LETTER_RE = re.compile(r"[a-zA-Z]")


def sanitize_input(text: object) -> str:
    """Strip markup and control characters and normalize whitespace.

    Non-string input sanitizes to the empty string.

    Examples:
        >>> sanitize_input('  <b>deep</b>   "dive" ')
        'bdeep/b dive'
    """
    if not isinstance(text, str):
        return ""
    text = MARKUP_CHARS_RE.sub("", text)
    text = WHITESPACE_RE.sub(" ", text)
    text = CONTROL_CHARS_RE.sub("", text)
    return text.strip()


def normalize_query(text: str) -> str:
    """Lower-case and trim an already sanitized query."""
    return text.lower().strip()


def split_terms(normalized_query: str) -> List[str]:
    """Split a normalized query on whitespace, discarding empty terms."""
    return [term for term in normalized_query.split() if term]


def match_key(phrase: str) -> str:
    """Comparison form of a dictionary phrase.

    Phrases go through the same sanitization as queries, so a phrase such as
    "let's take this offline" is still found exactly when typed verbatim.
    """
    return normalize_query(sanitize_input(phrase))


class QueryProcessor:
    """Validates raw queries against the configured length limits."""

    def __init__(self, config: SearchConfig):
        """Initialize the query processor.

        Args:
            config: Search configuration with query length limits
        """
        self.config = config

    def validate(self, raw_query: object) -> QueryValidation:
        """Sanitize and classify a raw query.

        Args:
            raw_query: Text as typed by the user

        Returns:
            QueryValidation: sanitized text plus ``empty``, ``invalid`` (with a
            reason) or ``ok``
        """
        sanitized = sanitize_input(raw_query)

        if not sanitized:
            return QueryValidation(sanitized, SearchStatus.EMPTY)

        if len(sanitized) < self.config.min_query_length:
            return QueryValidation(
                sanitized, SearchStatus.INVALID, InvalidReason.TOO_SHORT
            )

        if len(sanitized) > self.config.max_query_length:
            return QueryValidation(
                sanitized, SearchStatus.INVALID, InvalidReason.TOO_LONG
            )

        if not LETTER_RE.search(sanitized):
            return QueryValidation(
                sanitized, SearchStatus.INVALID, InvalidReason.NO_LETTERS
            )

        return QueryValidation(sanitized, SearchStatus.OK)

    def hint_for(self, reason: InvalidReason) -> str:
        """User-facing hint for a rejected query."""
        return INVALID_REASON_HINTS[reason].format(
            min_length=self.config.min_query_length
        )
