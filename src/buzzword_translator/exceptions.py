"""Exception hierarchy for the buzzword translator.

Only genuinely exceptional conditions are raised. Expected outcomes such as an
empty query, a too-short query or a search with no matches are reported as
typed values (see :class:`buzzword_translator.search.models.SearchOutcome`).
"""

from typing import Any, Dict, Optional


class BuzzwordTranslatorError(Exception):
    """Base error carrying a user-facing message and structured details."""

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        """Initialize the error.

        Args:
            message: Human-readable error message
            details: Additional context for logging and debugging
        """
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} (Details: {self.details})"
        return self.message

    def to_dict(self) -> Dict[str, Any]:
        """Convert error to a serializable mapping."""
        error_dict: Dict[str, Any] = {
            "error_type": self.__class__.__name__,
            "message": self.message,
        }
        if self.details:
            error_dict["details"] = self.details
        return error_dict


class ConfigurationError(BuzzwordTranslatorError):
    """Invalid or unreadable configuration."""


class DictionaryLoadError(BuzzwordTranslatorError):
    """The dictionary cannot be used; the engine refuses to initialize."""

    def __init__(
        self,
        message: str,
        total_entries: int = 0,
        invalid_entries: int = 0,
        source: Optional[str] = None,
    ):
        """Initialize dictionary load error.

        Args:
            message: Specific load error message
            total_entries: Number of raw entries supplied
            invalid_entries: Number of raw entries that failed validation
            source: File path or description of the dictionary source
        """
        details: Dict[str, Any] = {
            "total_entries": total_entries,
            "invalid_entries": invalid_entries,
        }
        if source:
            details["source"] = source
        super().__init__(message, details)
        self.total_entries = total_entries
        self.invalid_entries = invalid_entries
        self.source = source


class EntryScoringError(BuzzwordTranslatorError):
    """A single dictionary entry could not be scored against a query."""

    def __init__(self, phrase: Any, reason: str):
        super().__init__(
            f"Cannot score entry {phrase!r}: {reason}",
            {"phrase": repr(phrase), "reason": reason},
        )
        self.phrase = phrase
        self.reason = reason
