"""Dictionary loading and validation.

The dictionary is supplied once at startup as an ordered sequence of raw
entries. Each raw entry is validated; invalid entries are dropped and logged.
Loading is refused outright when the data is absent, not a sequence, empty, or
when more than ``max_invalid_ratio`` of the entries are invalid.
"""

import json
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Sequence, Tuple, Union

import yaml
from pydantic import AliasChoices, BaseModel, Field, ValidationError, field_validator

from ..config.logging import get_logger
from ..exceptions import DictionaryLoadError
from .models import DictionaryEntry, SecondaryMeaning

logger = get_logger(__name__)

BUNDLED_DICTIONARY = "buzzwords.json"


class RawSecondaryMeaning(BaseModel):
    """Raw secondary meaning record."""

    translation: str
    context: Optional[str] = None

    class Config:
        extra = "ignore"


class RawDictionaryEntry(BaseModel):
    """Raw dictionary entry as supplied by the loader."""

    phrase: str = Field(..., description="Canonical phrase")
    translation: str = Field(..., description="Plain-language translation")
    keywords: List[str] = Field(default_factory=list, description="Search aliases")
    category: Optional[str] = Field(default="", description="Category label")
    alternatives: List[str] = Field(
        default_factory=list, description="Alternate phrasings"
    )
    context: Optional[str] = Field(default=None, description="Usage note")
    secondary_meanings: List[RawSecondaryMeaning] = Field(
        default_factory=list,
        validation_alias=AliasChoices(
            "secondary_meanings", "secondaryMeanings", "multipleMeanings"
        ),
        description="Other valid interpretations",
    )

    class Config:
        extra = "ignore"

    @field_validator("phrase", "translation")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be empty")
        return value.strip()

    @field_validator("keywords", "alternatives", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return [] if value is None else value

    def to_entry(self) -> DictionaryEntry:
        """Freeze the validated record into an immutable entry."""
        return DictionaryEntry(
            phrase=self.phrase,
            translation=self.translation,
            keywords=tuple(k for k in self.keywords if k.strip()),
            category=self.category or "",
            alternatives=tuple(self.alternatives),
            context=self.context or None,
            secondary_meanings=tuple(
                SecondaryMeaning(m.translation, m.context)
                for m in self.secondary_meanings
            ),
        )


class Dictionary(Sequence[DictionaryEntry]):
    """Immutable, ordered collection of validated entries.

    Shared read-only by every search; never mutated after construction.
    """

    def __init__(
        self,
        entries: Sequence[DictionaryEntry],
        dropped: int = 0,
        source: Optional[str] = None,
    ):
        self._entries: Tuple[DictionaryEntry, ...] = tuple(entries)
        self._by_phrase: Dict[str, DictionaryEntry] = {}
        for entry in self._entries:
            self._by_phrase.setdefault(str(entry.phrase).lower(), entry)
        self.dropped = dropped
        self.source = source

    def __len__(self) -> int:
        return len(self._entries)

    def __getitem__(self, index):  # type: ignore[override]
        return self._entries[index]

    def __iter__(self) -> Iterator[DictionaryEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Dictionary(entries={len(self)}, dropped={self.dropped})"

    @property
    def entries(self) -> Tuple[DictionaryEntry, ...]:
        return self._entries

    @property
    def categories(self) -> List[str]:
        """Distinct categories in dictionary order."""
        return list(dict.fromkeys(e.category for e in self._entries if e.category))

    def lookup(self, phrase: str) -> Optional[DictionaryEntry]:
        """Find an entry by phrase, ignoring case."""
        return self._by_phrase.get(phrase.lower())

    def __contains__(self, item: object) -> bool:
        if isinstance(item, str):
            return item.lower() in self._by_phrase
        return item in self._entries


def build_dictionary(
    raw_entries: Any,
    max_invalid_ratio: float = 0.5,
    source: Optional[str] = None,
) -> Dictionary:
    """Validate raw entries and build a dictionary.

    Args:
        raw_entries: Ordered sequence of raw entry mappings
        max_invalid_ratio: Share of invalid entries above which loading fails
        source: Optional description of where the data came from

    Returns:
        Dictionary: Validated dictionary (invalid entries dropped)

    Raises:
        DictionaryLoadError: If the data cannot be used at all
    """
    if raw_entries is None:
        raise DictionaryLoadError("Dictionary data is missing", source=source)

    if isinstance(raw_entries, (str, bytes, dict)) or not isinstance(
        raw_entries, (list, tuple)
    ):
        raise DictionaryLoadError(
            f"Dictionary data must be a sequence, got {type(raw_entries).__name__}",
            source=source,
        )

    total = len(raw_entries)
    if total == 0:
        raise DictionaryLoadError("Dictionary data is empty", source=source)

    entries: List[DictionaryEntry] = []
    seen_phrases: Dict[str, int] = {}
    invalid = 0

    for index, raw in enumerate(raw_entries):
        if not isinstance(raw, dict):
            invalid += 1
            logger.warning(
                "Dropping malformed dictionary entry",
                index=index,
                error=f"expected mapping, got {type(raw).__name__}",
            )
            continue
        try:
            entry = RawDictionaryEntry.model_validate(raw).to_entry()
        except ValidationError as e:
            invalid += 1
            logger.warning(
                "Dropping incomplete dictionary entry",
                index=index,
                phrase=raw.get("phrase"),
                error_count=e.error_count(),
            )
            continue

        key = entry.phrase.lower()
        if key in seen_phrases:
            logger.warning(
                "Duplicate dictionary phrase",
                phrase=entry.phrase,
                index=index,
                first_index=seen_phrases[key],
            )
        else:
            seen_phrases[key] = index
        entries.append(entry)

    if invalid > total * max_invalid_ratio:
        raise DictionaryLoadError(
            "Too many invalid entries in dictionary",
            total_entries=total,
            invalid_entries=invalid,
            source=source,
        )

    logger.info(
        "Dictionary loaded",
        source=source,
        entries=len(entries),
        dropped=invalid,
    )
    return Dictionary(entries, dropped=invalid, source=source)


def load_dictionary_file(
    path: Union[str, Path], max_invalid_ratio: float = 0.5
) -> Dictionary:
    """Load a dictionary from a JSON or YAML file.

    Args:
        path: File containing a list of raw entries (``.json``, ``.yaml``, ``.yml``)
        max_invalid_ratio: Share of invalid entries above which loading fails

    Returns:
        Dictionary: Validated dictionary

    Raises:
        DictionaryLoadError: If the file cannot be read, decoded or validated
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as e:
        raise DictionaryLoadError(
            f"Cannot read dictionary file: {e}", source=str(path)
        ) from e

    return _parse_dictionary_text(
        text, path.suffix.lower(), max_invalid_ratio, source=str(path)
    )


def load_default_dictionary(max_invalid_ratio: float = 0.5) -> Dictionary:
    """Load the dictionary bundled with the package."""
    text = (
        resources.files("buzzword_translator")
        .joinpath("data")
        .joinpath(BUNDLED_DICTIONARY)
        .read_text(encoding="utf-8")
    )
    return _parse_dictionary_text(
        text, ".json", max_invalid_ratio, source=f"bundled:{BUNDLED_DICTIONARY}"
    )


def _parse_dictionary_text(
    text: str, suffix: str, max_invalid_ratio: float, source: str
) -> Dictionary:
    try:
        if suffix in (".yaml", ".yml"):
            data = yaml.safe_load(text)
        else:
            data = json.loads(text)
    except (json.JSONDecodeError, yaml.YAMLError) as e:
        raise DictionaryLoadError(
            f"Cannot decode dictionary data: {e}", source=source
        ) from e

    return build_dictionary(data, max_invalid_ratio=max_invalid_ratio, source=source)
