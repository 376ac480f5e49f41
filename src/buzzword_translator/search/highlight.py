"""Markup-safe highlighting of matched terms inside a phrase."""

import html
import re
from typing import Iterable, Optional, Pattern

MATCH_CLASS = "highlight-match"
PARTIAL_CLASS = "highlight-partial"


def _wrap(text: str, pattern: Optional[Pattern[str]], css_class: str) -> str:
    if pattern is None:
        return html.escape(text)

    parts = []
    last = 0
    for match in pattern.finditer(text):
        if match.start() == match.end():
            continue
        parts.append(html.escape(text[last : match.start()]))
        parts.append(
            f'<mark class="{css_class}">{html.escape(match.group(0))}</mark>'
        )
        last = match.end()
    parts.append(html.escape(text[last:]))
    return "".join(parts)


def highlight_matches(phrase: str, matched_terms: Iterable[str]) -> str:
    """Mark whole-word occurrences of matched terms in a phrase.

    Longer terms take precedence over shorter ones and marks never nest.
    Everything outside the marks is HTML-escaped.

    Examples:
        >>> highlight_matches("deep dive", ["dive"])
        'deep <mark class="highlight-match">dive</mark>'
    """
    terms = sorted(
        {term.strip() for term in matched_terms if term and term.strip()},
        key=len,
        reverse=True,
    )
    pattern = None
    if terms:
        alternation = "|".join(re.escape(term) for term in terms)
        pattern = re.compile(rf"\b(?:{alternation})\b", re.IGNORECASE)
    return _wrap(phrase, pattern, MATCH_CLASS)


def highlight_partial(phrase: str, query: str) -> str:
    """Mark every substring occurrence of the query in a phrase."""
    query = query.strip()
    pattern = None
    if len(query) >= 2:
        pattern = re.compile(re.escape(query), re.IGNORECASE)
    return _wrap(phrase, pattern, PARTIAL_CLASS)
