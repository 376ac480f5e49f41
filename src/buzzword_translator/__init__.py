"""Corporate Buzzword Translator.

Typo-tolerant lookup of corporate jargon in a small phrase dictionary,
returning plain-language translations ranked by relevance.
"""

from .__version__ import __version__

__all__ = ["__version__"]
