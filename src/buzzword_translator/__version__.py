"""Version information for buzzword-translator."""

__version__ = "0.1.0"
