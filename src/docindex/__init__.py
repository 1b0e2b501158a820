"""Documentation index and search engine."""

__version__ = "0.1.0"
