"""
Exception types for dropsearch.

Every error that should abort a run derives from DropsearchError, so the
CLI can report it uniformly and exit with a non-zero status.
"""


class DropsearchError(Exception):
    """Base class for fatal dropsearch errors."""

    pass


class RaindropError(DropsearchError):
    """Raised when fetching from the Raindrop API fails."""

    pass


class SearchIndexError(DropsearchError):
    """Raised when a search index call fails."""

    pass
