"""Exceptions shared across the TermSearch layers."""
from __future__ import annotations


class TermSearchError(Exception):
    """Base class for TermSearch specific errors."""


class IndexUnavailable(TermSearchError):
    """The term index could not be reached or read.

    ``backend`` names the index implementation that failed. The underlying
    driver exception is chained as ``__cause__``.
    """

    def __init__(self, backend: str, message: str) -> None:
        super().__init__(f"{backend} index unavailable: {message}")
        self.backend = backend


class ReadOnlyIndex(TermSearchError):
    """A write was attempted on an index backend that only serves lookups."""

    def __init__(self, backend: str) -> None:
        super().__init__(f"{backend} index is read-only")
        self.backend = backend


__all__ = ["TermSearchError", "IndexUnavailable", "ReadOnlyIndex"]
