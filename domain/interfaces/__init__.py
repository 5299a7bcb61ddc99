"""Abstract interfaces for the TermSearch system."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Mapping


class TextExtractor(ABC):
    """Extracts text from user provided sources (files, pages, etc.)."""

    @abstractmethod
    def extract(self, source: bytes | str) -> str:
        """Return the textual representation of a source."""


class TermIndex(ABC):
    """Inverted index mapping a term to per-document frequency counts."""

    @abstractmethod
    def lookup(self, term: str) -> dict[str, int]:
        """Return document id -> count for ``term``.

        An unknown term yields an empty mapping. Storage or connectivity
        failures raise ``IndexUnavailable``.
        """

    @abstractmethod
    def add_counts(self, document_id: str, counts: Mapping[str, int]) -> None:
        """Replace the term counts stored for a document."""

    @abstractmethod
    def is_indexed(self, document_id: str) -> bool:
        """Return whether the document has been indexed."""

    @abstractmethod
    def terms(self) -> set[str]:
        """Return every term with at least one posting."""


__all__ = [
    "TextExtractor",
    "TermIndex",
]
