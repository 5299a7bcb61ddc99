"""Term index kept in Python dictionaries, for demos and tests."""
from __future__ import annotations

from typing import Mapping

from domain.interfaces import TermIndex


class InMemoryTermIndex(TermIndex):
    """Stores postings per term and the indexed counts per document."""

    def __init__(self) -> None:
        self._postings: dict[str, dict[str, int]] = {}
        self._documents: dict[str, dict[str, int]] = {}

    def lookup(self, term: str) -> dict[str, int]:
        return dict(self._postings.get(term, {}))

    def add_counts(self, document_id: str, counts: Mapping[str, int]) -> None:
        for term in self._documents.get(document_id, {}):
            postings = self._postings.get(term)
            if postings is None:
                continue
            postings.pop(document_id, None)
            if not postings:
                del self._postings[term]
        stored = {term: count for term, count in counts.items() if count > 0}
        for term, count in stored.items():
            self._postings.setdefault(term, {})[document_id] = count
        self._documents[document_id] = stored

    def is_indexed(self, document_id: str) -> bool:
        return document_id in self._documents

    def terms(self) -> set[str]:
        return set(self._postings)


__all__ = ["InMemoryTermIndex"]
