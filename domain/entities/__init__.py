"""Domain entities for the TermSearch system."""
from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Iterator, Mapping

if TYPE_CHECKING:
    from domain.interfaces import TermIndex


@dataclass(slots=True)
class Document:
    """Represents a raw document that can be indexed."""

    id: str
    content: str
    title: str | None = None
    metadata: dict[str, Any] = field(default_factory=dict)


class SearchResult:
    """Outcome of a query: document identifier mapped to relevance score.

    Instances are values. The constructor copies the mapping it receives and
    every combining operation builds a fresh instance, so operands are never
    modified and results never share storage with them.

    Scores combine additively: ``or_`` and ``and_`` add the scores of a
    document found in both operands, ``minus`` subtracts the right score from
    the left one without going below zero.
    """

    __slots__ = ("_scores",)

    def __init__(self, scores: Mapping[str, int] | None = None) -> None:
        copied = dict(scores or {})
        for document_id, score in copied.items():
            if score < 0:
                raise ValueError(f"Negative relevance {score} for '{document_id}'")
        self._scores: Mapping[str, int] = MappingProxyType(copied)

    @classmethod
    def from_term(cls, term: str, index: TermIndex) -> SearchResult:
        """Look up ``term`` in ``index`` and wrap the raw counts.

        Failures of the index propagate unchanged (``IndexUnavailable``).
        """
        return cls(index.lookup(term))

    @property
    def scores(self) -> Mapping[str, int]:
        return self._scores

    def relevance(self, document_id: str) -> int:
        """Return the score of ``document_id``, 0 when it is not in the result."""
        return self._scores.get(document_id, 0)

    @staticmethod
    def total_relevance(left: int, right: int) -> int:
        """Combine the scores a document has in two sub-queries."""
        return left + right

    def or_(self, other: SearchResult) -> SearchResult:
        """Union of both results; shared documents get the combined score."""
        union = dict(self._scores)
        for document_id, score in other._scores.items():
            if document_id in union:
                union[document_id] = self.total_relevance(union[document_id], score)
            else:
                union[document_id] = score
        return type(self)(union)

    def and_(self, other: SearchResult) -> SearchResult:
        """Intersection of both results with combined scores."""
        intersection = {
            document_id: self.total_relevance(score, other._scores[document_id])
            for document_id, score in self._scores.items()
            if document_id in other._scores
        }
        return type(self)(intersection)

    def minus(self, other: SearchResult) -> SearchResult:
        """Penalise documents of this result by their score in ``other``.

        Every document of the left operand is kept; a document also present on
        the right has its score reduced, clamped at zero. Documents found only
        on the right are ignored.
        """
        difference: dict[str, int] = {}
        for document_id, score in self._scores.items():
            if document_id in other._scores:
                difference[document_id] = max(0, score - other._scores[document_id])
            else:
                difference[document_id] = score
        return type(self)(difference)

    def __or__(self, other: SearchResult) -> SearchResult:
        return self.or_(other)

    def __and__(self, other: SearchResult) -> SearchResult:
        return self.and_(other)

    def __sub__(self, other: SearchResult) -> SearchResult:
        return self.minus(other)

    def rank(self) -> list[tuple[str, int]]:
        """Return ``(document_id, score)`` pairs by ascending score.

        The weakest match comes first. Equal scores keep the mapping order.
        """
        return sorted(self._scores.items(), key=lambda item: item[1])

    def describe(self) -> list[str]:
        return [f"{document_id}\t{score}" for document_id, score in self.rank()]

    def __len__(self) -> int:
        return len(self._scores)

    def __contains__(self, document_id: object) -> bool:
        return document_id in self._scores

    def __iter__(self) -> Iterator[str]:
        return iter(self._scores)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, SearchResult):
            return NotImplemented
        return dict(self._scores) == dict(other._scores)

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"SearchResult({dict(self._scores)!r})"


__all__ = [
    "Document",
    "SearchResult",
]
