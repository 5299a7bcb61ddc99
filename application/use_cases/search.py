"""Use case that evaluates boolean term queries against a term index."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Iterable, Literal, Union

from domain.entities import SearchResult
from domain.interfaces import TermIndex

logger = logging.getLogger(__name__)

Operator = Literal["and", "or", "minus"]
Order = Literal["asc", "desc"]


@dataclass(frozen=True, slots=True)
class TermQuery:
    term: str


@dataclass(frozen=True, slots=True)
class CombinedQuery:
    operator: Operator
    left: "QueryNode"
    right: "QueryNode"


QueryNode = Union[TermQuery, CombinedQuery]


def search(query: QueryNode, *, term_index: TermIndex) -> SearchResult:
    """Evaluate a query tree, looking up each term leaf in ``term_index``."""

    if isinstance(query, TermQuery):
        result = SearchResult.from_term(query.term, term_index)
        logger.debug("Term %r matched %d documents.", query.term, len(result))
        return result

    left = search(query.left, term_index=term_index)
    right = search(query.right, term_index=term_index)
    if query.operator == "and":
        return left.and_(right)
    if query.operator == "or":
        return left.or_(right)
    if query.operator == "minus":
        return left.minus(right)
    raise ValueError(f"Unknown operator '{query.operator}'")


def chain(first_term: str, steps: Iterable[tuple[Operator, str]]) -> QueryNode:
    """Build a left-deep query: ((first op1 t1) op2 t2) ..."""

    node: QueryNode = TermQuery(first_term)
    for operator, term in steps:
        node = CombinedQuery(operator=operator, left=node, right=TermQuery(term))
    return node


def ranked(result: SearchResult, *, order: Order = "asc") -> list[tuple[str, int]]:
    """Return ``result.rank()``; ``order="desc"`` puts the best match first."""

    entries = result.rank()
    if order == "desc":
        entries.reverse()
    return entries


__all__ = ["TermQuery", "CombinedQuery", "QueryNode", "search", "chain", "ranked"]
