"""Tokenisation and term-frequency counting for indexing."""
from __future__ import annotations

import re
from collections import Counter

_TOKEN_SPLIT = re.compile(r"[\W_]+", re.UNICODE)


def tokenize(text: str) -> list[str]:
    return [token for token in _TOKEN_SPLIT.split(text.lower()) if token]


def count_terms(text: str) -> dict[str, int]:
    """Return how many times each token occurs in ``text``."""

    return dict(Counter(tokenize(text)))


__all__ = ["count_terms", "tokenize"]
