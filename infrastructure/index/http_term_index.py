"""Read-only client for a term index served by the TermSearch API."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Mapping
from urllib.parse import quote

import requests

from domain.errors import IndexUnavailable, ReadOnlyIndex
from domain.interfaces import TermIndex

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class HttpTermIndexConfig:
    base_url: str = "http://localhost:8000"
    timeout: float = 10.0


class HttpTermIndex(TermIndex):
    """Fetch postings from ``GET /terms/{term}`` of a remote instance."""

    backend = "http"

    def __init__(self, config: HttpTermIndexConfig, session: requests.Session | None = None) -> None:
        self._config = config
        self._session = session or requests.Session()

    def lookup(self, term: str) -> dict[str, int]:
        payload = self._get(f"/terms/{quote(term, safe='')}")
        postings = payload.get("postings") if isinstance(payload, dict) else None
        if not isinstance(postings, dict):
            raise self._malformed("postings", payload)
        counts: dict[str, int] = {}
        for document_id, count in postings.items():
            # bool is an int subclass but never a valid count
            if isinstance(count, bool) or not isinstance(count, int) or count < 0:
                raise self._malformed("postings", payload)
            counts[str(document_id)] = count
        return counts

    def add_counts(self, document_id: str, counts: Mapping[str, int]) -> None:
        raise ReadOnlyIndex(self.backend)

    def is_indexed(self, document_id: str) -> bool:
        payload = self._get("/documents/status", params={"document_id": document_id})
        if not isinstance(payload, dict):
            raise self._malformed("document status", payload)
        return bool(payload.get("indexed", False))

    def terms(self) -> set[str]:
        payload = self._get("/terms")
        terms = payload.get("terms") if isinstance(payload, dict) else None
        if not isinstance(terms, list):
            raise self._malformed("terms", payload)
        return {str(term) for term in terms}

    def _get(self, path: str, params: dict[str, str] | None = None) -> Any:
        url = f"{self._config.base_url.rstrip('/')}{path}"
        try:
            response = self._session.get(url, params=params, timeout=self._config.timeout)
            response.raise_for_status()
            return response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.error("Request to %s failed: %s", url, exc)
            raise IndexUnavailable(self.backend, str(exc)) from exc

    def _malformed(self, what: str, payload: Any) -> IndexUnavailable:
        logger.error("Malformed %s payload from %s: %r", what, self._config.base_url, payload)
        return IndexUnavailable(self.backend, f"malformed {what}")


__all__ = ["HttpTermIndex", "HttpTermIndexConfig"]
