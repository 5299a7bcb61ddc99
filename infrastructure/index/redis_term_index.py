"""Inverted index stored in Redis hashes."""
from __future__ import annotations

import logging
from typing import Mapping

import redis

from domain.errors import IndexUnavailable
from domain.interfaces import TermIndex

logger = logging.getLogger(__name__)

_MAX_WATCH_RETRIES = 10


class RedisTermIndex(TermIndex):
    """Keeps one hash per term (document -> count) and one per document.

    Key layout under ``prefix``:
    ``term:<term>`` postings, ``doc:<document_id>`` counts of that document,
    ``documents`` set of indexed document ids.
    """

    backend = "redis"

    def __init__(
        self,
        redis_url: str = "redis://localhost:6379/0",
        *,
        prefix: str = "termsearch:",
        client: redis.Redis | None = None,
    ) -> None:
        self._client = client or redis.Redis.from_url(redis_url, decode_responses=True)
        self._prefix = prefix

    def _term_key(self, term: str) -> str:
        return f"{self._prefix}term:{term}"

    def _document_key(self, document_id: str) -> str:
        return f"{self._prefix}doc:{document_id}"

    @property
    def _documents_key(self) -> str:
        return f"{self._prefix}documents"

    def lookup(self, term: str) -> dict[str, int]:
        try:
            postings = self._client.hgetall(self._term_key(term))
        except redis.exceptions.RedisError as exc:
            logger.exception("Lookup of term %r failed.", term)
            raise IndexUnavailable(self.backend, str(exc)) from exc
        return {_decode(document_id): int(count) for document_id, count in postings.items()}

    def add_counts(self, document_id: str, counts: Mapping[str, int]) -> None:
        stored = {term: int(count) for term, count in counts.items() if count > 0}
        document_key = self._document_key(document_id)
        try:
            with self._client.pipeline(transaction=True) as pipe:
                for _attempt in range(_MAX_WATCH_RETRIES):
                    try:
                        pipe.watch(document_key)
                        previous = pipe.hkeys(document_key)
                        pipe.multi()
                        for term in previous:
                            pipe.hdel(self._term_key(_decode(term)), document_id)
                        pipe.delete(document_key)
                        for term, count in stored.items():
                            pipe.hset(self._term_key(term), document_id, count)
                        if stored:
                            pipe.hset(document_key, mapping=stored)
                        pipe.sadd(self._documents_key, document_id)
                        pipe.execute()
                        return
                    except redis.exceptions.WatchError:
                        logger.debug("Concurrent update of %s, retrying.", document_id)
                        continue
        except redis.exceptions.RedisError as exc:
            logger.exception("Indexing of %s failed.", document_id)
            raise IndexUnavailable(self.backend, str(exc)) from exc
        raise IndexUnavailable(self.backend, f"{document_id} kept changing during re-indexing")

    def is_indexed(self, document_id: str) -> bool:
        try:
            return bool(self._client.sismember(self._documents_key, document_id))
        except redis.exceptions.RedisError as exc:
            raise IndexUnavailable(self.backend, str(exc)) from exc

    def terms(self) -> set[str]:
        offset = len(self._term_key(""))
        try:
            keys = self._client.scan_iter(match=self._term_key("*"))
            return {_decode(key)[offset:] for key in keys}
        except redis.exceptions.RedisError as exc:
            raise IndexUnavailable(self.backend, str(exc)) from exc


def _decode(value: bytes | str) -> str:
    if isinstance(value, bytes):
        return value.decode("utf-8")
    return value


__all__ = ["RedisTermIndex"]
