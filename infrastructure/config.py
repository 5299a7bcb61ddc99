"""Dependency wiring for the TermSearch application."""
from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Callable, Literal

from domain.interfaces import TermIndex, TextExtractor
from infrastructure.index.http_term_index import HttpTermIndex, HttpTermIndexConfig
from infrastructure.index.in_memory_term_index import InMemoryTermIndex
from infrastructure.index.redis_term_index import RedisTermIndex
from infrastructure.index.sqlite_term_index import SqliteTermIndex
from infrastructure.text_extraction.html_extractor import HtmlExtractor
from infrastructure.text_extraction.plain_text_extractor import PlainTextExtractor


IndexBackendName = Literal["memory", "sqlite", "redis", "http"]


@dataclass(slots=True)
class Container:
    """Simple container bundling concrete infrastructure implementations."""

    term_index: TermIndex
    text_extractor: TextExtractor
    html_extractor: TextExtractor


@dataclass(slots=True)
class ContainerConfig:
    """Configuration for selecting the term index backend."""

    index_backend: IndexBackendName = "memory"
    db_path: str = "termsearch.db"
    redis_url: str = "redis://localhost:6379/0"
    redis_prefix: str = "termsearch:"
    http_url: str = "http://localhost:8000"
    http_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> ContainerConfig:
        defaults = cls()
        return cls(
            index_backend=os.getenv("TERMSEARCH_INDEX_BACKEND", defaults.index_backend),  # type: ignore[arg-type]
            db_path=os.getenv("TERMSEARCH_DB_PATH", defaults.db_path),
            redis_url=os.getenv("TERMSEARCH_REDIS_URL", defaults.redis_url),
            redis_prefix=os.getenv("TERMSEARCH_REDIS_PREFIX", defaults.redis_prefix),
            http_url=os.getenv("TERMSEARCH_HTTP_URL", defaults.http_url),
            http_timeout=float(os.getenv("TERMSEARCH_HTTP_TIMEOUT", defaults.http_timeout)),
        )


_INDEX_FACTORIES: dict[IndexBackendName, Callable[[ContainerConfig], TermIndex]] = {
    "memory": lambda cfg: InMemoryTermIndex(),
    "sqlite": lambda cfg: SqliteTermIndex(db_path=cfg.db_path),
    "redis": lambda cfg: RedisTermIndex(cfg.redis_url, prefix=cfg.redis_prefix),
    "http": lambda cfg: HttpTermIndex(HttpTermIndexConfig(base_url=cfg.http_url, timeout=cfg.http_timeout)),
}


def build_default_container(config: ContainerConfig | None = None) -> Container:
    """Instantiate the default infrastructure stack."""

    cfg = config or ContainerConfig()
    try:
        factory = _INDEX_FACTORIES[cfg.index_backend]
    except KeyError as exc:
        raise ValueError(f"Unknown index backend '{cfg.index_backend}'") from exc

    return Container(
        term_index=factory(cfg),
        text_extractor=PlainTextExtractor(),
        html_extractor=HtmlExtractor(),
    )


__all__ = ["Container", "ContainerConfig", "build_default_container"]
