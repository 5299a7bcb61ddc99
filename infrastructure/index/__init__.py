from infrastructure.index.http_term_index import HttpTermIndex, HttpTermIndexConfig
from infrastructure.index.in_memory_term_index import InMemoryTermIndex
from infrastructure.index.redis_term_index import RedisTermIndex
from infrastructure.index.sqlite_term_index import SqliteTermIndex

__all__ = [
    "HttpTermIndex",
    "HttpTermIndexConfig",
    "InMemoryTermIndex",
    "RedisTermIndex",
    "SqliteTermIndex",
]
