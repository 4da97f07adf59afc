"""
Summary store backends.

- memory_cache: in-process store (tests, single process)
- file_cache: local key-value file (default)
- sql_cache: networked store via SQLAlchemy with native expiration
"""

import logging

from cache.base import CacheEntry, SummaryStore
from cache.memory_cache import MemoryStore
from cache.file_cache import FileStore
from cache.sql_cache import SQLStore
from common.errors import ConfigurationError

logger = logging.getLogger(__name__)


def create_store(settings) -> SummaryStore:
    """
    Build the configured summary store.

    Backends with native expiration get a TTL equal to the throttle window.

    Args:
        settings: utils.config.Settings instance

    Returns:
        SummaryStore implementation
    """
    backend = (settings.cache_backend or "").lower()
    ttl_seconds = settings.throttle_ms / 1000

    if backend == "file":
        return FileStore(path=settings.cache_file, key=settings.cache_key)
    if backend == "sql":
        return SQLStore(url=settings.cache_url, key=settings.cache_key, ttl_seconds=ttl_seconds)
    if backend == "memory":
        logger.warning("Using in-memory summary store; cached summaries are lost on restart")
        return MemoryStore(key=settings.cache_key, ttl_seconds=ttl_seconds)

    raise ConfigurationError(f"Unknown CACHE_BACKEND '{settings.cache_backend}' (expected file, sql or memory)")


__all__ = [
    'CacheEntry',
    'SummaryStore',
    'MemoryStore',
    'FileStore',
    'SQLStore',
    'create_store',
]
