"""
Simple in-memory summary store.
"""

import logging
import time
import threading
from typing import Any, Dict, Optional

from cache.base import CacheEntry, SummaryStore
from utils.config import DEFAULT_CACHE_KEY

logger = logging.getLogger(__name__)


class MemoryStore(SummaryStore):
    """
    In-process summary store with optional TTL.

    Features:
    - Time-based expiration (wall clock)
    - Thread-safe operations
    - Usage statistics
    """

    def __init__(self, key: str = DEFAULT_CACHE_KEY, ttl_seconds: Optional[float] = None):
        """
        Initialize the memory store.

        Args:
            key: Logical cache key
            ttl_seconds: Optional expiry for written entries, in seconds
        """
        super().__init__(key)
        self.cache = {}  # key -> (entry, expiry_time)
        self.ttl_seconds = ttl_seconds
        self.lock = threading.RLock()
        self.hits = 0
        self.misses = 0
        self.sets = 0

        logger.info(f"Initialized MemoryStore with key={key}, ttl_seconds={ttl_seconds}")

    def _live_entry(self) -> Optional[CacheEntry]:
        item = self.cache.get(self.key)
        if item is None:
            return None
        entry, expiry_time = item
        if expiry_time is not None and time.time() > expiry_time:
            del self.cache[self.key]
            return None
        return entry

    def _store(self, entry: CacheEntry) -> None:
        expiry_time = None
        if self.ttl_seconds is not None:
            expiry_time = time.time() + self.ttl_seconds
        self.cache[self.key] = (entry, expiry_time)
        self.sets += 1

    def read(self) -> Optional[CacheEntry]:
        with self.lock:
            entry = self._live_entry()
            if entry is None:
                self.misses += 1
            else:
                self.hits += 1
            return entry

    def write(self, entry: CacheEntry) -> bool:
        with self.lock:
            self._store(entry)
            return True

    def compare_and_write(self, entry: CacheEntry, expected_generated_at: Optional[int]) -> bool:
        with self.lock:
            current = self._live_entry()
            current_ts = current.generated_at if current is not None else None
            if current_ts != expected_generated_at:
                logger.info(
                    f"Conditional write rejected: expected {expected_generated_at}, found {current_ts}"
                )
                return False
            self._store(entry)
            return True

    def describe(self) -> Dict[str, Any]:
        with self.lock:
            return {
                'backend': 'memory',
                'key': self.key,
                'ttl_seconds': self.ttl_seconds,
                'hits': self.hits,
                'misses': self.misses,
                'sets': self.sets,
            }
