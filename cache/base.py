"""
Cache interface for the summary store.

A store persists exactly one (generated_at, payload) pair under a fixed
logical key. Absence, unavailability and malformed data all read as a miss;
writes report success as a boolean and never raise.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Dict, Optional

from common.errors import MalformedCacheEntry
from utils.config import DEFAULT_CACHE_KEY

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CacheEntry:
    """
    The persisted summary.

    Attributes:
        generated_at: Milliseconds since epoch when the summary was produced
        payload: Markdown summary text, stored without any status banner
    """
    generated_at: int
    payload: str

    def __post_init__(self):
        if isinstance(self.generated_at, bool) or not isinstance(self.generated_at, int):
            raise MalformedCacheEntry(f"generated_at must be an integer, got {self.generated_at!r}")
        if self.generated_at < 0:
            raise MalformedCacheEntry(f"generated_at must be non-negative, got {self.generated_at}")
        if not isinstance(self.payload, str):
            raise MalformedCacheEntry("payload must be text")


class SummaryStore(ABC):
    """
    Abstract base class for summary store implementations.

    Implementations must replace both fields of the entry atomically: a
    concurrent read observes either the old entry or the new one.
    """

    def __init__(self, key: str = DEFAULT_CACHE_KEY):
        self._key = key

    @property
    def key(self) -> str:
        """Logical name of the stored entry."""
        return self._key

    @abstractmethod
    def read(self) -> Optional[CacheEntry]:
        """
        Read the current entry.

        Returns:
            The stored entry, or None when absent, expired, malformed or the
            backend is unreachable
        """
        pass

    @abstractmethod
    def write(self, entry: CacheEntry) -> bool:
        """
        Unconditionally replace the stored entry.

        Args:
            entry: Entry to persist

        Returns:
            True if persisted, False if the backend was unavailable
        """
        pass

    @abstractmethod
    def compare_and_write(self, entry: CacheEntry, expected_generated_at: Optional[int]) -> bool:
        """
        Replace the stored entry only if it has not changed since it was read.

        Args:
            entry: Entry to persist
            expected_generated_at: generated_at observed by the caller, or
                None if the caller observed no live entry

        Returns:
            True if persisted; False if the stored entry changed in the
            meantime or the backend was unavailable
        """
        pass

    @abstractmethod
    def describe(self) -> Dict[str, Any]:
        """
        Describe the backend for status reporting.

        Returns:
            Dictionary with backend name and settings
        """
        pass
