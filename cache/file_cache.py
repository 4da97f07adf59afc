"""
Local key-value file store.

The record is a single text file: the first line holds generated_at in
milliseconds, everything after the first newline is the payload verbatim.
"""

import logging
import os
import tempfile
import threading
from typing import Any, Dict, Optional

from cache.base import CacheEntry, SummaryStore
from common.errors import CacheUnavailable, MalformedCacheEntry
from utils.config import DEFAULT_CACHE_KEY

logger = logging.getLogger(__name__)


def parse_record(content: str) -> CacheEntry:
    """
    Parse a cache record.

    Raises:
        MalformedCacheEntry: if the separator or timestamp is missing or invalid
    """
    header, sep, payload = content.partition('\n')
    if not sep:
        raise MalformedCacheEntry("Cache record is corrupted or incomplete")

    header = header.strip()
    if not (header.isascii() and header.isdigit()):
        raise MalformedCacheEntry(f"Cache record contains an invalid timestamp: {header!r}")

    return CacheEntry(generated_at=int(header), payload=payload)


def format_record(entry: CacheEntry) -> str:
    """Serialize an entry into the on-disk record format."""
    return f"{entry.generated_at}\n{entry.payload}"


class FileStore(SummaryStore):
    """
    Summary store backed by one file on local disk.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so readers never see a half-written record.
    Conditional writes are serialized within this process only.
    """

    def __init__(self, path: str = "summary_cache.txt", key: str = DEFAULT_CACHE_KEY):
        """
        Initialize the file store.

        Args:
            path: Location of the cache record
            key: Logical cache key (reported in status only)
        """
        super().__init__(key)
        self.path = os.path.abspath(path)
        self.lock = threading.Lock()

        logger.info(f"Initialized FileStore at {self.path}")

    def _load(self) -> Optional[CacheEntry]:
        try:
            with open(self.path, 'r', encoding='utf-8', newline='') as f:
                content = f.read()
        except FileNotFoundError:
            return None
        except UnicodeDecodeError as e:
            raise MalformedCacheEntry(f"Cache file {self.path} is not valid UTF-8: {e}") from e
        except OSError as e:
            raise CacheUnavailable(f"Error reading cache file {self.path}: {e}") from e
        return parse_record(content)

    def _dump(self, entry: CacheEntry) -> None:
        directory = os.path.dirname(self.path)
        tmp_path = None
        try:
            os.makedirs(directory, exist_ok=True)
            with tempfile.NamedTemporaryFile(
                'w', encoding='utf-8', newline='', dir=directory,
                prefix='.summary-', suffix='.tmp', delete=False
            ) as f:
                tmp_path = f.name
                f.write(format_record(entry))
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        except OSError as e:
            if tmp_path and os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise CacheUnavailable(f"Error writing cache file {self.path}: {e}") from e

    def read(self) -> Optional[CacheEntry]:
        try:
            return self._load()
        except MalformedCacheEntry as e:
            logger.error(f"{e}; treating as cache miss")
        except CacheUnavailable as e:
            logger.error(f"{e}; treating as cache miss")
        return None

    def write(self, entry: CacheEntry) -> bool:
        with self.lock:
            try:
                self._dump(entry)
            except CacheUnavailable as e:
                logger.error(f"{e}; write skipped")
                return False
        logger.info(f"Cache updated at {self.path}")
        return True

    def compare_and_write(self, entry: CacheEntry, expected_generated_at: Optional[int]) -> bool:
        with self.lock:
            try:
                try:
                    current = self._load()
                except MalformedCacheEntry:
                    current = None
                current_ts = current.generated_at if current is not None else None
                if current_ts != expected_generated_at:
                    logger.info(
                        f"Conditional write rejected: expected {expected_generated_at}, found {current_ts}"
                    )
                    return False
                self._dump(entry)
            except CacheUnavailable as e:
                logger.error(f"{e}; write skipped")
                return False
        logger.info(f"Cache updated at {self.path}")
        return True

    def describe(self) -> Dict[str, Any]:
        return {
            'backend': 'file',
            'key': self.key,
            'path': self.path,
        }
