"""
Generation coordinator: the throttled summary cache.

Each request either serves the cached summary (SERVE_CACHED) or calls the
summarizer and persists the result (GENERATE_NEW). The read, decide,
generate and write sequence is serialized per cache key inside the process,
and the final write is conditional on the entry that was read, so a second
instance sharing the store cannot overwrite a newer summary.
"""

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional, Tuple, Union

from cache.base import CacheEntry, SummaryStore
from common.errors import GenerationFailed, MissingInput
from common.logging import StructuredLogger
from summarization.throttle import ThrottleDecision, decide

logger = logging.getLogger(__name__)

InputContent = Union[str, Callable[[], str], None]


@dataclass(frozen=True)
class SummaryResult:
    """
    Outcome of obtain_summary.

    Attributes:
        summary: Clean summary text
        generated_at: When the summary was produced (ms since epoch)
        was_fresh: True when served from a fresh cache entry
    """
    summary: str
    generated_at: int
    was_fresh: bool


def current_millis() -> int:
    """Wall-clock time in milliseconds since epoch."""
    return int(time.time() * 1000)


class SummaryCoordinator:
    """
    Orchestrates cache lookup, throttle decision and summary generation.
    """

    def __init__(self, store: SummaryStore, summarizer, window_ms: int):
        """
        Initialize the coordinator.

        Args:
            store: Summary store holding the single cache entry
            summarizer: Object with a blocking summarize(content) -> str
            window_ms: Throttle window in milliseconds
        """
        self.store = store
        self.summarizer = summarizer
        self.window_ms = window_ms
        self.logger = StructuredLogger(__name__, {"key": store.key})

        # One lock per cache key
        self._locks: Dict[str, asyncio.Lock] = {}

        logger.info(f"Initialized SummaryCoordinator with {window_ms / 60000:g} minute window")

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        return lock

    async def _run(self, func, *args):
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, lambda: func(*args))

    async def _resolve_input(self, input_content: InputContent) -> str:
        if callable(input_content):
            input_content = await self._run(input_content)
        if not input_content or not str(input_content).strip():
            raise MissingInput("Missing HTML content in request body.")
        return input_content

    async def _generate(self, content: str) -> str:
        start_time = time.time()
        try:
            summary = await self._run(self.summarizer.summarize, content)
        except GenerationFailed as e:
            self.logger.error("Summary generation failed", status=e.provider_status, error=e.message)
            raise
        except Exception as e:
            self.logger.exception("Summarizer raised an unexpected error", error=str(e))
            raise GenerationFailed(None, str(e)) from e

        if not summary or not summary.strip():
            raise GenerationFailed(None, "Summarizer returned an empty result")

        self.logger.info(
            "Summary generated",
            seconds=f"{time.time() - start_time:.2f}",
            length=len(summary)
        )
        return summary

    async def obtain_summary(
        self,
        input_content: InputContent,
        now: int,
        force_regenerate: bool = False,
        on_generated: Optional[Callable[[SummaryResult], Any]] = None
    ) -> SummaryResult:
        """
        Return the current summary, generating a new one only when allowed.

        Args:
            input_content: Text to summarize, or a zero-argument callable that
                produces it; only consulted when a new summary is generated
            now: Current time in milliseconds since epoch
            force_regenerate: Generate even if the cached entry is fresh
            on_generated: Blocking callback run with a newly generated result
                while the per-key lock is still held

        Returns:
            SummaryResult

        Raises:
            MissingInput: generation required but no content was supplied
            GenerationFailed: the summarizer failed; the cache is unchanged
        """
        async with self._lock_for(self.store.key):
            entry = await self._run(self.store.read)

            if entry is None:
                self.logger.info("No cached summary found; generating")
            elif force_regenerate:
                self.logger.info("Forced regeneration requested", generated_at=entry.generated_at)
            else:
                decision = decide(now, entry.generated_at, self.window_ms)
                if decision.is_fresh:
                    self.logger.info(
                        "Throttle active; serving cached summary",
                        generated_at=entry.generated_at,
                        remaining_ms=decision.remaining
                    )
                    return SummaryResult(entry.payload, entry.generated_at, True)
                self.logger.info("Throttle window expired; generating", generated_at=entry.generated_at)

            content = await self._resolve_input(input_content)
            summary = await self._generate(content)

            expected = entry.generated_at if entry is not None else None
            written = await self._run(self.store.compare_and_write, CacheEntry(now, summary), expected)
            if not written:
                current = await self._run(self.store.read)
                if (
                    current is not None
                    and current.generated_at != expected
                    and decide(now, current.generated_at, self.window_ms).is_fresh
                ):
                    self.logger.warning(
                        "Another writer stored a newer summary; serving it",
                        generated_at=current.generated_at
                    )
                    return SummaryResult(current.payload, current.generated_at, True)
                self.logger.warning("Summary could not be persisted; returning it uncached")

            result = SummaryResult(summary, now, False)
            if on_generated is not None:
                await self._run(on_generated, result)
            return result

    async def peek(self, now: int) -> Optional[Tuple[CacheEntry, ThrottleDecision]]:
        """
        Inspect the cached entry without generating.

        Returns:
            (entry, decision) or None when nothing is cached
        """
        entry = await self._run(self.store.read)
        if entry is None:
            return None
        return entry, decide(now, entry.generated_at, self.window_ms)
