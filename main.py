#!/usr/bin/env python3
"""
Command line entry point.

    python main.py update [--force] [--feed-path PATH]   headless feed refresh
    python main.py serve [--host HOST] [--port PORT]     run the web server
    python main.py status                                print cache state
"""

import argparse
import asyncio
import json
import logging
import math
import sys
from typing import Callable, Optional

from cache import create_store
from common.errors import ConfigurationError, GenerationFailed, MissingInput, SourceFetchFailed
from common.logging import configure_logging
from reader.feeds import fetch_all_feeds
from summarization.base import create_summarizer
from summarization.coordinator import SummaryCoordinator, current_millis
from summarization.text_processing import format_news_for_prompt
from utils.config import Settings
from views.feed_view import FeedChannel, render_feed, write_feed
from views.formatting import format_timestamp

logger = logging.getLogger(__name__)


def build_news_digest(settings: Settings) -> str:
    """Fetch every default feed and format the digest for the summarizer."""
    items = fetch_all_feeds(limit=settings.feed_item_limit, max_workers=settings.fetch_workers)
    return format_news_for_prompt(items)


async def run_update(
    settings: Settings,
    force: bool = False,
    feed_path: Optional[str] = None,
    store=None,
    summarizer=None,
    news_digest: Optional[Callable[[], str]] = None
) -> int:
    """
    Refresh the published feed, generating a new summary only when allowed.

    Returns:
        Process exit code
    """
    logger.info("Daily RSS feed update - starting")

    coordinator = SummaryCoordinator(
        store if store is not None else create_store(settings),
        summarizer if summarizer is not None else create_summarizer(settings),
        settings.throttle_ms
    )
    news_digest = news_digest or (lambda: build_news_digest(settings))
    channel = FeedChannel.from_settings(settings)
    feed_path = feed_path or settings.feed_path
    published = []
    now = current_millis()

    def publish_feed(result):
        published.append(write_feed(feed_path, render_feed(result.generated_at, result.summary, channel)))

    try:
        result = await coordinator.obtain_summary(
            news_digest, now, force_regenerate=force, on_generated=publish_feed
        )
    except SourceFetchFailed as e:
        logger.error(f"{e}. Aborting summary generation.")
        return 1
    except MissingInput as e:
        logger.error(f"News digest was empty: {e}")
        return 1
    except GenerationFailed as e:
        logger.error(f"Fatal error during summary generation: {e}")
        return 1

    tz = settings.display_timezone
    next_run = result.generated_at + settings.throttle_ms
    if result.was_fresh:
        minutes = math.ceil(max(next_run - now, 0) / 60000)
        logger.info(f"Summary was generated recently at {format_timestamp(result.generated_at, tz)}")
        logger.info(f"Next generation available in {minutes} minutes; using cached summary")

    if not published:
        published.append(write_feed(feed_path, render_feed(result.generated_at, result.summary, channel)))
    if not published[0]:
        return 1

    logger.info(f"Daily update completed ({'cached' if result.was_fresh else 'new'} summary)")
    logger.info(f"Generated at: {format_timestamp(result.generated_at, tz)}")
    logger.info(f"Next update: {format_timestamp(next_run, tz)}")
    return 0


async def show_status(settings: Settings, store=None) -> dict:
    """Collect the cache status as a JSON-serializable dict."""
    store = store if store is not None else create_store(settings)
    coordinator = SummaryCoordinator(store, None, settings.throttle_ms)
    cached = await coordinator.peek(current_millis())

    status = {'has_summary': cached is not None, 'cache': store.describe()}
    if cached is not None:
        entry, decision = cached
        status.update({
            'generated_at': entry.generated_at,
            'generated_at_display': format_timestamp(entry.generated_at, settings.display_timezone),
            'is_fresh': decision.is_fresh,
            'next_eligible_at': decision.next_eligible_at,
            'remaining_ms': decision.remaining,
        })
    return status


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="AdTech news strategy summary service")
    subparsers = parser.add_subparsers(dest="command", required=True)

    update = subparsers.add_parser("update", help="Refresh feed.xml, generating a summary if the throttle allows")
    update.add_argument("--force", action="store_true", help="Generate even if the cached summary is fresh")
    update.add_argument("--feed-path", help="Where to write the RSS document")

    serve = subparsers.add_parser("serve", help="Run the web server")
    serve.add_argument("--host", help="Bind address")
    serve.add_argument("--port", type=int, help="Port")

    subparsers.add_parser("status", help="Print the cache status as JSON")
    return parser


def main(argv=None) -> int:
    """Main application entry point."""
    args = build_parser().parse_args(argv)

    try:
        settings = Settings.from_env()
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(level=settings.log_level, log_file=settings.log_file)

    if args.command == "update":
        return asyncio.run(run_update(settings, force=args.force, feed_path=args.feed_path))

    if args.command == "status":
        print(json.dumps(asyncio.run(show_status(settings)), indent=2))
        return 0

    import uvicorn
    uvicorn.run(
        "server:create_app",
        factory=True,
        host=args.host or settings.host,
        port=args.port or settings.port,
        workers=1
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())
