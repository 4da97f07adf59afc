"""
News source aggregation.

Fetches every configured RSS feed, skipping the ones that fail, and returns
the collected articles in source order.
"""

import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from dataclasses import dataclass
from typing import List, Optional, Sequence

import feedparser
import requests

from common.errors import SourceFetchFailed
from common.performance import track_performance
from reader.sources import DEFAULT_FEEDS, FeedSource
from utils.http import create_http_session

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = (10, 30)  # (connect, read) seconds


@dataclass(frozen=True)
class NewsItem:
    """An article collected from a news source."""
    title: str
    source: str
    description: str
    link: str
    published_at: Optional[str] = None


def _entry_description(entry) -> str:
    description = entry.get('summary') or entry.get('description') or ''
    if not description:
        content = entry.get('content')
        if isinstance(content, list) and content:
            description = content[0].get('value', '')
    return description


def fetch_feed(
    feed: FeedSource,
    session: Optional[requests.Session] = None,
    limit: int = 10
) -> List[NewsItem]:
    """
    Fetch one feed.

    Args:
        feed: Feed URL and attribution
        session: HTTP session (a retrying session is created if omitted)
        limit: Maximum number of entries to keep

    Returns:
        Up to `limit` news items

    Raises:
        SourceFetchFailed: on HTTP/network errors or an unparseable feed
    """
    session = session or create_http_session()
    try:
        response = session.get(feed.url, timeout=REQUEST_TIMEOUT)
        response.raise_for_status()
    except requests.RequestException as e:
        raise SourceFetchFailed(f"Failed to fetch {feed.source}: {e}") from e

    parsed = feedparser.parse(response.content)
    entries = getattr(parsed, 'entries', None) or []
    if not entries:
        reason = getattr(parsed, 'bozo_exception', None) or 'no entries'
        raise SourceFetchFailed(f"Invalid response from {feed.source}: {reason}")

    items = []
    for entry in entries[:limit]:
        items.append(NewsItem(
            title=(entry.get('title') or 'No Title').strip(),
            source=feed.source,
            description=_entry_description(entry),
            link=entry.get('link') or '',
            published_at=entry.get('published') or entry.get('updated'),
        ))
    return items


@track_performance
def fetch_all_feeds(
    sources: Sequence[FeedSource] = DEFAULT_FEEDS,
    session: Optional[requests.Session] = None,
    limit: int = 10,
    max_workers: int = 8
) -> List[NewsItem]:
    """
    Fetch all feeds concurrently and aggregate their items.

    Per-source failures are logged and skipped.

    Raises:
        SourceFetchFailed: if no items were collected from any source
    """
    logger.info(f"Fetching {len(sources)} RSS feeds...")
    session = session or create_http_session()
    results = {}

    with ThreadPoolExecutor(max_workers=max(1, min(max_workers, len(sources) or 1))) as executor:
        futures = {
            executor.submit(fetch_feed, feed, session, limit): index
            for index, feed in enumerate(sources)
        }
        for future in as_completed(futures):
            index = futures[future]
            try:
                results[index] = future.result()
            except SourceFetchFailed as e:
                logger.warning(str(e))

    items = [item for index in sorted(results) for item in results[index]]
    if not items:
        raise SourceFetchFailed("No news items fetched from any source")

    logger.info(f"Fetched {len(items)} news items from {len(results)}/{len(sources)} sources")
    return items
