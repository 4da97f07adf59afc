"""
News source collection for the strategy summary.
"""

from reader.sources import DEFAULT_FEEDS, EDITORIAL_FEEDS, REDDIT_FEEDS, FeedSource
from reader.feeds import NewsItem, fetch_feed, fetch_all_feeds

__all__ = [
    'DEFAULT_FEEDS',
    'EDITORIAL_FEEDS',
    'REDDIT_FEEDS',
    'FeedSource',
    'NewsItem',
    'fetch_feed',
    'fetch_all_feeds',
]
