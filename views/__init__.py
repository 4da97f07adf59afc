"""
Stateless projections of a summary: the JSON API body and the RSS feed.
"""

from views.formatting import format_timestamp, rfc822
from views.json_view import render_json_view, render_header
from views.feed_view import (
    FEED_CONTENT_TYPE,
    FeedChannel,
    escape_cdata,
    feed_guid,
    render_feed,
    write_feed,
)

__all__ = [
    'format_timestamp',
    'rfc822',
    'render_json_view',
    'render_header',
    'FEED_CONTENT_TYPE',
    'FeedChannel',
    'escape_cdata',
    'feed_guid',
    'render_feed',
    'write_feed',
]
