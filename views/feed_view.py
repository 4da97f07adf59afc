"""
RSS 2.0 view of the cached summary.

The document depends only on (generated_at, summary) and the channel
settings, so re-rendering the same entry reproduces it byte for byte.
"""

import logging
import os
import tempfile
from dataclasses import dataclass
from typing import Sequence

from jinja2 import Environment, BaseLoader

from views.formatting import DEFAULT_TIMEZONE, format_timestamp, iso_date, rfc822

logger = logging.getLogger(__name__)

GUID_PREFIX = "adtech-summary-"
FEED_CONTENT_TYPE = "application/rss+xml"

DEFAULT_SOURCE_NAMES = (
    "Marketing Dive", "Adweek", "AdExchanger", "VideoWeek",
    "CIO Dive", "Banking Dive", "Wired",
)

FEED_TEMPLATE = """<?xml version="1.0" encoding="UTF-8" ?>
<rss version="2.0" xmlns:atom="http://www.w3.org/2005/Atom">
  <channel>
    <title>{{ channel.title | e }}</title>
    <link>{{ channel.link | e }}</link>
    <description>{{ channel.description | e }}</description>
    <language>{{ channel.language | e }}</language>
    <lastBuildDate>{{ pub_date }}</lastBuildDate>
    <atom:link href="{{ channel.feed_url | e }}" rel="self" type="application/rss+xml" />

    <item>
      <title>{{ channel.item_title | e }}</title>
      <link>{{ channel.link | e }}</link>
      <guid isPermaLink="false">{{ guid }}</guid>
      <pubDate>{{ pub_date }}</pubDate>
      <description><![CDATA[
{{ body }}

---

**Last Updated**: {{ last_updated }}

**About This Feed**:
This feed contains AI-generated strategic analysis powered by Claude (Anthropic).
The summary is updated periodically based on aggregated news from {{ sources }},
and other industry sources.

**How it works**:
1. The system aggregates news from industry RSS feeds
2. Claude AI analyzes the content for strategic patterns and insights
3. A structured summary is generated highlighting trends, takeaways, and risks
4. This feed is refreshed by a scheduled update job

**Throttling**: To conserve API resources, summaries are generated no more frequently than every {{ channel.throttle_minutes }} minutes.
      ]]></description>
    </item>
  </channel>
</rss>
"""

_env = Environment(loader=BaseLoader(), autoescape=False, keep_trailing_newline=True)
_template = _env.from_string(FEED_TEMPLATE)


@dataclass(frozen=True)
class FeedChannel:
    """Channel-level settings of the published feed."""
    link: str = "http://localhost:3000"
    feed_url: str = "http://localhost:3000/feed.xml"
    title: str = "AdTech News - AI Strategy Summary"
    description: str = (
        "Claude AI-generated strategic analysis of AdTech, Marketing, "
        "and Enterprise Technology news"
    )
    item_title: str = "AI Strategy Summary - AdTech & Marketing News"
    language: str = "en-us"
    throttle_minutes: int = 91
    timezone: str = DEFAULT_TIMEZONE
    source_names: Sequence[str] = DEFAULT_SOURCE_NAMES

    @classmethod
    def from_settings(cls, settings) -> "FeedChannel":
        return cls(
            link=settings.site_url,
            feed_url=f"{settings.site_url}/feed.xml",
            throttle_minutes=settings.throttle_minutes,
            timezone=settings.display_timezone,
        )


def escape_cdata(text: str) -> str:
    """Split every ']]>' so the text can sit inside a CDATA section."""
    return text.replace(']]>', ']]]]><![CDATA[>')


def feed_guid(generated_at: int) -> str:
    """Item guid: one per UTC generation date."""
    return f"{GUID_PREFIX}{iso_date(generated_at)}"


def render_feed(generated_at: int, summary: str, channel: FeedChannel = FeedChannel()) -> str:
    """
    Render the complete RSS document for one summary.

    Args:
        generated_at: Generation time in ms since epoch
        summary: Summary text
        channel: Channel settings

    Returns:
        RSS 2.0 XML document
    """
    return _template.render(
        channel=channel,
        pub_date=rfc822(generated_at),
        guid=feed_guid(generated_at),
        body=escape_cdata(summary),
        last_updated=format_timestamp(generated_at, channel.timezone),
        sources=', '.join(channel.source_names),
    )


def write_feed(path: str, document: str) -> bool:
    """
    Atomically write the feed document.

    Returns:
        True on success; errors are logged and reported as False
    """
    path = os.path.abspath(path)
    directory = os.path.dirname(path)
    tmp_path = None
    try:
        os.makedirs(directory, exist_ok=True)
        with tempfile.NamedTemporaryFile(
            'w', encoding='utf-8', dir=directory, prefix='.feed-', suffix='.tmp', delete=False
        ) as f:
            tmp_path = f.name
            f.write(document)
        os.replace(tmp_path, path)
    except OSError as e:
        logger.error(f"Error writing feed file {path}: {e}")
        if tmp_path and os.path.exists(tmp_path):
            os.remove(tmp_path)
        return False

    logger.info(f"Feed written to {path}")
    return True
