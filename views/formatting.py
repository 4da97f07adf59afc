"""Timestamp formatting for the rendered views."""

from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Optional
from zoneinfo import ZoneInfo

DEFAULT_TIMEZONE = "America/New_York"


def to_datetime(ms: int) -> datetime:
    """Convert epoch milliseconds to an aware UTC datetime."""
    return datetime.fromtimestamp(ms / 1000, tz=timezone.utc)


def format_timestamp(ms: Optional[int], tz: str = DEFAULT_TIMEZONE) -> str:
    """
    Human-readable timestamp in the display timezone.

    Example: "Oct 18, 2026, 07:48:12 AM EDT"
    """
    if ms is None:
        return 'N/A'
    local = to_datetime(ms).astimezone(ZoneInfo(tz))
    return local.strftime('%b %d, %Y, %I:%M:%S %p %Z')


def rfc822(ms: int) -> str:
    """RFC-822 date in GMT, as used by RSS pubDate."""
    return format_datetime(to_datetime(ms).replace(microsecond=0), usegmt=True)


def iso_date(ms: int) -> str:
    """UTC calendar date, YYYY-MM-DD."""
    return to_datetime(ms).date().isoformat()
