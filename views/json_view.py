"""
JSON view of a summary result.

The header banner and the summary body are kept apart; they are only ever
combined by the client that displays them.
"""

import math
from typing import Any, Dict

from views.formatting import DEFAULT_TIMEZONE, format_timestamp

THROTTLED_HEADER = """## ⏳ Summary Throttle Active ⏳
This summary was last generated at **{generated}**.
The next beneficial generation time is **{next_run}** (in {minutes} minutes).
The AI model was not called, to conserve the finite API interactions per day.
---
"""

FRESH_HEADER = """## ✅ Summary Freshly Generated by Claude ✅
This summary was generated **just now** at **{generated}**.
The next beneficial generation time will be **{next_run}**.
---
"""


def render_header(result, now: int, window_ms: int, tz: str = DEFAULT_TIMEZONE) -> str:
    """
    Build the status banner for a summary result.

    Args:
        result: SummaryResult from the coordinator
        now: Current time in ms since epoch
        window_ms: Throttle window in ms
        tz: Display timezone

    Returns:
        Markdown banner
    """
    next_run = result.generated_at + window_ms
    if result.was_fresh:
        remaining = max(next_run - now, 0)
        return THROTTLED_HEADER.format(
            generated=format_timestamp(result.generated_at, tz),
            next_run=format_timestamp(next_run, tz),
            minutes=math.ceil(remaining / 60000),
        )
    return FRESH_HEADER.format(
        generated=format_timestamp(result.generated_at, tz),
        next_run=format_timestamp(next_run, tz),
    )


def render_json_view(
    result,
    now: int,
    window_ms: int,
    tz: str = DEFAULT_TIMEZONE,
    include_header: bool = True
) -> Dict[str, Any]:
    """
    Render the API response body.

    Returns:
        {"header": banner or None, "summary": raw summary text}
    """
    return {
        'header': render_header(result, now, window_ms, tz) if include_header else None,
        'summary': result.summary,
    }
