"""
Throttle policy for summary generation.

All values are integer milliseconds since epoch. The policy is a pure
function; formatting for display lives in the views package.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class ThrottleDecision:
    """
    Result of applying the throttle window to a cached entry.

    Attributes:
        is_fresh: True when the entry is younger than the window
        remaining: Milliseconds until the window closes (None when expired)
        next_eligible_at: Earliest time a new generation is allowed
    """
    is_fresh: bool
    remaining: Optional[int]
    next_eligible_at: int


def decide(now: int, generated_at: int, window: int) -> ThrottleDecision:
    """
    Decide whether an entry generated at `generated_at` is still fresh at `now`.

    An age exactly equal to the window counts as expired. A generated_at in
    the future (clock skew) is fresh with remaining > window; no clamping.
    """
    age = now - generated_at
    is_fresh = age < window
    return ThrottleDecision(
        is_fresh=is_fresh,
        remaining=window - age if is_fresh else None,
        next_eligible_at=generated_at + window,
    )
