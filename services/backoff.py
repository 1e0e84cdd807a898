"""Exponential backoff helpers shared by the retry loops.

Used by:
  - WordPress.com publish-verify loop: delay in seconds between attempts
  - publishing-job dispatcher: minutes until a failed job runs again

Rule: delay = base * 2^attempt, capped.
"""

from __future__ import annotations

# Default cap on a single backoff step (same unit as base)
_DEFAULT_CAP = 60.0


def backoff_delay(attempt: int, *, base: float = 1.0, cap: float = _DEFAULT_CAP) -> float:
    """Return base * 2^attempt, capped at cap.

    attempt is the number of attempts already made (1 after the first failure).
    Negative attempts are treated as 0.
    """
    delay: float = base * (2 ** max(attempt, 0))
    return min(delay, cap)
