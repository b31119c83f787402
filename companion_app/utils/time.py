"""
Time utilities for epoch-millisecond timestamps.

The persistence store and lifecycle controller read wall-clock time through
a ``Clock`` callable so that ordering and timestamps can be controlled in tests.
"""

import time
from datetime import datetime, timezone
from typing import Callable, Optional

Clock = Callable[[], int]


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


def ms_to_datetime(timestamp_ms: int) -> datetime:
    """Convert epoch milliseconds to a UTC datetime."""
    return datetime.fromtimestamp(timestamp_ms / 1000.0, tz=timezone.utc)


def format_relative_time(timestamp_ms: int, now: Optional[int] = None) -> str:
    """
    Format a timestamp relative to now for plan listings.

    Args:
        timestamp_ms: Timestamp to describe
        now: Reference time in epoch ms, defaults to wall clock

    Returns:
        "Just now", "5m ago", "3h ago", "Yesterday", "4d ago" or an ISO date
    """
    if now is None:
        now = now_ms()

    diff = now - timestamp_ms
    minutes = diff // 60_000
    hours = diff // 3_600_000
    days = diff // 86_400_000

    if minutes < 1:
        return "Just now"
    if minutes < 60:
        return f"{minutes}m ago"
    if hours < 24:
        return f"{hours}h ago"
    if days == 1:
        return "Yesterday"
    if days < 7:
        return f"{days}d ago"
    return ms_to_datetime(timestamp_ms).date().isoformat()


class ManualClock:
    """Deterministic clock that advances only when told to."""

    def __init__(self, start_ms: int = 1_700_000_000_000, step_ms: int = 0):
        self.current = start_ms
        self.step_ms = step_ms

    def __call__(self) -> int:
        value = self.current
        self.current += self.step_ms
        return value

    def advance(self, delta_ms: int) -> None:
        self.current += delta_ms
