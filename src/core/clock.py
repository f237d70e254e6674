"""Injectable clock and timestamp helpers.

Stores never read system time directly. Liveness checks go through a
``Clock`` callable so tests and callers control what "now" means.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    """Return the current wall-clock instant in UTC."""
    return datetime.now(timezone.utc)


def normalize_timestamp(value: datetime) -> datetime:
    """Return an aware timestamp, treating naive values as UTC.

    Args:
        value: Caller-supplied instant.

    Returns:
        Timezone-aware datetime comparable with any other normalized value.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value


class FixedClock:
    """Manually advanced clock for deterministic liveness checks."""

    def __init__(self, start: datetime) -> None:
        self._now = normalize_timestamp(start)

    def __call__(self) -> datetime:
        return self._now

    def set(self, value: datetime) -> None:
        """Move the clock to an absolute instant."""
        self._now = normalize_timestamp(value)

    def advance(self, seconds: float) -> None:
        """Move the clock forward by a number of seconds."""
        self._now = self._now + timedelta(seconds=seconds)
