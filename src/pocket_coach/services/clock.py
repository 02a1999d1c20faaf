"""Current-time providers."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, tzinfo
from typing import Protocol
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

_logger = logging.getLogger(__name__)


class Clock(Protocol):
    """Source of the user's local wall-clock time."""

    def now(self) -> datetime:
        """Return the current timezone-aware local time."""


@dataclass
class SystemClock(Clock):
    """Clock backed by the system time in a fixed timezone."""

    timezone: tzinfo = UTC

    @classmethod
    def for_timezone(cls, timezone_name: str) -> "SystemClock":
        """Create a clock for a named timezone."""
        return cls(timezone=parse_timezone(timezone_name))

    def now(self) -> datetime:
        """Return the current local time."""
        return datetime.now(tz=self.timezone)


def parse_timezone(timezone_name: str | None) -> tzinfo:
    """Resolve a timezone name, falling back to UTC."""
    if not timezone_name:
        return UTC
    try:
        return ZoneInfo(timezone_name)
    except (ZoneInfoNotFoundError, ValueError):
        _logger.warning("Unknown timezone %s, using UTC", timezone_name)
        return UTC
