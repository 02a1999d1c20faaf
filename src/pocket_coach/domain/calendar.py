"""Domain models for the streak calendar."""

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class CalendarDay:
    """Read-only view of one day in the rolling 7-day window."""

    date: str
    day_of_week: str
    day_number: int
    has_entries: bool
    entries_count: int
    is_today: bool
    is_grace_period: bool = False
    is_streak_freeze: bool = False


@dataclass(frozen=True)
class GraceWindow:
    """Grace allowance granted after a late-evening log."""

    is_in_grace: bool
    expires_at: datetime | None


@dataclass(frozen=True)
class StreakStatus:
    """Current streak with grace and freeze details."""

    current_streak: int
    is_in_grace_period: bool
    grace_expires_at: datetime | None
    streak_freezes_available: int
    streak_freezes_used_this_month: int
    calendar: list[CalendarDay]
    message: str
