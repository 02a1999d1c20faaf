"""Streak calendar with grace periods and streak freezes."""

from collections.abc import Sequence
from dataclasses import replace
from datetime import UTC, datetime, time, timedelta

from pocket_coach.domain.calendar import CalendarDay, GraceWindow, StreakStatus
from pocket_coach.domain.food_log import (
    DailyFoodLog,
    day_key,
    entries_of,
    find_log,
    has_entries,
    latest_entry,
    localize,
)

WINDOW_DAYS = 7
GRACE_START_HOUR = 18
GRACE_EXPIRY_HOUR = 12
DAYS_PER_FREEZE = 7
MAX_FREEZES_PER_MONTH = 2

_DAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_NO_GRACE = GraceWindow(is_in_grace=False, expires_at=None)


def generate_week_calendar(
    week_logs: Sequence[DailyFoodLog] | None, now: datetime
) -> list[CalendarDay]:
    """Build the 7-day presence calendar ending today, oldest first."""
    logs = week_logs or ()
    today = now.date()
    calendar: list[CalendarDay] = []
    for offset in range(WINDOW_DAYS - 1, -1, -1):
        day = today - timedelta(days=offset)
        key = day_key(day)
        entries = entries_of(find_log(logs, key))
        calendar.append(
            CalendarDay(
                date=key,
                day_of_week=_DAY_LABELS[day.weekday()],
                day_number=day.day,
                has_entries=bool(entries),
                entries_count=len(entries),
                is_today=offset == 0,
            )
        )
    return calendar


def calculate_streak(calendar: Sequence[CalendarDay]) -> int:
    """Count consecutive days ending at the most recent day.

    Logged and frozen days add to the streak. A grace day keeps the chain
    alive without counting until food is actually logged.
    """
    streak = 0
    for day in reversed(calendar):
        if day.has_entries or day.is_streak_freeze:
            streak += 1
        elif day.is_grace_period:
            continue
        else:
            break
    return streak


def check_grace_period(
    week_logs: Sequence[DailyFoodLog] | None, now: datetime
) -> GraceWindow:
    """Grant a grace window until noon after a late-evening log yesterday."""
    logs = week_logs or ()
    tz = now.tzinfo or UTC
    now = now.replace(tzinfo=tz)
    today = now.date()
    if has_entries(find_log(logs, day_key(today))):
        return _NO_GRACE

    yesterday_log = find_log(logs, day_key(today - timedelta(days=1)))
    last_entry = latest_entry(yesterday_log, tz)
    if last_entry is None:
        return _NO_GRACE
    if localize(last_entry.logged_at, tz).hour < GRACE_START_HOUR:
        return _NO_GRACE

    expires_at = datetime.combine(today, time(hour=GRACE_EXPIRY_HOUR), tzinfo=tz)
    if now < expires_at:
        return GraceWindow(is_in_grace=True, expires_at=expires_at)
    return _NO_GRACE


def apply_grace_period(
    calendar: Sequence[CalendarDay], grace: GraceWindow
) -> list[CalendarDay]:
    """Return a calendar with today flagged when the grace window is active."""
    if not grace.is_in_grace:
        return list(calendar)
    return [
        replace(day, is_grace_period=True)
        if day.is_today and not day.has_entries
        else day
        for day in calendar
    ]


def calculate_streak_freezes_available(
    current_streak: int, freezes_used_this_month: int
) -> int:
    """Return usable freezes: one per 7 streak days, at most 2 a month."""
    earned = max(current_streak, 0) // DAYS_PER_FREEZE
    available = min(earned, MAX_FREEZES_PER_MONTH) - max(freezes_used_this_month, 0)
    return max(0, available)


def apply_streak_freezes(
    calendar: Sequence[CalendarDay], freezes_available: int
) -> tuple[list[CalendarDay], int]:
    """Bridge single missed days in the current chain with freezes.

    Returns the new calendar and the number of freezes consumed. Today is
    never frozen: an unlogged today without grace has no chain to preserve.
    """
    days = list(calendar)
    if not days or freezes_available <= 0:
        return days, 0
    today = days[-1]
    if not (today.has_entries or today.is_grace_period or today.is_streak_freeze):
        return days, 0

    used = 0
    for index in range(len(days) - 2, 0, -1):
        day = days[index]
        if day.has_entries or day.is_streak_freeze:
            continue
        if used < freezes_available and days[index - 1].has_entries:
            days[index] = replace(day, is_streak_freeze=True)
            used += 1
            continue
        break
    return days, used


def get_streak_message(streak: int, calendar: Sequence[CalendarDay]) -> str:
    """Return the streak headline shown above the calendar."""
    if streak <= 0:
        return "Start your streak today! 🌟"
    if streak == 1:
        return "Great start! Keep it going tomorrow! 💪"
    if streak == len(calendar):
        return f"Perfect week! {streak} days straight! 🔥"
    if streak >= 3:
        return f"{streak} days in a row! You're on fire! 🔥"
    return f"{streak} day streak! Don't break the chain! ⛓️"


def build_streak_status(
    week_logs: Sequence[DailyFoodLog] | None,
    now: datetime,
    freezes_used_this_month: int = 0,
) -> StreakStatus:
    """Compute the calendar, grace window, freezes and streak together."""
    grace = check_grace_period(week_logs, now)
    calendar = apply_grace_period(generate_week_calendar(week_logs, now), grace)
    # Only the chain actually logged earns freezes.
    available = calculate_streak_freezes_available(
        calculate_streak(calendar), freezes_used_this_month
    )
    calendar, used_now = apply_streak_freezes(calendar, available)
    streak = calculate_streak(calendar)
    return StreakStatus(
        current_streak=streak,
        is_in_grace_period=grace.is_in_grace,
        grace_expires_at=grace.expires_at,
        streak_freezes_available=available - used_now,
        streak_freezes_used_this_month=max(freezes_used_this_month, 0) + used_now,
        calendar=calendar,
        message=get_streak_message(streak, calendar),
    )

