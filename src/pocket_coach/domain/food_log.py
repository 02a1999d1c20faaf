"""Domain models for daily food logs."""

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field
from datetime import date, datetime, time, tzinfo
from typing import Literal

MealType = Literal["breakfast", "lunch", "dinner", "snack"]
MEAL_TYPES: tuple[MealType, ...] = ("breakfast", "lunch", "dinner", "snack")

MacroName = Literal["calories", "protein", "carbs", "fat"]
MACRO_NAMES: tuple[MacroName, ...] = ("calories", "protein", "carbs", "fat")


@dataclass(frozen=True)
class MacroTotals:
    """Calories and macronutrients for a day or a target."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fat: float = 0.0

    @classmethod
    def sum_of(cls, entries: Iterable["FoodLogEntry"]) -> "MacroTotals":
        """Sum the macros of the given entries."""
        total = cls()
        for entry in entries:
            total = cls(
                calories=total.calories + entry.calories,
                protein=total.protein + entry.protein,
                carbs=total.carbs + entry.carbs,
                fat=total.fat + entry.fat,
            )
        return total

    def get(self, macro: MacroName) -> float:
        """Return the value for a macro by name."""
        return float(getattr(self, macro))


@dataclass(frozen=True)
class FoodLogEntry:
    """A single logged food item."""

    id: int | None
    food_name: str
    serving_size: float
    serving_unit: str
    calories: float
    protein: float
    carbs: float
    fat: float
    meal_type: MealType
    logged_at: datetime


@dataclass(frozen=True)
class DailyAdjustment:
    """Signed macro deltas applied on top of the base targets."""

    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DailyFoodLog:
    """One calendar day's nutrition record."""

    date: str
    entries: tuple[FoodLogEntry, ...] = ()
    totals: MacroTotals = field(default_factory=MacroTotals)
    targets: MacroTotals = field(default_factory=MacroTotals)
    base_targets: MacroTotals | None = None
    daily_adjustment: DailyAdjustment | None = None
    adjustment_message: str | None = None


def has_entries(log: DailyFoodLog | None) -> bool:
    """Return True when the log exists and holds entries."""
    return log is not None and bool(log.entries or ())


def entries_of(log: DailyFoodLog | None) -> tuple[FoodLogEntry, ...]:
    """Return the log's entries, or an empty tuple for a missing log."""
    if log is None:
        return ()
    return tuple(log.entries or ())


def day_key(day: date) -> str:
    """Format a date as the ISO day string used to key logs."""
    return day.isoformat()


def parse_day(value: str | None) -> date | None:
    """Parse an ISO day string, returning None when malformed."""
    if not value:
        return None
    try:
        return date.fromisoformat(value[:10])
    except ValueError:
        return None


def noon_of(day: date, tz: tzinfo) -> datetime:
    """Return noon local time on the given day."""
    return datetime.combine(day, time(hour=12), tzinfo=tz)


def find_log(week_logs: Iterable[DailyFoodLog], key: str) -> DailyFoodLog | None:
    """Return the first log whose date matches the key exactly."""
    for log in week_logs:
        if log is not None and log.date == key:
            return log
    return None


def distinct_days(
    week_logs: Iterable[DailyFoodLog | None] | None,
) -> list[DailyFoodLog]:
    """Keep the first log for each date, preserving order."""
    seen: set[str] = set()
    logs: list[DailyFoodLog] = []
    for log in week_logs or ():
        if log is None or log.date in seen:
            continue
        seen.add(log.date)
        logs.append(log)
    return logs


def localize(value: datetime, tz: tzinfo) -> datetime:
    """Express a timestamp in local time, treating naive values as local."""
    if value.tzinfo is None:
        return value.replace(tzinfo=tz)
    return value.astimezone(tz)


def latest_entry(log: DailyFoodLog | None, tz: tzinfo) -> FoodLogEntry | None:
    """Return the most recently logged entry, if any."""
    entries = entries_of(log)
    if not entries:
        return None
    return max(entries, key=lambda entry: localize(entry.logged_at, tz))


def iter_entries(
    week_logs: Iterable[DailyFoodLog | None] | None,
) -> Iterator[FoodLogEntry]:
    """Yield every entry across the logs, in log order."""
    for log in week_logs or ():
        yield from entries_of(log)
