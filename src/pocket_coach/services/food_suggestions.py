"""Recent-food and quick-log recommendations from a week of entries."""

from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import datetime

from pocket_coach.domain.food_log import (
    DailyFoodLog,
    FoodLogEntry,
    MealType,
    iter_entries,
)
from pocket_coach.domain.suggestions import QuickLogSuggestion, RecentFood

RECENT_FOODS_LIMIT = 5
QUICK_LOG_LIMIT = 3
QUICK_LOG_MIN_COUNT = 3


@dataclass
class _FoodGroup:
    entries: list[FoodLogEntry] = field(default_factory=list)

    @property
    def first(self) -> FoodLogEntry:
        return self.entries[0]

    @property
    def last_logged(self) -> datetime:
        return max(self.entries, key=_instant).logged_at

    def mean(self, macro: str) -> float:
        return sum(getattr(entry, macro) for entry in self.entries) / len(self.entries)


def normalize_food_name(name: str) -> str:
    """Key used to group entries of the same food."""
    return name.strip().lower()


def get_recent_foods(
    week_logs: Sequence[DailyFoodLog] | None, limit: int = RECENT_FOODS_LIMIT
) -> list[RecentFood]:
    """Return the most frequently logged foods of the week.

    Each food keeps the serving and macros of its first occurrence; only
    ``last_logged`` and ``times_logged`` look at every occurrence.
    """
    groups: dict[str, _FoodGroup] = {}
    for entry in iter_entries(week_logs):
        key = normalize_food_name(entry.food_name)
        groups.setdefault(key, _FoodGroup()).entries.append(entry)

    foods = [
        RecentFood(
            food_name=group.first.food_name,
            serving_size=group.first.serving_size,
            serving_unit=group.first.serving_unit,
            calories=group.first.calories,
            protein=group.first.protein,
            carbs=group.first.carbs,
            fat=group.first.fat,
            last_logged=group.last_logged,
            times_logged=len(group.entries),
        )
        for group in groups.values()
    ]
    foods.sort(key=lambda food: food.times_logged, reverse=True)
    return foods[: max(limit, 0)]


def get_quick_log_suggestions(
    week_logs: Sequence[DailyFoodLog] | None, limit: int = QUICK_LOG_LIMIT
) -> list[QuickLogSuggestion]:
    """Return foods repeatedly logged for the same meal, with averaged macros."""
    groups: dict[tuple[str, MealType], _FoodGroup] = {}
    for entry in iter_entries(week_logs):
        key = (normalize_food_name(entry.food_name), entry.meal_type)
        groups.setdefault(key, _FoodGroup()).entries.append(entry)

    suggestions = [
        QuickLogSuggestion(
            food_name=group.first.food_name,
            meal_type=meal_type,
            count=len(group.entries),
            last_logged=group.last_logged,
            avg_calories=group.mean("calories"),
            avg_protein=group.mean("protein"),
            avg_carbs=group.mean("carbs"),
            avg_fat=group.mean("fat"),
        )
        for (_, meal_type), group in groups.items()
        if len(group.entries) >= QUICK_LOG_MIN_COUNT
    ]
    suggestions.sort(
        key=lambda suggestion: (suggestion.count, suggestion.last_logged.timestamp()),
        reverse=True,
    )
    return suggestions[: max(limit, 0)]


def current_meal_type(now: datetime) -> MealType:
    """Map the hour to a meal type; breakfast starts at 5 here."""
    hour = now.hour
    if 5 <= hour < 11:
        return "breakfast"
    if 11 <= hour < 15:
        return "lunch"
    if 15 <= hour < 18:
        return "snack"
    return "dinner"


def get_relevant_quick_log(
    suggestions: Sequence[QuickLogSuggestion], now: datetime
) -> QuickLogSuggestion | None:
    """Prefer a suggestion for the current meal, else the most frequent one."""
    if not suggestions:
        return None
    meal_type = current_meal_type(now)
    return next(
        (suggestion for suggestion in suggestions if suggestion.meal_type == meal_type),
        suggestions[0],
    )


def _instant(entry: FoodLogEntry) -> float:
    return entry.logged_at.timestamp()
