"""Domain models for food suggestions and reminders."""

from dataclasses import dataclass
from datetime import datetime

from pocket_coach.domain.food_log import MacroTotals, MealType


@dataclass(frozen=True)
class RecentFood:
    """Recently logged food, represented by its first occurrence."""

    food_name: str
    serving_size: float
    serving_unit: str
    calories: float
    protein: float
    carbs: float
    fat: float
    last_logged: datetime
    times_logged: int


@dataclass(frozen=True)
class QuickLogSuggestion:
    """Food repeatedly logged for the same meal, with averaged macros."""

    food_name: str
    meal_type: MealType
    count: int
    last_logged: datetime
    avg_calories: float
    avg_protein: float
    avg_carbs: float
    avg_fat: float


@dataclass(frozen=True)
class MealReminderTime:
    """Daily reminder time for a meal type."""

    meal_type: MealType
    hour: int
    minute: int
    message: str


@dataclass(frozen=True)
class ScheduledReminder:
    """Daily repeating notification handed to the device."""

    title: str
    body: str
    hour: int
    minute: int
    data: dict[str, str]


@dataclass(frozen=True)
class MealSuggestion:
    """Food that would round out the current meal."""

    food: str
    reason: str
    macros: MacroTotals
    priority: int
