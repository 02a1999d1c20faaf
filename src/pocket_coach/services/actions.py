"""Contextual quick actions for the dashboard."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from pocket_coach.domain.actions import QuickAction
from pocket_coach.domain.food_log import DailyFoodLog, MealType, entries_of

DEFAULT_ACTION_LIMIT = 6
DASHBOARD_ACTION_LIMIT = 3
PROGRESS_PHOTO_STREAKS = frozenset({7, 14, 30, 60, 90})


@dataclass(frozen=True)
class ActionContext:
    """Inputs every action gate can inspect."""

    today_log: DailyFoodLog | None
    current_streak: int
    hour: int


Gate = Callable[[ActionContext], bool]


@dataclass(frozen=True)
class ActionRule:
    """Catalogue entry: an action and the gate that makes it eligible."""

    action: QuickAction
    gate: Gate


def _always(_context: ActionContext) -> bool:
    return True


def _meal_window(meal_type: MealType, start_hour: int, end_hour: int) -> Gate:
    def gate(context: ActionContext) -> bool:
        return start_hour <= context.hour < end_hour and not _has_meal(
            context.today_log, meal_type
        )

    return gate


def _progress_photo_due(context: ActionContext) -> bool:
    return context.current_streak in PROGRESS_PHOTO_STREAKS


def _nothing_logged(context: ActionContext) -> bool:
    return not entries_of(context.today_log)


ACTION_CATALOG: tuple[ActionRule, ...] = (
    ActionRule(
        QuickAction(
            id="log-food",
            label="Log Food",
            emoji="🍽️",
            route="/food-search",
            priority=100,
        ),
        _always,
    ),
    ActionRule(
        QuickAction(
            id="log-breakfast",
            label="Log Breakfast",
            emoji="🥞",
            route="/food-search?mealType=breakfast",
            priority=95,
            reason="Morning meal time",
        ),
        _meal_window("breakfast", 6, 11),
    ),
    ActionRule(
        QuickAction(
            id="log-lunch",
            label="Log Lunch",
            emoji="🥗",
            route="/food-search?mealType=lunch",
            priority=95,
            reason="Lunch time",
        ),
        _meal_window("lunch", 11, 15),
    ),
    ActionRule(
        QuickAction(
            id="log-dinner",
            label="Log Dinner",
            emoji="🍝",
            route="/food-search?mealType=dinner",
            priority=95,
            reason="Dinner time",
        ),
        _meal_window("dinner", 17, 22),
    ),
    ActionRule(
        QuickAction(
            id="progress-photo",
            label="Progress Photo",
            emoji="📸",
            route="/progress-photo-capture",
            priority=85,
            reason="Track your progress",
        ),
        _progress_photo_due,
    ),
    ActionRule(
        QuickAction(
            id="water",
            label="Water Intake",
            emoji="💧",
            route="/water-tracker",
            priority=70,
        ),
        _always,
    ),
    ActionRule(
        QuickAction(
            id="mood",
            label="Mood Check",
            emoji="💭",
            route="/mood-tracker",
            priority=65,
        ),
        _always,
    ),
    ActionRule(
        QuickAction(
            id="scan",
            label="Scan Barcode",
            emoji="📱",
            route="/barcode-scanner",
            priority=60,
        ),
        _always,
    ),
    ActionRule(
        QuickAction(
            id="coach",
            label="Ask Coach",
            emoji="💬",
            route="/coach-chat",
            priority=55,
        ),
        _always,
    ),
    ActionRule(
        QuickAction(
            id="meal-plan",
            label="Meal Plan",
            emoji="📋",
            route="/meal-plan",
            priority=80,
            reason="Plan ahead",
        ),
        _nothing_logged,
    ),
    ActionRule(
        QuickAction(
            id="timeline",
            label="Progress Photos",
            emoji="🖼️",
            route="/photo-timeline",
            priority=50,
        ),
        _always,
    ),
)


def select_actions(
    today_log: DailyFoodLog | None,
    current_streak: int,
    now: datetime,
    limit: int = DEFAULT_ACTION_LIMIT,
    catalog: tuple[ActionRule, ...] = ACTION_CATALOG,
) -> list[QuickAction]:
    """Return eligible actions, highest priority first, capped at limit.

    The generic log action (100) outranks the meal-specific ones (95).
    Equal priorities keep catalogue order.
    """
    if limit <= 0:
        return []
    context = ActionContext(
        today_log=today_log, current_streak=current_streak, hour=now.hour
    )
    eligible = [rule.action for rule in catalog if rule.gate(context)]
    eligible.sort(key=lambda action: action.priority, reverse=True)
    return eligible[:limit]


def _has_meal(log: DailyFoodLog | None, meal_type: MealType) -> bool:
    return any(entry.meal_type == meal_type for entry in entries_of(log))
