"""One-shot milestone detection."""

from collections.abc import Mapping, Sequence
from datetime import datetime

from pocket_coach.domain.food_log import (
    DailyFoodLog,
    distinct_days,
    entries_of,
    has_entries,
)
from pocket_coach.domain.milestones import Milestone
from pocket_coach.services.adherence import WEEK_DAYS, is_perfect_day

SUNDAY = 6

MEAL_COUNT_MILESTONES: Mapping[int, Milestone] = {
    1: Milestone(
        id="first_meal",
        title="First Meal Logged! 🌟",
        description="You took the first step! Every journey starts here.",
        emoji="🌟",
        type="meals_logged",
    ),
    10: Milestone(
        id="10_meals",
        title="10 Meals Logged! 📝",
        description="You're building the habit! Keep the momentum going.",
        emoji="📝",
        type="meals_logged",
    ),
    50: Milestone(
        id="50_meals",
        title="50 Meals Logged! 🎯",
        description="This is serious commitment! You're tracking like a pro.",
        emoji="🎯",
        type="meals_logged",
    ),
    100: Milestone(
        id="100_meals",
        title="100 Meals Logged! 💯",
        description="CENTURY! You've logged 100 meals - that's dedication!",
        emoji="💯",
        type="meals_logged",
    ),
    250: Milestone(
        id="250_meals",
        title="250 Meals Logged! 🏆",
        description="Quarter thousand! You're a tracking champion!",
        emoji="🏆",
        type="meals_logged",
    ),
    500: Milestone(
        id="500_meals",
        title="500 Meals Logged! 🔥",
        description="HALF THOUSAND! This is elite-level consistency!",
        emoji="🔥",
        type="meals_logged",
    ),
    1000: Milestone(
        id="1000_meals",
        title="1,000 Meals Logged! 👑",
        description="LEGENDARY! You've mastered the art of tracking!",
        emoji="👑",
        type="meals_logged",
    ),
}

STREAK_MILESTONES: Mapping[int, Milestone] = {
    3: Milestone(
        id="3_day_streak",
        title="3 Day Streak! 🔥",
        description="Three days in a row! The habit is forming.",
        emoji="🔥",
        type="streak",
    ),
    7: Milestone(
        id="7_day_streak",
        title="Full Week Streak! 📅",
        description="Seven days straight! You're on fire!",
        emoji="📅",
        type="streak",
    ),
    14: Milestone(
        id="14_day_streak",
        title="2 Week Streak! ⚡",
        description="Two weeks of consistency! This is a real habit now.",
        emoji="⚡",
        type="streak",
    ),
    30: Milestone(
        id="30_day_streak",
        title="30 Day Streak! 🏅",
        description="One month straight! You're unstoppable!",
        emoji="🏅",
        type="streak",
    ),
    50: Milestone(
        id="50_day_streak",
        title="50 Day Streak! 💪",
        description="Fifty days! This is dedication at its finest!",
        emoji="💪",
        type="streak",
    ),
    100: Milestone(
        id="100_day_streak",
        title="100 Day Streak! 🌟",
        description="CENTURY STREAK! You're in the top 1% of users!",
        emoji="🌟",
        type="streak",
    ),
}

PERFECT_WEEK = Milestone(
    id="perfect_week",
    title="Perfect Week! 🎊",
    description="You logged every single day this week! Incredible!",
    emoji="🎊",
    type="special",
)

PERFECT_DAY = Milestone(
    id="perfect_day",
    title="Perfect Day! 🎯",
    description="All macros within 5% of target! This is precision!",
    emoji="🎯",
    type="adherence",
)


def detect_milestones(
    today_log: DailyFoodLog | None,
    week_logs: Sequence[DailyFoodLog] | None,
    total_meals_logged: int,
    current_streak: int,
    now: datetime,
) -> list[Milestone]:
    """Return every milestone reached right now.

    Counts match exactly: jumping from 9 to 11 meals skips the 10-meal
    milestone. Nothing here remembers what was already shown.
    """
    milestones: list[Milestone] = []
    meal_milestone = MEAL_COUNT_MILESTONES.get(total_meals_logged)
    if meal_milestone is not None:
        milestones.append(meal_milestone)
    streak_milestone = STREAK_MILESTONES.get(current_streak)
    if streak_milestone is not None:
        milestones.append(streak_milestone)

    recent = distinct_days(week_logs)[-WEEK_DAYS:]
    logged_days = sum(1 for log in recent if has_entries(log))
    if logged_days == WEEK_DAYS and now.weekday() == SUNDAY:
        milestones.append(PERFECT_WEEK)

    if is_perfect_day(today_log):
        milestones.append(PERFECT_DAY)
    return milestones


def calculate_total_meals_logged(week_logs: Sequence[DailyFoodLog] | None) -> int:
    """Count entries across the supplied logs."""
    return sum(len(entries_of(log)) for log in (week_logs or ()))
