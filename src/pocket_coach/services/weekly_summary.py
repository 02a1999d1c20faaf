"""Weekly report card with grade, achievements and insights."""

import math
import statistics
from collections.abc import Sequence
from datetime import date

from pocket_coach.domain.food_log import (
    MACRO_NAMES,
    DailyFoodLog,
    distinct_days,
    has_entries,
    parse_day,
)
from pocket_coach.domain.trends import (
    SummaryBestDay,
    SummaryGrade,
    WeeklySummaryReport,
)
from pocket_coach.services.adherence import WEEK_DAYS

MAX_AREAS = 3
MAX_INSIGHTS = 3
PROTEIN_SHORTFALL_RATIO = 0.9
PROTEIN_HIT_RATIO = 0.95
CALORIE_SPREAD_LIMIT = 500

_GRADE_MESSAGES: dict[SummaryGrade, str] = {
    "A": (
        "Outstanding work! You're absolutely crushing your nutrition goals. "
        "Keep this up and the results will be incredible! 🏆"
    ),
    "B": (
        "Great job this week! You're showing real consistency and dedication. "
        "Let's push for that A next week! 💪"
    ),
    "C": (
        "Solid effort! You're building good habits. Focus on consistency and "
        "you'll see even better results! 📈"
    ),
    "D": (
        "Nice start, but there's room for improvement! Try logging more "
        "consistently and hitting those targets. You've got this! 💙"
    ),
    "F": (
        "Let's make next week count! Small steps add up. Start by logging "
        "every day and the rest will follow. I believe in you! 🌟"
    ),
}

EMPTY_SUMMARY = WeeklySummaryReport(
    week_range="No data",
    total_days_logged=0,
    average_calories=0,
    average_protein=0,
    average_carbs=0,
    average_fat=0,
    target_adherence=0,
    best_day=None,
    areas_to_improve=("Start logging your meals to get personalized insights!",),
    achievements=(),
    insights=("Track your nutrition consistently to unlock weekly summaries!",),
    overall_grade="F",
    motivational_message=(
        "Let's get started! Begin logging your meals today and watch your "
        "progress grow! 🚀"
    ),
)


def target_closeness(actual: float, target: float) -> float | None:
    """Score how close a total is to its target, 100 meaning exact.

    Overshoot and undershoot cost the same. Returns None without a target.
    """
    if target <= 0:
        return None
    return max(0.0, 100.0 - abs(actual - target) / target * 100.0)


def day_closeness(log: DailyFoodLog) -> float | None:
    """Mean closeness over the macros that have a target."""
    scores: list[float] = []
    for macro in MACRO_NAMES:
        score = target_closeness(
            getattr(log.totals, macro), getattr(log.targets, macro)
        )
        if score is not None:
            scores.append(score)
    if not scores:
        return None
    return sum(scores) / len(scores)


def generate_weekly_summary(
    week_logs: Sequence[DailyFoodLog] | None,
) -> WeeklySummaryReport:
    """Grade the week and collect achievements, weak spots and insights."""
    logged = [
        log for log in distinct_days(week_logs)[-WEEK_DAYS:] if has_entries(log)
    ]
    days_logged = len(logged)
    if days_logged == 0:
        return EMPTY_SUMMARY

    averages = {
        macro: sum(getattr(log.totals, macro) for log in logged) / days_logged
        for macro in MACRO_NAMES
    }
    scores = [day_closeness(log) for log in logged]
    scored = [score for score in scores if score is not None]
    target_adherence = sum(scored) / len(scored) if scored else 0.0
    grade = _grade(target_adherence, days_logged)

    return WeeklySummaryReport(
        week_range=_week_range(logged),
        total_days_logged=days_logged,
        average_calories=_round_half_up(averages["calories"]),
        average_protein=_round_half_up(averages["protein"]),
        average_carbs=_round_half_up(averages["carbs"]),
        average_fat=_round_half_up(averages["fat"]),
        target_adherence=_round_half_up(target_adherence),
        best_day=_best_day(logged, scores),
        areas_to_improve=tuple(
            _areas_to_improve(logged, averages["protein"])[:MAX_AREAS]
        ),
        achievements=tuple(_achievements(logged, target_adherence)),
        insights=tuple(_insights(logged, target_adherence)[:MAX_INSIGHTS]),
        overall_grade=grade,
        motivational_message=_GRADE_MESSAGES[grade],
    )


def _grade(target_adherence: float, days_logged: int) -> SummaryGrade:
    if target_adherence >= 90 and days_logged >= 6:
        return "A"
    if target_adherence >= 80 and days_logged >= 5:
        return "B"
    if target_adherence >= 70 and days_logged >= 4:
        return "C"
    if days_logged >= 3:
        return "D"
    return "F"


def _best_day(
    logged: list[DailyFoodLog], scores: list[float | None]
) -> SummaryBestDay | None:
    best: tuple[DailyFoodLog, float] | None = None
    for log, score in zip(logged, scores, strict=True):
        if score is not None and (best is None or score > best[1]):
            best = (log, score)
    if best is None:
        return None
    log, score = best
    return SummaryBestDay(
        label=_label(log.date), reason=f"{_round_half_up(score)}% on target!"
    )


def _areas_to_improve(logged: list[DailyFoodLog], avg_protein: float) -> list[str]:
    areas: list[str] = []
    protein_target = logged[0].targets.protein
    if avg_protein < protein_target * PROTEIN_SHORTFALL_RATIO:
        areas.append(
            "Increase protein intake - aim for more lean meats, eggs, "
            "or protein powder"
        )
    if len(logged) < 5:
        areas.append(
            "Log more consistently - tracking 6-7 days/week gives best results"
        )
    calories = [log.totals.calories for log in logged]
    if statistics.pstdev(calories) > CALORIE_SPREAD_LIMIT:
        areas.append("Aim for more consistent calorie intake each day")
    return areas


def _achievements(logged: list[DailyFoodLog], target_adherence: float) -> list[str]:
    achievements: list[str] = []
    days_logged = len(logged)
    if days_logged == WEEK_DAYS:
        achievements.append("🔥 Perfect week - logged every single day!")
    elif days_logged >= 5:
        achievements.append(f"💪 Strong consistency - {days_logged} days logged!")

    if target_adherence >= 90:
        achievements.append("🎯 Excellent adherence to targets!")
    elif target_adherence >= 75:
        achievements.append("✅ Good adherence to targets!")

    protein_days = sum(
        1
        for log in logged
        if log.totals.protein >= log.targets.protein * PROTEIN_HIT_RATIO
    )
    if protein_days >= 5:
        achievements.append("💪 Hit protein targets most days!")
    return achievements


def _insights(logged: list[DailyFoodLog], target_adherence: float) -> list[str]:
    insights: list[str] = []
    weekend_days = sum(1 for day in _days(logged) if day.weekday() >= 5)
    if weekend_days < 2:
        insights.append(
            "Consider logging on weekends too - helps maintain consistency!"
        )

    meals_per_day = sum(len(log.entries) for log in logged) / len(logged)
    if meals_per_day < 3:
        insights.append(
            f"You're averaging {meals_per_day:.1f} meals/day - "
            "consider eating more frequently"
        )

    if target_adherence >= 85 and len(logged) >= 6:
        insights.append(
            "You're crushing it! Keep up this momentum and results will follow! 🚀"
        )
    return insights


def _week_range(logged: list[DailyFoodLog]) -> str:
    days = _days(logged)
    if not days:
        return "No data"
    return f"{_format_day(min(days))} - {_format_day(max(days))}"


def _days(logged: list[DailyFoodLog]) -> list[date]:
    parsed = (parse_day(log.date) for log in logged)
    return [day for day in parsed if day is not None]


def _label(day_string: str) -> str:
    day = parse_day(day_string)
    return _format_day(day) if day else day_string


def _format_day(day: date) -> str:
    return f"{day:%b} {day.day}"


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
