"""Macro adherence bands and weekly trend analysis."""

import math
import random
from collections.abc import Sequence

from pocket_coach.domain.food_log import (
    MACRO_NAMES,
    DailyFoodLog,
    MacroName,
    distinct_days,
    has_entries,
)
from pocket_coach.domain.trends import (
    AdherenceBand,
    BestDay,
    TrendDirection,
    WeeklyTrend,
)
from pocket_coach.services.phrasing import pick

WEEK_DAYS = 7
MIN_DAYS_FOR_TREND = 4

PERFECT_LOW = 95.0
PERFECT_HIGH = 105.0
SLIGHTLY_OVER_HIGH = 115.0
SLIGHTLY_UNDER_LOW = 85.0

_RATE_POOLS: dict[str, tuple[tuple[str, str], ...]] = {
    "perfect": (
        (
            "PERFECT WEEK! You logged every single day! "
            "This is incredible dedication 🔥",
            "🔥",
        ),
        ("Seven for seven! Every day of the week is logged 🔥", "🔥"),
    ),
    "amazing": (
        (
            "Amazing week! You logged {days} out of 7 days. "
            "You're crushing it! 💪",
            "⭐",
        ),
        ("Outstanding consistency! {days} of 7 days logged ⭐", "⭐"),
    ),
    "solid": (
        (
            "Solid week! {days} days logged. "
            "Let's aim for one more day next week!",
            "💪",
        ),
        ("Nice work! {days} days tracked. One more day makes it great!", "💪"),
    ),
    "good": (
        (
            "Good progress with {days} days logged. "
            "Let's build that consistency! 📈",
            "📈",
        ),
        ("{days} days logged this week. Consistency is building! 📈", "📈"),
    ),
    "started": (
        (
            "You logged {days} {unit} - that's a start! "
            "Let's aim for more this week 🎯",
            "🎯",
        ),
        ("{days} {unit} logged. Every log counts, let's add more 🎯", "🎯"),
    ),
    "none": (
        (
            "Ready to start tracking? Your first log is just a tap away! 🌟",
            "🌟",
        ),
    ),
}
_IMPROVING_SUFFIX = " Your consistency is improving - keep that momentum! 📈"
_DECLINING_SUFFIX = (
    ". I noticed tracking dropped off mid-week. Let's get back on track! 💪"
)


def adherence_percent(total: float, target: float) -> float | None:
    """Return total as a percentage of target, or None without a target."""
    if not _is_number(total) or not _is_number(target) or target <= 0:
        return None
    return 100.0 * total / target


def classify_band(percent: float | None) -> AdherenceBand | None:
    """Classify an adherence percentage into one of the five bands."""
    if percent is None or not _is_number(percent):
        return None
    if PERFECT_LOW <= percent <= PERFECT_HIGH:
        return "perfect"
    if PERFECT_HIGH < percent <= SLIGHTLY_OVER_HIGH:
        return "slightly_over"
    if percent > SLIGHTLY_OVER_HIGH:
        return "way_over"
    if SLIGHTLY_UNDER_LOW <= percent < PERFECT_LOW:
        return "slightly_under"
    return "way_under"


def macro_adherence(log: DailyFoodLog) -> dict[MacroName, float | None]:
    """Return adherence percentages for all four macros."""
    return {
        macro: adherence_percent(log.totals.get(macro), log.targets.get(macro))
        for macro in MACRO_NAMES
    }


def day_adherence(log: DailyFoodLog) -> float | None:
    """Return the mean of calorie and protein adherence."""
    values = [
        value
        for value in (
            adherence_percent(log.totals.calories, log.targets.calories),
            adherence_percent(log.totals.protein, log.targets.protein),
        )
        if value is not None
    ]
    if not values:
        return None
    return sum(values) / len(values)


def is_perfect_day(log: DailyFoodLog | None) -> bool:
    """Return True when all four macros land in the perfect band."""
    if log is None or not has_entries(log):
        return False
    return all(
        classify_band(value) == "perfect" for value in macro_adherence(log).values()
    )


def analyze_week(
    week_logs: Sequence[DailyFoodLog] | None, rng: random.Random
) -> WeeklyTrend:
    """Summarise a week of logs into adherence, trend and a coach message."""
    # Most recent seven dates; duplicates keep their first log.
    logs = distinct_days(week_logs)[-WEEK_DAYS:]
    logged = [log for log in logs if has_entries(log)]
    days_logged = len(logged)
    adherence_rate = 100.0 * days_logged / WEEK_DAYS

    protein_values: list[float] = []
    calorie_values: list[float] = []
    best_day: BestDay | None = None
    for log in logged:
        protein = adherence_percent(log.totals.protein, log.targets.protein)
        calories = adherence_percent(log.totals.calories, log.targets.calories)
        if protein is not None:
            protein_values.append(protein)
        if calories is not None:
            calorie_values.append(calories)
        overall = day_adherence(log)
        if overall is not None and (best_day is None or overall > best_day.adherence):
            best_day = BestDay(date=log.date, adherence=overall)

    trend = _trend(logs, days_logged)
    message, emoji = _coach_message(days_logged, adherence_rate, trend, rng)
    return WeeklyTrend(
        days_logged=days_logged,
        total_days=WEEK_DAYS,
        adherence_rate=adherence_rate,
        trend=trend,
        avg_protein_adherence=_mean(protein_values),
        avg_calories_adherence=_mean(calorie_values),
        best_day=best_day,
        coach_message=message,
        emoji=emoji,
    )


def _trend(logs: list[DailyFoodLog], days_logged: int) -> TrendDirection:
    if days_logged == 0:
        return "new"
    if days_logged < MIN_DAYS_FOR_TREND:
        return "steady"
    # 3-vs-3 split around the middle day of the window.
    first_half = sum(1 for log in logs[0:3] if has_entries(log))
    second_half = sum(1 for log in logs[4:7] if has_entries(log))
    if second_half > first_half:
        return "improving"
    if second_half < first_half:
        return "declining"
    return "steady"


def _coach_message(
    days_logged: int,
    adherence_rate: float,
    trend: TrendDirection,
    rng: random.Random,
) -> tuple[str, str]:
    template, emoji = pick(_RATE_POOLS[_rate_bucket(days_logged, adherence_rate)], rng)
    message = template.format(
        days=days_logged, unit="day" if days_logged == 1 else "days"
    )
    if trend == "improving":
        message += _IMPROVING_SUFFIX
    elif trend == "declining":
        message = message.split(".")[0] + _DECLINING_SUFFIX
    return message, emoji


def _rate_bucket(days_logged: int, adherence_rate: float) -> str:
    if days_logged >= WEEK_DAYS:
        return "perfect"
    if adherence_rate >= 85:
        return "amazing"
    if adherence_rate >= 70:
        return "solid"
    if adherence_rate >= 50:
        return "good"
    if days_logged > 0:
        return "started"
    return "none"


def _mean(values: list[float]) -> float:
    if not values:
        return 0.0
    return sum(values) / len(values)


def _is_number(value: object) -> bool:
    return isinstance(value, int | float) and math.isfinite(value)
