"""Tests for the weekly report card."""

from pocket_coach.domain.food_log import MacroTotals
from pocket_coach.services.weekly_summary import (
    EMPTY_SUMMARY,
    generate_weekly_summary,
    target_closeness,
)
from tests.conftest import DEFAULT_TARGETS, make_entry, make_log

FULL_WEEK_DATES = [f"2024-06-{day}" for day in range(10, 17)]


def _on_target_week():
    return [
        make_log(day, [make_entry() for _ in range(3)], totals=DEFAULT_TARGETS)
        for day in FULL_WEEK_DATES
    ]


def _sparse_week():
    return [
        make_log(
            "2024-06-11",
            [make_entry()],
            totals=MacroTotals(calories=1000, protein=50, carbs=100, fat=35),
        ),
        make_log(
            "2024-06-12",
            [make_entry()],
            totals=MacroTotals(calories=2200, protein=140, carbs=210, fat=75),
        ),
    ]


def test_target_closeness_penalises_both_directions() -> None:
    assert target_closeness(90, 100) == 90.0
    assert target_closeness(110, 100) == 90.0
    assert target_closeness(300, 100) == 0.0
    assert target_closeness(50, 0) is None


def test_no_logged_days_gives_empty_summary() -> None:
    assert generate_weekly_summary(None) == EMPTY_SUMMARY
    assert generate_weekly_summary([make_log("2024-06-12")]) == EMPTY_SUMMARY
    assert EMPTY_SUMMARY.overall_grade == "F"


def test_on_target_week_earns_an_a() -> None:
    summary = generate_weekly_summary(_on_target_week())

    assert summary.week_range == "Jun 10 - Jun 16"
    assert summary.total_days_logged == 7
    assert (
        summary.average_calories,
        summary.average_protein,
        summary.average_carbs,
        summary.average_fat,
    ) == (2000, 150, 200, 70)
    assert summary.target_adherence == 100
    assert summary.overall_grade == "A"
    assert summary.best_day is not None
    assert summary.best_day.label == "Jun 10"
    assert summary.best_day.reason == "100% on target!"
    assert summary.areas_to_improve == ()
    assert summary.achievements == (
        "🔥 Perfect week - logged every single day!",
        "🎯 Excellent adherence to targets!",
        "💪 Hit protein targets most days!",
    )
    assert summary.insights == (
        "You're crushing it! Keep up this momentum and results will follow! 🚀",
    )
    assert summary.motivational_message.startswith("Outstanding work!")


def test_sparse_week_lists_what_to_improve() -> None:
    summary = generate_weekly_summary(_sparse_week())

    assert summary.total_days_logged == 2
    assert summary.target_adherence == 69
    assert summary.overall_grade == "F"
    assert summary.best_day is not None
    assert summary.best_day.label == "Jun 12"
    assert summary.best_day.reason == "93% on target!"
    assert summary.areas_to_improve == (
        "Increase protein intake - aim for more lean meats, eggs, or protein powder",
        "Log more consistently - tracking 6-7 days/week gives best results",
        "Aim for more consistent calorie intake each day",
    )
    assert summary.achievements == ()
    assert summary.insights == (
        "Consider logging on weekends too - helps maintain consistency!",
        "You're averaging 1.0 meals/day - consider eating more frequently",
    )


def test_repeated_dates_count_once() -> None:
    week = _sparse_week()

    summary = generate_weekly_summary([*week, week[0]])

    assert summary.total_days_logged == 2


def test_days_without_targets_do_not_score() -> None:
    log = make_log("2024-06-12", [make_entry()], targets=MacroTotals())

    summary = generate_weekly_summary([log])

    assert summary.target_adherence == 0
    assert summary.best_day is None
    assert summary.average_calories == 300
