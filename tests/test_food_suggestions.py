"""Tests for recent-food and quick-log suggestions."""

from datetime import UTC, datetime

import pytest

from pocket_coach.services.food_suggestions import (
    current_meal_type,
    get_quick_log_suggestions,
    get_recent_foods,
    get_relevant_quick_log,
)
from tests.conftest import make_entry, make_log


def _at(day, hour, minute=0):
    return datetime(2024, 6, day, hour, minute, tzinfo=UTC)


def _entry(name, meal_type, logged_at, calories=100.0, **macros):
    return make_entry(
        food_name=name,
        meal_type=meal_type,
        logged_at=logged_at,
        calories=calories,
        protein=macros.get("protein", 10.0),
        carbs=macros.get("carbs", 10.0),
        fat=macros.get("fat", 5.0),
    )


@pytest.fixture
def week():
    return [
        make_log(
            "2024-06-10",
            [
                _entry("Oatmeal", "breakfast", _at(10, 7), calories=100),
                _entry("Chicken Breast", "lunch", _at(10, 12), calories=250),
            ],
        ),
        make_log(
            "2024-06-11",
            [
                _entry("oatmeal ", "breakfast", _at(11, 7), calories=110),
                _entry("Rice", "dinner", _at(11, 19)),
                _entry("Chicken Breast", "lunch", _at(11, 12), calories=260),
            ],
        ),
        make_log(
            "2024-06-12",
            [
                _entry("OATMEAL", "breakfast", _at(12, 7), calories=120),
                _entry("Chicken Breast", "dinner", _at(12, 19), calories=270),
                _entry("Chicken Breast", "lunch", _at(12, 12), calories=280),
            ],
        ),
    ]


def test_recent_foods_ranked_by_frequency(week) -> None:
    foods = get_recent_foods(week)

    assert [(food.food_name, food.times_logged) for food in foods] == [
        ("Chicken Breast", 4),
        ("Oatmeal", 3),
        ("Rice", 1),
    ]


def test_recent_food_keeps_first_occurrence_macros(week) -> None:
    oatmeal = get_recent_foods(week)[1]

    assert oatmeal.food_name == "Oatmeal"
    assert oatmeal.calories == 100
    assert oatmeal.last_logged == _at(12, 7)


def test_recent_foods_respects_limit_and_encounter_order() -> None:
    logs = [
        make_log(
            "2024-06-12",
            [_entry(name, "snack", _at(12, 10)) for name in "ABCDEFG"],
        )
    ]

    foods = get_recent_foods(logs, limit=5)

    assert [food.food_name for food in foods] == ["A", "B", "C", "D", "E"]
    assert get_recent_foods(logs, limit=0) == []
    assert get_recent_foods(None) == []


def test_quick_log_groups_by_name_and_meal(week) -> None:
    suggestions = get_quick_log_suggestions(week)

    assert [(s.food_name, s.meal_type, s.count) for s in suggestions] == [
        ("Chicken Breast", "lunch", 3),
        ("Oatmeal", "breakfast", 3),
    ]


def test_quick_log_averages_every_occurrence(week) -> None:
    suggestions = {s.meal_type: s for s in get_quick_log_suggestions(week)}

    assert suggestions["breakfast"].avg_calories == pytest.approx(110.0)
    assert suggestions["lunch"].avg_calories == pytest.approx(263.3333, rel=1e-4)
    assert get_recent_foods(week)[1].calories == 100


def test_quick_log_requires_three_occurrences() -> None:
    logs = [
        make_log(
            "2024-06-12",
            [
                _entry("Apple", "snack", _at(12, 15)),
                _entry("apple", "snack", _at(12, 16)),
            ],
        )
    ]

    assert get_quick_log_suggestions(logs) == []


def test_relevant_quick_log_prefers_current_meal(week) -> None:
    suggestions = get_quick_log_suggestions(week)

    assert get_relevant_quick_log(suggestions, _at(12, 8)).meal_type == "breakfast"
    assert get_relevant_quick_log(suggestions, _at(12, 5)).meal_type == "breakfast"
    assert get_relevant_quick_log(suggestions, _at(12, 16)).meal_type == "lunch"
    assert get_relevant_quick_log([], _at(12, 8)) is None


def test_current_meal_type_starts_breakfast_at_five() -> None:
    assert current_meal_type(_at(12, 5)) == "breakfast"
    assert current_meal_type(_at(12, 4)) == "dinner"
    assert current_meal_type(_at(12, 15)) == "snack"
