"""Tests for meal completion suggestions."""

from pocket_coach.domain.food_log import MacroTotals
from pocket_coach.services.meal_pairing import (
    get_meal_completion_message,
    get_meal_completion_suggestions,
    is_meal_incomplete,
)
from tests.conftest import make_log

NEARLY_DONE = MacroTotals(calories=1900, protein=140, carbs=190, fat=65)


def _foods(suggestions):
    return [suggestion.food for suggestion in suggestions]


def test_no_log_means_no_suggestions() -> None:
    assert get_meal_completion_suggestions(None, "lunch") == []


def test_empty_day_at_breakfast_ranks_balanced_meal_first() -> None:
    today = make_log("2024-06-12")

    suggestions = get_meal_completion_suggestions(today, "breakfast")

    assert _foods(suggestions) == [
        "Salmon with Quinoa",
        "Grilled Chicken Breast",
        "Eggs & Whole Wheat Toast",
    ]
    assert suggestions[1].reason == "Add 150g protein to hit your target"
    assert suggestions[1].macros.protein == 31


def test_equal_priorities_keep_catalogue_order() -> None:
    today = make_log("2024-06-12")

    suggestions = get_meal_completion_suggestions(today, "breakfast", limit=5)

    assert _foods(suggestions)[3:] == [
        "Greek Yogurt (plain, nonfat)",
        "Brown Rice (1 cup)",
    ]


def test_nearly_finished_day_only_tops_up() -> None:
    today = make_log("2024-06-12", totals=NEARLY_DONE)

    assert _foods(get_meal_completion_suggestions(today, "snack")) == [
        "Apple with Peanut Butter",
        "Mixed Green Salad",
    ]
    assert _foods(get_meal_completion_suggestions(today, "dinner")) == [
        "Mixed Green Salad"
    ]


def test_meal_minimums() -> None:
    assert is_meal_incomplete("breakfast", 299)
    assert not is_meal_incomplete("breakfast", 300)
    assert is_meal_incomplete("dinner", 399.5)
    assert not is_meal_incomplete("snack", 100)


def test_meal_completion_messages() -> None:
    assert get_meal_completion_message("lunch", 350) == (
        "This lunch might leave you hungry. Consider adding a side?"
    )
    assert get_meal_completion_message("dinner", 500) is None
    assert get_meal_completion_message("snack", 50) == (
        "Perfect snack size! You can add more if you're still hungry."
    )
