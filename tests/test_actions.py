"""Tests for contextual quick actions."""

from datetime import UTC, datetime

from pocket_coach.services.actions import DASHBOARD_ACTION_LIMIT, select_actions
from tests.conftest import make_entry, make_log


def _at(hour, minute=0):
    return datetime(2024, 6, 12, hour, minute, tzinfo=UTC)


def _ids(actions):
    return [action.id for action in actions]


def test_morning_without_entries_ranks_generic_log_first() -> None:
    actions = select_actions(None, 0, _at(8))

    assert _ids(actions) == [
        "log-food",
        "log-breakfast",
        "meal-plan",
        "water",
        "mood",
        "scan",
    ]


def test_logged_breakfast_hides_breakfast_action() -> None:
    today = make_log("2024-06-12", [make_entry(meal_type="breakfast")])

    actions = select_actions(today, 0, _at(8))

    assert "log-breakfast" not in _ids(actions)
    assert "meal-plan" not in _ids(actions)
    assert _ids(actions)[0] == "log-food"


def test_dashboard_limit_keeps_top_three() -> None:
    actions = select_actions(None, 0, _at(8), limit=DASHBOARD_ACTION_LIMIT)

    assert _ids(actions) == ["log-food", "log-breakfast", "meal-plan"]


def test_progress_photo_on_milestone_streaks_only() -> None:
    today = make_log("2024-06-12", [make_entry(meal_type="lunch")])

    on_milestone = select_actions(today, 7, _at(16))
    off_milestone = select_actions(today, 8, _at(16))

    assert _ids(on_milestone) == [
        "log-food",
        "progress-photo",
        "water",
        "mood",
        "scan",
        "coach",
    ]
    assert "progress-photo" not in _ids(off_milestone)
    assert _ids(off_milestone)[-1] == "timeline"


def test_meal_windows_are_end_exclusive() -> None:
    assert "log-lunch" in _ids(select_actions(None, 0, _at(11)))
    assert "log-lunch" not in _ids(select_actions(None, 0, _at(15)))
    assert "log-dinner" in _ids(select_actions(None, 0, _at(21, 59)))
    assert "log-dinner" not in _ids(select_actions(None, 0, _at(22)))


def test_non_positive_limit_returns_nothing() -> None:
    assert select_actions(None, 0, _at(8), limit=0) == []
    assert select_actions(None, 0, _at(8), limit=-1) == []
