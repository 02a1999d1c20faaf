"""Tests for dashboard and reminder endpoints."""

from fastapi.testclient import TestClient

from pocket_coach.api.app import create_app
from tests.conftest import FakeCoachApiClient, entry_payload, log_payload

SMALL_TOTALS = {"calories": 100, "protein": 17, "carbs": 6, "fat": 0.7}


def _configure(client: FakeCoachApiClient) -> None:
    client.responses.update(
        {
            "get_current_log": {"success": True, "data": log_payload("2024-06-12")},
            "get_week_logs": {
                "success": True,
                "data": [
                    log_payload(
                        "2024-06-10",
                        [entry_payload(id=1, logged_at="2024-06-10T07:30:00+00:00")],
                        totals=SMALL_TOTALS,
                    ),
                    log_payload(
                        "2024-06-11",
                        [entry_payload(id=2, logged_at="2024-06-11T07:30:00+00:00")],
                        totals=SMALL_TOTALS,
                    ),
                    log_payload("2024-06-12"),
                ],
            },
            "get_daily_quote": {
                "success": True,
                "data": {"quote": "Small steps add up.", "author": "Abe"},
            },
        }
    )


def test_health_endpoint(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/health")

    assert response.status_code == 200
    assert response.json() == {"status": "ok"}


def test_dashboard_endpoint(container, coach_api_client) -> None:
    _configure(coach_api_client)
    client = TestClient(create_app(container))

    response = client.get("/dashboard")

    assert response.status_code == 200
    data = response.json()
    assert data["greeting"] == "Good morning"
    assert data["streak"]["current_streak"] == 0
    assert len(data["streak"]["calendar"]) == 7
    assert [action["id"] for action in data["actions"]] == [
        "log-food",
        "log-breakfast",
        "meal-plan",
    ]
    assert data["time_prompt"]["tone"] == "suggestion"
    assert data["meal_prompt"]["meal_type"] == "breakfast"
    assert data["weekly_trend"]["days_logged"] == 2
    assert data["yesterday"]["overall_tone"] == "tough"
    assert data["inactivity"]["should_show_check_in"] is False
    assert data["recent_foods"][0]["food_name"] == "Greek Yogurt"
    assert data["recent_foods"][0]["times_logged"] == 2
    assert data["daily_quote"] == {"quote": "Small steps add up.", "author": "Abe"}
    assert data["weekly_summary"]["total_days_logged"] == 2
    assert data["weekly_summary"]["overall_grade"] == "F"
    assert [item["food"] for item in data["meal_completion"]] == [
        "Salmon with Quinoa",
        "Grilled Chicken Breast",
        "Eggs & Whole Wheat Toast",
    ]
    assert data["suggested_questions"][0]["category"] == "planning"
    assert data["training_plan"] is None
    assert coach_api_client.calls_to("get_current_log") == ["2024-06-12"]


def test_dashboard_prompt_is_throttled(container, coach_api_client) -> None:
    _configure(coach_api_client)
    client = TestClient(create_app(container))

    first = client.get("/dashboard").json()
    second = client.get("/dashboard").json()

    assert first["time_prompt"] is not None
    assert second["time_prompt"] is None


def test_dashboard_rejects_negative_freezes(container) -> None:
    client = TestClient(create_app(container))

    response = client.get("/dashboard", params={"freezes_used": -1})

    assert response.status_code == 422


def test_reminder_sync_schedules_from_eating_times(
    container, coach_api_client
) -> None:
    _configure(coach_api_client)

    with TestClient(create_app(container)) as client:
        synced = client.post("/reminders/sync")
        listed = client.get("/reminders")

    assert synced.status_code == 200
    reminders = synced.json()["reminders"]
    assert [reminder["title"] for reminder in reminders] == [
        "Breakfast Reminder",
        "Quick Check-In 💙",
    ]
    assert (reminders[0]["hour"], reminders[0]["minute"]) == (7, 30)
    assert listed.json() == {"reminders": reminders}
    assert coach_api_client.closed
