"""Shared test fixtures."""

import random
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, time, timedelta

import pytest

from pocket_coach.adapters.coach_api_client import CoachApiClient
from pocket_coach.config import Settings
from pocket_coach.containers import AppContainer
from pocket_coach.domain.food_log import (
    DailyFoodLog,
    FoodLogEntry,
    MacroTotals,
    MealType,
)
from pocket_coach.services.cache import InMemoryKeyValueStore
from pocket_coach.services.dashboard import DashboardService
from pocket_coach.services.food_logs import FoodLogService
from pocket_coach.services.quotes import DailyQuoteService
from pocket_coach.services.reminders import LocalNotificationRegistry, ReminderService
from pocket_coach.services.training import TrainingService

WEDNESDAY_MORNING = datetime(2024, 6, 12, 8, 0, tzinfo=UTC)
DEFAULT_TARGETS = MacroTotals(calories=2000, protein=150, carbs=200, fat=70)


@dataclass
class FixedClock:
    """Clock frozen at a given instant; tests move it explicitly."""

    current: datetime = WEDNESDAY_MORNING

    def now(self) -> datetime:
        return self.current

    def advance(self, delta: timedelta) -> None:
        self.current = self.current + delta


def make_entry(
    food_name: str = "Chicken Breast",
    meal_type: MealType = "lunch",
    logged_at: datetime | None = None,
    calories: float = 300.0,
    protein: float = 30.0,
    carbs: float = 20.0,
    fat: float = 10.0,
    serving_size: float = 100.0,
    serving_unit: str = "g",
    entry_id: int | None = None,
) -> FoodLogEntry:
    return FoodLogEntry(
        id=entry_id,
        food_name=food_name,
        serving_size=serving_size,
        serving_unit=serving_unit,
        calories=calories,
        protein=protein,
        carbs=carbs,
        fat=fat,
        meal_type=meal_type,
        logged_at=logged_at or datetime(2024, 6, 12, 12, 0, tzinfo=UTC),
    )


def make_log(
    day: date | str,
    entries: Iterable[FoodLogEntry] = (),
    totals: MacroTotals | None = None,
    targets: MacroTotals = DEFAULT_TARGETS,
) -> DailyFoodLog:
    entries = tuple(entries)
    return DailyFoodLog(
        date=day if isinstance(day, str) else day.isoformat(),
        entries=entries,
        totals=totals if totals is not None else MacroTotals.sum_of(entries),
        targets=targets,
    )


def logged_days(
    now: datetime, offsets: Iterable[int], hour: int = 12
) -> list[DailyFoodLog]:
    """Build one-entry logs for the given day offsets before ``now``, oldest first."""
    logs = []
    for offset in sorted(set(offsets), reverse=True):
        day = now.date() - timedelta(days=offset)
        logged_at = datetime.combine(day, time(hour=hour), tzinfo=now.tzinfo)
        logs.append(make_log(day, [make_entry(logged_at=logged_at)]))
    return logs


def entry_payload(**overrides: object) -> dict[str, object]:
    payload: dict[str, object] = {
        "id": 1,
        "user_id": "user-1",
        "food_name": "Greek Yogurt",
        "serving_size": 170,
        "serving_unit": "g",
        "calories": 100,
        "protein": 17,
        "carbs": 6,
        "fat": 0.7,
        "meal_type": "breakfast",
        "logged_at": "2024-06-12T07:30:00+00:00",
    }
    payload.update(overrides)
    return payload


def log_payload(
    day: str,
    entries: list[dict[str, object]] | None = None,
    totals: dict[str, float] | None = None,
    targets: dict[str, float] | None = None,
) -> dict[str, object]:
    return {
        "date": day,
        "entries": entries or [],
        "totals": totals or {"calories": 0, "protein": 0, "carbs": 0, "fat": 0},
        "targets": targets
        or {"calories": 2000, "protein": 150, "carbs": 200, "fat": 70},
    }


@dataclass
class FakeCoachApiClient(CoachApiClient):
    """Fake backend client returning canned envelopes and recording calls."""

    responses: dict[str, dict[str, object]] = field(default_factory=dict)
    errors: dict[str, Exception] = field(default_factory=dict)
    calls: list[tuple[str, object]] = field(default_factory=list)
    closed: bool = False

    async def _respond(self, name: str, argument: object = None) -> dict[str, object]:
        self.calls.append((name, argument))
        if name in self.errors:
            raise self.errors[name]
        return self.responses.get(name, {"success": False, "error": "not configured"})

    def calls_to(self, name: str) -> list[object]:
        return [argument for call, argument in self.calls if call == name]

    async def get_current_log(self, user_date: str) -> dict[str, object]:
        return await self._respond("get_current_log", user_date)

    async def get_week_logs(self) -> dict[str, object]:
        return await self._respond("get_week_logs")

    async def create_entry(self, entry: dict[str, object]) -> dict[str, object]:
        return await self._respond("create_entry", entry)

    async def delete_entry(self, entry_id: int) -> dict[str, object]:
        return await self._respond("delete_entry", entry_id)

    async def get_profile(self) -> dict[str, object]:
        return await self._respond("get_profile")

    async def update_profile(self, fields: dict[str, object]) -> dict[str, object]:
        return await self._respond("update_profile", fields)

    async def get_daily_quote(self) -> dict[str, object]:
        return await self._respond("get_daily_quote")

    async def get_current_plan(self) -> dict[str, object]:
        return await self._respond("get_current_plan")

    async def get_today_workout(self) -> dict[str, object]:
        return await self._respond("get_today_workout")

    async def get_personal_records(self) -> dict[str, object]:
        return await self._respond("get_personal_records")

    async def close(self) -> None:
        self.closed = True


@pytest.fixture
def settings() -> Settings:
    return Settings(
        coach_api_url="https://coach.test",
        coach_api_token="test-token",
    )


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def rng() -> random.Random:
    return random.Random(7)


@pytest.fixture
def coach_api_client() -> FakeCoachApiClient:
    return FakeCoachApiClient()


@pytest.fixture
def container(
    settings: Settings,
    clock: FixedClock,
    coach_api_client: FakeCoachApiClient,
) -> AppContainer:
    food_log_service = FoodLogService(client=coach_api_client, clock=clock)
    training_service = TrainingService(client=coach_api_client)
    quote_service = DailyQuoteService(
        client=coach_api_client, store=InMemoryKeyValueStore(), clock=clock
    )
    reminder_service = ReminderService(
        gateway=LocalNotificationRegistry(), clock=clock
    )
    dashboard_service = DashboardService(
        food_logs=food_log_service,
        training=training_service,
        quotes=quote_service,
        clock=clock,
        rng=random.Random(7),
        action_limit=settings.dashboard_action_limit,
    )

    async def close_resources() -> None:
        await coach_api_client.close()

    return AppContainer(
        settings=settings,
        clock=clock,
        coach_api_client=coach_api_client,
        food_log_service=food_log_service,
        training_service=training_service,
        quote_service=quote_service,
        reminder_service=reminder_service,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
