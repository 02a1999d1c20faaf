"""Tests for meal reminder scheduling."""

import asyncio
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

import pytest

from pocket_coach.services.reminders import (
    END_OF_DAY_REMINDER,
    LocalNotificationRegistry,
    ReminderService,
    analyze_eating_patterns,
    default_reminder_times,
)
from tests.conftest import FixedClock, make_entry, make_log


def _at(day, hour, minute=0):
    return datetime(2024, 6, day, hour, minute, tzinfo=UTC)


def _times(reminders):
    return [(r.meal_type, r.hour, r.minute) for r in reminders]


@pytest.fixture
def week():
    return [
        make_log(
            "2024-06-10",
            [
                make_entry(meal_type="dinner", logged_at=_at(10, 19)),
                make_entry(meal_type="breakfast", logged_at=_at(10, 7)),
            ],
        ),
        make_log(
            "2024-06-11",
            [make_entry(meal_type="breakfast", logged_at=_at(11, 8))],
        ),
    ]


def test_patterns_fall_back_to_defaults_without_entries() -> None:
    assert _times(analyze_eating_patterns([])) == [
        ("breakfast", 8, 0),
        ("lunch", 12, 30),
        ("dinner", 18, 30),
    ]
    assert analyze_eating_patterns(None) == default_reminder_times()


def test_patterns_average_logging_time_per_meal(week) -> None:
    assert _times(analyze_eating_patterns(week)) == [
        ("breakfast", 7, 30),
        ("dinner", 19, 0),
    ]


def test_patterns_round_half_minutes_up() -> None:
    logs = [
        make_log(
            "2024-06-11",
            [
                make_entry(meal_type="lunch", logged_at=_at(11, 12, 0)),
                make_entry(meal_type="lunch", logged_at=_at(11, 12, 1)),
            ],
        )
    ]

    assert _times(analyze_eating_patterns(logs)) == [("lunch", 12, 1)]


def test_patterns_use_local_time() -> None:
    entry = make_entry(meal_type="breakfast", logged_at=_at(11, 12))
    logs = [make_log("2024-06-11", [entry])]

    reminders = analyze_eating_patterns(logs, ZoneInfo("America/New_York"))

    assert _times(reminders) == [("breakfast", 8, 0)]


def test_scheduling_requires_initialization(week) -> None:
    service = ReminderService(gateway=LocalNotificationRegistry(), clock=FixedClock())

    with pytest.raises(RuntimeError):
        asyncio.run(service.schedule_smart_reminders(week))


def test_smart_reminders_replace_previous_schedule(week) -> None:
    registry = LocalNotificationRegistry()
    service = ReminderService(gateway=registry, clock=FixedClock())

    async def run():
        await service.initialize()
        await service.initialize()
        await service.schedule_smart_reminders([])
        scheduled = await service.schedule_smart_reminders(week)
        return scheduled, await service.upcoming()

    scheduled, upcoming = asyncio.run(run())

    assert service.initialized
    assert upcoming == scheduled
    assert [r.title for r in scheduled] == ["Breakfast Reminder", "Dinner Reminder"]
    assert scheduled[0].data == {"mealType": "breakfast"}
    assert (scheduled[0].hour, scheduled[0].minute) == (7, 30)


def test_end_of_day_reminder_is_added_at_eight_pm(week) -> None:
    registry = LocalNotificationRegistry()
    service = ReminderService(gateway=registry, clock=FixedClock())

    async def run():
        await service.initialize()
        await service.schedule_smart_reminders(week)
        reminder = await service.schedule_end_of_day_reminder()
        return reminder, await service.upcoming()

    reminder, upcoming = asyncio.run(run())

    assert reminder == END_OF_DAY_REMINDER
    assert (reminder.hour, reminder.minute) == (20, 0)
    assert reminder.data == {"type": "end_of_day_check"}
    assert len(upcoming) == 3


def test_denied_permission_schedules_nothing(week) -> None:
    registry = LocalNotificationRegistry(permission_granted=False)
    service = ReminderService(gateway=registry, clock=FixedClock())

    async def run():
        await service.initialize()
        smart = await service.schedule_smart_reminders(week)
        end_of_day = await service.schedule_end_of_day_reminder()
        return smart, end_of_day, await service.upcoming()

    smart, end_of_day, upcoming = asyncio.run(run())

    assert smart == []
    assert end_of_day is None
    assert upcoming == []


def test_cancel_all_and_shutdown(week) -> None:
    registry = LocalNotificationRegistry()
    service = ReminderService(gateway=registry, clock=FixedClock())

    async def run():
        await service.initialize()
        await service.schedule_smart_reminders(week)
        await service.cancel_all()
        remaining = await service.upcoming()
        await service.shutdown()
        await service.shutdown()
        return remaining

    assert asyncio.run(run()) == []
    assert not service.initialized
    with pytest.raises(RuntimeError):
        asyncio.run(service.upcoming())
