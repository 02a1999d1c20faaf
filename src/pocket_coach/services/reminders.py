"""Meal reminder scheduling based on eating patterns."""

import logging
import math
from collections.abc import Sequence
from dataclasses import dataclass, field
from datetime import UTC, tzinfo
from typing import Protocol

from pocket_coach.domain.food_log import (
    MEAL_TYPES,
    DailyFoodLog,
    MealType,
    iter_entries,
    localize,
)
from pocket_coach.domain.suggestions import MealReminderTime, ScheduledReminder
from pocket_coach.services.clock import Clock

_logger = logging.getLogger(__name__)

REMINDER_MESSAGES: dict[MealType, str] = {
    "breakfast": "Good morning! 🌅 Ready to log your breakfast?",
    "lunch": "Lunch time! 🍽️ What are you eating?",
    "dinner": "Dinner time! 🌙 Let's track your evening meal",
    "snack": "Snack time! 🍎 Don't forget to log it",
}

END_OF_DAY_REMINDER = ScheduledReminder(
    title="Quick Check-In 💙",
    body=(
        "Haven't seen you today! Don't forget to log your meals - "
        "consistency is key! 💪"
    ),
    hour=20,
    minute=0,
    data={"type": "end_of_day_check"},
)


def default_reminder_times() -> list[MealReminderTime]:
    """Return the fallback breakfast, lunch and dinner reminders."""
    return [
        MealReminderTime("breakfast", 8, 0, REMINDER_MESSAGES["breakfast"]),
        MealReminderTime("lunch", 12, 30, REMINDER_MESSAGES["lunch"]),
        MealReminderTime("dinner", 18, 30, REMINDER_MESSAGES["dinner"]),
    ]


def analyze_eating_patterns(
    week_logs: Sequence[DailyFoodLog] | None, tz: tzinfo = UTC
) -> list[MealReminderTime]:
    """Place each meal's reminder at its average local logging time."""
    minutes: dict[MealType, list[int]] = {meal_type: [] for meal_type in MEAL_TYPES}
    for entry in iter_entries(week_logs):
        logged_at = localize(entry.logged_at, tz)
        bucket = minutes.get(entry.meal_type)
        if bucket is not None:
            bucket.append(logged_at.hour * 60 + logged_at.minute)

    reminders: list[MealReminderTime] = []
    for meal_type, values in minutes.items():
        if not values:
            continue
        average = math.floor(sum(values) / len(values) + 0.5)
        reminders.append(
            MealReminderTime(
                meal_type=meal_type,
                hour=average // 60,
                minute=average % 60,
                message=REMINDER_MESSAGES[meal_type],
            )
        )
    return reminders or default_reminder_times()


def to_scheduled_reminder(reminder: MealReminderTime) -> ScheduledReminder:
    return ScheduledReminder(
        title=f"{reminder.meal_type.capitalize()} Reminder",
        body=reminder.message,
        hour=reminder.hour,
        minute=reminder.minute,
        data={"mealType": reminder.meal_type},
    )


class NotificationGateway(Protocol):
    """Device notification scheduler."""

    async def request_permission(self) -> bool:
        """Return True when notifications may be scheduled."""

    async def cancel_all(self) -> None:
        """Drop every scheduled notification."""

    async def schedule_daily(self, reminder: ScheduledReminder) -> None:
        """Schedule a notification repeating daily at the reminder time."""

    async def scheduled(self) -> list[ScheduledReminder]:
        """Return the currently scheduled notifications."""


@dataclass
class LocalNotificationRegistry(NotificationGateway):
    """Keeps the schedule in process for the client to hand to the OS."""

    permission_granted: bool = True
    _reminders: list[ScheduledReminder] = field(default_factory=list)

    async def request_permission(self) -> bool:
        return self.permission_granted

    async def cancel_all(self) -> None:
        self._reminders.clear()

    async def schedule_daily(self, reminder: ScheduledReminder) -> None:
        self._reminders.append(reminder)

    async def scheduled(self) -> list[ScheduledReminder]:
        return list(self._reminders)


@dataclass
class ReminderService:
    """Schedules smart meal reminders through a notification gateway."""

    gateway: NotificationGateway
    clock: Clock
    _initialized: bool = False

    @property
    def initialized(self) -> bool:
        return self._initialized

    async def initialize(self) -> None:
        """Prepare the service; calling it again is a no-op."""
        if self._initialized:
            return
        self._initialized = True
        _logger.info("Reminder service initialized")

    async def shutdown(self) -> None:
        """Stop accepting scheduling calls. Scheduled reminders stay in place."""
        if not self._initialized:
            return
        self._initialized = False
        _logger.info("Reminder service shut down")

    async def schedule_smart_reminders(
        self, week_logs: Sequence[DailyFoodLog] | None
    ) -> list[ScheduledReminder]:
        """Replace the schedule with reminders at the user's usual meal times."""
        self._ensure_initialized()
        await self.gateway.cancel_all()
        if not await self.gateway.request_permission():
            _logger.info("Notification permission not granted")
            return []

        tz = self.clock.now().tzinfo or UTC
        scheduled: list[ScheduledReminder] = []
        for reminder in analyze_eating_patterns(week_logs, tz):
            notification = to_scheduled_reminder(reminder)
            await self.gateway.schedule_daily(notification)
            scheduled.append(notification)
            _logger.info(
                "Scheduled %s reminder at %s:%02d",
                reminder.meal_type,
                reminder.hour,
                reminder.minute,
            )
        return scheduled

    async def schedule_end_of_day_reminder(self) -> ScheduledReminder | None:
        """Add the 20:00 check-in reminder."""
        self._ensure_initialized()
        if not await self.gateway.request_permission():
            return None
        await self.gateway.schedule_daily(END_OF_DAY_REMINDER)
        _logger.info("Scheduled end-of-day reminder at 20:00")
        return END_OF_DAY_REMINDER

    async def cancel_all(self) -> None:
        self._ensure_initialized()
        await self.gateway.cancel_all()
        _logger.info("Cancelled all reminders")

    async def upcoming(self) -> list[ScheduledReminder]:
        self._ensure_initialized()
        return await self.gateway.scheduled()

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise RuntimeError("ReminderService.initialize() must be called first")
