"""Food log access through the coaching backend."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import datetime

import httpx
from pydantic import ValidationError

from pocket_coach.adapters.coach_api_client import CoachApiClient
from pocket_coach.adapters.coach_api_models import (
    ApiEnvelope,
    DailyFoodLogPayload,
    FoodLogEntryPayload,
)
from pocket_coach.domain.food_log import (
    DailyFoodLog,
    FoodLogEntry,
    MealType,
    day_key,
    parse_day,
)
from pocket_coach.errors import CoachApiError, friendly_error, status_code_of
from pocket_coach.services.clock import Clock

_logger = logging.getLogger(__name__)


@dataclass
class FoodLogService:
    """Reads degrade to empty results; user-initiated writes raise."""

    client: CoachApiClient
    clock: Clock

    async def get_today(self, now: datetime | None = None) -> DailyFoodLog | None:
        """Return today's log for the user's local date, or None on failure."""
        user_date = day_key((now or self.clock.now()).date())
        try:
            envelope = ApiEnvelope.model_validate(
                await self.client.get_current_log(user_date)
            )
            if not envelope.success or envelope.data is None:
                _logger.warning(
                    "Today's log unavailable",
                    extra={"user_date": user_date, "error": envelope.error},
                )
                return None
            return DailyFoodLogPayload.model_validate(envelope.data).to_domain()
        except (httpx.HTTPError, ValidationError):
            _logger.exception(
                "Failed to load today's log", extra={"user_date": user_date}
            )
            return None

    async def get_week(self) -> list[DailyFoodLog]:
        """Return the last week of logs, oldest first, or [] on failure."""
        try:
            envelope = ApiEnvelope.model_validate(await self.client.get_week_logs())
            if not envelope.success or not isinstance(envelope.data, list):
                _logger.warning(
                    "Week logs unavailable", extra={"error": envelope.error}
                )
                return []
        except (httpx.HTTPError, ValidationError):
            _logger.exception("Failed to load week logs")
            return []
        logs: list[DailyFoodLog] = []
        for item in envelope.data:
            if item is None:
                continue
            try:
                logs.append(DailyFoodLogPayload.model_validate(item).to_domain())
            except ValidationError:
                _logger.warning("Skipping invalid day log: %s", item)
        return sorted(logs, key=lambda log: parse_day(log.date) or datetime.max.date())

    async def create_entry(
        self,
        food_name: str,
        meal_type: MealType,
        calories: float,
        protein: float,
        carbs: float,
        fat: float,
        serving_size: float = 1.0,
        serving_unit: str = "serving",
        logged_at: datetime | None = None,
    ) -> FoodLogEntry | None:
        """Log a food item; returns the stored entry when the backend echoes it."""
        payload: dict[str, object] = {
            "food_name": food_name,
            "serving_size": serving_size,
            "serving_unit": serving_unit,
            "calories": calories,
            "protein": protein,
            "carbs": carbs,
            "fat": fat,
            "meal_type": meal_type,
            "logged_at": (logged_at or self.clock.now()).isoformat(),
        }
        envelope = await self._mutate(
            lambda: self.client.create_entry(payload), fallback="food_log_failed"
        )
        if not isinstance(envelope.data, dict):
            return None
        try:
            return FoodLogEntryPayload.model_validate(envelope.data).to_domain()
        except ValidationError:
            _logger.warning("Created entry could not be parsed")
            return None

    async def delete_entry(self, entry_id: int) -> None:
        """Delete an entry; raises CoachApiError on failure."""
        await self._mutate(
            lambda: self.client.delete_entry(entry_id), fallback="delete_failed"
        )

    async def get_profile(self) -> dict[str, object]:
        """Return the user's profile fields."""
        envelope = await self._mutate(self.client.get_profile, fallback="load_failed")
        return envelope.data if isinstance(envelope.data, dict) else {}

    async def update_profile(self, fields: dict[str, object]) -> dict[str, object]:
        """Update profile fields and return the stored profile."""
        envelope = await self._mutate(
            lambda: self.client.update_profile(fields), fallback="update_failed"
        )
        return envelope.data if isinstance(envelope.data, dict) else {}

    async def _mutate(
        self,
        call: Callable[[], Awaitable[dict[str, object]]],
        *,
        fallback: str,
    ) -> ApiEnvelope:
        try:
            envelope = ApiEnvelope.model_validate(await call())
        except (httpx.HTTPError, ValidationError) as exc:
            _logger.warning("Coach API %s: %s", fallback, exc)
            raise CoachApiError(
                friendly_error(exc, fallback), status_code=status_code_of(exc)
            ) from exc
        if not envelope.success:
            reason = RuntimeError(envelope.error or "request failed")
            _logger.warning("Coach API %s: %s", fallback, reason)
            raise CoachApiError(friendly_error(reason, fallback))
        return envelope
