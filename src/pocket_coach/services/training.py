"""Training summaries from the coaching backend."""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import Any

import httpx
from pydantic import ValidationError

from pocket_coach.adapters.coach_api_client import CoachApiClient
from pocket_coach.adapters.coach_api_models import (
    ApiEnvelope,
    PersonalRecordPayload,
    TodayWorkoutPayload,
    TrainingPlanPayload,
)
from pocket_coach.domain.training import (
    PersonalRecord,
    TodayWorkout,
    TrainingPlanSummary,
)

_logger = logging.getLogger(__name__)


@dataclass
class TrainingService:
    """Read-only training views; failures degrade to None or []."""

    client: CoachApiClient

    async def get_plan_summary(self) -> TrainingPlanSummary | None:
        """Return the active plan, or None when unavailable."""
        data = await self._fetch(self.client.get_current_plan, action="plan")
        if not isinstance(data, dict):
            return None
        try:
            return TrainingPlanPayload.model_validate(data).to_domain()
        except ValidationError:
            _logger.exception("Invalid training plan payload")
            return None

    async def get_today_workout(self) -> TodayWorkout | None:
        """Return today's scheduled workout, or None when unavailable."""
        data = await self._fetch(self.client.get_today_workout, action="workout")
        if not isinstance(data, dict):
            return None
        try:
            return TodayWorkoutPayload.model_validate(data).to_domain()
        except ValidationError:
            _logger.exception("Invalid workout payload")
            return None

    async def get_personal_records(
        self, limit: int | None = None
    ) -> list[PersonalRecord]:
        """Return personal records in backend order, optionally capped."""
        data = await self._fetch(
            self.client.get_personal_records, action="personal_records"
        )
        if not isinstance(data, list):
            return []
        records: list[PersonalRecord] = []
        for item in data:
            try:
                records.append(PersonalRecordPayload.model_validate(item).to_domain())
            except ValidationError:
                _logger.warning("Skipping invalid personal record: %s", item)
        return records if limit is None else records[: max(limit, 0)]

    async def _fetch(
        self, call: Callable[[], Awaitable[dict[str, object]]], *, action: str
    ) -> Any:
        try:
            envelope = ApiEnvelope.model_validate(await call())
        except (httpx.HTTPError, ValidationError):
            _logger.exception("Training %s request failed", action)
            return None
        if not envelope.success:
            _logger.warning(
                "Training %s unavailable", action, extra={"error": envelope.error}
            )
            return None
        return envelope.data
