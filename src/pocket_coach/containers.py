"""Dependency container wiring for the application."""

import random
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta

from supabase import create_client

from pocket_coach.adapters.coach_api_client import CoachApiClient, HttpxCoachApiClient
from pocket_coach.adapters.supabase_key_value_store import SupabaseKeyValueStore
from pocket_coach.config import Settings
from pocket_coach.services.cache import InMemoryKeyValueStore, KeyValueStore
from pocket_coach.services.clock import Clock, SystemClock
from pocket_coach.services.dashboard import DashboardService
from pocket_coach.services.food_logs import FoodLogService
from pocket_coach.services.quotes import DailyQuoteService
from pocket_coach.services.reminders import LocalNotificationRegistry, ReminderService
from pocket_coach.services.training import TrainingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    clock: Clock
    coach_api_client: CoachApiClient
    food_log_service: FoodLogService
    training_service: TrainingService
    quote_service: DailyQuoteService
    reminder_service: ReminderService
    dashboard_service: DashboardService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    clock = SystemClock.for_timezone(resolved_settings.timezone)
    coach_api_client = HttpxCoachApiClient.create(
        base_url=resolved_settings.coach_api_url,
        token=resolved_settings.coach_api_token,
    )
    store: KeyValueStore
    if resolved_settings.uses_supabase_cache:
        store = SupabaseKeyValueStore(
            create_client(
                resolved_settings.supabase_url, resolved_settings.supabase_service_key
            )
        )
    else:
        store = InMemoryKeyValueStore()

    food_log_service = FoodLogService(client=coach_api_client, clock=clock)
    training_service = TrainingService(client=coach_api_client)
    quote_service = DailyQuoteService(client=coach_api_client, store=store, clock=clock)
    reminder_service = ReminderService(
        gateway=LocalNotificationRegistry(), clock=clock
    )
    dashboard_service = DashboardService(
        food_logs=food_log_service,
        training=training_service,
        quotes=quote_service,
        clock=clock,
        rng=random.Random(),
        action_limit=resolved_settings.dashboard_action_limit,
        prompt_interval=timedelta(hours=resolved_settings.prompt_interval_hours),
    )

    async def close_resources() -> None:
        await coach_api_client.close()

    return AppContainer(
        settings=resolved_settings,
        clock=clock,
        coach_api_client=coach_api_client,
        food_log_service=food_log_service,
        training_service=training_service,
        quote_service=quote_service,
        reminder_service=reminder_service,
        dashboard_service=dashboard_service,
        close_resources=close_resources,
    )
