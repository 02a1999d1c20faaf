"""Tests for container wiring."""

import asyncio

from pocket_coach.containers import build_container
from pocket_coach.services.cache import InMemoryKeyValueStore


def test_build_container_creates_services(settings) -> None:
    container = build_container(settings)

    assert container.dashboard_service is not None
    assert container.reminder_service is not None
    assert isinstance(container.quote_service.store, InMemoryKeyValueStore)
    assert container.dashboard_service.action_limit == 3
    asyncio.run(container.close_resources())
