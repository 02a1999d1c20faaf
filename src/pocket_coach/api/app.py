"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from dataclasses import asdict

from fastapi import FastAPI, Query, Request

from pocket_coach.app_logging import configure_logging
from pocket_coach.containers import AppContainer


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        state_container: AppContainer = app.state.container
        await state_container.reminder_service.initialize()
        try:
            yield
        finally:
            await state_container.reminder_service.shutdown()
            await state_container.close_resources()
            logger.info("Resources closed")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/dashboard")
    async def dashboard(
        request: Request,
        freezes_used: int = Query(default=0, ge=0),
    ) -> dict[str, object]:
        """Return every dashboard value computed for the current moment."""
        state_container: AppContainer = request.app.state.container
        view = await state_container.dashboard_service.build(
            freezes_used_this_month=freezes_used
        )
        return asdict(view)

    @app.get("/reminders")
    async def reminders(request: Request) -> dict[str, object]:
        """List the currently scheduled reminders."""
        state_container: AppContainer = request.app.state.container
        scheduled = await state_container.reminder_service.upcoming()
        return {"reminders": [asdict(reminder) for reminder in scheduled]}

    @app.post("/reminders/sync")
    async def sync_reminders(request: Request) -> dict[str, object]:
        """Reschedule meal reminders from the last week of eating times."""
        state_container: AppContainer = request.app.state.container
        week = await state_container.food_log_service.get_week()
        service = state_container.reminder_service
        scheduled = await service.schedule_smart_reminders(week)
        end_of_day = await service.schedule_end_of_day_reminder()
        if end_of_day is not None:
            scheduled.append(end_of_day)
        logger.info("Reminders synced", extra={"count": len(scheduled)})
        return {"reminders": [asdict(reminder) for reminder in scheduled]}

    return app
