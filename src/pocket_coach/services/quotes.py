"""Daily motivational quote with a per-day cache."""

import logging
from dataclasses import dataclass

import httpx
from pydantic import ValidationError

from pocket_coach.adapters.coach_api_client import CoachApiClient
from pocket_coach.adapters.coach_api_models import ApiEnvelope, QuotePayload
from pocket_coach.domain.food_log import day_key
from pocket_coach.domain.quotes import DailyQuote
from pocket_coach.services.cache import KeyValueStore
from pocket_coach.services.clock import Clock

_logger = logging.getLogger(__name__)

CACHE_KEY_PREFIX = "daily_quote_"


def quote_cache_key(day_string: str) -> str:
    """Return the store key for the given day."""
    return f"{CACHE_KEY_PREFIX}{day_string}"


@dataclass
class DailyQuoteService:
    """Serves one quote per local calendar day."""

    client: CoachApiClient
    store: KeyValueStore
    clock: Clock

    async def get_daily_quote(self) -> DailyQuote | None:
        """Return today's quote from the store, fetching it once on a miss."""
        key = quote_cache_key(day_key(self.clock.now().date()))
        cached = self._read(key)
        if cached is not None:
            return cached

        try:
            envelope = ApiEnvelope.model_validate(await self.client.get_daily_quote())
            if not envelope.success or envelope.data is None:
                _logger.warning("Daily quote unavailable: %s", envelope.error)
                return None
            quote = QuotePayload.model_validate(envelope.data).to_domain()
        except (httpx.HTTPError, ValidationError):
            _logger.exception("Failed to fetch daily quote")
            return None

        self._write(key, quote)
        return quote

    def _read(self, key: str) -> DailyQuote | None:
        try:
            value = self.store.get(key)
        except Exception:
            _logger.exception("Quote cache read failed", extra={"cache_key": key})
            return None
        if value is None:
            return None
        try:
            return QuotePayload.model_validate(value).to_domain()
        except ValidationError:
            _logger.warning("Ignoring malformed cached quote", extra={"cache_key": key})
            return None

    def _write(self, key: str, quote: DailyQuote) -> None:
        try:
            self.store.set(key, quote.to_dict())
        except Exception:
            _logger.exception("Quote cache write failed", extra={"cache_key": key})
