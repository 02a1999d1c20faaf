"""Coaching backend API client."""

from dataclasses import dataclass
from typing import Protocol

import httpx

_TIMEOUT_SECONDS = 15


class CoachApiClient(Protocol):
    """Interface for the coaching backend REST API."""

    async def get_current_log(self, user_date: str) -> dict[str, object]:
        """Fetch today's log for the user's local date."""

    async def get_week_logs(self) -> dict[str, object]:
        """Fetch the last seven days of logs."""

    async def create_entry(self, entry: dict[str, object]) -> dict[str, object]:
        """Create a food log entry."""

    async def delete_entry(self, entry_id: int) -> dict[str, object]:
        """Delete a food log entry."""

    async def get_profile(self) -> dict[str, object]:
        """Fetch the user's profile."""

    async def update_profile(self, fields: dict[str, object]) -> dict[str, object]:
        """Update profile fields."""

    async def get_daily_quote(self) -> dict[str, object]:
        """Fetch the motivational quote of the day."""

    async def get_current_plan(self) -> dict[str, object]:
        """Fetch the active training plan."""

    async def get_today_workout(self) -> dict[str, object]:
        """Fetch today's workout."""

    async def get_personal_records(self) -> dict[str, object]:
        """Fetch personal records."""


@dataclass
class HttpxCoachApiClient(CoachApiClient):
    """HTTPX-backed coaching API client returning raw JSON envelopes."""

    base_url: str
    http_client: httpx.AsyncClient
    token: str | None = None

    @classmethod
    def create(cls, base_url: str, token: str | None = None) -> "HttpxCoachApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            token=token,
        )

    async def get_current_log(self, user_date: str) -> dict[str, object]:
        return await self._request(
            "GET", "/log/current", params={"userDate": user_date}
        )

    async def get_week_logs(self) -> dict[str, object]:
        return await self._request("GET", "/log/week")

    async def create_entry(self, entry: dict[str, object]) -> dict[str, object]:
        return await self._request("POST", "/log/entry", json=entry)

    async def delete_entry(self, entry_id: int) -> dict[str, object]:
        return await self._request("DELETE", f"/log/entry/{entry_id}")

    async def get_profile(self) -> dict[str, object]:
        return await self._request("GET", "/auth/profile")

    async def update_profile(self, fields: dict[str, object]) -> dict[str, object]:
        return await self._request("PUT", "/auth/profile", json=fields)

    async def get_daily_quote(self) -> dict[str, object]:
        return await self._request("GET", "/api/quote/daily")

    async def get_current_plan(self) -> dict[str, object]:
        return await self._request("GET", "/training/plan/current")

    async def get_today_workout(self) -> dict[str, object]:
        return await self._request("GET", "/training/workout/today")

    async def get_personal_records(self) -> dict[str, object]:
        return await self._request("GET", "/training/personal-records")

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        params: dict[str, str] | None = None,
        json: dict[str, object] | None = None,
    ) -> dict[str, object]:
        headers = {"Cache-Control": "no-cache"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            params=params,
            json=json,
            headers=headers,
            timeout=_TIMEOUT_SECONDS,
        )
        response.raise_for_status()
        try:
            return response.json()
        except ValueError as exc:
            raise httpx.DecodingError(
                f"Response from {path} is not valid JSON", request=response.request
            ) from exc
