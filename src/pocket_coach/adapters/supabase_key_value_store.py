"""Supabase-backed key-value store."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from pocket_coach.services.cache import KeyValueStore

_TABLE = "app_cache"


@dataclass
class SupabaseKeyValueStore(KeyValueStore):
    """Stores JSON blobs in the ``app_cache`` table keyed by ``key``."""

    client: Client

    def get(self, key: str) -> dict[str, object] | None:
        """Return the stored value for a key."""
        response = (
            self.client.table(_TABLE)
            .select("value")
            .eq("key", key)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        value = response.data[0].get("value")
        return value if isinstance(value, dict) else None

    def set(self, key: str, value: dict[str, object]) -> None:
        """Insert or replace the value for a key."""
        self.client.table(_TABLE).upsert(
            {
                "key": key,
                "value": value,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            },
            on_conflict="key",
        ).execute()
