"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

from pocket_coach.adapters.supabase_key_value_store import SupabaseKeyValueStore


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "upsert": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    last_on_conflict: str | None = None

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def upsert(self, payload: dict[str, object], on_conflict: str = "") -> "FakeTable":
        self._action = "upsert"
        self.last_payload = payload
        self.last_on_conflict = on_conflict
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_key_value_store_reads_value_by_key() -> None:
    client = FakeSupabaseClient()
    table = client.table("app_cache")
    table.queue("select", [{"value": {"quote": "Keep going.", "author": "Coach"}}])

    store = SupabaseKeyValueStore(client)
    value = store.get("daily_quote_2024-06-12")

    assert value == {"quote": "Keep going.", "author": "Coach"}
    assert table.last_filters == [("key", "daily_quote_2024-06-12")]


def test_key_value_store_missing_or_malformed_value() -> None:
    client = FakeSupabaseClient()
    table = client.table("app_cache")
    table.queue("select", [{"value": "not-a-dict"}])

    store = SupabaseKeyValueStore(client)

    assert store.get("daily_quote_2024-06-12") is None
    assert store.get("daily_quote_2024-06-13") is None


def test_key_value_store_upserts_on_key() -> None:
    client = FakeSupabaseClient()

    store = SupabaseKeyValueStore(client)
    store.set("daily_quote_2024-06-12", {"quote": "Eat.", "author": "Unknown"})

    table = client.tables["app_cache"]
    assert isinstance(table.last_payload, dict)
    assert table.last_payload["key"] == "daily_quote_2024-06-12"
    assert table.last_payload["value"] == {"quote": "Eat.", "author": "Unknown"}
    assert "updated_at" in table.last_payload
    assert table.last_on_conflict == "key"
