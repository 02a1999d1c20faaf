"""Key-value store abstractions."""

from dataclasses import dataclass, field
from typing import Protocol


class KeyValueStore(Protocol):
    """Persistent store for small JSON blobs."""

    def get(self, key: str) -> dict[str, object] | None:
        """Return the stored value for a key, if any."""

    def set(self, key: str, value: dict[str, object]) -> None:
        """Store a value, replacing any previous one."""


@dataclass
class InMemoryKeyValueStore(KeyValueStore):
    """In-process store used when no persistent backend is configured."""

    _entries: dict[str, dict[str, object]] = field(default_factory=dict)

    def get(self, key: str) -> dict[str, object] | None:
        value = self._entries.get(key)
        return dict(value) if value is not None else None

    def set(self, key: str, value: dict[str, object]) -> None:
        self._entries[key] = dict(value)
