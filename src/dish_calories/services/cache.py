"""Simple cache abstractions."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol


class Cache(Protocol):
    """Cache interface for simple key-value data."""

    def get(self, key: str) -> object | None:
        """Return a cached value if present and not expired."""

    def set(self, key: str, value: object) -> None:
        """Store a cached value stamped with the current time."""


@dataclass(frozen=True)
class CacheEntry:
    """Cached value with its insertion time."""

    key: str
    value: object
    inserted_at: datetime


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


class InMemoryCache(Cache):
    """In-memory TTL cache bounded by entry count.

    Expiry is lazy: a stale entry stays in the store until it is read or
    evicted. When the cache is full, the least recently inserted entry is
    evicted.
    """

    def __init__(
        self,
        ttl_seconds: int = 3600,
        max_entries: int = 512,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if max_entries < 1:
            raise ValueError("max_entries must be at least 1")
        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_entries = max_entries
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, key: object) -> bool:
        return key in self._entries

    def get(self, key: str) -> object | None:
        """Return a cached value if it hasn't expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.inserted_at > self.ttl:
            self._entries.pop(key, None)
            return None
        return entry.value

    def set(self, key: str, value: object) -> None:
        """Store a value, replacing any previous entry for the key."""
        self._entries.pop(key, None)
        while len(self._entries) >= self.max_entries:
            oldest = next(iter(self._entries))
            del self._entries[oldest]
        self._entries[key] = CacheEntry(key=key, value=value, inserted_at=self._clock())
