import time
from collections.abc import Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Any


def make_daily_rates_key(target_currency: str) -> str:
    return f"dailyRates:{target_currency}"


@dataclass(frozen=True)
class _CacheEntry:
    value: Any
    expires_at: float


class InMemoryCacheService:
    """Process-local key/value cache with per-entry TTL.

    Entries expire silently; an expired entry is dropped on the next read.
    ``clock`` must be monotonic and return seconds.
    """

    def __init__(
        self,
        default_ttl: timedelta = timedelta(minutes=5),
        clock: Callable[[], float] = time.monotonic,
    ):
        self.default_ttl = default_ttl
        self._clock = clock
        self._entries: dict[str, _CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        entry = self._entries.get(key)
        if entry is None:
            return None

        if self._clock() >= entry.expires_at:
            del self._entries[key]
            return None

        return entry.value

    def set(self, key: str, value: Any, ttl: timedelta | None = None) -> None:
        ttl = self.default_ttl if ttl is None else ttl
        self._entries[key] = _CacheEntry(
            value=value, expires_at=self._clock() + ttl.total_seconds()
        )

    def __contains__(self, key: str) -> bool:
        return self.get(key) is not None

    def __len__(self) -> int:
        return len(self._entries)
