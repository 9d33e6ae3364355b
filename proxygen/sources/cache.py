"""In-memory TTL cache for normalized source records.

Entries are immutable snapshots keyed by source key. An entry is served while
``now - timestamp < ttl`` and treated as absent afterwards; there is no other
eviction. Concurrent writers to the same key simply overwrite each other.
"""

from __future__ import annotations

import time
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from proxygen.models.records import ProxyRecord

Clock = Callable[[], float]


@dataclass(frozen=True)
class CacheEntry:
    """A cached, normalized record list and the clock value it was stored at."""

    timestamp: float
    records: tuple[ProxyRecord, ...]


class TtlCache:
    """Source-keyed record cache with an injectable clock.

    Parameters
    ----------
    ttl_seconds:
        How long an entry stays fresh (default 600 = 10 min).
    clock:
        Monotonic time source; tests pass a fake.
    """

    def __init__(self, ttl_seconds: float = 600, clock: Clock = time.monotonic) -> None:
        self._ttl_seconds = ttl_seconds
        self._clock = clock
        self._entries: dict[str, CacheEntry] = {}

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def get(self, key: str) -> list[ProxyRecord] | None:
        """Return the cached records for *key*, or None if absent or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self._ttl_seconds:
            return None
        return list(entry.records)

    def set(self, key: str, records: Sequence[ProxyRecord]) -> None:
        """Store *records* under *key*, stamped with the current clock value."""
        self._entries[key] = CacheEntry(timestamp=self._clock(), records=tuple(records))

    def clear(self) -> None:
        self._entries.clear()

    def get_stats(self) -> dict:
        """Return per-key entry sizes and ages for the health endpoint."""
        now = self._clock()
        return {
            "ttl_seconds": self._ttl_seconds,
            "entries": {
                key: {
                    "count": len(entry.records),
                    "age_seconds": round(now - entry.timestamp, 3),
                    "fresh": now - entry.timestamp < self._ttl_seconds,
                }
                for key, entry in self._entries.items()
            },
        }
