"""Time-bounded in-memory cache for geocoding results."""

import time
from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

from locator.core.location.models import CacheInfo
from locator.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

DEFAULT_TTL_MS = 30 * 60 * 1000  # 30 minutes


def now_ms() -> int:
    """Current wall-clock time in epoch milliseconds."""
    return int(time.time() * 1000)


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    key: str
    data: T
    timestamp: int  # epoch ms


class LocationCache(Generic[T]):
    """Key/value store whose entries expire ``ttl_ms`` after being written.

    Expired entries are not swept; they are treated as absent when read and
    replaced on the next ``set``. There is no capacity bound.
    """

    def __init__(
        self,
        ttl_ms: int = DEFAULT_TTL_MS,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """
        Args:
            ttl_ms: Entry lifetime in milliseconds
            clock: Returns the current time in epoch milliseconds
        """
        if ttl_ms < 0:
            raise ValueError("ttl_ms must be non-negative")
        self.ttl_ms = ttl_ms
        self._clock = clock
        self._entries: dict[str, CacheEntry[T]] = {}

    def get(self, key: str) -> T | None:
        """Return the stored value, or None if missing or expired."""
        entry = self._entries.get(key)
        if entry is None:
            return None
        if self._clock() - entry.timestamp >= self.ttl_ms:
            return None
        return entry.data

    def set(self, key: str, data: T) -> None:
        self._entries[key] = CacheEntry(key=key, data=data, timestamp=self._clock())

    def clear(self) -> None:
        size = len(self._entries)
        self._entries.clear()
        logger.info("location_cache_cleared", entries_removed=size)

    def info(self) -> CacheInfo:
        """Physical size and keys, expired entries included."""
        return CacheInfo(
            size=len(self._entries),
            ttl=self.ttl_ms,
            keys=list(self._entries.keys()),
        )

    def __len__(self) -> int:
        return len(self._entries)
