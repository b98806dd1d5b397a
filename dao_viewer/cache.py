"""
Response Cache - Time-windowed cache for the web layer.

Lives outside the adapter layer: adapters always hit the network, the
web API decides how long a response may be reused.
"""

import logging
import time
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Hashable, Optional


logger = logging.getLogger(__name__)


@dataclass
class CacheEntry:
    """Cached value with its expiry time."""
    value: Any
    created_at: float
    expires_at: float
    hits: int = 0

    def is_expired(self, now: Optional[float] = None) -> bool:
        return (now if now is not None else time.monotonic()) >= self.expires_at

    def age_seconds(self, now: Optional[float] = None) -> float:
        return (now if now is not None else time.monotonic()) - self.created_at


class ResponseCache:
    """
    Simple TTL cache keyed by tuples such as ``("treasury", network, address)``.

    ``None`` results are never stored, so failures are retried on the
    next request.
    """

    def __init__(
        self,
        max_entries: int = 1000,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self._entries: dict[Hashable, CacheEntry] = {}
        self._max_entries = max_entries
        self._clock = clock
        self._hits = 0
        self._misses = 0

    def get(self, key: Hashable) -> Optional[Any]:
        entry = self._entries.get(key)
        if entry is None or entry.is_expired(self._clock()):
            self._misses += 1
            return None
        entry.hits += 1
        self._hits += 1
        return entry.value

    def put(self, key: Hashable, value: Any, ttl_seconds: float) -> None:
        if value is None or ttl_seconds <= 0:
            return
        now = self._clock()
        self._entries[key] = CacheEntry(
            value=value,
            created_at=now,
            expires_at=now + ttl_seconds,
        )
        if len(self._entries) > self._max_entries:
            self._clean()

    async def get_or_fetch(
        self,
        key: Hashable,
        ttl_seconds: float,
        fetch: Callable[[], Awaitable[Any]],
    ) -> Any:
        """Return a fresh cached value or fetch, store and return a new one."""
        cached = self.get(key)
        if cached is not None:
            return cached
        value = await fetch()
        self.put(key, value, ttl_seconds)
        return value

    def _clean(self) -> None:
        """Remove expired entries, then the oldest ones while still over the limit."""
        now = self._clock()
        expired = [key for key, entry in self._entries.items() if entry.is_expired(now)]
        for key in expired:
            del self._entries[key]

        overflow = len(self._entries) - self._max_entries
        evicted = []
        if overflow > 0:
            oldest = sorted(self._entries, key=lambda k: self._entries[k].created_at)
            evicted = oldest[:overflow]
            for key in evicted:
                del self._entries[key]

        logger.debug(f"Cleaned {len(expired)} expired and evicted {len(evicted)} cache entries")

    def clear(self) -> None:
        self._entries.clear()
        logger.info("Response cache cleared")

    def get_stats(self) -> dict[str, Any]:
        """Get cache statistics."""
        total = self._hits + self._misses
        hit_rate = (self._hits / total * 100) if total > 0 else 0
        return {
            "entries": len(self._entries),
            "hits": self._hits,
            "misses": self._misses,
            "hit_rate_percent": round(hit_rate, 2),
        }

    def __len__(self) -> int:
        return len(self._entries)
