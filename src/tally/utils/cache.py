"""Bounded, expiring in-memory cache."""

import threading
import time
from collections import OrderedDict
from dataclasses import dataclass
from typing import Any, Callable, Generic, Hashable, Optional, TypeVar

V = TypeVar("V")


@dataclass(frozen=True)
class CacheStats:
    """Point-in-time counters for a cache."""

    hits: int
    misses: int
    evictions: int
    size: int

    @property
    def hit_rate(self) -> float:
        requests = self.hits + self.misses
        return self.hits / requests if requests else 0.0


class TTLCache(Generic[V]):
    """Thread-safe cache with a size bound and expire-after-write.

    When full, the least recently used entry is evicted. Every ``clear()``
    advances ``generation``; a ``put`` tagged with an older generation is
    dropped, which lets a reader that started before an invalidation avoid
    storing a result computed from pre-invalidation state.
    """

    def __init__(self, maxsize: int, ttl: float, timer: Callable[[], float] = time.monotonic):
        """Initialize cache.

        Args:
            maxsize: Maximum number of entries
            ttl: Seconds an entry stays valid after it is written
            timer: Monotonic clock, injectable for tests
        """
        if maxsize <= 0:
            raise ValueError("maxsize must be positive")
        if ttl <= 0:
            raise ValueError("ttl must be positive")
        self.maxsize = maxsize
        self.ttl = ttl
        self.timer = timer
        self._lock = threading.Lock()
        self._entries: "OrderedDict[Hashable, tuple[V, float]]" = OrderedDict()
        self._generation = 0
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def generation(self) -> int:
        with self._lock:
            return self._generation

    def get(self, key: Hashable) -> Optional[V]:
        """Return the cached value, or None on a miss or expired entry."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None
            value, expires_at = entry
            if self.timer() >= expires_at:
                del self._entries[key]
                self._misses += 1
                return None
            self._entries.move_to_end(key)
            self._hits += 1
            return value

    def put(self, key: Hashable, value: V, generation: Optional[int] = None) -> bool:
        """Store a value.

        Args:
            key: Cache key
            value: Value to store
            generation: If given, store only when no clear() happened since
                this generation was read

        Returns:
            True if the value was stored
        """
        with self._lock:
            if generation is not None and generation != self._generation:
                return False
            self._store(key, value)
            return True

    def add(self, key: Hashable, value: V) -> bool:
        """Store a value only if the key has no live entry. Returns True if stored."""
        with self._lock:
            entry = self._entries.get(key)
            if entry is not None and self.timer() < entry[1]:
                return False
            self._store(key, value)
            return True

    def _store(self, key: Hashable, value: V) -> None:
        self._entries[key] = (value, self.timer() + self.ttl)
        self._entries.move_to_end(key)
        while len(self._entries) > self.maxsize:
            self._entries.popitem(last=False)
            self._evictions += 1

    def evict(self, key: Hashable) -> bool:
        """Remove one entry. Returns True if it was present."""
        with self._lock:
            return self._entries.pop(key, None) is not None

    def clear(self) -> None:
        """Remove all entries and start a new generation."""
        with self._lock:
            self._entries.clear()
            self._generation += 1

    def stats(self) -> CacheStats:
        with self._lock:
            return CacheStats(
                hits=self._hits,
                misses=self._misses,
                evictions=self._evictions,
                size=len(self._entries),
            )

    def __contains__(self, key: Any) -> bool:
        with self._lock:
            entry = self._entries.get(key)
            return entry is not None and self.timer() < entry[1]

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)
