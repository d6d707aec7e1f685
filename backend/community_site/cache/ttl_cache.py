"""Expiring in-memory cache with a fixed per-instance time-to-live."""
from dataclasses import dataclass
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar
import logging
import threading
import time

logger = logging.getLogger(__name__)

V = TypeVar("V")


@dataclass(frozen=True)
class CacheEntry(Generic[V]):
    """A cached value stamped with the clock reading at insertion."""

    value: V
    stored_at: float


class ExpiringCache(Generic[V]):
    """
    Process-local key/value cache where every entry lives for ``ttl_seconds``.

    Expired entries are evicted lazily on ``get`` and in bulk by ``sweep``;
    between the two they may still sit in memory, so every read re-checks age.
    An entry is valid through exactly ``ttl_seconds`` and stale after that.

    All operations hold one lock, so the cache can be shared by request
    handlers running in a threadpool.

    Attributes:
        name: Label used in logs and stats (e.g. "ownership")
        ttl_seconds: Time-to-live in seconds, fixed for the instance lifetime

    Example:
        >>> cache = ExpiringCache(ttl_seconds=60, name="ownership")
        >>> cache.set("post:42:user:7", {"authorized": True})
        >>> cache.get("post:42:user:7")
        {'authorized': True}
    """

    def __init__(
        self,
        ttl_seconds: float = 60,
        name: str = "cache",
        clock: Callable[[], float] = time.monotonic,
    ):
        """
        Initialize the cache.

        Args:
            ttl_seconds: Time-to-live in seconds, must be positive
            name: Label for logs and stats
            clock: Function returning the current time in seconds

        Raises:
            ValueError: If ttl_seconds is not positive
        """
        if ttl_seconds <= 0:
            raise ValueError(f"Cache '{name}' ttl_seconds must be positive, got {ttl_seconds}")
        self._ttl_seconds = ttl_seconds
        self.name = name
        self._clock = clock
        self._entries: Dict[str, CacheEntry[V]] = {}
        self._lock = threading.Lock()
        self._hits = 0
        self._misses = 0
        self._evictions = 0

    @property
    def ttl_seconds(self) -> float:
        return self._ttl_seconds

    def _is_expired(self, entry: CacheEntry[V], now: float) -> bool:
        return now - entry.stored_at > self._ttl_seconds

    def set(self, key: str, value: V) -> None:
        """
        Store a value, replacing any previous entry for the key.

        Args:
            key: Cache key (e.g., "post:42:user:7")
            value: Value to cache
        """
        with self._lock:
            self._entries[key] = CacheEntry(value=value, stored_at=self._clock())

    def get(self, key: str) -> Optional[V]:
        """
        Retrieve a value if it exists and hasn't expired.

        A stale entry found here is removed.

        Args:
            key: Cache key

        Returns:
            Cached value, or None on a miss
        """
        with self._lock:
            entry = self._entries.get(key)
            if entry is None:
                self._misses += 1
                return None

            if self._is_expired(entry, self._clock()):
                del self._entries[key]
                self._evictions += 1
                self._misses += 1
                return None

            self._hits += 1
            return entry.value

    def delete(self, key: str) -> None:
        """Remove a single entry. No-op if the key is absent."""
        with self._lock:
            self._entries.pop(key, None)

    def delete_by_prefix(self, prefix: str) -> int:
        """
        Remove every entry whose key starts with ``prefix``.

        Keys are built with the resource identifier as a leading segment
        (see ``cache_key``), so "post:42:" drops every decision cached for
        post 42 whatever subject it was cached for. Include the trailing
        separator or "post:4" would also match "post:42:...".

        Args:
            prefix: Leading part of the keys to remove

        Returns:
            Number of entries removed
        """
        with self._lock:
            doomed = [k for k in self._entries if k.startswith(prefix)]
            for key in doomed:
                del self._entries[key]
            return len(doomed)

    def clear(self) -> None:
        """Remove all entries."""
        with self._lock:
            self._entries.clear()

    def sweep(self) -> int:
        """
        Evict every expired entry, whether or not it was ever read again.

        Returns:
            Number of entries evicted
        """
        with self._lock:
            now = self._clock()
            expired = [k for k, entry in self._entries.items() if self._is_expired(entry, now)]
            for key in expired:
                del self._entries[key]
            self._evictions += len(expired)

        if expired:
            logger.debug(f"Swept {len(expired)} expired entries from cache '{self.name}'")
        return len(expired)

    def size(self) -> int:
        """Number of entries physically held, stale ones included."""
        with self._lock:
            return len(self._entries)

    def keys(self) -> List[str]:
        """Snapshot of the current keys."""
        with self._lock:
            return list(self._entries)

    def stats(self) -> Dict[str, Any]:
        """
        Get cache statistics.

        Returns:
            Dict with name, size, ttl_seconds, hits, misses and evictions
        """
        with self._lock:
            return {
                "name": self.name,
                "size": len(self._entries),
                "ttl_seconds": self._ttl_seconds,
                "hits": self._hits,
                "misses": self._misses,
                "evictions": self._evictions,
            }

    def __repr__(self) -> str:
        return f"ExpiringCache(name={self.name!r}, ttl_seconds={self._ttl_seconds})"
