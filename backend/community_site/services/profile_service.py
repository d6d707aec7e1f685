"""Cached profile lookups with de-duplication of concurrent loads."""
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional
import logging
import threading

from community_site.cache import ExpiringCache, profile_key

logger = logging.getLogger(__name__)


@dataclass
class _PendingLoad:
    done: threading.Event = field(default_factory=threading.Event)
    result: Optional[Any] = None


class ProfileService:
    """
    Profile lookup that hits the loader at most once per user per TTL.

    Concurrent callers asking for the same user while a load is running
    wait for that load instead of starting their own. A user without a
    profile is cached as such. Loader failures are logged, return None and
    are not cached.
    """

    def __init__(self, cache: ExpiringCache, loader: Callable[[str], Optional[Any]]):
        self.cache = cache
        self.loader = loader
        self._lock = threading.Lock()
        self._in_flight: Dict[str, _PendingLoad] = {}

    def get_profile(self, user_id: str) -> Optional[Any]:
        key = profile_key(user_id)
        with self._lock:
            # Wrapped so a cached "no profile" is distinguishable from a miss
            cached = self.cache.get(key)
            if cached is not None:
                return cached["profile"]

            pending = self._in_flight.get(user_id)
            owner = pending is None
            if owner:
                pending = _PendingLoad()
                self._in_flight[user_id] = pending

        if not owner:
            pending.done.wait()
            return pending.result

        loaded = False
        try:
            pending.result = self.loader(user_id)
            loaded = True
        except Exception as e:
            logger.error(f"Failed to load profile for user {user_id}: {e}")
        finally:
            with self._lock:
                # An invalidate during the load detaches it; don't cache its result
                if self._in_flight.get(user_id) is pending:
                    del self._in_flight[user_id]
                    if loaded:
                        self.cache.set(key, {"profile": pending.result})
            pending.done.set()

        return pending.result

    def invalidate(self, user_id: str) -> None:
        """Forget the cached profile, e.g. after the user edits it."""
        with self._lock:
            self.cache.delete(profile_key(user_id))
            self._in_flight.pop(user_id, None)

    def pending_loads(self) -> int:
        with self._lock:
            return len(self._in_flight)
