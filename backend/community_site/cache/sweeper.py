"""Periodic sweep of expired cache entries."""
import asyncio
import logging
from typing import Iterable, List, Optional

from .ttl_cache import ExpiringCache

logger = logging.getLogger(__name__)


class CacheSweeper:
    """
    Calls ``sweep()`` on a set of caches every ``interval_seconds``.

    Lazy eviction in ``get`` never fires for keys that are not read again;
    the sweeper bounds the memory those keys hold. The interval is unrelated
    to (and normally longer than) any cache's TTL.
    """

    def __init__(self, caches: Iterable[ExpiringCache], interval_seconds: float = 300):
        if interval_seconds <= 0:
            raise ValueError(f"interval_seconds must be positive, got {interval_seconds}")
        self.caches: List[ExpiringCache] = list(caches)
        self.interval_seconds = interval_seconds
        self.sweep_task: Optional[asyncio.Task] = None
        self.running = False

    def sweep_once(self) -> dict:
        """
        Sweep every cache once.

        A failure in one cache is logged and the rest are still swept.

        Returns:
            Dict of cache name -> number of entries evicted
        """
        evicted = {}
        for cache in self.caches:
            try:
                evicted[cache.name] = cache.sweep()
            except Exception as e:
                logger.error(f"Sweep of cache '{cache.name}' failed: {e}")
        total = sum(evicted.values())
        if total:
            logger.info(f"Cache sweep evicted {total} entries: {evicted}")
        return evicted

    async def start(self):
        """Start the background sweep loop."""
        if self.running:
            return
        self.running = True
        self.sweep_task = asyncio.create_task(self._sweep_loop())
        logger.info(f"Cache sweeper started (interval={self.interval_seconds}s, caches={len(self.caches)})")

    async def stop(self):
        """Stop the background sweep loop."""
        self.running = False
        if self.sweep_task:
            self.sweep_task.cancel()
            try:
                await self.sweep_task
            except asyncio.CancelledError:
                pass
            self.sweep_task = None

        logger.info("Cache sweeper stopped")

    async def _sweep_loop(self):
        while self.running:
            await asyncio.sleep(self.interval_seconds)
            self.sweep_once()
