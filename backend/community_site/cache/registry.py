"""Registry of named cache instances, one per logical purpose."""
from typing import Dict, List, Optional

from community_site.config.settings import CacheSettings

from .ttl_cache import ExpiringCache

OWNERSHIP = "ownership"
POST_METADATA = "post_metadata"
PROFILE = "profile"


class CacheRegistry:
    """Registry maintaining mapping from cache name -> ExpiringCache instance."""

    def __init__(self):
        self._caches: Dict[str, ExpiringCache] = {}

    def register(self, cache: ExpiringCache) -> ExpiringCache:
        if cache.name in self._caches:
            raise ValueError(f"Cache '{cache.name}' is already registered")
        self._caches[cache.name] = cache
        return cache

    def get(self, name: str) -> ExpiringCache:
        if name not in self._caches:
            raise KeyError(f"No cache registered under name '{name}'")
        return self._caches[name]

    def all(self) -> List[ExpiringCache]:
        return list(self._caches.values())

    def names(self) -> List[str]:
        return list(self._caches)

    @classmethod
    def from_settings(cls, settings: Optional[CacheSettings] = None) -> "CacheRegistry":
        """
        Build the standard caches from settings.

        Ownership decisions and metadata never share an instance, so keys
        from one purpose can't leak into the other.
        """
        settings = settings or CacheSettings.from_env()
        registry = cls()
        registry.register(ExpiringCache(settings.ownership_ttl_seconds, name=OWNERSHIP))
        registry.register(ExpiringCache(settings.post_metadata_ttl_seconds, name=POST_METADATA))
        registry.register(ExpiringCache(settings.profile_ttl_seconds, name=PROFILE))
        return registry


_registry_singleton: Optional[CacheRegistry] = None


def get_cache_registry() -> CacheRegistry:
    """FastAPI dependency returning the process-wide registry."""
    global _registry_singleton
    if _registry_singleton is None:
        _registry_singleton = CacheRegistry.from_settings()
    return _registry_singleton
