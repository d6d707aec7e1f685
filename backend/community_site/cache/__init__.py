"""Expiring in-memory caches for ownership decisions, post metadata and profiles."""
from .ttl_cache import CacheEntry, ExpiringCache
from .cache_key import (
    ownership_key,
    post_prefix,
    post_metadata_key,
    post_slug_metadata_key,
    profile_key,
)
from .registry import CacheRegistry, get_cache_registry, OWNERSHIP, POST_METADATA, PROFILE
from .sweeper import CacheSweeper

__all__ = [
    "CacheEntry",
    "ExpiringCache",
    "ownership_key",
    "post_prefix",
    "post_metadata_key",
    "post_slug_metadata_key",
    "profile_key",
    "CacheRegistry",
    "get_cache_registry",
    "OWNERSHIP",
    "POST_METADATA",
    "PROFILE",
    "CacheSweeper",
]
