import logging
from fastapi import APIRouter, Depends, HTTPException
from typing import List

from community_site.cache import CacheRegistry, ExpiringCache, get_cache_registry, post_prefix, OWNERSHIP
from community_site.schemas.schemas import (
    CacheStatsResponse,
    SweepResponse,
    ClearResponse,
    PostInvalidationResponse,
)

logger = logging.getLogger(__name__)

# Router
router = APIRouter(prefix="/api/admin/cache", tags=["cache"])


def _get_cache(registry: CacheRegistry, name: str) -> ExpiringCache:
    try:
        return registry.get(name)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Cache '{name}' not found")


# =========================
# STATS
# =========================
@router.get("/", response_model=List[CacheStatsResponse])
def list_caches(registry: CacheRegistry = Depends(get_cache_registry)):
    return [cache.stats() for cache in registry.all()]


@router.get("/{name}", response_model=CacheStatsResponse)
def get_cache_stats(name: str, registry: CacheRegistry = Depends(get_cache_registry)):
    return _get_cache(registry, name).stats()


# =========================
# MAINTENANCE
# =========================
@router.post("/{name}/sweep", response_model=SweepResponse)
def sweep_cache(name: str, registry: CacheRegistry = Depends(get_cache_registry)):
    evicted = _get_cache(registry, name).sweep()
    return {"name": name, "evicted": evicted}


@router.delete("/{name}", response_model=ClearResponse)
def clear_cache(name: str, registry: CacheRegistry = Depends(get_cache_registry)):
    _get_cache(registry, name).clear()
    return {"name": name, "cleared": True}


# =========================
# OWNERSHIP INVALIDATION
# =========================
@router.delete("/ownership/posts/{post_id}", response_model=PostInvalidationResponse)
def invalidate_post_ownership(post_id: str, registry: CacheRegistry = Depends(get_cache_registry)):
    """Forget cached permission decisions for a post after it changed hands or was deleted."""
    removed = _get_cache(registry, OWNERSHIP).delete_by_prefix(post_prefix(post_id))
    logger.info(f"Operator invalidated {removed} ownership decisions for post {post_id}")
    return {"post_id": post_id, "removed": removed}
