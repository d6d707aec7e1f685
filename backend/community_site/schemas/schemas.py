from pydantic import BaseModel


# =========================
# CACHE SCHEMAS
# =========================
class CacheStatsResponse(BaseModel):
    name: str
    size: int
    ttl_seconds: float
    hits: int
    misses: int
    evictions: int


class SweepResponse(BaseModel):
    name: str
    evicted: int


class ClearResponse(BaseModel):
    name: str
    cleared: bool = True


class PostInvalidationResponse(BaseModel):
    post_id: str
    removed: int
