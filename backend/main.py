"""
Community site FastAPI API
Operator endpoints for the in-process caches plus a health check
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from community_site.api import cache_admin
from community_site.cache import CacheSweeper, get_cache_registry
from community_site.config.settings import CacheSettings, configure_logging

settings = CacheSettings.from_env()
configure_logging(settings.log_level)


@asynccontextmanager
async def lifespan(app: FastAPI):
    sweeper = None
    if settings.sweeper_enabled:
        sweeper = CacheSweeper(get_cache_registry().all(), settings.sweep_interval_seconds)
        await sweeper.start()
    app.state.sweeper = sweeper
    yield
    if sweeper:
        await sweeper.stop()


# Initialize FastAPI app
app = FastAPI(
    title="Community Site API",
    description="Posts, members, projects and certificates - cache operations API",
    version="1.0.0",
    lifespan=lifespan,
)

# CORS config for frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=[
        "http://localhost:3000",
        "http://127.0.0.1:3000",
    ],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Include routers
app.include_router(cache_admin.router)


@app.get("/")
def root():
    """API info"""
    return {
        "message": "Community site API is running",
        "version": "1.0.0",
        "status": "operational",
        "docs": "/docs",
        "endpoints": {
            "caches": "/api/admin/cache",
            "cache_stats": "/api/admin/cache/{name}",
            "cache_sweep": "/api/admin/cache/{name}/sweep",
            "post_ownership": "/api/admin/cache/ownership/posts/{post_id}",
        },
    }


@app.get("/health")
def health_check():
    """Simple health endpoint"""
    return {"status": "healthy"}


# Run with:
#   uvicorn main:app --reload --port 8000
