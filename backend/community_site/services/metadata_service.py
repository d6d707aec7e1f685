"""Cached post metadata lookups."""
import logging
from typing import Any, Callable, Optional

from community_site.cache import ExpiringCache, post_metadata_key, post_slug_metadata_key

logger = logging.getLogger(__name__)


class PostMetadataService:
    """Get-or-load wrapper around the post metadata cache.

    ``None`` from a loader means "no such post" and is not cached, so a post
    created right after a miss is visible on the next request.
    """

    def __init__(
        self,
        cache: ExpiringCache,
        load_by_id: Callable[[str], Optional[Any]],
        load_by_slug: Optional[Callable[[str], Optional[Any]]] = None,
    ):
        self.cache = cache
        self.load_by_id = load_by_id
        self.load_by_slug = load_by_slug

    def get(self, post_id: str) -> Optional[Any]:
        key = post_metadata_key(post_id)
        metadata = self.cache.get(key)
        if metadata is not None:
            return metadata

        metadata = self.load_by_id(post_id)
        if metadata is not None:
            self.cache.set(key, metadata)
        return metadata

    def get_by_slug(self, slug: str) -> Optional[Any]:
        if self.load_by_slug is None:
            raise ValueError("No slug loader configured")

        key = post_slug_metadata_key(slug)
        metadata = self.cache.get(key)
        if metadata is not None:
            return metadata

        metadata = self.load_by_slug(slug)
        if metadata is not None:
            self.cache.set(key, metadata)
        return metadata

    def invalidate(self, post_id: str, slug: Optional[str] = None) -> None:
        """Drop cached metadata after a post is updated or deleted."""
        self.cache.delete(post_metadata_key(post_id))
        if slug:
            self.cache.delete(post_slug_metadata_key(slug))
        logger.info(f"Invalidated metadata for post {post_id}")
