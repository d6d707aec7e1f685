# backend/community_site/services/ownership_service.py

import logging
from typing import Callable, Optional

from community_site.cache import ExpiringCache, ownership_key, post_prefix

logger = logging.getLogger(__name__)

POST_NOT_FOUND = "Post not found"
NOT_PERMITTED = "You do not have permission to modify this post"
ADMIN_ROLE = "admin"


class PostOwnershipService:
    """
    Decides whether a user may modify a post, memoizing the answer.

    The post's author and any admin are authorized. Negative decisions are
    cached too, so a decision can be served up to the cache TTL after the
    underlying post or role changed unless ``invalidate_post`` is called.

    The lookups are the authoritative source:
        author_lookup(post_id) -> author id, or None if the post doesn't exist
        role_lookup(user_id)   -> role name, or None if no profile
    """

    def __init__(
        self,
        cache: ExpiringCache,
        author_lookup: Callable[[str], Optional[str]],
        role_lookup: Callable[[str], Optional[str]],
    ):
        self.cache = cache
        self.author_lookup = author_lookup
        self.role_lookup = role_lookup

    def verify(self, post_id: str, user_id: str) -> dict:
        """
        Check if ``user_id`` may modify ``post_id``.

        Returns:
            {"authorized": True} or {"authorized": False, "error": <reason>}

        Lookup exceptions propagate and nothing is cached for the pair.
        """
        key = ownership_key(post_id, user_id)
        cached = self.cache.get(key)
        # Callers get a copy so they can never edit the cached decision
        if cached is not None:
            return dict(cached)

        decision = self._decide(post_id, user_id)
        self.cache.set(key, decision)
        return dict(decision)

    def _decide(self, post_id: str, user_id: str) -> dict:
        author_id = self.author_lookup(post_id)
        if author_id is None:
            return {"authorized": False, "error": POST_NOT_FOUND}

        if author_id == user_id:
            return {"authorized": True}

        if self.role_lookup(user_id) == ADMIN_ROLE:
            return {"authorized": True}

        return {"authorized": False, "error": NOT_PERMITTED}

    def invalidate_post(self, post_id: str) -> int:
        """
        Forget every decision cached for a post, for all users.

        Call after the post is deleted or its author changes.
        """
        removed = self.cache.delete_by_prefix(post_prefix(post_id))
        logger.info(f"Invalidated {removed} ownership decisions for post {post_id}")
        return removed

    def invalidate_user(self, post_id: str, user_id: str) -> None:
        self.cache.delete(ownership_key(post_id, user_id))
