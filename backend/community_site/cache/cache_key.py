"""Cache key composition rules.

Every key starts with the resource kind and identifier so that all entries
for one resource share the prefix returned by ``post_prefix``.
"""


def ownership_key(post_id: str, user_id: str) -> str:
    """
    Generate a cache key for a post ownership decision.

    Args:
        post_id: The post identifier
        user_id: The user whose permission was checked

    Returns:
        Cache key string

    Example:
        >>> ownership_key("42", "7")
        'post:42:user:7'
    """
    return f"post:{post_id}:user:{user_id}"


def post_prefix(post_id: str) -> str:
    """
    Prefix shared by every key cached for a post.

    Example:
        >>> post_prefix("42")
        'post:42:'
    """
    return f"post:{post_id}:"


def post_metadata_key(post_id: str) -> str:
    """
    Generate a cache key for post metadata looked up by id.

    Example:
        >>> post_metadata_key("42")
        'post:42:metadata'
    """
    return f"post:{post_id}:metadata"


def post_slug_metadata_key(slug: str) -> str:
    """
    Generate a cache key for post metadata looked up by slug.

    Example:
        >>> post_slug_metadata_key("hello-world")
        'post-slug:hello-world:metadata'
    """
    return f"post-slug:{slug}:metadata"


def profile_key(user_id: str) -> str:
    return f"profile:{user_id}"
