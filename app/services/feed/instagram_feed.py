"""
Instagram feed for the storefront grid.

Serves the latest image posts through a single-slot cache with a stale
fallback, so the page keeps showing the last known grid while the Graph
API is unavailable.
"""

import logging
from datetime import UTC, datetime
from typing import Any, Dict, List, Optional

from app.db.instagram_client import InstagramGraphClient
from app.services.feed.stale_cache import StaleFallbackCache

logger = logging.getLogger(__name__)

GRID_MEDIA_TYPES = frozenset({"IMAGE", "CAROUSEL_ALBUM"})
TOKEN_MISSING_ERROR = "INSTAGRAM_ACCESS_TOKEN not configured"


def filter_grid_posts(posts: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    """Keep only posts that render as a thumbnail (videos are dropped)."""
    return [post for post in posts if isinstance(post, dict) and post.get("media_type") in GRID_MEDIA_TYPES]


class InstagramFeedService:
    """Feed service backed by ``StaleFallbackCache``."""

    def __init__(
        self,
        client: Optional[InstagramGraphClient],
        cache: StaleFallbackCache[List[Dict[str, Any]]],
        post_limit: int = 12,
    ):
        """
        Args:
            client: Graph API client, None when no access token is configured
            cache: Cache holding the filtered posts
            post_limit: Posts requested from the Graph API
        """
        self.client = client
        self.cache = cache
        self.post_limit = post_limit

    async def _fetch_posts(self) -> List[Dict[str, Any]]:
        posts = await self.client.fetch_recent_media(self.post_limit)
        grid_posts = filter_grid_posts(posts)
        logger.info(f"📸 Instagram: {len(grid_posts)}/{len(posts)} posts para la grilla")
        return grid_posts

    async def get_feed(self, now: datetime | None = None) -> Dict[str, Any]:
        """
        Get the posts for the storefront.

        Never raises: an upstream failure is answered with the stale cache
        (flagged with ``stale``) or with an empty list.

        Args:
            now: Reference time (defaults to the current UTC time)

        Returns:
            Dict: ``{"posts": [...]}`` plus ``stale`` or ``error`` when applicable
        """
        if self.client is None:
            return {"posts": [], "error": TOKEN_MISSING_ERROR}

        try:
            result = await self.cache.resolve(self._fetch_posts, now or datetime.now(UTC))
        except Exception as e:
            logger.error(f"❌ Error en feed de Instagram sin cache disponible: {e}")
            return {"posts": []}

        if result.stale:
            return {"posts": result.value, "stale": True}
        return {"posts": result.value}
