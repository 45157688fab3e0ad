"""
Instagram feed services.
"""

from .instagram_feed import InstagramFeedService, filter_grid_posts
from .stale_cache import CacheEntry, CacheResult, StaleFallbackCache

__all__ = ["CacheEntry", "CacheResult", "InstagramFeedService", "StaleFallbackCache", "filter_grid_posts"]
