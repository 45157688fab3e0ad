"""
Single-slot cache with TTL and stale fallback.

Holds one value together with the time it was fetched. The refresh policy
is explicit: a fresh value is served as is; otherwise the upstream is asked
again, and if that fails the last known value is served flagged as stale.
"""

import logging
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Generic, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


@dataclass(frozen=True)
class CacheEntry(Generic[T]):
    """Cached value and the moment it was fetched."""

    value: T
    fetched_at: datetime


@dataclass(frozen=True)
class CacheResult(Generic[T]):
    """
    Outcome of a cache resolution.

    Attributes:
        value: Value to serve
        stale: True when the upstream failed and an expired value is served
        source: "cache", "upstream" or "stale"
    """

    value: T
    stale: bool
    source: str


class StaleFallbackCache(Generic[T]):
    """
    Explicit cache entity for one upstream value.

    Example:
        >>> cache = StaleFallbackCache(ttl_seconds=900)
        >>> result = await cache.resolve(fetch_posts)
        >>> result.stale
        False
    """

    def __init__(self, ttl_seconds: int):
        if ttl_seconds < 0:
            raise ValueError(f"ttl_seconds cannot be negative: {ttl_seconds}")
        self.ttl = timedelta(seconds=ttl_seconds)
        self.entry: Optional[CacheEntry[T]] = None

    def is_fresh(self, now: datetime) -> bool:
        """Check if there is a value younger than the TTL."""
        return self.entry is not None and now - self.entry.fetched_at < self.ttl

    def store(self, value: T, now: datetime) -> CacheEntry[T]:
        """Replace the cached value."""
        self.entry = CacheEntry(value=value, fetched_at=now)
        return self.entry

    def clear(self) -> None:
        self.entry = None

    async def resolve(self, fetch: Callable[[], Awaitable[T]], now: datetime | None = None) -> CacheResult[T]:
        """
        Serve the value according to the refresh policy.

        Args:
            fetch: Coroutine factory returning a fresh value from the upstream
            now: Reference time (defaults to the current UTC time)

        Returns:
            CacheResult: Value to serve and where it came from

        Raises:
            Exception: The upstream error, when there is nothing cached to fall back to
        """
        now = now or datetime.now(UTC)

        if self.is_fresh(now):
            return CacheResult(value=self.entry.value, stale=False, source="cache")

        try:
            value = await fetch()
        except Exception as e:
            if self.entry is None:
                raise
            logger.warning(f"⚠️ Upstream falló, sirviendo valor en cache ({self.entry.fetched_at.isoformat()}): {e}")
            return CacheResult(value=self.entry.value, stale=True, source="stale")

        self.store(value, now)
        return CacheResult(value=value, stale=False, source="upstream")
