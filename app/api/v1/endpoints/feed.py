"""
Instagram feed endpoint for the storefront.
"""

from typing import Any

from fastapi import APIRouter, Depends

from app.api.v1.dependencies import get_feed_service
from app.services.feed import InstagramFeedService

router = APIRouter()


@router.get(
    "",
    summary="Get Instagram posts",
    description="Latest image posts; served from cache for 15 minutes, stale cache on upstream errors",
)
async def get_instagram_feed(service: InstagramFeedService = Depends(get_feed_service)) -> dict[str, Any]:
    return await service.get_feed()
