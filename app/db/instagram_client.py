"""
Instagram Graph API client.

Fetches the most recent media of the account linked to the long-lived
access token.
"""

import logging
from typing import Any, Dict, List, Optional

import aiohttp
from aiohttp import ClientTimeout

from app.utils.error_handler import FeedException

logger = logging.getLogger(__name__)

MEDIA_FIELDS = "id,caption,media_type,media_url,thumbnail_url,permalink,timestamp"


class InstagramGraphClient:
    """Minimal async client for the ``/me/media`` endpoint."""

    def __init__(self, access_token: str, graph_url: str = "https://graph.instagram.com", timeout_seconds: int = 10):
        self.access_token = access_token
        self.graph_url = graph_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session: Optional[aiohttp.ClientSession] = None

    async def initialize(self):
        """Create the HTTP session."""
        if not self.session:
            self.session = aiohttp.ClientSession(timeout=ClientTimeout(total=self.timeout_seconds))

    async def close(self):
        """Close the HTTP session."""
        if self.session:
            await self.session.close()
            self.session = None

    async def fetch_recent_media(self, limit: int = 12) -> List[Dict[str, Any]]:
        """
        Fetch the latest posts of the account.

        Args:
            limit: Maximum number of posts

        Returns:
            List: Raw media records

        Raises:
            FeedException: If the Graph API answers with an error or is unreachable
        """
        await self.initialize()

        params = {"fields": MEDIA_FIELDS, "limit": limit, "access_token": self.access_token}

        try:
            async with self.session.get(f"{self.graph_url}/me/media", params=params) as response:
                if response.status != 200:
                    body = await response.text()
                    raise FeedException(
                        f"Instagram API {response.status}: {body[:200]}", api_response_code=response.status
                    )
                data = await response.json()
        except aiohttp.ClientError as e:
            raise FeedException(f"Instagram API network error: {e}") from e

        return data.get("data") or []
