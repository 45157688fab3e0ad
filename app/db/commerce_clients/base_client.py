"""
Base commerce admin API client with common functionality.

This module provides the foundation for all commerce backend clients,
including session management, authentication, retries and pagination.
"""

import asyncio
import logging
import time
from typing import Any, Dict, List, Optional

import aiohttp
from aiohttp import ClientTimeout

from app.core.config import get_settings
from app.core.logging_config import log_api_call
from app.utils.error_handler import CommerceAPIException

logger = logging.getLogger(__name__)


class BaseCommerceClient:
    """
    Base client for the commerce framework's admin REST API.

    Provides connection management, bearer authentication, retries with
    exponential backoff and offset pagination that specialized clients inherit.
    """

    def __init__(
        self,
        base_url: Optional[str] = None,
        api_token: Optional[str] = None,
        timeout_seconds: Optional[int] = None,
        max_retries: Optional[int] = None,
        page_size: Optional[int] = None,
    ):
        """Initialize the base commerce client."""
        self.settings = get_settings()
        self.base_url = (base_url or self.settings.COMMERCE_API_URL).rstrip("/")
        self.api_token = api_token if api_token is not None else self.settings.COMMERCE_API_TOKEN
        self.timeout_seconds = timeout_seconds or self.settings.COMMERCE_API_TIMEOUT
        self.max_retries = max_retries or self.settings.COMMERCE_MAX_RETRIES
        self.page_size = page_size or self.settings.COMMERCE_PAGE_SIZE

        self.session: Optional[aiohttp.ClientSession] = None

        logger.info(f"Initialized commerce client for {self.base_url}")

    async def initialize(self):
        """Create the HTTP session."""
        if self.session:
            return

        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
            "User-Agent": f"{self.settings.APP_NAME}/{self.settings.APP_VERSION}",
        }
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        self.session = aiohttp.ClientSession(
            timeout=ClientTimeout(total=self.timeout_seconds, connect=10),
            connector=aiohttp.TCPConnector(limit=20, limit_per_host=10),
            headers=headers,
        )
        logger.info("✅ Commerce client session initialized")

    async def close(self):
        """Close the HTTP session and clean up resources."""
        if self.session:
            await self.session.close()
            self.session = None
            logger.info("Commerce client closed")

    async def _request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        json: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:
        """
        Execute a request against the admin API with retries.

        Args:
            method: HTTP method
            path: Path relative to the base URL
            params: Query parameters
            json: JSON body

        Returns:
            Dict: Decoded JSON response

        Raises:
            CommerceAPIException: If the request fails after retries
        """
        if not self.session:
            raise CommerceAPIException("Client not initialized. Call initialize() first.", endpoint=path)

        url = f"{self.base_url}{path}"
        last_exception: Optional[CommerceAPIException] = None

        for attempt in range(self.max_retries):
            start_time = time.time()
            try:
                async with self.session.request(method, url, params=params, json=json) as response:
                    log_api_call(method, path, response.status, time.time() - start_time, attempt=attempt + 1)

                    if response.status == 429:
                        retry_after = int(response.headers.get("Retry-After", 2))
                        logger.warning(f"Rate limit exceeded, waiting {retry_after}s (attempt {attempt + 1})")
                        last_exception = CommerceAPIException(
                            "Rate limit exceeded", api_response_code=429, endpoint=path
                        )
                        await asyncio.sleep(retry_after)
                        continue

                    if response.status >= 500:
                        body = await response.text()
                        last_exception = CommerceAPIException(
                            f"HTTP {response.status}: {body[:200]}", api_response_code=response.status, endpoint=path
                        )
                    elif response.status >= 400:
                        body = await response.text()
                        raise CommerceAPIException(
                            f"HTTP {response.status}: {body[:200]}", api_response_code=response.status, endpoint=path
                        )
                    else:
                        return await response.json()

            except aiohttp.ClientError as e:
                last_exception = CommerceAPIException(f"Network error: {e}", endpoint=path)
            except asyncio.TimeoutError:
                last_exception = CommerceAPIException("Request timed out", endpoint=path)

            if attempt < self.max_retries - 1:
                wait_time = min(2**attempt, 10)  # Exponential backoff, max 10s
                logger.warning(f"Error calling {path}, retrying in {wait_time}s (attempt {attempt + 1})")
                await asyncio.sleep(wait_time)

        raise last_exception or CommerceAPIException("Request failed after retries", endpoint=path)

    async def _get_all_pages(
        self, path: str, collection_key: str, params: Optional[Dict[str, Any]] = None
    ) -> List[Dict[str, Any]]:
        """
        Fetch every page of a list endpoint using limit/offset pagination.

        Args:
            path: List endpoint path
            collection_key: Key of the records in the response body
            params: Extra query parameters

        Returns:
            List: All records in server order
        """
        records: List[Dict[str, Any]] = []
        offset = 0

        while True:
            page_params = {**(params or {}), "limit": self.page_size, "offset": offset}
            data = await self._request("GET", path, params=page_params)

            page = data.get(collection_key) or []
            records.extend(page)

            total = data.get("count")
            offset += len(page)

            if not page or len(page) < self.page_size or (total is not None and offset >= total):
                break

        logger.debug(f"Fetched {len(records)} {collection_key} from {path}")
        return records

    async def test_connection(self) -> bool:
        """
        Test the connection to the commerce backend.

        Returns:
            bool: True if the backend answers the health endpoint
        """
        try:
            if not self.session:
                await self.initialize()
            async with self.session.get(f"{self.base_url}/health") as response:
                return response.status == 200
        except Exception as e:
            logger.error(f"❌ Commerce connection test failed: {e}")
            return False
