"""
Customer client for the commerce admin API.

Reads and updates customer records; the storefront wishlist lives in the
customer metadata.
"""

import logging
from typing import Any, Dict, Optional

from app.utils.error_handler import CommerceAPIException

from .base_client import BaseCommerceClient

logger = logging.getLogger(__name__)


class CommerceCustomerClient(BaseCommerceClient):
    """Client for the customer entity and its metadata."""

    async def get_customer(self, customer_id: str) -> Optional[Dict[str, Any]]:
        """
        Get a customer by id.

        Args:
            customer_id: Customer identifier

        Returns:
            Dict with the customer record, or None if the backend answers 404
        """
        try:
            data = await self._request("GET", f"{self.settings.COMMERCE_CUSTOMERS_PATH}/{customer_id}")
        except CommerceAPIException as e:
            if e.api_response_code == 404:
                return None
            raise
        return data.get("customer")

    async def update_customer_metadata(self, customer_id: str, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace the metadata of a customer.

        Args:
            customer_id: Customer identifier
            metadata: Complete metadata mapping to persist

        Returns:
            Dict: Updated customer record
        """
        data = await self._request(
            "POST",
            f"{self.settings.COMMERCE_CUSTOMERS_PATH}/{customer_id}",
            json={"metadata": metadata},
        )
        logger.debug(f"Metadata del cliente {customer_id} actualizada")
        return data.get("customer") or {}
