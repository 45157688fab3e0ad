"""
Store client for the commerce admin API.

Reads and updates the store record whose metadata holds the configurable
storefront settings.
"""

import logging
from typing import Any, Dict, Optional

from .base_client import BaseCommerceClient

logger = logging.getLogger(__name__)


class CommerceStoreClient(BaseCommerceClient):
    """Client for the store entity and its metadata."""

    async def get_store(self) -> Optional[Dict[str, Any]]:
        """
        Get the first (and only) store of the backend.

        Returns:
            Dict with the store record, or None if no store exists
        """
        data = await self._request("GET", self.settings.COMMERCE_STORES_PATH)
        stores = data.get("stores") or []
        return stores[0] if stores else None

    async def update_store_metadata(self, store_id: str, metadata: Dict[str, Any]) -> Dict[str, Any]:
        """
        Replace the metadata of a store.

        Args:
            store_id: Store identifier
            metadata: Complete metadata mapping to persist

        Returns:
            Dict: Updated store record
        """
        data = await self._request(
            "POST",
            f"{self.settings.COMMERCE_STORES_PATH}/{store_id}",
            json={"metadata": metadata},
        )
        logger.info(f"🛠️ Metadata de la tienda {store_id} actualizada ({len(metadata)} claves)")
        return data.get("store") or {}
