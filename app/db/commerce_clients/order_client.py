"""
Order client for the commerce admin API.

Supplies the raw snapshot consumed by the analytics: every order with its
summary totals and item references, and every order line item.
"""

import logging
from typing import Any, Dict, List

from .base_client import BaseCommerceClient

logger = logging.getLogger(__name__)

ORDER_FIELDS = [
    "id",
    "status",
    "created_at",
    "currency_code",
    "summary.*",
    "items.id",
    "items.item_id",
    "items.quantity",
    "items.unit_price",
]

LINE_ITEM_FIELDS = [
    "id",
    "title",
    "product_id",
    "variant_id",
    "unit_price",
    "quantity",
]


class CommerceOrderClient(BaseCommerceClient):
    """Data-access collaborator for orders and line items."""

    async def fetch_orders(self) -> List[Dict[str, Any]]:
        """
        Fetch all orders with summary totals and item references.

        Returns:
            List: Raw order records
        """
        orders = await self._get_all_pages(
            self.settings.COMMERCE_ORDERS_PATH,
            "orders",
            params={"fields": ",".join(ORDER_FIELDS)},
        )
        logger.info(f"📦 {len(orders)} pedidos obtenidos del backend de comercio")
        return orders

    async def fetch_line_items(self) -> List[Dict[str, Any]]:
        """
        Fetch all order line items with product details.

        Returns:
            List: Raw line item records
        """
        line_items = await self._get_all_pages(
            self.settings.COMMERCE_LINE_ITEMS_PATH,
            "order_line_items",
            params={"fields": ",".join(LINE_ITEM_FIELDS)},
        )
        logger.info(f"🧾 {len(line_items)} líneas de pedido obtenidas")
        return line_items
