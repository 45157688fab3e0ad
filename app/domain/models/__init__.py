"""
Domain models for business entities.

These models represent core business concepts and contain
business logic and invariants.
"""

from .analytics import AnalyticsSnapshot, ProductSalesAggregate, TopProduct
from .line_item import LineItem
from .order_snapshot import CANCELED_STATUS, NormalizedOrder, OrderItemRef, OrderTotals

__all__ = [
    "AnalyticsSnapshot",
    "CANCELED_STATUS",
    "LineItem",
    "NormalizedOrder",
    "OrderItemRef",
    "OrderTotals",
    "ProductSalesAggregate",
    "TopProduct",
]
