"""
Order analytics for the merchant dashboard.

Flow: raw snapshot -> normalizer -> aggregator -> AnalyticsSnapshot.
"""

from .aggregator import OrderAnalyticsAggregator
from .interfaces import IOrderDataSource
from .normalizer import build_line_item_lookup, normalize_orders
from .service import OrderAnalyticsService

__all__ = [
    "IOrderDataSource",
    "OrderAnalyticsAggregator",
    "OrderAnalyticsService",
    "build_line_item_lookup",
    "normalize_orders",
]
