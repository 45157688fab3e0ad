"""
OrderAnalyticsService - coordinates fetch, normalization and aggregation.

The only suspension point is the upstream fetch. Everything after it is a
synchronous, pure computation over the complete snapshot, rebuilt on every
call; nothing is retained between requests.
"""

import asyncio
import logging
import time
from datetime import UTC, datetime

from app.domain.models import AnalyticsSnapshot
from app.services.analytics.aggregator import OrderAnalyticsAggregator
from app.services.analytics.interfaces import IOrderDataSource
from app.services.analytics.normalizer import build_line_item_lookup, normalize_orders
from app.utils.error_handler import UpstreamFetchException

logger = logging.getLogger(__name__)


class OrderAnalyticsService:
    """
    Builds the dashboard analytics snapshot for one request.

    Dependencies are injected via constructor so the data source can be
    replaced by any implementation of ``IOrderDataSource``.
    """

    def __init__(self, data_source: IOrderDataSource, aggregator: OrderAnalyticsAggregator):
        """
        Args:
            data_source: Collaborator supplying raw orders and line items
            aggregator: Pure metrics aggregator
        """
        self.data_source = data_source
        self.aggregator = aggregator

    async def get_snapshot(self, now: datetime | None = None) -> AnalyticsSnapshot:
        """
        Fetch the raw snapshot and compute the analytics.

        Args:
            now: Reference time (defaults to the current UTC time)

        Returns:
            AnalyticsSnapshot: Dashboard metrics

        Raises:
            UpstreamFetchException: If orders or line items cannot be fetched
        """
        start_time = time.time()

        try:
            raw_orders, raw_line_items = await asyncio.gather(
                self.data_source.fetch_orders(),
                self.data_source.fetch_line_items(),
            )
        except Exception as e:
            logger.error(f"❌ Error obteniendo pedidos para analítica: {e}")
            raise UpstreamFetchException(upstream_error=str(e)) from e

        fetch_time = time.time() - start_time

        orders = normalize_orders(raw_orders)
        line_items = build_line_item_lookup(raw_line_items)
        snapshot = self.aggregator.aggregate(orders, line_items, now or datetime.now(UTC))

        logger.info(
            f"✅ Analítica generada: {len(orders)} pedidos, {len(line_items)} líneas - "
            f"fetch {fetch_time:.3f}s, total {time.time() - start_time:.3f}s"
        )
        return snapshot
