"""
Analytics result models.

``AnalyticsSnapshot`` is the immutable outcome of one aggregation run. All
monetary fields are integers in minor currency units.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any


@dataclass
class ProductSalesAggregate:
    """
    Running totals for one product across paid orders.

    Attributes:
        key: Grouping key (product id, else title, else line item id)
        title: Display title
        quantity: Cumulative quantity sold
        revenue: Cumulative revenue in major units (unit price x quantity)
    """

    key: str
    title: str
    quantity: Decimal = Decimal("0")
    revenue: Decimal = Decimal("0")

    def add_sale(self, quantity: Decimal, unit_price: Decimal) -> None:
        """Accumulate one sold line."""
        self.quantity += quantity
        self.revenue += unit_price * quantity


@dataclass(frozen=True)
class TopProduct:
    """Ranked product entry of the snapshot."""

    title: str
    quantity: int | float
    revenue: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize the entry as one element of ``top_products``."""
        return {"title": self.title, "quantity": self.quantity, "revenue": self.revenue}


@dataclass(frozen=True)
class AnalyticsSnapshot:
    """
    Complete dashboard metrics for one request.

    Realized revenue is based on ``paid_total`` of paid orders; pending values
    on ``order_total`` of active orders with nothing captured. Canceled orders
    only appear in the counts and the status breakdown.
    """

    total_revenue: int
    revenue_30d: int
    revenue_7d: int
    average_order_value: int
    pending_revenue: int
    pending_revenue_30d: int
    pending_revenue_7d: int
    total_order_value: int
    total_orders: int
    completed_orders: int
    pending_orders: int
    canceled_orders: int
    orders_30d: int
    pending_orders_30d: int
    orders_7d: int
    pending_orders_7d: int
    conversion_rate: int
    currency_code: str
    top_products: tuple[TopProduct, ...] = ()
    revenue_by_day: dict[str, int] = field(default_factory=dict)
    status_breakdown: dict[str, int] = field(default_factory=dict)
    payment_breakdown: dict[str, int] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        """Serialize the snapshot with the response keys of the dashboard API."""
        return {
            # Ingresos realizados (capturados)
            "total_revenue": self.total_revenue,
            "revenue_30d": self.revenue_30d,
            "revenue_7d": self.revenue_7d,
            "average_order_value": self.average_order_value,
            # Valor pendiente (sin pago)
            "pending_revenue": self.pending_revenue,
            "pending_revenue_30d": self.pending_revenue_30d,
            "pending_revenue_7d": self.pending_revenue_7d,
            "total_order_value": self.total_order_value,
            # Conteos
            "total_orders": self.total_orders,
            "completed_orders": self.completed_orders,
            "pending_orders": self.pending_orders,
            "canceled_orders": self.canceled_orders,
            "orders_30d": self.orders_30d,
            "pending_orders_30d": self.pending_orders_30d,
            "orders_7d": self.orders_7d,
            "pending_orders_7d": self.pending_orders_7d,
            "conversion_rate": self.conversion_rate,
            # Desgloses
            "top_products": [product.to_dict() for product in self.top_products],
            "revenue_by_day": dict(self.revenue_by_day),
            "status_breakdown": dict(self.status_breakdown),
            "payment_breakdown": dict(self.payment_breakdown),
            "currency_code": self.currency_code,
        }
