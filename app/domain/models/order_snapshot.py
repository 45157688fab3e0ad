"""
Normalized order view used by the analytics aggregation.

Represents one order of the raw commerce snapshot after its totals have been
resolved and coerced. Instances are read-only and built fresh per request.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any

CANCELED_STATUS = "canceled"
UNKNOWN_STATUS = "unknown"


@dataclass(frozen=True)
class OrderTotals:
    """
    Canonical totals of an order summary, in major currency units.

    Attributes:
        order_total: Full order value (``current_order_total``)
        paid_total: Amount actually captured (``paid_total``)
        pending_amount: Amount still owed (``pending_difference``)
    """

    order_total: Decimal = Decimal("0")
    paid_total: Decimal = Decimal("0")
    pending_amount: Decimal = Decimal("0")

    def __post_init__(self) -> None:
        """Validate totals after initialization."""
        for name in ("order_total", "paid_total", "pending_amount"):
            value = getattr(self, name)
            if not value.is_finite() or value < 0:
                raise ValueError(f"{name} must be a finite non-negative amount: {value}")


@dataclass(frozen=True)
class OrderItemRef:
    """
    Reference from an order to one of its line items.

    Attributes:
        id: Order item identifier
        item_id: Line item identifier used for the lookup
        quantity: Quantity ordered (coerced, >= 0)
        unit_price: Unit price recorded on the order item (coerced, >= 0)
    """

    id: str | None
    item_id: str | None
    quantity: Decimal = Decimal("0")
    unit_price: Decimal = Decimal("0")


@dataclass(frozen=True)
class NormalizedOrder:
    """
    Domain model representing an order ready for aggregation.

    Attributes:
        id: Order identifier
        status: Raw lifecycle label (``"unknown"`` when absent)
        created_at: Creation time in UTC, None when missing or unparseable
        currency_code: Currency code as reported by the backend
        totals: Coerced summary totals
        items: Item references in source order
    """

    id: str | None
    status: str
    created_at: datetime | None
    currency_code: str | None
    totals: OrderTotals = field(default_factory=OrderTotals)
    items: tuple[OrderItemRef, ...] = ()

    @property
    def is_canceled(self) -> bool:
        """Check if the order is canceled."""
        return self.status == CANCELED_STATUS

    @property
    def is_paid(self) -> bool:
        """Active order with a strictly positive captured amount."""
        return not self.is_canceled and self.totals.paid_total > 0

    @property
    def is_unpaid(self) -> bool:
        """Active order with nothing captured yet."""
        return not self.is_canceled and self.totals.paid_total == 0

    def created_since(self, cutoff: datetime) -> bool:
        """Check if the order was created at or after ``cutoff``."""
        return self.created_at is not None and self.created_at >= cutoff

    def to_dict(self) -> dict[str, Any]:
        """Convert order to dictionary for logging and debugging."""
        return {
            "id": self.id,
            "status": self.status,
            "created_at": self.created_at.isoformat() if self.created_at else None,
            "currency_code": self.currency_code,
            "order_total": str(self.totals.order_total),
            "paid_total": str(self.totals.paid_total),
            "pending_amount": str(self.totals.pending_amount),
            "items_count": len(self.items),
        }
