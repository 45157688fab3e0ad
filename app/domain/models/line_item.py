"""
Line item domain model.

Descriptive data of an order line, resolved from the order items by identifier.
"""

from dataclasses import dataclass
from decimal import Decimal


@dataclass(frozen=True)
class LineItem:
    """
    Domain model representing an order line item.

    Attributes:
        id: Line item identifier
        title: Product title shown on the order
        product_id: Product identifier (None for custom items)
        variant_id: Variant identifier
        unit_price: Unit price in major units (coerced, >= 0)
        quantity: Quantity on the line (coerced, >= 0)
    """

    id: str
    title: str | None = None
    product_id: str | None = None
    variant_id: str | None = None
    unit_price: Decimal = Decimal("0")
    quantity: Decimal = Decimal("0")
