"""
Interfaces/Protocols for analytics services (Dependency Inversion Principle).

These protocols define contracts that collaborators must implement,
allowing for loose coupling and easy testing.
"""

from typing import Any, Protocol


class IOrderDataSource(Protocol):
    """Protocol for the data-access collaborator that supplies the raw snapshot."""

    async def fetch_orders(self) -> list[dict[str, Any]]:
        """Fetch all orders with summary totals and item references."""
        ...

    async def fetch_line_items(self) -> list[dict[str, Any]]:
        """Fetch all order line items with their descriptive fields."""
        ...
