"""
Money value object for handling monetary amounts with currency.

Amounts are kept in the major currency unit (e.g. CHF) with full Decimal
precision. Conversion to the minor unit (e.g. Rappen) happens only at the
presentation boundary through ``to_minor_units``.
"""

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext

MINOR_UNITS_PER_MAJOR = Decimal("100")


def round_half_up(value: Decimal) -> int:
    """Round a Decimal to the nearest integer, halves away from zero."""
    with localcontext() as ctx:
        # quantize needs one digit per integer position
        ctx.prec = max(ctx.prec, value.adjusted() + 2)
        return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))


@dataclass(frozen=True)
class Money:
    """
    Immutable value object representing a non-negative monetary amount.

    Attributes:
        amount: The monetary amount in major units as Decimal for precision
        currency: Lower-case currency code as used by the commerce backend (e.g. "chf")

    Example:
        >>> Money(amount=Decimal("56.95"), currency="chf").to_minor_units()
        5695
    """

    amount: Decimal
    currency: str = "chf"

    def __post_init__(self) -> None:
        """Validate money object after initialization."""
        if not isinstance(self.amount, Decimal):
            object.__setattr__(self, "amount", Decimal(str(self.amount)))

        if not self.amount.is_finite():
            raise ValueError(f"Money amount must be finite: {self.amount}")

        if self.amount < 0:
            raise ValueError(f"Money amount cannot be negative: {self.amount}")

        if not self.currency or len(self.currency) != 3:
            raise ValueError(f"Invalid currency code: {self.currency}")

    def to_minor_units(self) -> int:
        """Amount in minor units (x100), rounded half-up to an integer."""
        return round_half_up(self.amount * MINOR_UNITS_PER_MAJOR)
