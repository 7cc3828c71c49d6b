"""Decimal money helpers.

Amounts are persisted and transmitted as strings with two fractional digits
(``"125.00"``) and computed with :class:`decimal.Decimal`. Floats never carry
money through the system.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError

CENTS = Decimal("0.01")
ZERO = Decimal("0.00")


def to_decimal(value, field: str = "amount") -> Decimal:
    """Parse ``value`` into a Decimal, raising ValidationError for garbage.

    Accepts strings, ints and Decimals. Floats are accepted only through their
    ``repr`` so ``0.1`` becomes ``Decimal("0.1")`` rather than its binary
    expansion.
    """
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, bool) or value is None:
        raise ValidationError({field: ["Must be a decimal amount"]})
    elif isinstance(value, float):
        result = Decimal(repr(value))
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            raise ValidationError({field: [f"'{value}' is not a valid decimal amount"]}) from None

    if not result.is_finite():
        raise ValidationError({field: [f"'{value}' is not a valid decimal amount"]})
    return result


def quantize(amount: Decimal) -> Decimal:
    return amount.quantize(CENTS, rounding=ROUND_HALF_UP)


def format_amount(value) -> str:
    """Canonical two-decimal string form of an amount."""
    return str(quantize(to_decimal(value)))


def to_minor_units(value) -> int:
    """Convert an amount to integer minor units (cents) for the gateway."""
    return int((quantize(to_decimal(value)) * 100).to_integral_value(rounding=ROUND_HALF_UP))


def from_minor_units(cents: int) -> Decimal:
    return quantize(Decimal(cents) / 100)


def discount_percent(price, effective_price) -> int:
    """Whole-number discount percentage, rounded half up.

    Returns 0 when there is no reduction or the list price is zero.
    """
    price = to_decimal(price, "price")
    effective_price = to_decimal(effective_price, "sale_price")
    if price <= 0 or effective_price >= price:
        return 0
    ratio = (price - effective_price) / price * 100
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
