"""Fixed-point helpers for monetary amounts.

Prices are persisted as integer minor units (cents) and surfaced as
``Decimal`` values with two decimal places. Floats never enter the
arithmetic.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from protean.exceptions import ValidationError

CENT = Decimal("0.01")
ZERO = Decimal("0.00")


def to_cents(amount, field="price") -> int:
    """Convert a decimal-like amount (``Decimal``, ``str``, ``int``) to cents."""
    if isinstance(amount, bool) or amount is None:
        raise ValidationError({field: ["Price must be a valid decimal number"]})

    try:
        value = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        raise ValidationError({field: ["Price must be a valid decimal number"]}) from None

    if not value.is_finite():
        raise ValidationError({field: ["Price must be a valid decimal number"]})
    if value < 0:
        raise ValidationError({field: ["Price must be non-negative"]})

    return int(value.quantize(CENT, rounding=ROUND_HALF_UP) * 100)


def from_cents(cents) -> Decimal:
    """Convert stored cents back to a two-place ``Decimal``."""
    return (Decimal(cents or 0) / 100).quantize(CENT)
