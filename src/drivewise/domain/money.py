from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

ZERO = Decimal("0")
ONE = Decimal("1")
CENT = Decimal("0.01")
THOUSAND = Decimal("1000")

# Ceiling for caller-supplied amounts (incomes, prices, mileage). Keeps every
# derived figure inside the default 28-digit Decimal context when quantized.
MAX_AMOUNT = Decimal("1000000000000000")


def to_cents(value: Decimal) -> Decimal:
    """Round a monetary amount to 2 decimal places using ROUND_HALF_UP."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def round_to_thousand(value: Decimal) -> Decimal:
    """Round to the nearest 1,000 currency units (halves round up)."""
    return (value / THOUSAND).quantize(ONE, rounding=ROUND_HALF_UP) * THOUSAND


def non_negative(value: Decimal) -> Decimal:
    return value if value > ZERO else ZERO


def bounded_amount(value: Decimal) -> Decimal:
    """Clamp a caller-supplied amount into [0, MAX_AMOUNT]."""
    return min(non_negative(value), MAX_AMOUNT)


def as_decimal(value: object) -> Decimal | None:
    """
    Coerce a caller-supplied number into a finite Decimal.

    Returns None for None, booleans, non-numeric text, NaN and infinities.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, (int, float, str)):
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            return None
    else:
        return None

    if not result.is_finite():
        return None
    return result
