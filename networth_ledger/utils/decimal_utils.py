"""Helpers for Decimal normalization and presentation rounding."""

from decimal import ROUND_HALF_UP, Decimal

MONEY_QUANTUM = Decimal("0.01")
ZERO = Decimal("0")


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value from SQL or adapters.

    Returns:
        Decimal: Normalized numeric value.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_money(value: Decimal) -> Decimal:
    """Round a money amount to 2 decimal places, half away from zero.

    Negative halves round down as well, so ``-0.005`` becomes ``-0.01``.

    Args:
        value: Unrounded amount.

    Returns:
        Decimal: Amount quantized to cents.
    """
    return coerce_decimal(value).quantize(MONEY_QUANTUM, rounding=ROUND_HALF_UP)


def percentage_of(part: Decimal, whole: Decimal) -> Decimal:
    """Return part as a percentage of whole, rounded to 2 decimal places.

    Returns 0 when whole is not positive.
    """
    if whole <= 0:
        return ZERO.quantize(MONEY_QUANTUM)
    return round_money(part / whole * 100)


__all__ = [
    "MONEY_QUANTUM",
    "ZERO",
    "coerce_decimal",
    "round_money",
    "percentage_of",
]
