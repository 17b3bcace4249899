"""Decimal arithmetic helpers"""

from decimal import ROUND_HALF_UP, Decimal
from typing import Any, Iterable


def to_decimal(value: Any) -> Decimal:
    """
    Convert a numeric input to Decimal without binary float drift.

    Floats go through their shortest string form, so 0.1 becomes
    Decimal("0.1") rather than the exact binary expansion.

    Args:
        value: Decimal, int, str or float

    Returns:
        Decimal value
    """
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def round_decimal(value: Decimal, decimal_places: int = 2) -> Decimal:
    """
    Round a decimal value to specified decimal places.

    Args:
        value: Decimal value to round
        decimal_places: Number of decimal places (default 2)

    Returns:
        Rounded decimal value
    """
    quantize_value = Decimal(10) ** -decimal_places
    return value.quantize(quantize_value, rounding=ROUND_HALF_UP)


def sum_decimals(values: Iterable[Decimal]) -> Decimal:
    """
    Sum decimal values.

    Args:
        values: Decimal values

    Returns:
        Sum of all values
    """
    return sum(values, Decimal("0"))


def to_minor_units(value: Decimal, decimal_places: int = 2) -> int:
    """
    Convert an amount to integer minor units (10.00 -> 1000 at 2 places).

    Digits beyond the currency precision are rounded half up first.

    Args:
        value: Decimal amount
        decimal_places: Currency minor-unit precision

    Returns:
        Signed integer count of minor units
    """
    scaled = round_decimal(value, decimal_places).scaleb(decimal_places)
    return int(scaled)


def from_minor_units(minor: int, decimal_places: int = 2) -> Decimal:
    """
    Convert integer minor units back to a Decimal amount.

    The result carries exactly `decimal_places` fractional digits.

    Args:
        minor: Signed integer minor units
        decimal_places: Currency minor-unit precision

    Returns:
        Decimal amount
    """
    return Decimal(minor).scaleb(-decimal_places).quantize(
        Decimal(10) ** -decimal_places
    )
