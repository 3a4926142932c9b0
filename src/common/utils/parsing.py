"""Lenient parsing of numbers and text found in broker trade exports."""

from decimal import Decimal, InvalidOperation
from typing import Any, Optional


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Parse a price-like value into a Decimal.

    Strings may use a comma as the decimal separator, as Turkish broker
    exports do. Floats are read through their shortest repr, so a JSON
    price of 98.35 becomes Decimal("98.35") rather than its binary
    expansion. Booleans are not numbers here.

    Args:
        value: str, int, float or Decimal

    Returns:
        Decimal, or None if the value is empty or not numeric

    Examples:
        >>> to_decimal("97,90")
        Decimal('97.90')
        >>> to_decimal(98.35)
        Decimal('98.35')
        >>> to_decimal("n/a") is None
        True
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        return value
    if isinstance(value, int):
        return Decimal(value)

    text = value.strip().replace(",", ".") if isinstance(value, str) else str(value)
    if not text:
        return None

    try:
        return Decimal(text)
    except InvalidOperation:
        return None


def to_units(value: Any) -> Optional[int]:
    """
    Parse a unit count, dropping any fraction (toward zero).

    >>> to_units("12,9")
    12
    >>> to_units(-3.7)
    -3
    """
    if isinstance(value, int) and not isinstance(value, bool):
        return value

    number = to_decimal(value)
    if number is None or not number.is_finite():
        return None
    return int(number)


def clean_text(value: Any) -> Optional[str]:
    """Strip a cell value; None for missing or blank cells."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None
