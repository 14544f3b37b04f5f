"""
Numeric coercion utilities for change detection.

Catalog payloads carry numbers as JSON numbers or as strings ("10",
"12.50"). Values are compared as exact decimals so that "10" and 10
are equal and no float rounding leaks into the comparison.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation
from typing import Any, Optional, Union


def to_decimal(value: Any) -> Optional[Decimal]:
    """
    Coerce a payload value to a Decimal.

    Args:
        value: Raw value from a catalog payload

    Returns:
        Decimal value, or None when the value is not a finite number
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, int):
        number = Decimal(value)
    elif isinstance(value, float):
        # repr gives the shortest round-tripping text, so 0.1 stays 0.1
        number = Decimal(repr(value))
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    else:
        return None

    if not number.is_finite():
        return None
    return number


def truncate(value: Decimal) -> Decimal:
    """Truncate a decimal toward zero."""
    return value.to_integral_value(rounding=ROUND_DOWN)


def to_json_number(value: Decimal) -> Union[int, float]:
    """Convert a decimal to the JSON number written to the target catalog."""
    if value == value.to_integral_value():
        return int(value)
    return float(value)
