from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Any, Optional

ZERO = Decimal("0")


def to_decimal(value: Any) -> Decimal:
    """
    Coerce a store or JSON number into a Decimal.

    - None -> Decimal("0") (SUM over an empty set)
    - float -> parsed from its repr so 97.01 stays 97.01
    - Decimal / int / numeric str -> Decimal
    """
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("boolean is not a monetary amount")
    if isinstance(value, float):
        return Decimal(repr(value))
    try:
        return Decimal(str(value).strip())
    except InvalidOperation:
        raise ValueError(f"not a decimal amount: {value!r}")


def to_money(value: Optional[Any]) -> Optional[float]:
    """Presentation form of an amount: a JSON number rounded to 2 places."""
    if value is None:
        return None
    return round(float(to_decimal(value)), 2)
