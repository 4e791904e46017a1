"""
Salon Money Primitive — CHF Amounts
=====================================
Amounts (prices, order totals, voucher balances) are Decimal CHF.

RULES:
- Engines compute in Decimal, never float
- ints and Decimals are accepted as-is
- floats are converted through their shortest repr (99.99 -> Decimal("99.99")),
  so a caller passing 99.99 gets the same result as Decimal("99.99")
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

Amount = Union[Decimal, int, float, str]

ZERO = Decimal("0")


def to_decimal(value: Amount) -> Decimal:
    """Coerce a CHF amount to Decimal."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        raise ValueError("amount must be numeric, got bool.")
    if isinstance(value, float):
        value = repr(value)
    if not isinstance(value, (int, str)):
        raise ValueError(f"amount must be numeric, got {type(value).__name__}.")
    try:
        result = Decimal(value)
    except InvalidOperation as exc:
        raise ValueError(f"amount is not a number: {value!r}") from exc
    if not result.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}.")
    return result


def format_chf(value: Amount) -> str:
    """Two-decimal display form, e.g. Decimal("30") -> "30.00"."""
    return f"{to_decimal(value):.2f}"
