"""
Salon Core Primitives — Reusable Value Helpers
================================================
Pure Python, engine-agnostic building blocks:

    money   — Decimal CHF coercion and display
"""

from core.primitives.money import ZERO, Amount, format_chf, to_decimal

__all__ = [
    "Amount",
    "ZERO",
    "format_chf",
    "to_decimal",
]
