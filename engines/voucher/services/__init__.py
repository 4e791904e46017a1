"""
Salon Voucher Engine — Service Layer
======================================
Partial redemption is the default: a voucher covers at most the order
amount and any unused balance stays on the voucher for a later order.
"""

from __future__ import annotations

import math
import re
from dataclasses import replace
from datetime import datetime, timedelta
from decimal import Decimal
from typing import Optional, Tuple

from core.primitives.money import ZERO, Amount, to_decimal

from engines.voucher.models import Voucher, VoucherRedemption

_NON_ALNUM = re.compile(r"[^A-Za-z0-9]")
_CODE_GROUP = 4
_SECONDS_PER_DAY = 24 * 60 * 60


# ── Amounts ───────────────────────────────────────────────────

def calculate_redemption_amount(voucher: Voucher, order_amount: Amount) -> Decimal:
    return min(voucher.remaining_value, to_decimal(order_amount))


def calculate_new_balance(current_balance: Amount, redemption_amount: Amount) -> Decimal:
    return max(ZERO, to_decimal(current_balance) - to_decimal(redemption_amount))


def apply_redemption(
    voucher: Voucher,
    amount: Amount,
    *,
    redemption_id: str,
    order_id: str,
    now: datetime,
) -> Tuple[Voucher, VoucherRedemption]:
    """
    New voucher snapshot plus its audit record.

    The amount is capped at the remaining balance. Callers validate with
    validate_redemption first.
    """
    redeemed = calculate_redemption_amount(voucher, amount)
    updated = replace(
        voucher,
        remaining_value=calculate_new_balance(voucher.remaining_value, redeemed),
    )
    redemption = VoucherRedemption(
        id=redemption_id,
        voucher_id=voucher.id,
        order_id=order_id,
        redeemed_amount=redeemed,
        created_at=now,
    )
    return updated, redemption


# ── Codes ─────────────────────────────────────────────────────

def normalize_voucher_code(code: str) -> str:
    """Lookup key: alphanumerics only, uppercase."""
    return _NON_ALNUM.sub("", code).upper()


def format_voucher_code(code: str) -> str:
    """Display form XXXX-XXXX-XXXX; a short tail group is not padded."""
    cleaned = normalize_voucher_code(code)
    return "-".join(
        cleaned[i:i + _CODE_GROUP] for i in range(0, len(cleaned), _CODE_GROUP)
    )


# ── Expiry ────────────────────────────────────────────────────

def is_expiring_soon(
    voucher: Voucher,
    days_threshold: int = 30,
    *,
    now: datetime,
) -> bool:
    """Expires after now but before now + days_threshold."""
    if voucher.expires_at is None:
        return False
    threshold = now + timedelta(days=days_threshold)
    return now < voucher.expires_at < threshold


def get_days_until_expiry(voucher: Voucher, now: datetime) -> Optional[int]:
    """Days left, rounded up, never negative. None if it never expires."""
    if voucher.expires_at is None:
        return None
    seconds = (voucher.expires_at - now).total_seconds()
    return max(0, math.ceil(seconds / _SECONDS_PER_DAY))


__all__ = [
    "apply_redemption",
    "calculate_new_balance",
    "calculate_redemption_amount",
    "format_voucher_code",
    "get_days_until_expiry",
    "is_expiring_soon",
    "normalize_voucher_code",
]
