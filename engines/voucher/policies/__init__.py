"""
Salon Voucher Engine — Policies
=================================
Ordered usability checks. The first failing check decides the error code.

Pre-checks only: the store must apply the balance decrement atomically
so two concurrent redemptions cannot overdraw one voucher.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from core.primitives.money import Amount, format_chf, to_decimal

from engines.voucher.models import Voucher, VoucherErrorCode, VoucherValidationResult

logger = logging.getLogger("salon.voucher")

MESSAGES = {
    VoucherErrorCode.NOT_FOUND: "Gutschein nicht gefunden.",
    VoucherErrorCode.INACTIVE: "Dieser Gutschein ist nicht mehr aktiv.",
    VoucherErrorCode.WRONG_SALON: "Dieser Gutschein ist für einen anderen Salon.",
    VoucherErrorCode.EXPIRED: "Dieser Gutschein ist abgelaufen.",
    VoucherErrorCode.NO_BALANCE: "Dieser Gutschein hat kein Guthaben mehr.",
}
INVALID_AMOUNT_MESSAGE = "Ungültiger Einlösebetrag."


def _reject(code: VoucherErrorCode, message: Optional[str] = None, **extra):
    logger.debug("Voucher rejected: %s", code.value)
    return VoucherValidationResult(
        valid=False,
        error=code,
        message=message or MESSAGES[code],
        **extra,
    )


def validate_voucher(
    voucher: Optional[Voucher],
    salon_id: str,
    now: datetime,
) -> VoucherValidationResult:
    if voucher is None:
        return _reject(VoucherErrorCode.NOT_FOUND)

    if not voucher.is_active:
        return _reject(VoucherErrorCode.INACTIVE)

    if voucher.salon_id != salon_id:
        return _reject(VoucherErrorCode.WRONG_SALON)

    if voucher.expires_at is not None and voucher.expires_at < now:
        return _reject(VoucherErrorCode.EXPIRED)

    if voucher.remaining_value <= 0:
        return _reject(VoucherErrorCode.NO_BALANCE)

    return VoucherValidationResult(
        valid=True,
        voucher=voucher,
        available_amount=voucher.remaining_value,
    )


def validate_redemption(
    voucher: Optional[Voucher],
    amount: Amount,
    salon_id: str,
    now: datetime,
) -> VoucherValidationResult:
    """Usability first, then the requested amount against the balance."""
    validation = validate_voucher(voucher, salon_id, now)
    if not validation.valid:
        return validation

    amount = to_decimal(amount)
    if amount <= 0:
        return _reject(VoucherErrorCode.INSUFFICIENT_BALANCE, INVALID_AMOUNT_MESSAGE)

    if voucher.remaining_value < amount:
        return _reject(
            VoucherErrorCode.INSUFFICIENT_BALANCE,
            f"Guthabenrest (CHF {format_chf(voucher.remaining_value)}) reicht nicht aus.",
            voucher=voucher,
            available_amount=voucher.remaining_value,
        )

    return VoucherValidationResult(
        valid=True,
        voucher=voucher,
        available_amount=voucher.remaining_value,
    )


def has_sufficient_balance(voucher: Voucher, required_amount: Amount) -> bool:
    return voucher.remaining_value >= to_decimal(required_amount)


__all__ = [
    "INVALID_AMOUNT_MESSAGE",
    "MESSAGES",
    "has_sufficient_balance",
    "validate_redemption",
    "validate_voucher",
]
