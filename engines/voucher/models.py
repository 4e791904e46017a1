"""
Salon Voucher Engine — Records
================================
Gift vouchers, their redemption audit records, and the validation
result carrying a machine-checkable error code.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional

from core.primitives.money import format_chf, to_decimal


# ══════════════════════════════════════════════════════════════
# ERROR CODES
# ══════════════════════════════════════════════════════════════

class VoucherErrorCode(str, Enum):
    NOT_FOUND = "VOUCHER_NOT_FOUND"
    EXPIRED = "VOUCHER_EXPIRED"
    INACTIVE = "VOUCHER_INACTIVE"
    NO_BALANCE = "VOUCHER_NO_BALANCE"
    WRONG_SALON = "VOUCHER_WRONG_SALON"
    INSUFFICIENT_BALANCE = "VOUCHER_INSUFFICIENT_BALANCE"


# ══════════════════════════════════════════════════════════════
# VOUCHER
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Voucher:
    """
    Gift voucher.

    total_value is the original value and never changes; remaining_value
    only decreases through redemption and stays within [0, total_value].
    expires_at None means the voucher never expires.
    """
    id: str
    code: str
    salon_id: str
    total_value: Decimal
    remaining_value: Decimal
    created_at: datetime
    expires_at: Optional[datetime] = None
    is_active: bool = True

    def __post_init__(self):
        object.__setattr__(self, "total_value", to_decimal(self.total_value))
        object.__setattr__(self, "remaining_value", to_decimal(self.remaining_value))
        if self.total_value < 0:
            raise ValueError("total_value must be >= 0.")
        if not 0 <= self.remaining_value <= self.total_value:
            raise ValueError("remaining_value must be within [0, total_value].")


@dataclass(frozen=True)
class VoucherRedemption:
    """Append-only audit record, one per successful redemption."""
    id: str
    voucher_id: str
    order_id: str
    redeemed_amount: Decimal
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "voucher_id": self.voucher_id,
            "order_id": self.order_id,
            "redeemed_amount": format_chf(self.redeemed_amount),
            "created_at": self.created_at.isoformat(),
        }


# ══════════════════════════════════════════════════════════════
# VALIDATION RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class VoucherValidationResult:
    valid: bool
    error: Optional[VoucherErrorCode] = None
    message: Optional[str] = None
    voucher: Optional[Voucher] = None
    available_amount: Optional[Decimal] = None

    def __post_init__(self):
        if self.valid and self.error is not None:
            raise ValueError("a valid result must not carry an error code.")
        if not self.valid and self.error is None:
            raise ValueError("an invalid result requires an error code.")

    def __bool__(self) -> bool:
        return self.valid

    def to_dict(self) -> dict:
        data = {"valid": self.valid}
        if self.error is not None:
            data["error"] = self.error.value
            data["message"] = self.message
        if self.available_amount is not None:
            data["available_amount"] = format_chf(self.available_amount)
        return data
