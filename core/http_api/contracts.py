"""
Salon HTTP API - Contracts
==========================
Framework-agnostic request/response DTOs for the booking, loyalty and
voucher endpoints.

Requests carry snapshots already loaded by the caller (appointments,
hours, account, voucher). Handlers never reach into a store.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from core.time.temporal import TimeWindow
from engines.loyalty.models import LoyaltyAccount
from engines.scheduling.models import (
    Appointment,
    OpeningHours,
    Service,
    StaffWorkingHours,
)
from engines.voucher.models import Voucher


def _require_str(value: Any, name: str) -> None:
    if not value or not isinstance(value, str):
        raise ValueError(f"{name} must be a non-empty string.")


def _require_tuple_of(value: Any, item_type: type, name: str) -> None:
    if not isinstance(value, tuple):
        raise ValueError(f"{name} must be a tuple.")
    for item in value:
        if not isinstance(item, item_type):
            raise ValueError(f"{name} must contain {item_type.__name__} items.")


@dataclass(frozen=True)
class AvailableSlotsHttpRequest:
    salon_id: str
    staff_id: str
    day: date
    services: tuple[Service, ...]
    opening_hours: tuple[OpeningHours, ...]
    staff_working_hours: tuple[StaffWorkingHours, ...] = field(default_factory=tuple)
    appointments: tuple[Appointment, ...] = field(default_factory=tuple)
    blocked_times: tuple[TimeWindow, ...] = field(default_factory=tuple)
    only_available: bool = False

    def __post_init__(self):
        _require_str(self.salon_id, "salon_id")
        _require_str(self.staff_id, "staff_id")
        if not isinstance(self.day, date) or isinstance(self.day, datetime):
            raise ValueError("day must be a date.")
        _require_tuple_of(self.services, Service, "services")
        if not self.services:
            raise ValueError("services must not be empty.")
        _require_tuple_of(self.opening_hours, OpeningHours, "opening_hours")
        _require_tuple_of(self.staff_working_hours, StaffWorkingHours, "staff_working_hours")
        _require_tuple_of(self.appointments, Appointment, "appointments")
        _require_tuple_of(self.blocked_times, TimeWindow, "blocked_times")


@dataclass(frozen=True)
class BookingValidateHttpRequest:
    salon_id: str
    staff_id: str
    starts_at: datetime
    services: tuple[Service, ...]
    appointments: tuple[Appointment, ...] = field(default_factory=tuple)

    def __post_init__(self):
        _require_str(self.salon_id, "salon_id")
        _require_str(self.staff_id, "staff_id")
        if not isinstance(self.starts_at, datetime) or self.starts_at.tzinfo is None:
            raise ValueError("starts_at must be a timezone-aware datetime.")
        _require_tuple_of(self.services, Service, "services")
        if not self.services:
            raise ValueError("services must not be empty.")
        _require_tuple_of(self.appointments, Appointment, "appointments")


@dataclass(frozen=True)
class LoyaltyQuoteHttpRequest:
    salon_id: str
    account: LoyaltyAccount
    purchase_amount: Decimal
    redeem_points: int = 0

    def __post_init__(self):
        _require_str(self.salon_id, "salon_id")
        if not isinstance(self.account, LoyaltyAccount):
            raise ValueError("account must be LoyaltyAccount.")
        if self.account.salon_id != self.salon_id:
            raise ValueError("account belongs to a different salon.")
        if not isinstance(self.purchase_amount, Decimal) or self.purchase_amount < 0:
            raise ValueError("purchase_amount must be a Decimal >= 0.")
        if not isinstance(self.redeem_points, int) or self.redeem_points < 0:
            raise ValueError("redeem_points must be an integer >= 0.")


@dataclass(frozen=True)
class VoucherValidateHttpRequest:
    salon_id: str
    code: str
    order_amount: Decimal
    voucher: Optional[Voucher] = None

    def __post_init__(self):
        _require_str(self.salon_id, "salon_id")
        _require_str(self.code, "code")
        if not isinstance(self.order_amount, Decimal):
            raise ValueError("order_amount must be a Decimal.")
        if self.voucher is not None and not isinstance(self.voucher, Voucher):
            raise ValueError("voucher must be Voucher or None.")


@dataclass(frozen=True)
class HttpApiErrorBody:
    code: str
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code,
            "message": self.message,
            "details": dict(self.details),
        }


@dataclass(frozen=True)
class HttpApiResponse:
    ok: bool
    data: Any = None
    error: Optional[HttpApiErrorBody] = None

    def to_dict(self) -> dict[str, Any]:
        if self.ok:
            return {"ok": True, "data": self.data}
        if self.error is None:
            raise ValueError("error must be set when ok is False.")
        return {"ok": False, "error": self.error.to_dict()}
