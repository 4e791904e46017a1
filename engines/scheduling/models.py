"""
Salon Scheduling Engine — Records
===================================
Immutable input and output records for availability computation.

Hours are minutes from local midnight. Weekdays are 0 = Sunday … 6 = Saturday.
Instants are datetimes already resolved to the salon's zone by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Iterable, Optional, Tuple, TypeVar, Union

from core.primitives.money import to_decimal


# ══════════════════════════════════════════════════════════════
# ENUMS
# ══════════════════════════════════════════════════════════════

class AppointmentStatus(Enum):
    RESERVED = "reserved"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"
    COMPLETED = "completed"
    NO_SHOW = "no_show"


MINUTES_PER_DAY = 24 * 60


def _check_day_of_week(day_of_week: int) -> None:
    if not isinstance(day_of_week, int) or not 0 <= day_of_week <= 6:
        raise ValueError(f"day_of_week must be 0..6, got {day_of_week!r}.")


def _check_minutes(name: str, value: int) -> None:
    if not isinstance(value, int) or not 0 <= value <= MINUTES_PER_DAY:
        raise ValueError(f"{name} must be within 0..{MINUTES_PER_DAY}, got {value!r}.")


# ══════════════════════════════════════════════════════════════
# CATALOG
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Service:
    """Catalog entry, used by value in aggregation."""
    id: str
    name: str
    duration_minutes: int
    price: Decimal

    def __post_init__(self):
        if not isinstance(self.duration_minutes, int) or self.duration_minutes <= 0:
            raise ValueError("duration_minutes must be a positive integer.")
        object.__setattr__(self, "price", to_decimal(self.price))
        if self.price < 0:
            raise ValueError("price must be >= 0.")


# ══════════════════════════════════════════════════════════════
# APPOINTMENT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class Appointment:
    id: str
    staff_id: str
    customer_id: str
    starts_at: datetime
    ends_at: datetime
    status: AppointmentStatus = AppointmentStatus.CONFIRMED
    services: Tuple[Service, ...] = ()

    def __post_init__(self):
        if isinstance(self.status, str):
            object.__setattr__(self, "status", AppointmentStatus(self.status))
        if self.ends_at <= self.starts_at:
            raise ValueError("ends_at must be after starts_at.")
        object.__setattr__(self, "services", tuple(self.services))

    @property
    def is_cancelled(self) -> bool:
        return self.status is AppointmentStatus.CANCELLED


# ══════════════════════════════════════════════════════════════
# HOURS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class OpeningHours:
    """Salon-wide opening hours for one weekday."""
    day_of_week: int
    open_minutes: int
    close_minutes: int

    def __post_init__(self):
        _check_day_of_week(self.day_of_week)
        _check_minutes("open_minutes", self.open_minutes)
        _check_minutes("close_minutes", self.close_minutes)


@dataclass(frozen=True)
class StaffWorkingHours:
    """One staff member's working hours for one weekday."""
    staff_id: str
    day_of_week: int
    start_minutes: int
    end_minutes: int

    def __post_init__(self):
        _check_day_of_week(self.day_of_week)
        _check_minutes("start_minutes", self.start_minutes)
        _check_minutes("end_minutes", self.end_minutes)


# ══════════════════════════════════════════════════════════════
# SLOT (ephemeral, never persisted)
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TimeSlot:
    staff_id: str
    starts_at: datetime
    ends_at: datetime
    available: bool

    def to_dict(self) -> dict:
        return {
            "staff_id": self.staff_id,
            "starts_at": self.starts_at.isoformat(),
            "ends_at": self.ends_at.isoformat(),
            "available": self.available,
        }


HoursT = TypeVar("HoursT", bound=Union[OpeningHours, StaffWorkingHours])


def find_hours_for_day(hours: Iterable[HoursT], day_of_week: int) -> Optional[HoursT]:
    """Pick the record for `day_of_week` out of a weekly list, or None."""
    for record in hours:
        if record.day_of_week == day_of_week:
            return record
    return None
