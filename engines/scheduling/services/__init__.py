"""
Salon Scheduling Engine — Service Layer
=========================================
Duration/price aggregation over selected services and the day slot grid.

The slot grid is the intersection of salon opening hours and the staff
member's working hours, walked in `slot_granularity_minutes` steps. Every
slot that fits is emitted; `available` tells whether it can be booked now.
"""

from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Optional, Sequence, Union

from core.config.rules import BookingRules
from core.primitives.money import ZERO
from core.time.temporal import (
    TimeWindow,
    add_minutes,
    start_of_day,
    sunday_based_weekday,
    whole_minutes_between,
)

from engines.scheduling.models import (
    Appointment,
    OpeningHours,
    Service,
    StaffWorkingHours,
    TimeSlot,
)
from engines.scheduling.policies import validate_booking_rules


# ── Aggregates ────────────────────────────────────────────────

def calculate_total_duration(services: Iterable[Service]) -> int:
    return sum((s.duration_minutes for s in services), 0)


def calculate_total_price(services: Iterable[Service]) -> Decimal:
    return sum((s.price for s in services), ZERO)


def get_minutes_until_appointment(appointment_time: datetime, now: datetime) -> int:
    """Whole minutes until the appointment; negative once it has started."""
    return whole_minutes_between(now, appointment_time)


# ── Slot grid ─────────────────────────────────────────────────

def generate_time_slots(
    day: Union[date, datetime],
    staff_id: str,
    duration_minutes: int,
    opening_hours: OpeningHours,
    staff_working_hours: Optional[StaffWorkingHours],
    existing_appointments: Iterable[Appointment],
    rules: BookingRules,
    now: datetime,
    *,
    blocked_times: Sequence[TimeWindow] = (),
) -> List[TimeSlot]:
    """
    Build the slot grid for one staff member on one calendar day.

    Returns [] when the salon is closed or the staff member is off that
    weekday. Slots overlapping a `blocked_times` window are emitted with
    available=False. Inputs are not validated here; callers must not pass
    a non-positive duration.
    """
    weekday = sunday_based_weekday(day)

    if opening_hours.day_of_week != weekday:
        return []

    if staff_working_hours is None or staff_working_hours.day_of_week != weekday:
        return []

    effective_start = max(opening_hours.open_minutes, staff_working_hours.start_minutes)
    effective_end = min(opening_hours.close_minutes, staff_working_hours.end_minutes)

    staff_appointments = [a for a in existing_appointments if a.staff_id == staff_id]
    day_start = start_of_day(day)

    slots: List[TimeSlot] = []
    current = effective_start
    while current + duration_minutes <= effective_end:
        slot_start = add_minutes(day_start, current)
        slot_end = add_minutes(slot_start, duration_minutes)

        available = validate_booking_rules(
            slot_start, duration_minutes, staff_appointments, rules, now,
        ).valid
        if available and blocked_times:
            window = TimeWindow(start=slot_start, end=slot_end)
            available = not any(window.overlaps(b) for b in blocked_times)

        slots.append(TimeSlot(
            staff_id=staff_id,
            starts_at=slot_start,
            ends_at=slot_end,
            available=available,
        ))
        current += rules.slot_granularity_minutes

    return slots


__all__ = [
    "calculate_total_duration",
    "calculate_total_price",
    "generate_time_slots",
    "get_minutes_until_appointment",
]
