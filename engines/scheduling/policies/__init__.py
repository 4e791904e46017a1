"""
Salon Scheduling Engine — Policies
====================================
Lead-time, horizon, cancellation and conflict rules.

Every check takes `now` explicitly. Rejections are returned as
ValidationResult values carrying the German message shown to the customer.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable

from core.config.rules import BookingRules
from core.policy.result import ValidationResult
from core.time.temporal import add_days, add_minutes, do_times_overlap, start_of_day

from engines.scheduling.models import Appointment

logger = logging.getLogger("salon.scheduling")

SLOT_UNAVAILABLE_MESSAGE = "Dieser Termin ist leider nicht mehr verfügbar."


def _format_number(value: float) -> str:
    """2.0 -> "2", 1.5 -> "1.5"."""
    if float(value).is_integer():
        return str(int(value))
    return str(value)


def lead_time_message(min_lead_time_minutes: int) -> str:
    hours = _format_number(min_lead_time_minutes / 60)
    return f"Termine müssen mindestens {hours} Stunden im Voraus gebucht werden."


def horizon_message(max_horizon_days: int) -> str:
    return f"Termine können maximal {max_horizon_days} Tage im Voraus gebucht werden."


# ── Time rules ────────────────────────────────────────────────

def is_within_lead_time(
    booking_time: datetime,
    now: datetime,
    min_lead_time_minutes: int,
) -> bool:
    """Booking must start no earlier than now + lead time (inclusive)."""
    return booking_time >= add_minutes(now, min_lead_time_minutes)


def is_within_horizon(
    booking_time: datetime,
    now: datetime,
    max_horizon_days: int,
) -> bool:
    """
    Booking must start before start_of_day(now) + horizon days.

    The bound is exclusive: with a 30 day horizon, day 29 counted from
    today's midnight is bookable and day 30 is not.
    """
    return booking_time < add_days(start_of_day(now), max_horizon_days)


def can_cancel_appointment(
    appointment_time: datetime,
    now: datetime,
    cancellation_cutoff_hours: int,
) -> bool:
    """Cancellation is allowed strictly before the cutoff."""
    return appointment_time > add_minutes(now, cancellation_cutoff_hours * 60)


# ── Conflict rule ─────────────────────────────────────────────

def has_slot_conflict(
    slot_start: datetime,
    slot_end: datetime,
    existing_appointments: Iterable[Appointment],
) -> bool:
    """
    True iff a non-cancelled appointment overlaps [slot_start, slot_end).

    Cancelled appointments never block a slot.
    """
    return any(
        not apt.is_cancelled
        and do_times_overlap(slot_start, slot_end, apt.starts_at, apt.ends_at)
        for apt in existing_appointments
    )


# ── Combined booking check ────────────────────────────────────

def validate_booking_rules(
    proposed_time: datetime,
    duration_minutes: int,
    existing_appointments: Iterable[Appointment],
    rules: BookingRules,
    now: datetime,
) -> ValidationResult:
    """
    Lead time, then horizon, then conflict. First failure wins.
    """
    if not is_within_lead_time(proposed_time, now, rules.min_lead_time_minutes):
        logger.debug("Booking at %s rejected: lead time", proposed_time.isoformat())
        return ValidationResult.fail(lead_time_message(rules.min_lead_time_minutes))

    if not is_within_horizon(proposed_time, now, rules.max_horizon_days):
        logger.debug("Booking at %s rejected: horizon", proposed_time.isoformat())
        return ValidationResult.fail(horizon_message(rules.max_horizon_days))

    end_time = add_minutes(proposed_time, duration_minutes)
    if has_slot_conflict(proposed_time, end_time, existing_appointments):
        logger.debug("Booking at %s rejected: conflict", proposed_time.isoformat())
        return ValidationResult.fail(SLOT_UNAVAILABLE_MESSAGE)

    return ValidationResult.ok()


__all__ = [
    "SLOT_UNAVAILABLE_MESSAGE",
    "can_cancel_appointment",
    "do_times_overlap",
    "has_slot_conflict",
    "horizon_message",
    "is_within_horizon",
    "is_within_lead_time",
    "lead_time_message",
    "validate_booking_rules",
]
