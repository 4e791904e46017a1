"""
Salon Core Time — Temporal Helpers
====================================
Pure functions for time interval logic.
All functions take explicit datetime arguments; no hidden clock access.

Intervals are half-open [start, end): an interval that ends exactly
when another starts does not overlap it.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, time, timedelta
from typing import Union


# ══════════════════════════════════════════════════════════════
# OVERLAP PRIMITIVE
# ══════════════════════════════════════════════════════════════

def do_times_overlap(
    start_a: datetime,
    end_a: datetime,
    start_b: datetime,
    end_b: datetime,
) -> bool:
    """
    True iff [start_a, end_a) and [start_b, end_b) share any instant.

    Touching intervals (end_a == start_b) do not overlap.
    """
    return start_a < end_b and end_a > start_b


# ══════════════════════════════════════════════════════════════
# TIME WINDOW (half-open [start, end))
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TimeWindow:
    """
    A half-open time interval [start, end).

    Invariant: start <= end (enforced at construction).
    """

    start: datetime
    end: datetime

    def __post_init__(self) -> None:
        if self.start > self.end:
            raise ValueError(
                f"TimeWindow start ({self.start}) must be <= end ({self.end})."
            )

    def contains(self, dt: datetime) -> bool:
        """Check if datetime falls within window (end exclusive)."""
        return self.start <= dt < self.end

    def overlaps(self, other: TimeWindow) -> bool:
        return do_times_overlap(self.start, self.end, other.start, other.end)

    def duration(self) -> timedelta:
        return self.end - self.start


# ══════════════════════════════════════════════════════════════
# CALENDAR ARITHMETIC
# ══════════════════════════════════════════════════════════════

def start_of_day(value: Union[date, datetime]) -> datetime:
    """
    Midnight of the given calendar day.

    A datetime keeps its tzinfo; a plain date yields a naive datetime.
    """
    if isinstance(value, datetime):
        return value.replace(hour=0, minute=0, second=0, microsecond=0)
    return datetime.combine(value, time.min)


def add_minutes(dt: datetime, minutes: int) -> datetime:
    return dt + timedelta(minutes=minutes)


def add_days(dt: datetime, days: int) -> datetime:
    return dt + timedelta(days=days)


def sunday_based_weekday(value: Union[date, datetime]) -> int:
    """Weekday with 0 = Sunday … 6 = Saturday."""
    return (value.weekday() + 1) % 7


def whole_minutes_between(start: datetime, end: datetime) -> int:
    """Signed whole minutes from start to end, truncated toward zero."""
    return int((end - start).total_seconds() / 60)
