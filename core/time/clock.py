"""
Salon Core Time — Clocks and Salon-Local "Now"
================================================
Engines never read the wall clock; they receive `now` as an argument.

The calling layer reads a Clock and converts the instant into the salon's
zone with `salon_now` before handing it to an engine, so that "today"
(horizon, start of day) is the salon's calendar day, not UTC's.
"""

from __future__ import annotations

from datetime import datetime, timezone, tzinfo
from typing import Protocol


class Clock(Protocol):
    def now_utc(self) -> datetime:
        """Current instant, timezone-aware UTC."""
        ...  # pragma: no cover


class SystemClock:
    def now_utc(self) -> datetime:
        return datetime.now(timezone.utc)


class FixedClock:
    """Pinned instant for tests; must be timezone-aware."""

    def __init__(self, instant: datetime) -> None:
        if instant.tzinfo is None:
            raise ValueError("FixedClock requires timezone-aware datetime.")
        self._instant = instant.astimezone(timezone.utc)

    def now_utc(self) -> datetime:
        return self._instant


def salon_now(clock: Clock, salon_timezone: tzinfo) -> datetime:
    """The clock's instant expressed in the salon's zone."""
    return clock.now_utc().astimezone(salon_timezone)


# ── Process-wide clock (adapter wiring only) ──────────────────

_default_clock: Clock = SystemClock()


def set_default_clock(clock: Clock) -> None:
    global _default_clock
    _default_clock = clock


def get_default_clock() -> Clock:
    return _default_clock
