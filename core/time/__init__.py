"""
Salon Core Time — Public API
==============================
Explicit clock protocol and temporal helpers.
Engines take `now` explicitly; `salon_now` resolves it in the salon zone.
"""

from core.time.clock import (
    Clock,
    FixedClock,
    SystemClock,
    get_default_clock,
    salon_now,
    set_default_clock,
)
from core.time.temporal import (
    TimeWindow,
    add_days,
    add_minutes,
    do_times_overlap,
    start_of_day,
    sunday_based_weekday,
    whole_minutes_between,
)

__all__ = [
    "Clock",
    "FixedClock",
    "SystemClock",
    "get_default_clock",
    "set_default_clock",
    "salon_now",
    "TimeWindow",
    "add_days",
    "add_minutes",
    "do_times_overlap",
    "start_of_day",
    "sunday_based_weekday",
    "whole_minutes_between",
]
