"""
Salon Scheduling Engine Test Suite
====================================
Tests verify:
- Duration / price aggregation
- Lead time, horizon and cancellation boundaries
- Half-open overlap and cancelled-appointment exclusion
- Booking validation order and messages
- Slot grid generation (closed days, intersection window, availability)
"""

from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

import pytest

from core.config.rules import DEFAULT_BOOKING_RULES, BookingRules
from core.time.temporal import TimeWindow
from engines.scheduling.models import (
    Appointment,
    AppointmentStatus,
    OpeningHours,
    Service,
    StaffWorkingHours,
    find_hours_for_day,
)
from engines.scheduling.policies import (
    can_cancel_appointment,
    do_times_overlap,
    has_slot_conflict,
    is_within_horizon,
    is_within_lead_time,
    validate_booking_rules,
)
from engines.scheduling.services import (
    calculate_total_duration,
    calculate_total_price,
    generate_time_slots,
    get_minutes_until_appointment,
)

# Thursday
NOW = datetime(2026, 2, 19, 8, 0, 0, tzinfo=timezone.utc)
FRIDAY = datetime(2026, 2, 20, tzinfo=timezone.utc)
THURSDAY = 4
FRIDAY_DOW = 5

STAFF = "staff-anna"
OTHER_STAFF = "staff-ben"


# ══════════════════════════════════════════════════════════════
# TEST HELPERS
# ══════════════════════════════════════════════════════════════

def make_services():
    return [
        Service(id="cut", name="Haarschnitt", duration_minutes=30, price=Decimal("45")),
        Service(id="color", name="Färben", duration_minutes=45, price=Decimal("65")),
        Service(id="treat", name="Pflege", duration_minutes=90, price=Decimal("120")),
    ]


def at(day: datetime, hour: int, minute: int = 0) -> datetime:
    return day.replace(hour=hour, minute=minute)


def appointment(start, end, status=AppointmentStatus.CONFIRMED, staff_id=STAFF, apt_id="apt-1"):
    return Appointment(
        id=apt_id,
        staff_id=staff_id,
        customer_id="cust-1",
        starts_at=start,
        ends_at=end,
        status=status,
    )


# ══════════════════════════════════════════════════════════════
# AGGREGATES
# ══════════════════════════════════════════════════════════════

class TestAggregates:
    def test_total_duration(self):
        assert calculate_total_duration(make_services()) == 165

    def test_total_price(self):
        assert calculate_total_price(make_services()) == Decimal("230")

    def test_empty_lists_are_zero(self):
        assert calculate_total_duration([]) == 0
        assert calculate_total_price([]) == 0

    def test_accepts_generator(self):
        assert calculate_total_duration(s for s in make_services()) == 165

    def test_service_rejects_non_positive_duration(self):
        with pytest.raises(ValueError, match="duration_minutes"):
            Service(id="x", name="X", duration_minutes=0, price=Decimal("10"))

    def test_service_rejects_negative_price(self):
        with pytest.raises(ValueError, match="price"):
            Service(id="x", name="X", duration_minutes=30, price=Decimal("-1"))


# ══════════════════════════════════════════════════════════════
# TIME RULES
# ══════════════════════════════════════════════════════════════

class TestLeadTime:
    def test_exactly_at_threshold_is_valid(self):
        assert is_within_lead_time(NOW + timedelta(minutes=120), NOW, 120)

    def test_one_minute_short_is_invalid(self):
        assert not is_within_lead_time(NOW + timedelta(minutes=119), NOW, 120)

    def test_zero_lead_time_allows_now(self):
        assert is_within_lead_time(NOW, NOW, 0)


class TestHorizon:
    def test_last_day_inside_horizon(self):
        # start of today + 30 days = 2026-03-21 00:00
        assert is_within_horizon(datetime(2026, 3, 20, 23, 59, tzinfo=timezone.utc), NOW, 30)

    def test_horizon_boundary_is_exclusive(self):
        assert not is_within_horizon(datetime(2026, 3, 21, 0, 0, tzinfo=timezone.utc), NOW, 30)

    def test_measured_from_start_of_today(self):
        # now is 08:00; 30 days from *now* would still include 03-21 07:00
        assert not is_within_horizon(datetime(2026, 3, 21, 7, 0, tzinfo=timezone.utc), NOW, 30)


class TestCancellation:
    def test_after_cutoff_can_cancel(self):
        assert can_cancel_appointment(NOW + timedelta(hours=24, minutes=1), NOW, 24)

    def test_exactly_at_cutoff_cannot_cancel(self):
        assert not can_cancel_appointment(NOW + timedelta(hours=24), NOW, 24)

    def test_past_appointment_cannot_cancel(self):
        assert not can_cancel_appointment(NOW - timedelta(hours=1), NOW, 24)


class TestMinutesUntil:
    def test_whole_minutes(self):
        assert get_minutes_until_appointment(NOW + timedelta(minutes=90), NOW) == 90

    def test_truncates_partial_minute(self):
        assert get_minutes_until_appointment(NOW + timedelta(minutes=90, seconds=30), NOW) == 90

    def test_negative_for_past(self):
        assert get_minutes_until_appointment(NOW - timedelta(minutes=30), NOW) == -30


# ══════════════════════════════════════════════════════════════
# OVERLAP & CONFLICT
# ══════════════════════════════════════════════════════════════

T = [NOW + timedelta(hours=h) for h in range(6)]


class TestOverlap:
    @pytest.mark.parametrize("a,b,c,d,expected", [
        (T[0], T[2], T[1], T[3], True),    # partial
        (T[0], T[4], T[1], T[2], True),    # containment
        (T[0], T[1], T[1], T[2], False),   # touching
        (T[0], T[1], T[2], T[3], False),   # disjoint
        (T[1], T[2], T[1], T[2], True),    # identical
    ])
    def test_overlap_is_symmetric(self, a, b, c, d, expected):
        assert do_times_overlap(a, b, c, d) is expected
        assert do_times_overlap(c, d, a, b) is expected


class TestSlotConflict:
    def test_cancelled_same_interval_never_conflicts(self):
        apt = appointment(T[1], T[2], status=AppointmentStatus.CANCELLED)
        assert not has_slot_conflict(T[1], T[2], [apt])

    def test_confirmed_containing_slot_conflicts(self):
        apt = appointment(T[0], T[4])
        assert has_slot_conflict(T[1], T[2], [apt])

    @pytest.mark.parametrize("status", [
        AppointmentStatus.RESERVED,
        AppointmentStatus.CONFIRMED,
        AppointmentStatus.COMPLETED,
        AppointmentStatus.NO_SHOW,
    ])
    def test_every_non_cancelled_status_blocks(self, status):
        assert has_slot_conflict(T[1], T[2], [appointment(T[1], T[2], status=status)])

    def test_adjacent_appointment_does_not_conflict(self):
        assert not has_slot_conflict(T[1], T[2], [appointment(T[2], T[3])])

    def test_status_accepts_plain_string(self):
        apt = appointment(T[1], T[2], status="cancelled")
        assert apt.status is AppointmentStatus.CANCELLED
        assert not has_slot_conflict(T[1], T[2], [apt])

    def test_appointment_rejects_inverted_interval(self):
        with pytest.raises(ValueError, match="ends_at"):
            appointment(T[2], T[1])


# ══════════════════════════════════════════════════════════════
# BOOKING VALIDATION
# ══════════════════════════════════════════════════════════════

class TestValidateBookingRules:
    def test_valid_booking_four_hours_ahead(self):
        duration = calculate_total_duration(make_services())
        result = validate_booking_rules(
            NOW + timedelta(hours=4), duration, [], DEFAULT_BOOKING_RULES, NOW,
        )
        assert result.valid
        assert result.error is None

    def test_too_soon_reports_lead_time(self):
        result = validate_booking_rules(
            NOW + timedelta(minutes=30), 165, [], DEFAULT_BOOKING_RULES, NOW,
        )
        assert not result.valid
        assert "2 Stunden" in result.error
        assert "Stunden im Voraus" in result.error

    def test_fractional_hours_in_message(self):
        rules = BookingRules(min_lead_time_minutes=90)
        result = validate_booking_rules(NOW, 30, [], rules, NOW)
        assert "1.5 Stunden" in result.error

    def test_beyond_horizon_reports_days(self):
        result = validate_booking_rules(
            NOW + timedelta(days=45), 60, [], DEFAULT_BOOKING_RULES, NOW,
        )
        assert not result.valid
        assert "30 Tage" in result.error

    def test_conflict_reports_unavailable(self):
        start = NOW + timedelta(hours=4)
        existing = [appointment(start + timedelta(minutes=30), start + timedelta(hours=2))]
        result = validate_booking_rules(start, 60, existing, DEFAULT_BOOKING_RULES, NOW)
        assert not result.valid
        assert "nicht mehr verfügbar" in result.error

    def test_lead_time_checked_before_conflict(self):
        start = NOW + timedelta(minutes=10)
        existing = [appointment(start, start + timedelta(hours=1))]
        result = validate_booking_rules(start, 60, existing, DEFAULT_BOOKING_RULES, NOW)
        assert "Stunden im Voraus" in result.error

    def test_cancelled_appointment_does_not_block(self):
        start = NOW + timedelta(hours=4)
        existing = [appointment(start, start + timedelta(hours=1), status="cancelled")]
        assert validate_booking_rules(start, 60, existing, DEFAULT_BOOKING_RULES, NOW).valid


# ══════════════════════════════════════════════════════════════
# SLOT GENERATION
# ══════════════════════════════════════════════════════════════

FRIDAY_OPEN = OpeningHours(day_of_week=FRIDAY_DOW, open_minutes=9 * 60, close_minutes=18 * 60)
FRIDAY_STAFF = StaffWorkingHours(
    staff_id=STAFF, day_of_week=FRIDAY_DOW, start_minutes=10 * 60, end_minutes=16 * 60,
)


class TestGenerateTimeSlots:
    def test_salon_closed_returns_empty(self):
        closed = OpeningHours(day_of_week=THURSDAY, open_minutes=540, close_minutes=1080)
        slots = generate_time_slots(
            FRIDAY, STAFF, 60, closed, FRIDAY_STAFF, [], DEFAULT_BOOKING_RULES, NOW,
        )
        assert slots == []

    def test_staff_without_hours_returns_empty(self):
        slots = generate_time_slots(
            FRIDAY, STAFF, 60, FRIDAY_OPEN, None, [], DEFAULT_BOOKING_RULES, NOW,
        )
        assert slots == []

    def test_staff_other_weekday_returns_empty(self):
        monday = StaffWorkingHours(staff_id=STAFF, day_of_week=1, start_minutes=600, end_minutes=960)
        slots = generate_time_slots(
            FRIDAY, STAFF, 60, FRIDAY_OPEN, monday, [], DEFAULT_BOOKING_RULES, NOW,
        )
        assert slots == []

    def test_grid_uses_intersection_window(self):
        slots = generate_time_slots(
            FRIDAY, STAFF, 60, FRIDAY_OPEN, FRIDAY_STAFF, [], DEFAULT_BOOKING_RULES, NOW,
        )
        # 10:00 .. 15:00 starts in 15 minute steps
        assert len(slots) == 21
        assert slots[0].starts_at == at(FRIDAY, 10)
        assert slots[-1].starts_at == at(FRIDAY, 15)
        assert slots[-1].ends_at == at(FRIDAY, 16)
        assert all(s.available for s in slots)
        assert all(s.staff_id == STAFF for s in slots)

    def test_granularity_controls_step(self):
        rules = BookingRules(slot_granularity_minutes=60)
        slots = generate_time_slots(
            FRIDAY, STAFF, 60, FRIDAY_OPEN, FRIDAY_STAFF, [], rules, NOW,
        )
        assert [s.starts_at.hour for s in slots] == [10, 11, 12, 13, 14, 15]

    def test_duration_longer_than_window_yields_nothing(self):
        slots = generate_time_slots(
            FRIDAY, STAFF, 7 * 60, FRIDAY_OPEN, FRIDAY_STAFF, [], DEFAULT_BOOKING_RULES, NOW,
        )
        assert slots == []

    def test_conflicting_slots_are_kept_but_unavailable(self):
        existing = [
            appointment(at(FRIDAY, 12), at(FRIDAY, 13)),
            appointment(at(FRIDAY, 10), at(FRIDAY, 16), staff_id=OTHER_STAFF, apt_id="apt-2"),
            appointment(at(FRIDAY, 14), at(FRIDAY, 15), status="cancelled", apt_id="apt-3"),
        ]
        slots = generate_time_slots(
            FRIDAY, STAFF, 60, FRIDAY_OPEN, FRIDAY_STAFF, existing, DEFAULT_BOOKING_RULES, NOW,
        )
        assert len(slots) == 21
        unavailable = [s.starts_at for s in slots if not s.available]
        assert unavailable == [
            at(FRIDAY, 11, 15), at(FRIDAY, 11, 30), at(FRIDAY, 11, 45),
            at(FRIDAY, 12, 0), at(FRIDAY, 12, 15), at(FRIDAY, 12, 30), at(FRIDAY, 12, 45),
        ]

    def test_slots_inside_lead_time_are_unavailable(self):
        thursday = datetime(2026, 2, 19, tzinfo=timezone.utc)
        opening = OpeningHours(day_of_week=THURSDAY, open_minutes=540, close_minutes=720)
        staff = StaffWorkingHours(staff_id=STAFF, day_of_week=THURSDAY, start_minutes=540, end_minutes=720)
        slots = generate_time_slots(
            thursday, STAFF, 30, opening, staff, [], DEFAULT_BOOKING_RULES, NOW,
        )
        first_available = next(s for s in slots if s.available)
        # now 08:00 + 2h lead time, inclusive
        assert first_available.starts_at == at(thursday, 10)
        assert not any(s.available for s in slots if s.starts_at < at(thursday, 10))

    def test_blocked_times_mark_slots_unavailable(self):
        blocks = [TimeWindow(start=at(FRIDAY, 13), end=at(FRIDAY, 14))]
        slots = generate_time_slots(
            FRIDAY, STAFF, 60, FRIDAY_OPEN, FRIDAY_STAFF, [], DEFAULT_BOOKING_RULES, NOW,
            blocked_times=blocks,
        )
        by_start = {s.starts_at: s.available for s in slots}
        assert by_start[at(FRIDAY, 12)] is True
        assert by_start[at(FRIDAY, 12, 15)] is False
        assert by_start[at(FRIDAY, 13, 45)] is False
        assert by_start[at(FRIDAY, 14)] is True

    def test_accepts_plain_date(self):
        naive_now = datetime(2026, 2, 19, 8, 0)
        slots = generate_time_slots(
            date(2026, 2, 20), STAFF, 60, FRIDAY_OPEN, FRIDAY_STAFF, [],
            DEFAULT_BOOKING_RULES, naive_now,
        )
        assert slots[0].starts_at == datetime(2026, 2, 20, 10, 0)

    def test_slot_to_dict(self):
        slot = generate_time_slots(
            FRIDAY, STAFF, 60, FRIDAY_OPEN, FRIDAY_STAFF, [], DEFAULT_BOOKING_RULES, NOW,
        )[0]
        assert slot.to_dict() == {
            "staff_id": STAFF,
            "starts_at": "2026-02-20T10:00:00+00:00",
            "ends_at": "2026-02-20T11:00:00+00:00",
            "available": True,
        }


class TestFindHoursForDay:
    def test_picks_matching_weekday(self):
        monday = OpeningHours(day_of_week=1, open_minutes=540, close_minutes=1080)
        assert find_hours_for_day([monday, FRIDAY_OPEN], 5) is FRIDAY_OPEN

    def test_staff_hours(self):
        assert find_hours_for_day((FRIDAY_STAFF,), 5) is FRIDAY_STAFF

    def test_missing_weekday(self):
        assert find_hours_for_day([FRIDAY_OPEN], 0) is None
