"""
Salon HTTP API - Framework-Agnostic Handlers
============================================
Pure handler functions over contracts and injected dependencies.

Each handler reads salon policy from the config store, takes `now` from
the clock in the salon's zone, calls the engines and wraps the decision in the response
envelope. Business rejections are ordinary responses with ok=False.
"""

from __future__ import annotations

import logging
from datetime import datetime, time
from typing import Any

from core.http_api.contracts import (
    AvailableSlotsHttpRequest,
    BookingValidateHttpRequest,
    LoyaltyQuoteHttpRequest,
    VoucherValidateHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import (
    BOOKING_REJECTED,
    LOYALTY_REJECTED,
    success_response,
    validation_response,
    voucher_rejection_response,
)
from core.primitives.money import format_chf
from core.time.clock import salon_now
from core.time.temporal import add_minutes, sunday_based_weekday
from engines.loyalty.models import DEFAULT_TIERS
from engines.loyalty.policies import validate_points_transaction
from engines.loyalty.services import (
    calculate_new_balance as calculate_new_points_balance,
    calculate_points_from_purchase,
    calculate_redemption_value,
    determine_tier,
    format_points,
    get_points_to_next_tier,
    get_tier_progress,
    will_upgrade_tier,
)
from engines.scheduling.models import find_hours_for_day
from engines.scheduling.policies import validate_booking_rules
from engines.scheduling.services import (
    calculate_total_duration,
    calculate_total_price,
    generate_time_slots,
)
from engines.voucher.policies import validate_redemption, validate_voucher
from engines.voucher.services import (
    calculate_new_balance as calculate_new_voucher_balance,
    calculate_redemption_amount,
    format_voucher_code,
    get_days_until_expiry,
    is_expiring_soon,
    normalize_voucher_code,
)

logger = logging.getLogger("salon.http")


# ── Booking ───────────────────────────────────────────────────

def post_available_slots(
    request: AvailableSlotsHttpRequest,
    dependencies: HttpApiDependencies,
) -> dict[str, Any]:
    rules = dependencies.config_store.get_booking_rules(request.salon_id)
    now = salon_now(dependencies.clock, dependencies.salon_timezone)
    duration = calculate_total_duration(request.services)
    weekday = sunday_based_weekday(request.day)

    data = {
        "date": request.day.isoformat(),
        "staff_id": request.staff_id,
        "duration_minutes": duration,
        "total_price": format_chf(calculate_total_price(request.services)),
        "slots": [],
    }

    opening_hours = find_hours_for_day(request.opening_hours, weekday)
    if opening_hours is None:
        logger.info("Salon %s closed on %s", request.salon_id, request.day)
        return success_response(data)

    staff_hours = find_hours_for_day(
        [h for h in request.staff_working_hours if h.staff_id == request.staff_id],
        weekday,
    )
    day_start = datetime.combine(request.day, time.min, tzinfo=dependencies.salon_timezone)

    slots = generate_time_slots(
        day_start,
        request.staff_id,
        duration,
        opening_hours,
        staff_hours,
        request.appointments,
        rules,
        now,
        blocked_times=request.blocked_times,
    )
    if request.only_available:
        slots = [s for s in slots if s.available]

    data["slots"] = [s.to_dict() for s in slots]
    return success_response(data)


def post_booking_validate(
    request: BookingValidateHttpRequest,
    dependencies: HttpApiDependencies,
) -> dict[str, Any]:
    rules = dependencies.config_store.get_booking_rules(request.salon_id)
    now = salon_now(dependencies.clock, dependencies.salon_timezone)
    duration = calculate_total_duration(request.services)
    staff_appointments = [
        a for a in request.appointments if a.staff_id == request.staff_id
    ]

    result = validate_booking_rules(
        request.starts_at, duration, staff_appointments, rules, now,
    )
    if not result.valid:
        logger.info(
            "Booking for staff %s at %s REJECTED: %s",
            request.staff_id, request.starts_at.isoformat(), result.error,
        )
        return validation_response(result, code=BOOKING_REJECTED)

    logger.info(
        "Booking for staff %s at %s ACCEPTED",
        request.staff_id, request.starts_at.isoformat(),
    )
    return success_response({
        "valid": True,
        "staff_id": request.staff_id,
        "starts_at": request.starts_at.isoformat(),
        "ends_at": add_minutes(request.starts_at, duration).isoformat(),
        "duration_minutes": duration,
        "total_price": format_chf(calculate_total_price(request.services)),
    })


# ── Loyalty ───────────────────────────────────────────────────

def post_loyalty_quote(
    request: LoyaltyQuoteHttpRequest,
    dependencies: HttpApiDependencies,
) -> dict[str, Any]:
    """Points a purchase would earn, plus an optional redemption check."""
    store = dependencies.config_store
    tiers = store.get_loyalty_tiers(request.salon_id) or DEFAULT_TIERS
    rates = store.get_loyalty_rates(request.salon_id)
    account = request.account

    redemption_value = None
    if request.redeem_points:
        check = validate_points_transaction(account, -request.redeem_points)
        if not check.valid:
            logger.info("Loyalty redemption for account %s REJECTED", account.id)
            return validation_response(
                check,
                code=LOYALTY_REJECTED,
                details={"current_points": account.current_points},
            )
        redemption_value = calculate_redemption_value(
            request.redeem_points, rates.points_per_redemption,
        )

    tier = determine_tier(account.lifetime_points, tiers)
    earned = calculate_points_from_purchase(
        request.purchase_amount, tier, rates.points_per_chf,
    )
    upgrade = will_upgrade_tier(account.lifetime_points, earned.total_points, tiers)
    next_tier = get_points_to_next_tier(account.lifetime_points, tiers)

    points_after = calculate_new_points_balance(
        account.current_points, earned.total_points - request.redeem_points,
    )
    return success_response({
        "tier": tier.to_dict(),
        "earned": earned.to_dict(),
        "tier_progress": round(get_tier_progress(account.lifetime_points, tiers), 2),
        "next_tier_id": next_tier.next_tier.id if next_tier.next_tier else None,
        "points_to_next_tier": next_tier.points_needed,
        "will_upgrade": upgrade.will_upgrade,
        "new_tier_id": upgrade.new_tier.id if upgrade.new_tier else None,
        "redeem_points": request.redeem_points,
        "redemption_value": (
            format_chf(redemption_value) if redemption_value is not None else None
        ),
        "points_after": points_after,
        "points_after_display": format_points(points_after),
    })


# ── Vouchers ──────────────────────────────────────────────────

def post_voucher_validate(
    request: VoucherValidateHttpRequest,
    dependencies: HttpApiDependencies,
) -> dict[str, Any]:
    now = salon_now(dependencies.clock, dependencies.salon_timezone)
    voucher = request.voucher
    if voucher is not None and (
        normalize_voucher_code(voucher.code) != normalize_voucher_code(request.code)
    ):
        voucher = None

    usable = validate_voucher(voucher, request.salon_id, now)
    if not usable.valid:
        logger.info("Voucher %s REJECTED: %s", request.code, usable.error.value)
        return voucher_rejection_response(usable)

    amount = calculate_redemption_amount(voucher, request.order_amount)
    result = validate_redemption(voucher, amount, request.salon_id, now)
    if not result.valid:
        logger.info("Voucher %s REJECTED: %s", request.code, result.error.value)
        return voucher_rejection_response(result)

    logger.info("Voucher %s ACCEPTED for CHF %s", request.code, format_chf(amount))
    return success_response({
        "valid": True,
        "code": format_voucher_code(voucher.code),
        "available_amount": format_chf(result.available_amount),
        "redemption_amount": format_chf(amount),
        "remaining_after": format_chf(
            calculate_new_voucher_balance(voucher.remaining_value, amount)
        ),
        "days_until_expiry": get_days_until_expiry(voucher, now),
        "expiring_soon": is_expiring_soon(voucher, now=now),
    })
