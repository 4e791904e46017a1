"""
Salon Django Adapter Views
==========================
Pass-through HTTP views over core/http_api handlers.

Views only parse JSON into contracts; every decision is made by the
handlers. Malformed bodies are answered with 400 INVALID_REQUEST.
"""

from __future__ import annotations

import json
from datetime import date, datetime
from typing import Any

from django.http import HttpRequest, JsonResponse
from django.views.decorators.csrf import csrf_exempt

from adapters.django_api.wiring import build_dependencies
from core.http_api.contracts import (
    AvailableSlotsHttpRequest,
    BookingValidateHttpRequest,
    LoyaltyQuoteHttpRequest,
    VoucherValidateHttpRequest,
)
from core.http_api.errors import INVALID_REQUEST, METHOD_NOT_ALLOWED, error_response
from core.http_api.handlers import (
    post_available_slots,
    post_booking_validate,
    post_loyalty_quote,
    post_voucher_validate,
)
from core.primitives.money import to_decimal
from core.time.temporal import TimeWindow
from engines.loyalty.models import LoyaltyAccount
from engines.scheduling.models import (
    Appointment,
    OpeningHours,
    Service,
    StaffWorkingHours,
)
from engines.voucher.models import Voucher


def _json_error(code: str, message: str, status: int = 400) -> JsonResponse:
    return JsonResponse(
        error_response(code=code, message=message, details={}),
        status=status,
    )


def _parse_json_body(request: HttpRequest) -> dict[str, Any]:
    if not request.body:
        return {}
    try:
        parsed = json.loads(request.body.decode("utf-8"))
    except Exception as exc:
        raise ValueError("Request body must be valid JSON.") from exc
    if not isinstance(parsed, dict):
        raise ValueError("Request body must be a JSON object.")
    return parsed


def _parse_datetime(value: Any, field_name: str) -> datetime:
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO-8601 datetime.") from exc
    if parsed.tzinfo is None:
        raise ValueError(f"{field_name} must include a UTC offset.")
    return parsed


def _parse_optional_datetime(value: Any, field_name: str) -> datetime | None:
    if value is None or value == "":
        return None
    return _parse_datetime(value, field_name)


def _parse_bool(value: Any, field_name: str) -> bool:
    if not isinstance(value, bool):
        raise ValueError(f"{field_name} must be a JSON boolean.")
    return value


def _parse_date(value: Any, field_name: str) -> date:
    try:
        return date.fromisoformat(str(value))
    except ValueError as exc:
        raise ValueError(f"{field_name} must be an ISO-8601 date.") from exc


def _parse_list(body: dict[str, Any], key: str, parse_item) -> tuple:
    raw = body.get(key, [])
    if not isinstance(raw, list):
        raise ValueError(f"{key} must be a list.")
    return tuple(parse_item(item) for item in raw)


def _parse_service(item: dict[str, Any]) -> Service:
    return Service(
        id=str(item["id"]),
        name=str(item.get("name", "")),
        duration_minutes=int(item["duration_minutes"]),
        price=to_decimal(item.get("price", 0)),
    )


def _parse_appointment(item: dict[str, Any]) -> Appointment:
    return Appointment(
        id=str(item["id"]),
        staff_id=str(item["staff_id"]),
        customer_id=str(item.get("customer_id", "")),
        starts_at=_parse_datetime(item["starts_at"], "starts_at"),
        ends_at=_parse_datetime(item["ends_at"], "ends_at"),
        status=item.get("status", "confirmed"),
    )


def _parse_opening_hours(item: dict[str, Any]) -> OpeningHours:
    return OpeningHours(
        day_of_week=int(item["day_of_week"]),
        open_minutes=int(item["open_minutes"]),
        close_minutes=int(item["close_minutes"]),
    )


def _parse_staff_hours(item: dict[str, Any]) -> StaffWorkingHours:
    return StaffWorkingHours(
        staff_id=str(item["staff_id"]),
        day_of_week=int(item["day_of_week"]),
        start_minutes=int(item["start_minutes"]),
        end_minutes=int(item["end_minutes"]),
    )


def _parse_blocked_time(item: dict[str, Any]) -> TimeWindow:
    return TimeWindow(
        start=_parse_datetime(item["starts_at"], "starts_at"),
        end=_parse_datetime(item["ends_at"], "ends_at"),
    )


def _parse_account(item: dict[str, Any]) -> LoyaltyAccount:
    return LoyaltyAccount(
        id=str(item["id"]),
        salon_id=str(item["salon_id"]),
        customer_id=str(item["customer_id"]),
        current_points=int(item.get("current_points", 0)),
        lifetime_points=int(item.get("lifetime_points", 0)),
        tier_id=str(item.get("tier_id", "bronze")),
    )


def _parse_voucher(item: dict[str, Any] | None) -> Voucher | None:
    if item is None:
        return None
    return Voucher(
        id=str(item["id"]),
        code=str(item["code"]),
        salon_id=str(item["salon_id"]),
        total_value=to_decimal(item["total_value"]),
        remaining_value=to_decimal(item["remaining_value"]),
        created_at=_parse_datetime(item["created_at"], "created_at"),
        expires_at=_parse_optional_datetime(item.get("expires_at"), "expires_at"),
        is_active=_parse_bool(item.get("is_active", True), "is_active"),
    )


# ── Contract factories ────────────────────────────────────────

def _available_slots_contract_factory(body: dict[str, Any]):
    return AvailableSlotsHttpRequest(
        salon_id=body["salon_id"],
        staff_id=body["staff_id"],
        day=_parse_date(body["date"], "date"),
        services=_parse_list(body, "services", _parse_service),
        opening_hours=_parse_list(body, "opening_hours", _parse_opening_hours),
        staff_working_hours=_parse_list(body, "staff_working_hours", _parse_staff_hours),
        appointments=_parse_list(body, "appointments", _parse_appointment),
        blocked_times=_parse_list(body, "blocked_times", _parse_blocked_time),
        only_available=_parse_bool(body.get("only_available", False), "only_available"),
    )


def _booking_validate_contract_factory(body: dict[str, Any]):
    return BookingValidateHttpRequest(
        salon_id=body["salon_id"],
        staff_id=body["staff_id"],
        starts_at=_parse_datetime(body["starts_at"], "starts_at"),
        services=_parse_list(body, "services", _parse_service),
        appointments=_parse_list(body, "appointments", _parse_appointment),
    )


def _loyalty_quote_contract_factory(body: dict[str, Any]):
    return LoyaltyQuoteHttpRequest(
        salon_id=body["salon_id"],
        account=_parse_account(body["account"]),
        purchase_amount=to_decimal(body.get("purchase_amount", 0)),
        redeem_points=int(body.get("redeem_points", 0)),
    )


def _voucher_validate_contract_factory(body: dict[str, Any]):
    return VoucherValidateHttpRequest(
        salon_id=body["salon_id"],
        code=body["code"],
        order_amount=to_decimal(body["order_amount"]),
        voucher=_parse_voucher(body.get("voucher")),
    )


def _dispatch(handler, contract_factory, request: HttpRequest) -> JsonResponse:
    if request.method != "POST":
        return _json_error(
            METHOD_NOT_ALLOWED,
            "Method not allowed for this endpoint.",
            status=405,
        )
    try:
        contract = contract_factory(_parse_json_body(request))
    except KeyError as exc:
        return _json_error(INVALID_REQUEST, f"Missing field: {exc.args[0]}", status=400)
    except (ValueError, TypeError, AttributeError) as exc:
        return _json_error(INVALID_REQUEST, str(exc), status=400)

    payload = handler(contract, build_dependencies())
    return JsonResponse(payload)


@csrf_exempt
def available_slots_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(post_available_slots, _available_slots_contract_factory, request)


@csrf_exempt
def booking_validate_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(post_booking_validate, _booking_validate_contract_factory, request)


@csrf_exempt
def loyalty_quote_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(post_loyalty_quote, _loyalty_quote_contract_factory, request)


@csrf_exempt
def voucher_validate_view(request: HttpRequest) -> JsonResponse:
    return _dispatch(post_voucher_validate, _voucher_validate_contract_factory, request)
