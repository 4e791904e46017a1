"""
Salon HTTP API - Error Mapping
==============================
Stable transport envelopes for engine rejections and request failures.
"""

from __future__ import annotations

from typing import Any, Optional

from core.http_api.contracts import HttpApiErrorBody, HttpApiResponse
from core.policy.result import ValidationResult
from engines.voucher.models import VoucherValidationResult

INVALID_REQUEST = "INVALID_REQUEST"
METHOD_NOT_ALLOWED = "METHOD_NOT_ALLOWED"
BOOKING_REJECTED = "BOOKING_REJECTED"
LOYALTY_REJECTED = "LOYALTY_REJECTED"


def error_response(
    *,
    code: str,
    message: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    return HttpApiResponse(
        ok=False,
        error=HttpApiErrorBody(
            code=code,
            message=message,
            details=details or {},
        ),
    ).to_dict()


def success_response(data: Any) -> dict[str, Any]:
    return HttpApiResponse(ok=True, data=data).to_dict()


def validation_response(
    result: ValidationResult,
    *,
    code: str,
    details: Optional[dict[str, Any]] = None,
) -> dict[str, Any]:
    """Envelope for a rejected scheduling/loyalty check."""
    if result.valid:
        raise ValueError("validation_response requires a rejected result.")
    return error_response(code=code, message=result.error, details=details)


def voucher_rejection_response(result: VoucherValidationResult) -> dict[str, Any]:
    if result.valid:
        raise ValueError("voucher_rejection_response requires a rejected result.")
    return error_response(
        code=result.error.value,
        message=result.message,
        details=result.to_dict(),
    )
