"""
Salon HTTP API - Public API
===========================
Framework-agnostic contracts and handlers over the booking, loyalty
and voucher engines.
"""

from core.http_api.contracts import (
    AvailableSlotsHttpRequest,
    BookingValidateHttpRequest,
    HttpApiErrorBody,
    HttpApiResponse,
    LoyaltyQuoteHttpRequest,
    VoucherValidateHttpRequest,
)
from core.http_api.dependencies import HttpApiDependencies
from core.http_api.errors import error_response, success_response
from core.http_api.handlers import (
    post_available_slots,
    post_booking_validate,
    post_loyalty_quote,
    post_voucher_validate,
)

__all__ = [
    "AvailableSlotsHttpRequest",
    "BookingValidateHttpRequest",
    "HttpApiDependencies",
    "HttpApiErrorBody",
    "HttpApiResponse",
    "LoyaltyQuoteHttpRequest",
    "VoucherValidateHttpRequest",
    "error_response",
    "post_available_slots",
    "post_booking_validate",
    "post_loyalty_quote",
    "post_voucher_validate",
    "success_response",
]
