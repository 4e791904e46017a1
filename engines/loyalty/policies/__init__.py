"""
Salon Loyalty Engine — Policies
=================================
Redemption guards. Pre-checks only: the store must still apply the
decrement atomically ("decrement if balance >= points").
"""

from __future__ import annotations

import logging

from core.policy.result import ValidationResult

from engines.loyalty.models import LoyaltyAccount

logger = logging.getLogger("salon.loyalty")


def insufficient_points_message(available: int, required: int) -> str:
    return f"Nicht genügend Punkte. Verfügbar: {available}, Benötigt: {required}"


def can_redeem_points(account: LoyaltyAccount, points_to_redeem: int) -> bool:
    return points_to_redeem > 0 and account.current_points >= points_to_redeem


def validate_points_transaction(
    account: LoyaltyAccount,
    points_delta: int,
) -> ValidationResult:
    """Earning is always valid; a redemption must be covered by the balance."""
    if points_delta < 0:
        required = abs(points_delta)
        if account.current_points < required:
            logger.debug(
                "Points transaction rejected for account %s: %s < %s",
                account.id, account.current_points, required,
            )
            return ValidationResult.fail(
                insufficient_points_message(account.current_points, required)
            )
    return ValidationResult.ok()


__all__ = [
    "can_redeem_points",
    "insufficient_points_message",
    "validate_points_transaction",
]
