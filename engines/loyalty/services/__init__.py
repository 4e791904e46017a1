"""
Salon Loyalty Engine — Service Layer
======================================
Tier ladder lookups, points per purchase and balance arithmetic.

Points are earned per CHF spent, then topped up by the tier multiplier.
Base and bonus points are floored separately, so CHF 99.99 at Bronze
earns 99 points, not 100.
"""

from __future__ import annotations

import math
from dataclasses import replace
from decimal import Decimal
from typing import Sequence

from core.config.rules import DEFAULT_LOYALTY_RATES
from core.primitives.money import Amount, to_decimal

from engines.loyalty.models import (
    DEFAULT_TIERS,
    LoyaltyAccount,
    LoyaltyTier,
    NextTierInfo,
    PointsCalculationResult,
    TierUpgradePreview,
)

DEFAULT_POINTS_PER_CHF = DEFAULT_LOYALTY_RATES.points_per_chf
DEFAULT_POINTS_PER_REDEMPTION = DEFAULT_LOYALTY_RATES.points_per_redemption


# ── Earning ───────────────────────────────────────────────────

def calculate_points_from_purchase(
    amount: Amount,
    tier: LoyaltyTier,
    points_per_chf: Amount = DEFAULT_POINTS_PER_CHF,
) -> PointsCalculationResult:
    base_points = int(math.floor(to_decimal(amount) * to_decimal(points_per_chf)))
    bonus_points = int(math.floor(base_points * (tier.points_multiplier - 1)))
    return PointsCalculationResult(
        base_points=base_points,
        bonus_points=bonus_points,
        total_points=base_points + bonus_points,
        multiplier=tier.points_multiplier,
    )


def estimate_points_from_cart(
    cart_total: Amount,
    tier: LoyaltyTier,
    points_per_chf: Amount = DEFAULT_POINTS_PER_CHF,
) -> PointsCalculationResult:
    """Preview shown in the cart before checkout."""
    return calculate_points_from_purchase(cart_total, tier, points_per_chf)


# ── Tiers ─────────────────────────────────────────────────────

def determine_tier(
    lifetime_points: int,
    tiers: Sequence[LoyaltyTier] = DEFAULT_TIERS,
) -> LoyaltyTier:
    """Highest tier whose min_points <= lifetime_points, else the lowest tier."""
    qualifying = [t for t in tiers if t.min_points <= lifetime_points]
    if qualifying:
        return max(qualifying, key=lambda t: t.min_points)
    return min(tiers, key=lambda t: t.min_points)


def get_points_to_next_tier(
    lifetime_points: int,
    tiers: Sequence[LoyaltyTier] = DEFAULT_TIERS,
) -> NextTierInfo:
    higher = [t for t in tiers if t.min_points > lifetime_points]
    if not higher:
        return NextTierInfo(next_tier=None, points_needed=0)
    next_tier = min(higher, key=lambda t: t.min_points)
    return NextTierInfo(
        next_tier=next_tier,
        points_needed=next_tier.min_points - lifetime_points,
    )


def get_tier_progress(
    lifetime_points: int,
    tiers: Sequence[LoyaltyTier] = DEFAULT_TIERS,
) -> float:
    """Percent (0..100) of the way from the current tier to the next."""
    current_tier = determine_tier(lifetime_points, tiers)
    next_tier = get_points_to_next_tier(lifetime_points, tiers).next_tier
    if next_tier is None:
        return 100.0

    tier_range = next_tier.min_points - current_tier.min_points
    points_in_tier = lifetime_points - current_tier.min_points
    # Below the lowest tier of a ladder without a 0-point rung.
    if points_in_tier < 0 or tier_range <= 0:
        return 0.0
    return min(100.0, points_in_tier / tier_range * 100)


def will_upgrade_tier(
    current_lifetime_points: int,
    points_to_earn: int,
    tiers: Sequence[LoyaltyTier] = DEFAULT_TIERS,
) -> TierUpgradePreview:
    current_tier = determine_tier(current_lifetime_points, tiers)
    new_tier = determine_tier(current_lifetime_points + points_to_earn, tiers)

    if new_tier.id != current_tier.id and new_tier.min_points > current_tier.min_points:
        return TierUpgradePreview(will_upgrade=True, new_tier=new_tier)
    return TierUpgradePreview(will_upgrade=False, new_tier=None)


# ── Redemption value ──────────────────────────────────────────

def calculate_redemption_value(
    points: int,
    points_per_chf: Amount = DEFAULT_POINTS_PER_REDEMPTION,
) -> Decimal:
    """CHF discount bought by `points`."""
    return Decimal(points) / to_decimal(points_per_chf)


def calculate_points_required(
    chf_value: Amount,
    points_per_chf: Amount = DEFAULT_POINTS_PER_REDEMPTION,
) -> int:
    """Points needed for a CHF discount, rounded up."""
    return int(math.ceil(to_decimal(chf_value) * to_decimal(points_per_chf)))


# ── Balance ───────────────────────────────────────────────────

def calculate_new_balance(current_points: int, points_delta: int) -> int:
    """
    Unconditional arithmetic step, floored at zero.

    Over-redemption must already have been rejected by
    validate_points_transaction.
    """
    return max(0, current_points + points_delta)


def apply_points_transaction(
    account: LoyaltyAccount,
    points_delta: int,
    tiers: Sequence[LoyaltyTier] = DEFAULT_TIERS,
) -> LoyaltyAccount:
    """
    New account snapshot after one validated transaction.

    Only positive deltas count toward lifetime_points; the tier follows
    lifetime_points, so a redemption never demotes a customer.
    """
    lifetime_points = account.lifetime_points + max(0, points_delta)
    return replace(
        account,
        current_points=calculate_new_balance(account.current_points, points_delta),
        lifetime_points=lifetime_points,
        tier_id=determine_tier(lifetime_points, tiers).id,
    )


# ── Display ───────────────────────────────────────────────────

def format_points(points: int) -> str:
    """Swiss German grouping: 1234567 -> "1’234’567"."""
    return f"{points:,}".replace(",", "’")


__all__ = [
    "DEFAULT_POINTS_PER_CHF",
    "DEFAULT_POINTS_PER_REDEMPTION",
    "apply_points_transaction",
    "calculate_new_balance",
    "calculate_points_from_purchase",
    "calculate_points_required",
    "calculate_redemption_value",
    "determine_tier",
    "estimate_points_from_cart",
    "format_points",
    "get_points_to_next_tier",
    "get_tier_progress",
    "will_upgrade_tier",
]
