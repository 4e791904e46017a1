"""
Salon Loyalty Engine — Records
================================
Tier ladder, customer accounts and the preview/result records
returned by the point calculations.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Tuple

from core.primitives.money import to_decimal


# ══════════════════════════════════════════════════════════════
# TIERS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LoyaltyTier:
    """
    One rung of the tier ladder.

    points_multiplier 1.5 means 50% bonus points on top of base points.
    """
    id: str
    name: str
    min_points: int
    points_multiplier: Decimal = Decimal("1")
    benefits: Tuple[str, ...] = ()

    def __post_init__(self):
        if not self.id:
            raise ValueError("id must be non-empty.")
        if not isinstance(self.min_points, int) or self.min_points < 0:
            raise ValueError("min_points must be an integer >= 0.")
        object.__setattr__(self, "points_multiplier", to_decimal(self.points_multiplier))
        if self.points_multiplier < 1:
            raise ValueError("points_multiplier must be >= 1.")
        object.__setattr__(self, "benefits", tuple(self.benefits))

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "min_points": self.min_points,
            "points_multiplier": str(self.points_multiplier),
            "benefits": list(self.benefits),
        }


DEFAULT_TIERS: Tuple[LoyaltyTier, ...] = (
    LoyaltyTier(
        id="bronze",
        name="Bronze",
        min_points=0,
        points_multiplier=Decimal("1.0"),
        benefits=("Punkte sammeln",),
    ),
    LoyaltyTier(
        id="silver",
        name="Silber",
        min_points=500,
        points_multiplier=Decimal("1.25"),
        benefits=("25% Bonuspunkte", "Prioritäts-Buchung"),
    ),
    LoyaltyTier(
        id="gold",
        name="Gold",
        min_points=1500,
        points_multiplier=Decimal("1.5"),
        benefits=("50% Bonuspunkte", "Prioritäts-Buchung", "Exklusive Angebote"),
    ),
    LoyaltyTier(
        id="platinum",
        name="Platin",
        min_points=5000,
        points_multiplier=Decimal("2.0"),
        benefits=("100% Bonuspunkte", "VIP-Service", "Kostenlose Upgrades"),
    ),
)


# ══════════════════════════════════════════════════════════════
# ACCOUNT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LoyaltyAccount:
    """
    Points held by one customer at one salon.

    current_points:  spendable balance, never negative.
    lifetime_points: cumulative earnings, never reduced by redemption.
    """
    id: str
    salon_id: str
    customer_id: str
    current_points: int = 0
    lifetime_points: int = 0
    tier_id: str = "bronze"

    def __post_init__(self):
        if self.current_points < 0:
            raise ValueError("current_points must be >= 0.")
        if self.lifetime_points < 0:
            raise ValueError("lifetime_points must be >= 0.")


# ══════════════════════════════════════════════════════════════
# CALCULATION RESULTS
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class PointsCalculationResult:
    base_points: int
    bonus_points: int
    total_points: int
    multiplier: Decimal

    def to_dict(self) -> dict:
        return {
            "base_points": self.base_points,
            "bonus_points": self.bonus_points,
            "total_points": self.total_points,
            "multiplier": str(self.multiplier),
        }


@dataclass(frozen=True)
class NextTierInfo:
    next_tier: Optional[LoyaltyTier]
    points_needed: int


@dataclass(frozen=True)
class TierUpgradePreview:
    will_upgrade: bool
    new_tier: Optional[LoyaltyTier] = None
