"""
Salon Core Config — Salon-Configurable Rules
===============================================
Doctrine: No hardcoded policy values in engine logic.
Lead time, horizon, slot granularity and loyalty rates come
from salon-configurable data; the module defaults below are
read-only fallbacks, injectable per call.
"""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Dict, Mapping, Optional, Protocol, Tuple


# ══════════════════════════════════════════════════════════════
# BOOKING RULES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class BookingRules:
    """
    Salon booking policy.

    minutes/hours/days are whole numbers; granularity must be positive
    or slot generation would never advance.
    """

    min_lead_time_minutes: int = 120
    max_horizon_days: int = 30
    cancellation_cutoff_hours: int = 24
    slot_granularity_minutes: int = 15
    buffer_between_bookings_minutes: int = 0

    def __post_init__(self) -> None:
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise ValueError(f"{f.name} must be an integer.")
            if value < 0:
                raise ValueError(f"{f.name} must be >= 0, got {value}.")
        if self.slot_granularity_minutes <= 0:
            raise ValueError("slot_granularity_minutes must be > 0.")


DEFAULT_BOOKING_RULES = BookingRules()


def booking_rules_from_mapping(
    mapping: Optional[Mapping[str, Any]],
    base: BookingRules = DEFAULT_BOOKING_RULES,
) -> BookingRules:
    """
    Build BookingRules from a settings mapping.

    Keys absent from the mapping keep the value from `base`.
    Unknown keys are rejected so that typos do not pass silently.
    """
    if not mapping:
        return base
    known = {f.name for f in fields(BookingRules)}
    unknown = set(mapping) - known
    if unknown:
        raise ValueError(f"Unknown booking rule keys: {sorted(unknown)}")
    values = {name: getattr(base, name) for name in known}
    values.update({k: int(v) for k, v in mapping.items()})
    return BookingRules(**values)


# ══════════════════════════════════════════════════════════════
# LOYALTY RATES
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class LoyaltyRates:
    """
    Earn and redeem conversion rates.

    points_per_chf:         points earned per CHF spent (before tier bonus).
    points_per_redemption:  points that buy CHF 1 of discount.
    """

    points_per_chf: Decimal = Decimal("1")
    points_per_redemption: Decimal = Decimal("100")

    def __post_init__(self) -> None:
        if self.points_per_chf <= 0:
            raise ValueError("points_per_chf must be > 0.")
        if self.points_per_redemption <= 0:
            raise ValueError("points_per_redemption must be > 0.")


DEFAULT_LOYALTY_RATES = LoyaltyRates()


def loyalty_rates_from_mapping(
    mapping: Optional[Mapping[str, Any]],
    base: LoyaltyRates = DEFAULT_LOYALTY_RATES,
) -> LoyaltyRates:
    if not mapping:
        return base
    return LoyaltyRates(
        points_per_chf=Decimal(str(mapping.get("points_per_chf", base.points_per_chf))),
        points_per_redemption=Decimal(
            str(mapping.get("points_per_redemption", base.points_per_redemption))
        ),
    )


# ══════════════════════════════════════════════════════════════
# CONFIG STORE PROTOCOL
# ══════════════════════════════════════════════════════════════

class ConfigStore(Protocol):
    """
    Protocol for salon-configured rule storage.

    Implementations may back this with a database, file, or in-memory store.
    """

    def get_booking_rules(self, salon_id: str) -> BookingRules:
        ...  # pragma: no cover

    def get_loyalty_rates(self, salon_id: str) -> LoyaltyRates:
        ...  # pragma: no cover

    def get_loyalty_tiers(self, salon_id: str) -> Optional[Tuple[Any, ...]]:
        """Tier ladder override, or None to use the engine default."""
        ...  # pragma: no cover


# ══════════════════════════════════════════════════════════════
# IN-MEMORY CONFIG STORE (for testing / bootstrap)
# ══════════════════════════════════════════════════════════════

class InMemoryConfigStore:
    """Per-salon overrides on top of deployment-wide defaults."""

    def __init__(
        self,
        *,
        default_booking_rules: BookingRules = DEFAULT_BOOKING_RULES,
        default_loyalty_rates: LoyaltyRates = DEFAULT_LOYALTY_RATES,
    ) -> None:
        self._default_booking_rules = default_booking_rules
        self._default_loyalty_rates = default_loyalty_rates
        self._booking_rules: Dict[str, BookingRules] = {}
        self._loyalty_rates: Dict[str, LoyaltyRates] = {}
        self._loyalty_tiers: Dict[str, Tuple[Any, ...]] = {}

    def set_booking_rules(self, salon_id: str, rules: BookingRules) -> None:
        self._booking_rules[salon_id] = rules

    def set_loyalty_rates(self, salon_id: str, rates: LoyaltyRates) -> None:
        self._loyalty_rates[salon_id] = rates

    def set_loyalty_tiers(self, salon_id: str, tiers) -> None:
        self._loyalty_tiers[salon_id] = tuple(tiers)

    def get_booking_rules(self, salon_id: str) -> BookingRules:
        return self._booking_rules.get(salon_id, self._default_booking_rules)

    def get_loyalty_rates(self, salon_id: str) -> LoyaltyRates:
        return self._loyalty_rates.get(salon_id, self._default_loyalty_rates)

    def get_loyalty_tiers(self, salon_id: str) -> Optional[Tuple[Any, ...]]:
        return self._loyalty_tiers.get(salon_id)
