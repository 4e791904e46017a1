"""
Salon Core Config — Public API
================================
Salon-configurable rules (booking policy, loyalty rates).
Doctrine: No hardcoded policy values in engine logic.
"""

from core.config.rules import (
    DEFAULT_BOOKING_RULES,
    DEFAULT_LOYALTY_RATES,
    BookingRules,
    ConfigStore,
    InMemoryConfigStore,
    LoyaltyRates,
    booking_rules_from_mapping,
    loyalty_rates_from_mapping,
)

__all__ = [
    "BookingRules",
    "DEFAULT_BOOKING_RULES",
    "LoyaltyRates",
    "DEFAULT_LOYALTY_RATES",
    "ConfigStore",
    "InMemoryConfigStore",
    "booking_rules_from_mapping",
    "loyalty_rates_from_mapping",
]
