"""
Salon Django Adapter Wiring
===========================
Constructs HttpApiDependencies from Django settings.

This module is adapter-only glue:
- deployment-wide defaults come from SALON_BOOKING_RULES / SALON_LOYALTY_RATES
- salon timezone comes from TIME_ZONE
- no persistence; requests carry their own snapshots
"""

from __future__ import annotations

import logging
import threading
from zoneinfo import ZoneInfo

from django.conf import settings

from core.config.rules import (
    InMemoryConfigStore,
    booking_rules_from_mapping,
    loyalty_rates_from_mapping,
)
from core.http_api.dependencies import HttpApiDependencies
from core.time.clock import get_default_clock

logger = logging.getLogger("salon.http")

_DEPENDENCIES_LOCK = threading.Lock()
_DEPENDENCIES: HttpApiDependencies | None = None


def _build_config_store() -> InMemoryConfigStore:
    return InMemoryConfigStore(
        default_booking_rules=booking_rules_from_mapping(
            getattr(settings, "SALON_BOOKING_RULES", None)
        ),
        default_loyalty_rates=loyalty_rates_from_mapping(
            getattr(settings, "SALON_LOYALTY_RATES", None)
        ),
    )


def build_dependencies() -> HttpApiDependencies:
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        if _DEPENDENCIES is None:
            _DEPENDENCIES = HttpApiDependencies(
                config_store=_build_config_store(),
                clock=get_default_clock(),
                salon_timezone=ZoneInfo(settings.TIME_ZONE),
            )
            logger.info("HTTP dependencies built (zone %s)", settings.TIME_ZONE)
        return _DEPENDENCIES


def reset_dependencies() -> None:
    """Drop the cached bundle so the next request rebuilds it (testing only)."""
    global _DEPENDENCIES
    with _DEPENDENCIES_LOCK:
        _DEPENDENCIES = None
