"""
Salon HTTP API - Dependencies
=============================
Injected providers for wall-clock time, salon zone and configuration.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import tzinfo

from core.config.rules import ConfigStore
from core.time.clock import Clock


@dataclass(frozen=True)
class HttpApiDependencies:
    config_store: ConfigStore
    clock: Clock
    salon_timezone: tzinfo
