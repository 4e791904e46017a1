"""
Salon Loyalty Engine — Ledger Entries
=======================================
Append-only point transactions. An account's current balance is the
running fold of all deltas, floored at zero after every entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Iterable, Optional

# ── Source Types ──────────────────────────────────────────────

SOURCE_ORDER = "order"
SOURCE_APPOINTMENT = "appointment"
SOURCE_ADJUSTMENT = "adjustment"
SOURCE_REDEMPTION = "redemption"
SOURCE_EXPIRY = "expiry"
SOURCE_BONUS = "bonus"

VALID_SOURCE_TYPES = frozenset({
    SOURCE_ORDER, SOURCE_APPOINTMENT, SOURCE_ADJUSTMENT,
    SOURCE_REDEMPTION, SOURCE_EXPIRY, SOURCE_BONUS,
})


@dataclass(frozen=True)
class LoyaltyTransaction:
    id: str
    loyalty_account_id: str
    salon_id: str
    points_delta: int          # positive for earning, negative for redemption
    source_type: str
    source_id: Optional[str]
    description: str
    created_at: datetime

    def __post_init__(self):
        if self.source_type not in VALID_SOURCE_TYPES:
            raise ValueError(f"Invalid source_type: {self.source_type}")


# ── Entry Builder ─────────────────────────────────────────────

def create_transaction(
    account_id: str,
    salon_id: str,
    points_delta: int,
    source_type: str,
    source_id: Optional[str],
    description: str,
) -> dict:
    """
    Unsaved ledger entry. The store assigns id and created_at on insert.
    """
    if source_type not in VALID_SOURCE_TYPES:
        raise ValueError(f"Invalid source_type: {source_type}")
    return {
        "loyalty_account_id": account_id,
        "salon_id": salon_id,
        "points_delta": points_delta,
        "source_type": source_type,
        "source_id": source_id,
        "description": description,
    }


# ── Fold ──────────────────────────────────────────────────────

def fold_points_balance(deltas: Iterable[int], opening_balance: int = 0) -> int:
    balance = opening_balance
    for delta in deltas:
        balance = max(0, balance + delta)
    return balance
