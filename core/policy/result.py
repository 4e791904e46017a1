"""
Salon Core Policy — Result Models
===================================
ValidationResult: the outcome of a business-rule check.

Rule checks never raise for a business rejection. They return a
ValidationResult and the caller branches on `valid`.

These are pure data structures. No side effects. No persistence.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional


# ══════════════════════════════════════════════════════════════
# VALIDATION RESULT
# ══════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of a rule check.

    Fields:
        valid:  True if every rule passed.
        error:  Localized, user-facing message (only when not valid).

    Invariant: valid <=> error is None.
    """

    valid: bool
    error: Optional[str] = None

    def __post_init__(self):
        if not isinstance(self.valid, bool):
            raise ValueError("valid must be a bool.")

        if self.valid and self.error is not None:
            raise ValueError("a valid result must not carry an error.")

        if not self.valid and (not self.error or not isinstance(self.error, str)):
            raise ValueError("an invalid result requires a non-empty error.")

    def __bool__(self) -> bool:
        return self.valid

    @classmethod
    def ok(cls) -> ValidationResult:
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> ValidationResult:
        return cls(valid=False, error=error)

    def to_dict(self) -> dict:
        if self.valid:
            return {"valid": True}
        return {"valid": False, "error": self.error}
