"""
Salon Core Policy — Public API
================================
Returned-value decision shape shared by the engines.
"""

from core.policy.result import ValidationResult

__all__ = [
    "ValidationResult",
]
