"""
Signals layer for Agent Alpha.

Provides:
- SignalValidator: Checks strategy signals against account risk limits
- SignalValidationResult: Per-signal outcome
- ValidationSummary: Accepted and rejected signals for a cycle
"""

from agentalpha.signals.validator import (
    SignalValidationResult,
    SignalValidator,
    ValidationSummary,
)

__all__ = [
    "SignalValidator",
    "SignalValidationResult",
    "ValidationSummary",
]
