"""Exceptions raised by the risk engine."""

from __future__ import annotations


class RiskEngineError(Exception):
    """Base exception for all risk engine errors."""


class ContractViolationError(RiskEngineError, ValueError):
    """Raised when an input breaks the shape contract of the engine.

    Numeric degeneracies (short series, zero variance, all-zero weights) are
    never reported this way; they surface as NaN/Inf in the results.
    """

    def __init__(self, message: str, field: str | None = None) -> None:
        super().__init__(message)
        self.field = field
