"""One-day Value at Risk: historical simulation and variance-covariance."""

from __future__ import annotations

import math
from enum import Enum
from typing import Sequence

import numpy as np
import pandas as pd

from risk_engine import stats
from risk_engine.exceptions import ContractViolationError

DEFAULT_CONFIDENCE = 0.95

# One-tailed z-scores for the supported confidence levels
Z_SCORES: dict[float, float] = {
    0.90: 1.282,
    0.95: 1.645,
    0.99: 2.326,
}


class VaRMethod(str, Enum):
    HISTORICAL = "historical"
    VARIANCE_COVARIANCE = "variance-covariance"

    @classmethod
    def parse(cls, value: str | VaRMethod) -> VaRMethod:
        """Accept an enum member or its name, value or ``parametric`` alias."""
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower().replace("_", "-")
        if key == "parametric":
            return cls.VARIANCE_COVARIANCE
        for member in cls:
            if key in (member.value, member.name.lower().replace("_", "-")):
                return member
        raise ContractViolationError(f"Unknown VaR method: {value!r}", field="method")


def _check_confidence(confidence: float) -> float:
    c = float(confidence)
    if not 0.0 < c < 1.0:
        raise ContractViolationError(
            f"Confidence must lie strictly between 0 and 1, got {confidence}",
            field="confidence",
        )
    return c


def z_score(confidence: float) -> float:
    """
    Lookup z-score for a confidence level.

    The level is rounded to two decimals before the lookup; anything outside
    the table falls back to the 95% z-score. There is no interpolation.
    """
    c = _check_confidence(confidence)
    return Z_SCORES.get(round(c, 2), Z_SCORES[DEFAULT_CONFIDENCE])


def historical_quantile(
    series: Sequence[float] | np.ndarray | pd.Series,
    q: float,
) -> float:
    """Type-7 quantile: sort, position (n - 1) * q, linear interpolation."""
    arr = np.asarray(series, dtype=float).ravel()
    if arr.size == 0:
        return float("nan")
    return float(np.quantile(arr, q, method="linear"))


def _floor_loss(loss: float) -> float:
    if math.isnan(loss):
        return loss
    return max(0.0, loss)


def var_historical(
    p_returns: Sequence[float] | np.ndarray | pd.Series,
    confidence: float = DEFAULT_CONFIDENCE,
) -> float:
    """Historical VaR as a non-negative loss fraction."""
    c = _check_confidence(confidence)
    return _floor_loss(-historical_quantile(p_returns, 1 - c))


def var_parametric(
    p_returns: Sequence[float] | np.ndarray | pd.Series,
    confidence: float = DEFAULT_CONFIDENCE,
) -> float:
    """Variance-covariance VaR, z * std - mean, floored at zero."""
    z = z_score(confidence)
    return _floor_loss(z * stats.std(p_returns) - stats.mean(p_returns))


def value_at_risk(
    p_returns: Sequence[float] | np.ndarray | pd.Series,
    confidence: float = DEFAULT_CONFIDENCE,
    method: VaRMethod | str = VaRMethod.HISTORICAL,
) -> float:
    """VaR by the selected method."""
    if VaRMethod.parse(method) is VaRMethod.HISTORICAL:
        return var_historical(p_returns, confidence)
    return var_parametric(p_returns, confidence)
