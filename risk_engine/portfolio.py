"""Portfolio aggregation: weight normalization, portfolio returns and volatility."""

from __future__ import annotations

import logging
from typing import Sequence

import numpy as np
import pandas as pd

from risk_engine import stats
from risk_engine.exceptions import ContractViolationError
from risk_engine.returns import AssetUniverse

logger = logging.getLogger(__name__)

TRADING_DAYS = 252


# ------------------------------------------------------------------
# Weights
# ------------------------------------------------------------------


def validate_weights(
    weights: Sequence[float] | np.ndarray,
    n_assets: int | None = None,
) -> np.ndarray:
    """Check shape and sign of a raw weight vector and return it as floats."""
    w = np.array(weights, dtype=float)
    if w.ndim != 1:
        raise ContractViolationError(
            f"Weights must be 1-D, got shape {w.shape}", field="weights"
        )
    if n_assets is not None and w.size != n_assets:
        raise ContractViolationError(
            f"Weight vector has {w.size} entries but the universe has {n_assets} assets",
            field="weights",
        )
    if not np.all(np.isfinite(w)):
        raise ContractViolationError("Weights must be finite", field="weights")
    if np.any(w < 0):
        raise ContractViolationError("Weights must be non-negative", field="weights")
    return w


def normalize_weights(weights: Sequence[float] | np.ndarray) -> np.ndarray:
    """
    Scale raw weights so they sum to one.

    An all-zero vector cannot be scaled and is returned unchanged.
    """
    w = validate_weights(weights)
    total = w.sum()
    if total == 0:
        logger.warning("Weights sum to zero; using raw weights without normalization")
        return w
    return w / total


# ------------------------------------------------------------------
# Returns
# ------------------------------------------------------------------


def portfolio_returns(
    universe: AssetUniverse,
    weights: Sequence[float] | np.ndarray,
) -> pd.Series:
    """
    Weighted portfolio daily returns, p_t = sum_i w_i * r_i,t.

    ``weights`` are used as given; pass them through ``normalize_weights``
    first. Only the first ``universe.length`` observations of each asset are
    read, so a ragged universe is truncated rather than padded.
    """
    w = validate_weights(weights, len(universe))
    n = universe.length
    out = np.zeros(n)
    for wi, series in zip(w, universe):
        out += wi * series.values[:n]
    return pd.Series(out, name="portfolio_return")


# ------------------------------------------------------------------
# Volatility
# ------------------------------------------------------------------


def volatility_direct(
    p_returns: Sequence[float] | np.ndarray | pd.Series,
    trading_days: int = TRADING_DAYS,
) -> float:
    """Annualized volatility from the sample std of the portfolio return series."""
    return stats.std(p_returns) * float(np.sqrt(trading_days))


def volatility_via_matrix(
    weights: Sequence[float] | np.ndarray,
    cov_matrix: pd.DataFrame | np.ndarray,
    trading_days: int = TRADING_DAYS,
) -> float:
    """Annualized volatility from the quadratic form sqrt(w' Cov w)."""
    cov = np.asarray(cov_matrix, dtype=float)
    w = validate_weights(weights)
    if cov.shape != (w.size, w.size):
        raise ContractViolationError(
            f"Covariance matrix shape {cov.shape} does not match {w.size} weights",
            field="cov_matrix",
        )
    variance = float(w @ cov @ w)
    # Clamp tiny negative values from numerical noise to zero
    if -1e-12 < variance < 0:
        variance = 0.0
    if variance < 0:
        logger.warning("Negative portfolio variance %.3e; volatility is undefined", variance)
        return float("nan")
    return float(np.sqrt(variance) * np.sqrt(trading_days))
