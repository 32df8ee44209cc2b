"""Beta of assets and of the portfolio against a benchmark."""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

from risk_engine import stats
from risk_engine.exceptions import ContractViolationError
from risk_engine.returns import AssetUniverse, ReturnSeries


def beta(
    asset_returns: Sequence[float] | np.ndarray | pd.Series,
    bench_returns: Sequence[float] | np.ndarray | pd.Series,
) -> float:
    """cov(asset, bench) / var(bench); NaN or Inf when the benchmark is flat."""
    cov = np.float64(stats.covariance(asset_returns, bench_returns))
    var = np.float64(stats.covariance(bench_returns, bench_returns))
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(cov / var)


def asset_betas(universe: AssetUniverse, benchmark: ReturnSeries) -> pd.Series:
    """Per-asset beta indexed by identifier."""
    return pd.Series(
        [beta(s.values, benchmark.values) for s in universe],
        index=universe.identifiers,
        name="beta",
    )


def portfolio_beta(
    weights: Sequence[float] | np.ndarray,
    betas: Sequence[float] | np.ndarray | pd.Series,
) -> float:
    """Weighted average of per-asset betas. Pass normalized weights."""
    w = np.asarray(weights, dtype=float)
    b = np.asarray(betas, dtype=float)
    if w.shape != b.shape:
        raise ContractViolationError(
            f"Weights shape {w.shape} does not match betas shape {b.shape}",
            field="weights",
        )
    return float((w * b).sum())
