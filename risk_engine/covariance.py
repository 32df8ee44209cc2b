"""Pairwise covariance and correlation matrices over an asset universe."""

from __future__ import annotations

from typing import Callable

import numpy as np
import pandas as pd

from risk_engine import stats
from risk_engine.returns import AssetUniverse


def _pairwise(
    universe: AssetUniverse,
    fn: Callable[[np.ndarray, np.ndarray], float],
) -> pd.DataFrame:
    n = len(universe)
    m = np.empty((n, n))
    for i, a in enumerate(universe):
        for j, b in enumerate(universe):
            m[i, j] = fn(a.values, b.values)
    ids = universe.identifiers
    return pd.DataFrame(m, index=ids, columns=ids)


def covariance_matrix(universe: AssetUniverse) -> pd.DataFrame:
    """Daily sample covariance matrix, rows and columns in universe order."""
    return _pairwise(universe, stats.covariance)


def correlation_matrix(universe: AssetUniverse) -> pd.DataFrame:
    """
    Correlation matrix in universe order.

    The diagonal is computed as cov(x, x) / std(x)^2 like every other cell,
    so it equals 1.0 only up to rounding, and is NaN for a constant series.
    """
    return _pairwise(universe, stats.correlation)
