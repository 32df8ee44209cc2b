"""Moment statistics over numeric return sequences.

All functions accept any 1-D sequence (list, numpy array, pandas Series) and
return plain floats. Undefined results are reported as NaN or Inf rather than
raised, so a degenerate series shows up in the output instead of aborting the
whole computation.
"""

from __future__ import annotations

from typing import Sequence

import numpy as np
import pandas as pd

ArrayLike = Sequence[float] | np.ndarray | pd.Series


def _as_array(series: ArrayLike) -> np.ndarray:
    return np.asarray(series, dtype=float).ravel()


def mean(series: ArrayLike) -> float:
    """Arithmetic mean, NaN for an empty sequence."""
    arr = _as_array(series)
    if arr.size == 0:
        return float("nan")
    return float(arr.sum() / arr.size)


def std(series: ArrayLike) -> float:
    """Sample standard deviation (n - 1 divisor), NaN when n < 2."""
    arr = _as_array(series)
    n = arr.size
    if n < 2:
        return float("nan")
    dev = arr - arr.sum() / n
    return float(np.sqrt((dev * dev).sum() / (n - 1)))


def covariance(a: ArrayLike, b: ArrayLike) -> float:
    """
    Sample covariance of two sequences.

    When the lengths differ only the overlapping prefix is summed, while each
    mean is still taken over its full sequence. The divisor is the prefix
    length minus one.
    """
    x = _as_array(a)
    y = _as_array(b)
    n = min(x.size, y.size)
    if n < 2:
        return float("nan")
    mx = x.sum() / x.size
    my = y.sum() / y.size
    s = ((x[:n] - mx) * (y[:n] - my)).sum()
    return float(s / (n - 1))


def correlation(a: ArrayLike, b: ArrayLike) -> float:
    """
    Pearson correlation as covariance(a, b) / (std(a) * std(b)).

    A constant series has zero std and yields NaN (or +/-Inf), which keeps it
    distinguishable from a genuine zero correlation.
    """
    cov = np.float64(covariance(a, b))
    denom = np.float64(std(a)) * np.float64(std(b))
    with np.errstate(divide="ignore", invalid="ignore"):
        return float(cov / denom)
