"""NAV path and drawdown from a return sequence."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd


@dataclass(frozen=True)
class DrawdownResult:
    """Compounded NAV path with per-step and maximum drawdown."""

    nav: np.ndarray        # NAV after each return, unit baseline
    drawdowns: np.ndarray  # (peak - nav) / peak at each step, >= 0
    max_drawdown: float


def nav_path(returns: Sequence[float] | np.ndarray | pd.Series) -> np.ndarray:
    """Cumulative compounded value starting from 1.0."""
    r = np.asarray(returns, dtype=float).ravel()
    return np.cumprod(1 + r)


def drawdown_series(returns: Sequence[float] | np.ndarray | pd.Series) -> np.ndarray:
    """Decline from the running peak at each step, as a positive fraction."""
    nav = pd.Series(nav_path(returns))
    running_max = nav.cummax()
    return ((running_max - nav) / running_max).to_numpy()


def _largest(dd: np.ndarray) -> float:
    if dd.size == 0 or np.all(np.isnan(dd)):
        return 0.0
    return float(max(0.0, np.nanmax(dd)))


def max_drawdown(returns: Sequence[float] | np.ndarray | pd.Series) -> float:
    """Largest peak-to-trough decline; 0.0 for an empty or flat path."""
    return _largest(drawdown_series(returns))


def compute_drawdown(returns: Sequence[float] | np.ndarray | pd.Series) -> DrawdownResult:
    nav = nav_path(returns)
    dd = drawdown_series(returns)
    return DrawdownResult(nav=nav, drawdowns=dd, max_drawdown=_largest(dd))
