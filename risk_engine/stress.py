"""One-day stress propagation from a benchmark shock to the portfolio.

The model is linear and single-factor: the benchmark move is expressed in
benchmark standard deviations, and each asset moves by that many of its own
standard deviations scaled by its correlation to the benchmark. It is a quick
sensitivity estimate, not a joint simulation and not a stress VaR.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from risk_engine import stats
from risk_engine.exceptions import ContractViolationError
from risk_engine.returns import AssetUniverse, ReturnSeries

logger = logging.getLogger(__name__)

VOLATILITY_FLOOR = 1e-9


@dataclass(frozen=True)
class StressScenario:
    """Benchmark shock and its estimated effect on each asset and the portfolio."""

    shock: float
    benchmark_std: float
    z_shock: float
    asset_shocks: pd.Series
    impact: float


def _floored_std(series: ReturnSeries) -> float:
    sigma = stats.std(series.values)
    if sigma == 0 or math.isnan(sigma):
        logger.debug(
            "Std of '%s' is %s; using floor %g", series.identifier, sigma, VOLATILITY_FLOOR
        )
        return VOLATILITY_FLOOR
    return sigma


def propagate_shock(
    universe: AssetUniverse,
    benchmark: ReturnSeries,
    weights: Sequence[float] | np.ndarray,
    shock: float,
) -> StressScenario:
    """
    Estimate the portfolio return on a day the benchmark returns ``shock``.

    Args:
        universe: Asset return series.
        benchmark: Benchmark return series.
        weights: Normalized portfolio weights aligned with the universe.
        shock: Benchmark one-day fractional return, e.g. -0.07.
    """
    w = np.asarray(weights, dtype=float)
    if w.shape != (len(universe),):
        raise ContractViolationError(
            f"Weight vector shape {w.shape} does not match {len(universe)} assets",
            field="weights",
        )

    sigma_b = _floored_std(benchmark)
    z_shock = shock / sigma_b

    asset_shocks = pd.Series(
        [
            z_shock * stats.correlation(s.values, benchmark.values) * _floored_std(s)
            for s in universe
        ],
        index=universe.identifiers,
        name="stress_shock",
    )
    impact = float((w * asset_shocks.to_numpy()).sum())

    return StressScenario(
        shock=float(shock),
        benchmark_std=sigma_b,
        z_shock=float(z_shock),
        asset_shocks=asset_shocks,
        impact=impact,
    )
