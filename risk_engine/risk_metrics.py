"""Full risk analysis of a weighted portfolio against a benchmark."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
import pandas as pd

from risk_engine import beta as beta_engine
from risk_engine import covariance, drawdown, portfolio, stress, var
from risk_engine.exceptions import ContractViolationError
from risk_engine.returns import AssetUniverse, ReturnSeries
from risk_engine.var import VaRMethod

logger = logging.getLogger(__name__)

DEFAULT_SHOCK = -0.07


def _round(value: float, digits: int = 4) -> float | None:
    """Round for display, mapping NaN/Inf to None so the dict stays JSON-safe."""
    if not np.isfinite(value):
        return None
    return round(float(value), digits)


@dataclass(frozen=True)
class RiskReport:
    """Immutable container for all computed risk metrics."""

    normalized_weights: pd.Series
    covariance_matrix: pd.DataFrame
    correlation_matrix: pd.DataFrame
    portfolio_returns: pd.Series
    volatility_annualized_direct: float
    volatility_annualized_matrix: float
    asset_betas: pd.Series
    portfolio_beta: float
    var_estimate: float
    var_method: VaRMethod
    confidence: float
    nav_path: np.ndarray
    max_drawdown: float
    stress_shock: float
    stress_impact: float
    asset_stress_shocks: pd.Series

    def to_dict(self) -> dict:
        return {
            "Weights": {k: _round(v) for k, v in self.normalized_weights.items()},
            "Betas": {k: _round(v) for k, v in self.asset_betas.items()},
            "Volatility_Direct": _round(self.volatility_annualized_direct),
            "Volatility_Matrix": _round(self.volatility_annualized_matrix),
            "Portfolio_Beta": _round(self.portfolio_beta),
            "VaR": _round(self.var_estimate),
            "VaR_Method": self.var_method.value,
            "Confidence": self.confidence,
            "Max_Drawdown": _round(self.max_drawdown),
            "Final_NAV": _round(self.nav_path[-1]) if self.nav_path.size else None,
            "Stress_Shock": _round(self.stress_shock),
            "Stress_Impact": _round(self.stress_impact),
            "Stress_Shocks": {k: _round(v) for k, v in self.asset_stress_shocks.items()},
        }


class RiskCalculator:
    """Compute every risk metric for one set of inputs.

    The calculator keeps no state beyond its inputs and caches nothing; build a
    new one whenever any input changes.
    """

    def __init__(
        self,
        universe: AssetUniverse,
        weights: Sequence[float] | np.ndarray,
        benchmark: ReturnSeries,
        confidence: float = var.DEFAULT_CONFIDENCE,
        method: VaRMethod | str = VaRMethod.HISTORICAL,
        shock: float = DEFAULT_SHOCK,
        trading_days: int = portfolio.TRADING_DAYS,
    ) -> None:
        """
        Args:
            universe: Asset return series in weight order.
            weights: Raw non-negative weights, one per asset.
            benchmark: Benchmark daily returns.
            confidence: VaR confidence level, e.g. 0.95.
            method: VaR method, historical or variance-covariance.
            shock: Benchmark one-day shock for the stress estimate.
            trading_days: Trading days per year for annualization.
        """
        if not isinstance(universe, AssetUniverse):
            raise ContractViolationError(
                f"Expected AssetUniverse, got {type(universe).__name__}",
                field="universe",
            )
        if not isinstance(benchmark, ReturnSeries):
            raise ContractViolationError(
                f"Expected ReturnSeries benchmark, got {type(benchmark).__name__}",
                field="benchmark",
            )
        if trading_days <= 0:
            raise ContractViolationError(
                f"Trading days must be positive, got {trading_days}",
                field="trading_days",
            )

        self.universe = universe
        self.benchmark = benchmark
        self.raw_weights = portfolio.validate_weights(weights, len(universe))
        self.method = VaRMethod.parse(method)
        self.confidence = float(confidence)
        var.z_score(self.confidence)  # validates the range
        self.shock = float(shock)
        self.td = trading_days

        if len(benchmark) != universe.length:
            logger.warning(
                "Benchmark has %d observations, assets have %d; "
                "beta and correlation use the overlapping prefix",
                len(benchmark),
                universe.length,
            )

    # ------------------------------------------------------------------
    # Weights and returns
    # ------------------------------------------------------------------

    def weights(self) -> np.ndarray:
        return portfolio.normalize_weights(self.raw_weights)

    def portfolio_returns(self) -> pd.Series:
        return portfolio.portfolio_returns(self.universe, self.weights())

    # ------------------------------------------------------------------
    # Covariance structure
    # ------------------------------------------------------------------

    def covariance_matrix(self) -> pd.DataFrame:
        """Daily covariance matrix of asset returns."""
        return covariance.covariance_matrix(self.universe)

    def correlation_matrix(self) -> pd.DataFrame:
        return covariance.correlation_matrix(self.universe)

    # ------------------------------------------------------------------
    # Volatility
    # ------------------------------------------------------------------

    def volatility_direct(self) -> float:
        """Annualized volatility of the portfolio return series."""
        return portfolio.volatility_direct(self.portfolio_returns(), self.td)

    def volatility_via_matrix(self) -> float:
        """Annualized volatility from the covariance quadratic form."""
        return portfolio.volatility_via_matrix(
            self.weights(), self.covariance_matrix(), self.td
        )

    # ------------------------------------------------------------------
    # Beta
    # ------------------------------------------------------------------

    def asset_betas(self) -> pd.Series:
        return beta_engine.asset_betas(self.universe, self.benchmark)

    def portfolio_beta(self) -> float:
        return beta_engine.portfolio_beta(self.weights(), self.asset_betas())

    # ------------------------------------------------------------------
    # Value at Risk
    # ------------------------------------------------------------------

    def var_historical(self) -> float:
        return var.var_historical(self.portfolio_returns(), self.confidence)

    def var_parametric(self) -> float:
        return var.var_parametric(self.portfolio_returns(), self.confidence)

    def value_at_risk(self) -> float:
        """One-day VaR by the configured method."""
        return var.value_at_risk(self.portfolio_returns(), self.confidence, self.method)

    # ------------------------------------------------------------------
    # Drawdown and stress
    # ------------------------------------------------------------------

    def drawdown_result(self) -> drawdown.DrawdownResult:
        return drawdown.compute_drawdown(self.portfolio_returns())

    def stress_scenario(self) -> stress.StressScenario:
        return stress.propagate_shock(
            self.universe, self.benchmark, self.weights(), self.shock
        )

    # ------------------------------------------------------------------
    # Full report
    # ------------------------------------------------------------------

    def compute_all(self) -> RiskReport:
        """Compute all risk metrics and return a RiskReport."""
        ids = self.universe.identifiers
        w = self.weights()
        p_returns = portfolio.portfolio_returns(self.universe, w)
        cov = self.covariance_matrix()
        betas = self.asset_betas()
        dd = drawdown.compute_drawdown(p_returns)
        scenario = stress.propagate_shock(self.universe, self.benchmark, w, self.shock)

        report = RiskReport(
            normalized_weights=pd.Series(w, index=ids, name="weight"),
            covariance_matrix=cov,
            correlation_matrix=self.correlation_matrix(),
            portfolio_returns=p_returns,
            volatility_annualized_direct=portfolio.volatility_direct(p_returns, self.td),
            volatility_annualized_matrix=portfolio.volatility_via_matrix(w, cov, self.td),
            asset_betas=betas,
            portfolio_beta=beta_engine.portfolio_beta(w, betas),
            var_estimate=var.value_at_risk(p_returns, self.confidence, self.method),
            var_method=self.method,
            confidence=self.confidence,
            nav_path=dd.nav,
            max_drawdown=dd.max_drawdown,
            stress_shock=self.shock,
            stress_impact=scenario.impact,
            asset_stress_shocks=scenario.asset_shocks,
        )
        logger.debug("Computed risk report: %s", report.to_dict())
        return report


def analyze_portfolio(
    universe: AssetUniverse,
    weights: Sequence[float] | np.ndarray,
    benchmark: ReturnSeries,
    confidence: float = var.DEFAULT_CONFIDENCE,
    method: VaRMethod | str = VaRMethod.HISTORICAL,
    shock: float = DEFAULT_SHOCK,
    trading_days: int = portfolio.TRADING_DAYS,
) -> RiskReport:
    """Run the full analysis for one input tuple."""
    return RiskCalculator(
        universe,
        weights,
        benchmark,
        confidence=confidence,
        method=method,
        shock=shock,
        trading_days=trading_days,
    ).compute_all()
