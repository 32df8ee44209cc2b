"""Tests for the portfolio module."""

import numpy as np
import pandas as pd
import pytest

from risk_engine.covariance import covariance_matrix
from risk_engine.exceptions import ContractViolationError
from risk_engine.portfolio import (
    normalize_weights,
    portfolio_returns,
    volatility_direct,
    volatility_via_matrix,
)
from risk_engine.returns import AssetUniverse, ReturnSeries


def _make_universe(n_days: int = 252) -> AssetUniverse:
    rng = np.random.default_rng(42)
    market = rng.normal(0.0005, 0.012, n_days)
    return AssetUniverse([
        ReturnSeries("MSFT", 1.2 * market + rng.normal(0.0001, 0.012, n_days)),
        ReturnSeries("AAPL", 1.1 * market + rng.normal(0.0001, 0.015, n_days)),
        ReturnSeries("GLD", 0.1 * market + rng.normal(0.0002, 0.009, n_days)),
        ReturnSeries("AGG", -0.05 * market + rng.normal(0.00015, 0.005, n_days)),
    ])


def test_normalize_weights_sum_to_one():
    w = normalize_weights([0.4, 0.4, 0.2, 0.0])
    assert abs(np.sum(w) - 1.0) < 1e-9
    np.testing.assert_allclose(w, [0.4, 0.4, 0.2, 0.0])


def test_normalize_weights_scales_large_raw_weights():
    w = normalize_weights([3.0, 1.0])
    np.testing.assert_allclose(w, [0.75, 0.25])


def test_normalize_weights_many_random_vectors():
    rng = np.random.default_rng(1)
    for _ in range(20):
        raw = rng.uniform(0, 5, size=6)
        assert abs(normalize_weights(raw).sum() - 1.0) < 1e-9


def test_normalize_all_zero_weights_pass_through():
    # Current behavior: raw weights are returned unchanged and do not sum to 1.
    w = normalize_weights([0.0, 0.0, 0.0])
    np.testing.assert_array_equal(w, [0.0, 0.0, 0.0])
    assert w.sum() != 1.0


def test_normalize_does_not_mutate_input():
    raw = np.array([2.0, 2.0])
    normalize_weights(raw)
    np.testing.assert_array_equal(raw, [2.0, 2.0])


def test_negative_weights_raise():
    with pytest.raises(ContractViolationError, match="non-negative"):
        normalize_weights([0.5, -0.1])


def test_non_finite_weights_raise():
    with pytest.raises(ContractViolationError, match="finite"):
        normalize_weights([0.5, float("nan")])


def test_portfolio_returns_weighted_sum():
    universe = AssetUniverse([
        ReturnSeries("A", [0.01, 0.02]),
        ReturnSeries("B", [0.03, -0.01]),
    ])
    pr = portfolio_returns(universe, [0.5, 0.5])
    assert isinstance(pr, pd.Series)
    np.testing.assert_allclose(pr.values, [0.02, 0.005])


def test_portfolio_returns_length_mismatch_raises():
    universe = _make_universe()
    with pytest.raises(ContractViolationError, match="4 assets"):
        portfolio_returns(universe, [0.5, 0.5])


def test_portfolio_returns_ragged_universe_truncates():
    universe = AssetUniverse([
        ReturnSeries("A", [0.01, 0.02, 0.03]),
        ReturnSeries("B", [0.03, -0.01]),
    ])
    pr = portfolio_returns(universe, [0.5, 0.5])
    assert len(pr) == 2
    assert np.all(np.isfinite(pr.values))


def test_volatility_direct_annualizes():
    series = np.array([0.01, -0.01, 0.02, -0.02])
    expected = np.std(series, ddof=1) * np.sqrt(252)
    assert volatility_direct(series) == pytest.approx(expected)


def test_volatility_direct_short_series_is_nan():
    assert np.isnan(volatility_direct([0.01]))


def test_two_volatility_derivations_agree():
    universe = _make_universe()
    w = normalize_weights([1.0, 1.0, 1.0, 1.0])
    direct = volatility_direct(portfolio_returns(universe, w))
    via_matrix = volatility_via_matrix(w, covariance_matrix(universe))
    assert abs(direct - via_matrix) / direct < 1e-6


def test_volatility_via_matrix_single_asset():
    cov = np.array([[0.0004]])
    assert volatility_via_matrix([1.0], cov) == pytest.approx(0.02 * np.sqrt(252))


def test_volatility_via_matrix_custom_trading_days():
    cov = np.array([[0.0004]])
    assert volatility_via_matrix([1.0], cov, trading_days=365) == pytest.approx(
        0.02 * np.sqrt(365)
    )


def test_volatility_via_matrix_shape_mismatch_raises():
    with pytest.raises(ContractViolationError):
        volatility_via_matrix([0.5, 0.5], np.eye(3))
