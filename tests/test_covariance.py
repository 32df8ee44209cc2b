"""Tests for the covariance module."""

import numpy as np
import pandas as pd

from risk_engine.covariance import correlation_matrix, covariance_matrix
from risk_engine.returns import AssetUniverse, ReturnSeries


def _make_universe(n_days: int = 120) -> AssetUniverse:
    rng = np.random.default_rng(3)
    base = rng.normal(0, 0.01, n_days)
    return AssetUniverse([
        ReturnSeries("MSFT", base + rng.normal(0, 0.01, n_days)),
        ReturnSeries("AAPL", base + rng.normal(0, 0.02, n_days)),
        ReturnSeries("GLD", rng.normal(0, 0.009, n_days)),
        ReturnSeries("AGG", rng.normal(0, 0.005, n_days)),
    ])


def test_covariance_matrix_shape_and_labels():
    cov = covariance_matrix(_make_universe())
    assert isinstance(cov, pd.DataFrame)
    assert cov.shape == (4, 4)
    assert list(cov.index) == ["MSFT", "AAPL", "GLD", "AGG"]
    assert list(cov.columns) == ["MSFT", "AAPL", "GLD", "AGG"]


def test_covariance_matrix_symmetric():
    cov = covariance_matrix(_make_universe()).values
    for i in range(4):
        for j in range(4):
            assert abs(cov[i, j] - cov[j, i]) < 1e-15


def test_covariance_matrix_matches_numpy():
    universe = _make_universe()
    expected = np.cov(universe.to_frame().values, rowvar=False)
    np.testing.assert_allclose(covariance_matrix(universe).values, expected, rtol=1e-10)


def test_correlation_diagonal_is_one():
    corr = correlation_matrix(_make_universe())
    for i in range(4):
        assert abs(corr.iloc[i, i] - 1.0) < 1e-12


def test_correlation_bounded():
    corr = correlation_matrix(_make_universe()).values
    assert np.all(corr <= 1.0 + 1e-12)
    assert np.all(corr >= -1.0 - 1e-12)


def test_correlation_constant_asset_is_nan():
    universe = AssetUniverse([
        ReturnSeries("A", [0.01, -0.02, 0.03, 0.0]),
        ReturnSeries("FLAT", [0.25, 0.25, 0.25, 0.25]),
    ])
    corr = correlation_matrix(universe)
    assert np.isnan(corr.loc["FLAT", "FLAT"])
    assert np.isnan(corr.loc["A", "FLAT"])
    assert abs(corr.loc["A", "A"] - 1.0) < 1e-12
