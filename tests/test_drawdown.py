"""Tests for the drawdown module."""

import numpy as np
import pytest

from risk_engine.drawdown import (
    DrawdownResult,
    compute_drawdown,
    drawdown_series,
    max_drawdown,
    nav_path,
)


def test_nav_path_compounds_from_one():
    np.testing.assert_allclose(nav_path([0.1, -0.5, 0.2]), [1.1, 0.55, 0.66])


def test_nav_path_empty():
    assert nav_path([]).size == 0


def test_max_drawdown_peak_to_trough():
    assert max_drawdown([0.1, -0.5, 0.2]) == pytest.approx(0.5)


def test_max_drawdown_first_point_is_not_a_drawdown():
    assert max_drawdown([-0.1]) == 0.0


def test_max_drawdown_monotonic_gains_is_zero():
    assert max_drawdown([0.01, 0.02, 0.005]) == 0.0


def test_max_drawdown_empty_is_zero():
    assert max_drawdown([]) == 0.0


def test_max_drawdown_new_peak_resets():
    # peak 1.1, trough 0.99 (10%), then new peak 1.287 and trough 1.2227 (5%)
    returns = [0.1, -0.1, 0.3, -0.05]
    assert max_drawdown(returns) == pytest.approx(0.1)


def test_max_drawdown_bounded():
    rng = np.random.default_rng(11)
    for _ in range(10):
        returns = rng.uniform(-0.99, 0.5, 100)
        mdd = max_drawdown(returns)
        assert 0.0 <= mdd <= 1.0


def test_drawdown_series_non_negative():
    rng = np.random.default_rng(12)
    dd = drawdown_series(rng.normal(0.0, 0.02, 252))
    assert dd.shape == (252,)
    assert np.all(dd >= 0.0)


def test_compute_drawdown_result():
    result = compute_drawdown([0.1, -0.5, 0.2])
    assert isinstance(result, DrawdownResult)
    np.testing.assert_allclose(result.nav, [1.1, 0.55, 0.66])
    np.testing.assert_allclose(result.drawdowns, [0.0, 0.5, 0.4])
    assert result.max_drawdown == pytest.approx(0.5)
