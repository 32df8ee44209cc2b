"""Tests for the command-line interface."""

import numpy as np
import pandas as pd
import pytest

from risk_engine.cli import build_parser, run
from risk_engine.risk_metrics import RiskReport
from risk_engine.var import VaRMethod


def _write_returns(tmp_path, n_days: int = 60):
    rng = np.random.default_rng(17)
    market = rng.normal(0.0005, 0.012, n_days)
    path = tmp_path / "returns.csv"
    pd.DataFrame({
        "MSFT": 1.2 * market + rng.normal(0, 0.01, n_days),
        "AAPL": 1.1 * market + rng.normal(0, 0.012, n_days),
        "GLD": rng.normal(0.0002, 0.009, n_days),
        "AGG": rng.normal(0.00015, 0.005, n_days),
        "SPY": market,
    }).to_csv(path, index=False)
    return path


def test_parser_defaults():
    args = build_parser().parse_args(["--returns", "r.csv"])
    assert args.benchmark == "SPY"
    assert args.confidence == 0.95
    assert args.method == "historical"
    assert args.shock == -0.07
    assert args.trading_days == 252
    assert args.weights is None


def test_parser_requires_returns():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])


def test_run_full_pipeline(tmp_path):
    path = _write_returns(tmp_path)
    args = build_parser().parse_args([
        "--returns", str(path),
        "--weights", "0.4", "0.4", "0.2", "0",
        "--confidence", "0.99",
        "--method", "variance-covariance",
    ])
    report = run(args)
    assert isinstance(report, RiskReport)
    assert report.var_method is VaRMethod.VARIANCE_COVARIANCE
    assert report.normalized_weights["AGG"] == 0.0


def test_run_defaults_to_equal_weights(tmp_path):
    path = _write_returns(tmp_path)
    report = run(build_parser().parse_args(["--returns", str(path)]))
    np.testing.assert_allclose(report.normalized_weights.values, [0.25] * 4)


def test_run_missing_file_exits(tmp_path):
    args = build_parser().parse_args(["--returns", str(tmp_path / "missing.csv")])
    with pytest.raises(SystemExit) as exc:
        run(args)
    assert exc.value.code == 1


def test_run_bad_weights_exits(tmp_path):
    path = _write_returns(tmp_path)
    args = build_parser().parse_args(["--returns", str(path), "--weights", "1", "1"])
    with pytest.raises(SystemExit) as exc:
        run(args)
    assert exc.value.code == 1
