"""Load asset and benchmark return series from CSV files."""

from __future__ import annotations

from pathlib import Path

import pandas as pd

from risk_engine.returns import AssetUniverse, ReturnSeries


def load_returns(
    path: str | Path,
    benchmark: str = "SPY",
    prices: bool = False,
) -> tuple[AssetUniverse, ReturnSeries]:
    """
    Build an asset universe and benchmark series from one CSV file.

    Args:
        path: CSV with an optional 'date' column and one column per asset,
            plus the benchmark column.
        benchmark: Name of the benchmark column.
        prices: Treat the columns as closing prices and convert them to
            daily simple returns.

    Returns:
        (universe, benchmark_series), assets in file column order.
    """
    frame = load_return_frame(path, prices=prices)
    if benchmark not in frame.columns:
        raise ValueError(f"Returns CSV missing benchmark column: {benchmark!r}")
    assets = [c for c in frame.columns if c != benchmark]
    if not assets:
        raise ValueError("Returns CSV has no asset columns besides the benchmark")

    universe = AssetUniverse([ReturnSeries(str(c), frame[c].to_numpy()) for c in assets])
    return universe, ReturnSeries(benchmark, frame[benchmark].to_numpy())


def load_return_frame(path: str | Path, prices: bool = False) -> pd.DataFrame:
    """Load a returns (or prices) CSV into a DataFrame of daily returns."""
    df = _read_csv(path)
    if "date" in df.columns:
        df["date"] = pd.to_datetime(df["date"])
        df = df.sort_values("date").reset_index(drop=True).drop(columns=["date"])
    non_numeric = [c for c in df.columns if not pd.api.types.is_numeric_dtype(df[c])]
    if non_numeric:
        raise ValueError(f"Non-numeric columns in CSV: {non_numeric}")
    if prices:
        return returns_from_prices(df)
    return df


def returns_from_prices(prices: pd.DataFrame) -> pd.DataFrame:
    """Daily simple returns from closing prices; the first row is dropped."""
    return prices.pct_change().dropna().reset_index(drop=True)


def _read_csv(path: str | Path) -> pd.DataFrame:
    """Read a CSV, raising a clear error if the file is missing."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Data file not found: {path}")
    return pd.read_csv(path)
