"""
Portfolio Risk Engine - volatility, beta, VaR, drawdown and stress analytics.

Pure computation over a set of asset return series, a benchmark series and a
weight vector: covariance and correlation structure, annualized volatility,
per-asset and portfolio beta, historical and variance-covariance Value at
Risk, NAV path with maximum drawdown, and a one-day linear stress estimate.
"""

__version__ = "1.0.0"
__author__ = "Taofik Bishi"
