"""Command-line interface for the Portfolio Risk Engine."""

from __future__ import annotations

import argparse
import logging
import sys

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.table import Table

from risk_engine.data_loader import load_returns
from risk_engine.exceptions import ContractViolationError
from risk_engine.portfolio import TRADING_DAYS
from risk_engine.risk_metrics import DEFAULT_SHOCK, RiskCalculator, RiskReport
from risk_engine.var import DEFAULT_CONFIDENCE, VaRMethod


console = Console()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="risk-engine",
        description="Portfolio volatility, beta, VaR, drawdown and stress analytics.",
    )

    parser.add_argument(
        "--returns", "-r",
        type=str,
        required=True,
        help="Path to CSV with one column per asset plus the benchmark",
    )
    parser.add_argument(
        "--benchmark", "-b",
        type=str,
        default="SPY",
        help="Benchmark column name (default: SPY)",
    )
    parser.add_argument(
        "--prices",
        action="store_true",
        help="Treat the CSV columns as closing prices instead of returns",
    )
    parser.add_argument(
        "--weights", "-w",
        type=float,
        nargs="+",
        default=None,
        help="Raw asset weights in column order (default: equal weights)",
    )
    parser.add_argument(
        "--confidence", "-c",
        type=float,
        default=DEFAULT_CONFIDENCE,
        help="VaR confidence level: 0.90, 0.95 or 0.99 (default: 0.95)",
    )
    parser.add_argument(
        "--method", "-m",
        type=str,
        choices=[m.value for m in VaRMethod],
        default=VaRMethod.HISTORICAL.value,
        help="VaR method (default: historical)",
    )
    parser.add_argument(
        "--shock", "-s",
        type=float,
        default=DEFAULT_SHOCK,
        help="One-day benchmark shock for the stress estimate (default: -0.07)",
    )
    parser.add_argument(
        "--trading-days",
        type=int,
        default=TRADING_DAYS,
        help="Trading days per year for annualization (default: 252)",
    )
    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable debug logging",
    )

    return parser


def configure_logging(verbose: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
        force=True,
    )


def _pct(value: float | None) -> str:
    return "N/A" if value is None else f"{value * 100:.2f}%"


def print_report(report: RiskReport) -> None:
    """Render a RiskReport as rich tables."""
    summary = report.to_dict()

    holdings = Table(title="Portfolio Holdings")
    holdings.add_column("Asset", style="cyan")
    holdings.add_column("Weight", justify="right")
    holdings.add_column("Beta", justify="right")
    holdings.add_column("Stress Shock", justify="right")
    for asset, weight in summary["Weights"].items():
        b = summary["Betas"][asset]
        holdings.add_row(
            asset,
            _pct(weight),
            "N/A" if b is None else f"{b:.2f}",
            _pct(summary["Stress_Shocks"][asset]),
        )
    console.print(holdings)

    metrics = Table(title="Risk Metrics")
    metrics.add_column("Metric", style="cyan")
    metrics.add_column("Value", justify="right")
    metrics.add_row("Volatility (series, ann.)", _pct(summary["Volatility_Direct"]))
    metrics.add_row("Volatility (matrix, ann.)", _pct(summary["Volatility_Matrix"]))
    beta = summary["Portfolio_Beta"]
    metrics.add_row("Portfolio Beta", "N/A" if beta is None else f"{beta:.4f}")
    metrics.add_row(
        f"VaR {report.confidence * 100:.0f}% 1-day ({report.var_method.value})",
        _pct(summary["VaR"]),
    )
    metrics.add_row("Max Drawdown", _pct(summary["Max_Drawdown"]))
    nav = summary["Final_NAV"]
    metrics.add_row("Final NAV", "N/A" if nav is None else f"{nav:.4f}")
    console.print(metrics)

    corr = report.correlation_matrix
    corr_table = Table(title="Correlation Matrix")
    corr_table.add_column("", style="cyan")
    for col in corr.columns:
        corr_table.add_column(str(col), justify="right")
    for asset, row in corr.iterrows():
        corr_table.add_row(str(asset), *(f"{v:.2f}" for v in row.values))
    console.print(corr_table)

    console.print(
        f"Stress: benchmark shock {_pct(summary['Stress_Shock'])} -> "
        f"estimated portfolio impact [bold]{_pct(summary['Stress_Impact'])}[/bold] "
        "[dim](linear single-factor approximation)[/dim]"
    )


def run(args: argparse.Namespace) -> RiskReport:
    """Execute the full analysis pipeline."""
    configure_logging(args.verbose)
    console.print(Panel.fit(
        "[bold blue]Portfolio Risk Engine[/bold blue]\n"
        "Volatility, beta, VaR, drawdown and stress analytics",
        border_style="blue",
    ))

    # ------------------------------------------------------------------ Load data
    console.print("\n[bold]Loading data...[/bold]")
    try:
        universe, benchmark = load_returns(args.returns, args.benchmark, prices=args.prices)
    except (FileNotFoundError, ValueError) as exc:
        console.print(f"[red]Error loading data:[/red] {exc}")
        sys.exit(1)

    console.print(f"  Assets: {', '.join(universe.identifiers)}")
    console.print(f"  Benchmark: {benchmark.identifier}")
    console.print(f"  Observations: {universe.length}")

    # ----------------------------------------------------------- Risk calculations
    weights = args.weights if args.weights is not None else [1.0] * len(universe)
    console.print("\n[bold]Computing risk metrics...[/bold]")
    try:
        calc = RiskCalculator(
            universe,
            weights,
            benchmark,
            confidence=args.confidence,
            method=args.method,
            shock=args.shock,
            trading_days=args.trading_days,
        )
        report = calc.compute_all()
    except ContractViolationError as exc:
        console.print(f"[red]Invalid input:[/red] {exc}")
        sys.exit(1)

    print_report(report)
    console.print("\n[bold green]Analysis complete.[/bold green]")
    return report


def main() -> None:
    parser = build_parser()
    args = parser.parse_args()
    run(args)


if __name__ == "__main__":
    main()
