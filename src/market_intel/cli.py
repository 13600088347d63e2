"""Typer CLI: market-intel rank, size, analyze, risk-level."""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.logging import RichHandler

from market_intel.markets.models import Market, Side

app = typer.Typer(
    name="market-intel",
    help="Prediction market placement scoring and risk-managed position sizing",
    no_args_is_help=True,
)
console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _load(path: Path):
    from market_intel.markets.loader import load_markets

    try:
        return load_markets(path)
    except FileNotFoundError:
        console.print(f"[red]File not found: {path}[/red]")
        raise typer.Exit(code=1)
    except ValueError as exc:
        console.print(f"[red]Could not read markets: {exc}[/red]")
        raise typer.Exit(code=1)


def _find_market(markets: list[Market], market_id: str) -> Market | None:
    for m in markets:
        if m.market_id == market_id:
            return m
    matches = [m for m in markets if m.market_id.startswith(market_id)]
    if len(matches) > 1:
        ids = ", ".join(m.market_id for m in matches)
        console.print(f"[red]Market prefix '{market_id}' is ambiguous: {ids}[/red]")
        raise typer.Exit(code=1)
    return matches[0] if matches else None


@app.command()
def rank(
    markets_file: Path = typer.Argument(help="JSON file with market snapshots"),
    top: Optional[int] = typer.Option(None, "--top", "-n", help="Show only the best N markets"),
    output: str = typer.Option("table", "--output", "-o", help="Output format: table, json"),
) -> None:
    """Rank markets by ad-theme score for promotional placement."""
    from market_intel.scoring.ad_theme import rank_markets
    from market_intel.signals.formatters import format_ranking_json, format_ranking_table

    markets, signals, perf = _load(markets_file)
    ranked = rank_markets(markets, signals=signals, perf=perf)
    if top is not None:
        ranked = ranked[:top]

    if output == "json":
        console.print_json(format_ranking_json(ranked))
    else:
        format_ranking_table(ranked, console)


@app.command()
def size(
    bankroll: float = typer.Option(..., "--bankroll", "-b", help="Available balance (BRL)"),
    price: float = typer.Option(..., "--price", "-p", help="Contract price (0-1)"),
    prob: float = typer.Option(..., "--prob", "-q", help="Your probability of the contract paying out"),
    confidence: Optional[float] = typer.Option(
        None, "--confidence", "-c",
        help="Confidence in your probability (0-1), default from settings",
    ),
    output: str = typer.Option("table", "--output", "-o", help="Output format: table, json"),
) -> None:
    """Recommend a fractional-Kelly stake for one contract."""
    from market_intel.config import get_settings
    from market_intel.risk.sizing import InvalidPriceError, calculate_risk_managed_position, get_risk_level
    from market_intel.signals.formatters import format_position_json, format_position_table

    settings = get_settings()
    try:
        position = calculate_risk_managed_position(
            bankroll,
            price,
            prob,
            confidence if confidence is not None else settings.default_confidence,
            kelly_multiplier=settings.kelly_multiplier,
            f_cap=settings.kelly_cap,
        )
    except InvalidPriceError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(code=1)

    risk = get_risk_level(position.kelly_fraction_pct)
    if output == "json":
        console.print_json(format_position_json(position, risk))
    else:
        format_position_table(position, risk, console)


@app.command()
def analyze(
    markets_file: Path = typer.Argument(help="JSON file with market snapshots"),
    market_id: str = typer.Argument(help="Market ID (or unique prefix) to analyze"),
    bankroll: float = typer.Option(..., "--bankroll", "-b", help="Available balance (BRL)"),
    side: Side = typer.Option(Side.YES, "--side", "-s", help="Contract side to buy"),
    offline: bool = typer.Option(False, "--offline", help="Skip the LLM and use neutral signals"),
    output: str = typer.Option("table", "--output", "-o", help="Output format: table, json"),
) -> None:
    """Blend external signals into a risk-managed recommendation for one market."""
    from market_intel.risk.sizing import InvalidPriceError
    from market_intel.signals.formatters import format_analysis_json, format_analysis_table

    markets, _, _ = _load(markets_file)
    market = _find_market(markets, market_id)
    if market is None:
        console.print(f"[red]Market '{market_id}' not found[/red]")
        raise typer.Exit(code=1)

    async def _run():
        from market_intel.signals.assistant import analyze_market

        return await analyze_market(market, bankroll, side=side, offline=offline)

    try:
        analysis = asyncio.run(_run())
    except InvalidPriceError as exc:
        console.print(f"[red]Market '{market.market_id}' cannot be sized: {exc}[/red]")
        raise typer.Exit(code=1)

    if output == "json":
        console.print_json(format_analysis_json(analysis))
    else:
        format_analysis_table(analysis, console)


@app.command(name="risk-level")
def risk_level(
    kelly_fraction_pct: str = typer.Argument(help="Bankroll fraction in percent, e.g. 1.25"),
) -> None:
    """Classify a bankroll percentage into a risk bucket."""
    from market_intel.risk.sizing import get_risk_level

    level = get_risk_level(kelly_fraction_pct)
    console.print(f"{level.level} ({level.label})")


if __name__ == "__main__":
    app()
