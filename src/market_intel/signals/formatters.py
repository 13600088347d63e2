"""Output formatters: Rich tables and JSON."""

from __future__ import annotations

import json
from dataclasses import asdict
from datetime import datetime, timezone

from rich.console import Console
from rich.table import Table

from market_intel.common.money import format_brl
from market_intel.risk.models import PositionRecommendation, RiskLevel
from market_intel.scoring.ad_theme import RankedMarket
from market_intel.signals.models import RiskAnalysis

# Rich styles for RiskLevel color tokens
_RISK_STYLES = {
    "emerald": "bright_green",
    "green": "green",
    "yellow": "yellow",
    "rose": "red",
}


def _risk_markup(risk: RiskLevel) -> str:
    style = _RISK_STYLES.get(risk.color, "white")
    return f"[{style}]{risk.label}[/{style}]"


def format_ranking_table(ranked: list[RankedMarket], console: Console | None = None) -> None:
    """Print ranked markets as a Rich table."""
    if console is None:
        console = Console()

    if not ranked:
        console.print("[yellow]No markets to rank.[/yellow]")
        return

    table = Table(
        title="Ad Placement Ranking",
        caption=f"Scored at {datetime.now(timezone.utc).strftime('%Y-%m-%d %H:%M UTC')}",
        show_lines=True,
    )
    table.add_column("#", justify="right", width=3)
    table.add_column("Score", justify="right", width=6)
    table.add_column("ID", width=12)
    table.add_column("Category", width=12)
    table.add_column("YES", justify="right", width=5)
    table.add_column("Closes", width=10)
    table.add_column("Title", width=50, no_wrap=False)

    for r in ranked:
        m = r.market
        table.add_row(
            str(r.rank),
            f"{r.score:.3f}",
            m.market_id[:12],
            (m.category or "")[:12],
            f"{m.yes_price:.0%}" if m.yes_price is not None else "?",
            m.closing_date.strftime("%Y-%m-%d") if m.closing_date else "",
            (m.title or "")[:80],
        )

    console.print(table)


def format_ranking_json(ranked: list[RankedMarket]) -> str:
    return json.dumps(
        [
            {
                "rank": r.rank,
                "score": round(r.score, 6),
                "market_id": r.market.market_id,
                "title": r.market.title,
                "category": r.market.category,
                "yes_price": r.market.yes_price,
            }
            for r in ranked
        ],
        indent=2,
        ensure_ascii=False,
    )


def format_position_table(
    position: PositionRecommendation,
    risk: RiskLevel,
    console: Console | None = None,
) -> None:
    """Print a position recommendation as a two-column Rich table."""
    if console is None:
        console = Console()

    table = Table(title="Position Recommendation", show_header=False)
    table.add_column("Field", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Risk", _risk_markup(risk))
    table.add_row("Adjusted probability", f"{position.q_adjusted:.1%}")
    table.add_row("Edge", f"{position.edge} pp")
    table.add_row("Kelly fraction", f"{position.kelly_fraction_pct}%")
    table.add_row("Stake", format_brl(position.stake_recommended_brl))
    table.add_row("Contracts", str(position.shares))
    table.add_row("Max loss", format_brl(position.max_loss_brl))
    table.add_row("Max gain", format_brl(position.max_gain_brl))
    ev_color = "green" if position.expected_value_brl >= 0 else "red"
    ev_sign = "+" if position.expected_value_brl >= 0 else ""
    table.add_row(
        "Expected value",
        f"[{ev_color}]{ev_sign}{format_brl(position.expected_value_brl)}[/{ev_color}]",
    )
    table.add_row("ROI if right", f"{position.roi_pct}%")

    console.print(table)


def position_to_dict(position: PositionRecommendation, risk: RiskLevel) -> dict:
    return {**asdict(position), "risk": asdict(risk)}


def format_position_json(position: PositionRecommendation, risk: RiskLevel) -> str:
    return json.dumps(position_to_dict(position, risk), indent=2, ensure_ascii=False)


def format_analysis_table(analysis: RiskAnalysis, console: Console | None = None) -> None:
    """Print a full risk analysis: signals, blend and position."""
    if console is None:
        console = Console()

    ext = analysis.external
    console.print(f"[bold]{analysis.market.title or analysis.market.market_id}[/bold]")
    console.print(f"  Side: {analysis.side.value.upper()}")
    console.print(f"  Market price:   {analysis.p_mkt:.1%}")
    if ext.external_probability is not None:
        console.print(f"  External prob:  {ext.external_probability:.1%}")
    console.print(f"  Blended prob:   [bold]{analysis.p_final:.1%}[/bold]")
    if ext.confidence is not None:
        console.print(f"  Confidence:     {ext.confidence:.0%}")
    console.print(
        f"  News {ext.news_intensity or 0:.2f} | "
        f"Consensus {ext.directional_consensus or 0:+.2f} | "
        f"Macro shock {ext.macro_shock or 0:.2f}"
    )
    if ext.summary:
        console.print(f"  [dim]{ext.summary}[/dim]")
    if ext.sources:
        console.print(f"  Sources: {', '.join(ext.sources)}")

    if analysis.has_edge:
        console.print(f"\n  [bold green]Statistical edge of {analysis.position.edge}% detected[/bold green]")
    else:
        console.print("\n  [dim]No positive edge at this price[/dim]")

    format_position_table(analysis.position, analysis.risk, console)


def format_analysis_json(analysis: RiskAnalysis) -> str:
    return json.dumps(
        {
            "market_id": analysis.market.market_id,
            "side": analysis.side.value,
            "p_mkt": analysis.p_mkt,
            "p_final": analysis.p_final,
            "external": asdict(analysis.external),
            "position": position_to_dict(analysis.position, analysis.risk),
        },
        indent=2,
        ensure_ascii=False,
    )
