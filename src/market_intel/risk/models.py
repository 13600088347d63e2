"""Position sizing data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PositionRecommendation:
    """Recommended stake for one binary contract purchase.

    Attributes:
        q_adjusted: Trader probability shrunk toward the contract price
        stake_recommended_brl: Bankroll share to commit (BRL)
        shares: Whole contracts affordable with the stake (rounded down)
        kelly_fraction_pct: Applied bankroll fraction in percent, two decimals
        max_loss_brl: Cost of the shares, lost if the contract settles at 0
        max_gain_brl: Profit if the contract settles at 1
        expected_value_brl: shares * (q_adjusted - price)
        roi_pct: max_gain / max_loss in whole percent (0 when nothing is bought)
        edge: (q_adjusted - price) in percentage points, one decimal
    """

    q_adjusted: float
    stake_recommended_brl: float
    shares: int
    kelly_fraction_pct: str
    max_loss_brl: float
    max_gain_brl: float
    expected_value_brl: float
    roi_pct: int
    edge: str


@dataclass(frozen=True)
class RiskLevel:
    """Qualitative risk bucket with its pt-BR label and display color token."""

    level: str
    label: str
    color: str


VERY_LOW = RiskLevel("very_low", "Muito Baixo", "emerald")
LOW = RiskLevel("low", "Baixo", "green")
MODERATE = RiskLevel("moderate", "Moderado", "yellow")
HIGH = RiskLevel("high", "Alto", "rose")
