"""Fractional-Kelly position sizing and risk classification."""

from __future__ import annotations

import math

from market_intel.risk.models import HIGH, LOW, MODERATE, VERY_LOW, PositionRecommendation, RiskLevel

# Quarter-Kelly, never more than 3% of bankroll on one position
KELLY_MULTIPLIER = 0.25
KELLY_CAP = 0.03

# Upper bounds (percent of bankroll) of each risk bucket
_RISK_THRESHOLDS: tuple[tuple[float, RiskLevel], ...] = (
    (0.5, VERY_LOW),
    (1.5, LOW),
    (3.0, MODERATE),
)


class InvalidPriceError(ValueError):
    """Contract price outside the open interval (0, 1)."""


def _round_half_up(x: float) -> int:
    return math.floor(x + 0.5)


def calculate_risk_managed_position(
    bankroll_brl: float,
    price_c: float,
    q_final: float,
    confidence: float = 0.7,
    kelly_multiplier: float = KELLY_MULTIPLIER,
    f_cap: float = KELLY_CAP,
) -> PositionRecommendation:
    """Size a YES-style purchase of a contract priced at *price_c*.

    The trader's probability *q_final* is first shrunk toward the price in
    proportion to (1 - confidence). The binary Kelly fraction for payout
    odds b = (1 - price) / price is then scaled by *kelly_multiplier*,
    capped at *f_cap* and floored at 0.

    Args:
        bankroll_brl: Available balance (BRL)
        price_c: Contract price, strictly between 0 and 1
        q_final: Trader's probability that the contract pays out
        confidence: Trust in q_final (0-1)
        kelly_multiplier: Fraction of full Kelly to apply
        f_cap: Absolute ceiling on the bankroll fraction

    Raises:
        InvalidPriceError: if price_c is not strictly between 0 and 1
    """
    if not 0.0 < price_c < 1.0:
        raise InvalidPriceError(f"price_c must be in (0, 1), got {price_c}")

    q_adj = confidence * q_final + (1 - confidence) * price_c

    b = (1 - price_c) / price_c
    f_kelly = q_adj - (1 - q_adj) / b

    f = max(0.0, min(kelly_multiplier * f_kelly, f_cap))

    stake = f * bankroll_brl
    shares = math.floor(stake / price_c)

    max_loss = shares * price_c
    max_gain = shares * (1 - price_c)
    expected_value = shares * (q_adj - price_c)

    roi_pct = _round_half_up(max_gain / max_loss * 100) if max_loss > 0 else 0

    return PositionRecommendation(
        q_adjusted=q_adj,
        stake_recommended_brl=stake,
        shares=shares,
        kelly_fraction_pct=f"{f * 100:.2f}",
        max_loss_brl=max_loss,
        max_gain_brl=max_gain,
        expected_value_brl=expected_value,
        roi_pct=roi_pct,
        edge=f"{(q_adj - price_c) * 100:.1f}",
    )


def get_risk_level(kelly_fraction_pct: str | float) -> RiskLevel:
    """Bucket a bankroll percentage into a risk level.

    Thresholds: < 0.5 very low, < 1.5 low, < 3.0 moderate, otherwise high.
    Input that does not parse as a number, or parses to NaN, is treated as
    high risk.
    """
    try:
        kf = float(kelly_fraction_pct)
    except (TypeError, ValueError):
        return HIGH

    if math.isnan(kf):
        return HIGH

    for upper, level in _RISK_THRESHOLDS:
        if kf < upper:
            return level
    return HIGH
