"""Trading risk assistant.

Wires together: external signals -> probability blend -> position sizing ->
risk classification, for one market and contract side.
"""

from __future__ import annotations

import logging

from market_intel.common.types import LLMInvoker
from market_intel.config import get_settings
from market_intel.markets.models import Market, Side
from market_intel.risk.sizing import calculate_risk_managed_position, get_risk_level
from market_intel.scoring.blend import blend_probability, liquidity_from_volume
from market_intel.signals.external import fetch_external_signals
from market_intel.signals.models import ExternalSignals, RiskAnalysis

logger = logging.getLogger(__name__)

# Confidence assumed when the integration does not report one
_UNREPORTED_CONFIDENCE = 0.5


async def analyze_market(
    market: Market,
    bankroll_brl: float,
    side: Side = Side.YES,
    invoke: LLMInvoker | None = None,
    offline: bool = False,
) -> RiskAnalysis:
    """Recommend a position on *side* of *market* for *bankroll_brl*.

    With ``offline=True`` the integration is skipped and fallback signals
    are used. The external probability always refers to YES, for either side.
    """
    settings = get_settings()
    p_mkt = market.side_price(side)

    if offline:
        external = ExternalSignals.fallback(market)
    else:
        external = await fetch_external_signals(market, invoke)

    consensus = external.directional_consensus or 0.0
    news_signal = consensus if side is Side.YES else -consensus

    p_ext = external.external_probability
    p_final = blend_probability(
        p_mkt,
        p_ext if p_ext is not None else 0.5,
        news_signal,
        liquidity_from_volume(market.volume_total, settings.liquidity_scale),
    )

    confidence = external.confidence
    position = calculate_risk_managed_position(
        bankroll_brl,
        p_mkt,
        p_final,
        confidence if confidence is not None else _UNREPORTED_CONFIDENCE,
        kelly_multiplier=settings.kelly_multiplier,
        f_cap=settings.kelly_cap,
    )
    risk = get_risk_level(position.kelly_fraction_pct)

    logger.info(
        "Market %s %s: p_mkt=%.3f p_final=%.3f stake=%.2f risk=%s",
        market.market_id or market.title, side.value, p_mkt, p_final,
        position.stake_recommended_brl, risk.level,
    )

    return RiskAnalysis(
        market=market,
        side=side,
        p_mkt=p_mkt,
        p_final=p_final,
        external=external,
        position=position,
        risk=risk,
    )
