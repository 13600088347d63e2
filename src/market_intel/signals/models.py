"""Signal data models."""

from __future__ import annotations

from dataclasses import dataclass, field

from market_intel.markets.models import Market, Side
from market_intel.risk.models import PositionRecommendation, RiskLevel

FALLBACK_CONFIDENCE = 0.3
FALLBACK_SUMMARY = "Dados externos não disponíveis"


@dataclass
class ExternalSignals:
    """External evidence about a market, as estimated by the LLM integration.

    Attributes:
        news_intensity: Recent news volume (0-1)
        directional_consensus: Lean of the sources, -1 (NO) to 1 (YES)
        macro_shock: Abrupt moves in relevant indicators (0-1)
        external_probability: Probability of YES implied by the sources (0-1)
        confidence: Confidence in the estimate (0-1)
        key_indicators: Indicators the sources pointed at
        sources: Sources consulted
        summary: Free-text summary
    """

    news_intensity: float | None = None
    directional_consensus: float | None = None
    macro_shock: float | None = None
    external_probability: float | None = None
    confidence: float | None = None
    key_indicators: list[str] = field(default_factory=list)
    sources: list[str] = field(default_factory=list)
    summary: str = ""

    @classmethod
    def fallback(cls, market: Market) -> ExternalSignals:
        """Neutral signals used when the integration cannot answer."""
        return cls(
            news_intensity=0.0,
            directional_consensus=0.0,
            macro_shock=0.0,
            external_probability=market.yes_price if market.yes_price is not None else 0.5,
            confidence=FALLBACK_CONFIDENCE,
            key_indicators=[],
            sources=[],
            summary=FALLBACK_SUMMARY,
        )


@dataclass
class RiskAnalysis:
    """Outcome of the trading risk assistant for one market and side."""

    market: Market
    side: Side
    p_mkt: float
    p_final: float
    external: ExternalSignals
    position: PositionRecommendation
    risk: RiskLevel

    @property
    def has_edge(self) -> bool:
        return float(self.position.edge) > 0
