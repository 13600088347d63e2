"""Market data models."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class Side(Enum):
    """Contract side a trader is buying."""

    YES = "yes"
    NO = "no"


@dataclass
class Market:
    """Snapshot of a binary prediction market.

    Every field is optional; scoring functions apply their own neutral
    defaults when a value is absent (None). An explicit 0 is a real value.
    """

    market_id: str = ""
    title: str | None = None
    category: str | None = None
    yes_price: float | None = None  # 0-1, market-implied probability of YES
    no_price: float | None = None
    volume_24h: float | None = None
    volume_7d_avg: float | None = None
    volume_total: float | None = None  # lifetime traded volume (BRL)
    volatility_24h: float | None = None
    closing_date: datetime | None = None

    def side_price(self, side: Side) -> float:
        """Contract price for *side*; NO falls back to 1 - YES."""
        yes = self.yes_price if self.yes_price is not None else 0.5
        if side is Side.YES:
            return yes
        if self.no_price is not None:
            return self.no_price
        return 1.0 - yes


@dataclass
class PerformanceStats:
    """Historical ad-campaign performance for a market theme."""

    conversion_rate: float | None = None  # 0-1
    cpa_normalized: float | None = None  # 0-1, cost per acquisition scaled to the campaign range
