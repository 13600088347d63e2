"""Ad-theme score: which markets deserve promotional placement.

The score is a fixed-weight sum of contest (entropy), volume growth,
volatility, settlement urgency, external news/shock signals and historical
campaign performance. Only the final sum is clamped to [0, 1]; individual
terms (urgency for overdue markets, unnormalized volume growth and
volatility) may exceed their nominal range.
"""

from __future__ import annotations

import logging
import math
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import datetime

import numpy as np

from market_intel.markets.models import Market, PerformanceStats
from market_intel.scoring.transforms import calculate_entropy, calculate_urgency, days_until
from market_intel.signals.models import ExternalSignals

logger = logging.getLogger(__name__)

# Calibrated term weights
W_ENTROPY = 0.22
W_VOLUME_GROWTH = 0.18
W_VOLATILITY = 0.12
W_URGENCY = 0.18
W_NEWS = 0.12
W_SHOCK = 0.08
W_CONVERSION = 0.07
W_CPA = 0.03

# Markets without a closing date are treated as settling in a month
DEFAULT_DAYS_TO_SETTLEMENT = 30.0


def _or(value: float | None, default: float) -> float:
    return default if value is None else value


def calculate_ad_theme_score(
    market: Market,
    external: ExternalSignals | None = None,
    perf: PerformanceStats | None = None,
    now: datetime | None = None,
) -> float:
    """Score a market in [0, 1] for promotional placement."""
    external = external or ExternalSignals()
    perf = perf or PerformanceStats()

    entropy = calculate_entropy(_or(market.yes_price, 0.5))

    vol_24h = _or(market.volume_24h, 0.0)
    vol_7d_avg = _or(market.volume_7d_avg, 1.0)
    # Floor the log argument: negative volumes must not leave the log domain
    vol_growth = math.log(max(1 + vol_24h / max(vol_7d_avg, 1e-9), 1e-12)) / 5

    volatility = _or(market.volatility_24h, 0.0)

    if market.closing_date is not None:
        days = days_until(market.closing_date, now)
    else:
        days = DEFAULT_DAYS_TO_SETTLEMENT
    urgency = calculate_urgency(days)

    news = _or(external.news_intensity, 0.0)
    shock = _or(external.macro_shock, 0.0)

    conv = _or(perf.conversion_rate, 0.0)
    cpa = _or(perf.cpa_normalized, 0.5)

    score = (
        W_ENTROPY * entropy
        + W_VOLUME_GROWTH * vol_growth
        + W_VOLATILITY * volatility
        + W_URGENCY * urgency
        + W_NEWS * news
        + W_SHOCK * shock
        + W_CONVERSION * conv
        + W_CPA * (1 - cpa)
    )

    return min(1.0, max(0.0, score))


@dataclass(frozen=True)
class RankedMarket:
    """A market with its placement score and 1-based rank."""

    rank: int
    score: float
    market: Market


def rank_markets(
    markets: Sequence[Market],
    signals: Mapping[str, ExternalSignals] | None = None,
    perf: Mapping[str, PerformanceStats] | None = None,
    now: datetime | None = None,
) -> list[RankedMarket]:
    """Score *markets* and order them best first.

    *signals* and *perf* are looked up by ``market_id``; markets without an
    entry are scored with neutral defaults. Equal scores keep input order.
    """
    if not markets:
        return []

    signals = signals or {}
    perf = perf or {}

    scores = np.array([
        calculate_ad_theme_score(
            m,
            external=signals.get(m.market_id),
            perf=perf.get(m.market_id),
            now=now,
        )
        for m in markets
    ])
    # Stable sort on negated scores: descending, ties in input order
    order = np.argsort(-scores, kind="stable")

    logger.debug(
        "Ranked %d markets, top score %.4f (%s)",
        len(markets), scores[order[0]], markets[order[0]].market_id,
    )

    return [
        RankedMarket(rank=i + 1, score=float(scores[idx]), market=markets[idx])
        for i, idx in enumerate(order)
    ]
