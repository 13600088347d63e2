"""Normalize raw market / signal JSON into models."""

from __future__ import annotations

import json
import logging
from datetime import datetime
from pathlib import Path

from market_intel.markets.models import Market, PerformanceStats
from market_intel.signals.models import ExternalSignals

logger = logging.getLogger(__name__)


def _parse_iso(s: str | None) -> datetime | None:
    if not s:
        return None
    try:
        return datetime.fromisoformat(s.replace("Z", "+00:00"))
    except ValueError:
        logger.debug("Unparseable date %r", s)
        return None


def _parse_float(raw: dict, key: str) -> float | None:
    value = raw.get(key)
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.warning("Ignoring non-numeric %s=%r for market %s", key, value, raw.get("id", "?"))
        return None


def _parse_volume(raw: dict, key: str) -> float | None:
    value = _parse_float(raw, key)
    if value is not None and value < 0:
        logger.warning("Ignoring negative %s=%s for market %s", key, value, raw.get("id", "?"))
        return None
    return value


def raw_to_market(raw: dict) -> Market:
    """Convert a backend market dict to a Market.

    Numbers may arrive as strings. Invalid values are treated as absent so
    that scoring falls back to its neutral defaults.
    """
    market_id = str(raw.get("id", raw.get("market_id", "")))
    yes_price = _parse_float(raw, "yes_price")

    if yes_price is not None and not 0.0 <= yes_price <= 1.0:
        logger.warning("Market %s has out-of-range YES price %.4f, ignoring it", market_id, yes_price)
        yes_price = None

    return Market(
        market_id=market_id,
        title=raw.get("title"),
        category=raw.get("category"),
        yes_price=yes_price,
        no_price=_parse_float(raw, "no_price"),
        volume_24h=_parse_volume(raw, "volume_24h"),
        volume_7d_avg=_parse_volume(raw, "volume_7d_avg"),
        volume_total=_parse_volume(raw, "volume_total"),
        volatility_24h=_parse_float(raw, "volatility_24h"),
        closing_date=_parse_iso(raw.get("closing_date")),
    )


def raw_to_signals(raw: dict) -> ExternalSignals:
    """Convert an external-signals dict to ExternalSignals."""
    return ExternalSignals(
        news_intensity=_parse_float(raw, "news_intensity"),
        directional_consensus=_parse_float(raw, "directional_consensus"),
        macro_shock=_parse_float(raw, "macro_shock"),
        external_probability=_parse_float(raw, "external_probability"),
        confidence=_parse_float(raw, "confidence"),
        key_indicators=list(raw.get("key_indicators") or []),
        sources=list(raw.get("sources") or []),
        summary=raw.get("summary") or "",
    )


def raw_to_perf(raw: dict) -> PerformanceStats:
    """Convert a campaign performance dict to PerformanceStats."""
    return PerformanceStats(
        conversion_rate=_parse_float(raw, "conversion_rate"),
        cpa_normalized=_parse_float(raw, "cpa_normalized"),
    )


def load_markets(
    path: Path,
) -> tuple[list[Market], dict[str, ExternalSignals], dict[str, PerformanceStats]]:
    """Load markets from a JSON file.

    Accepts either a bare array of markets or an object with a ``markets``
    array. Each market may embed ``external`` signals and ``perf`` stats,
    returned keyed by market id.

    Raises:
        FileNotFoundError: *path* does not exist
        ValueError: the file is not valid JSON or has the wrong shape
    """
    data = json.loads(path.read_text(encoding="utf-8"))
    if isinstance(data, dict):
        data = data.get("markets")
    if not isinstance(data, list):
        raise ValueError(f"{path}: expected a JSON array of markets")

    markets: list[Market] = []
    signals: dict[str, ExternalSignals] = {}
    perf: dict[str, PerformanceStats] = {}

    for raw in data:
        if not isinstance(raw, dict):
            logger.warning("Skipping non-object market entry in %s", path)
            continue
        market = raw_to_market(raw)
        markets.append(market)
        if isinstance(raw.get("external"), dict):
            signals[market.market_id] = raw_to_signals(raw["external"])
        if isinstance(raw.get("perf"), dict):
            perf[market.market_id] = raw_to_perf(raw["perf"])

    logger.debug("Loaded %d markets from %s", len(markets), path)
    return markets, signals, perf
