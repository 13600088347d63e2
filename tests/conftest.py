"""Shared test fixtures."""

from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import pytest

from market_intel.markets.models import Market, PerformanceStats
from market_intel.signals.models import ExternalSignals


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


@pytest.fixture
def sample_market(now):
    """Contested Selic market closing in 10 days."""
    return Market(
        market_id="selic-dez",
        title="O Copom vai cortar a Selic em dezembro?",
        category="Economia",
        yes_price=0.42,
        volume_24h=12_000.0,
        volume_7d_avg=8_000.0,
        volume_total=50_000.0,
        volatility_24h=0.08,
        closing_date=now + timedelta(days=10),
    )


@pytest.fixture
def sample_signals():
    return ExternalSignals(
        news_intensity=0.6,
        directional_consensus=0.4,
        macro_shock=0.1,
        external_probability=0.55,
        confidence=0.8,
        key_indicators=["IPCA", "Focus"],
        sources=["Banco Central do Brasil", "IBGE"],
        summary="Inflação em queda favorece corte.",
    )


@pytest.fixture
def sample_perf():
    return PerformanceStats(conversion_rate=0.12, cpa_normalized=0.3)


@pytest.fixture
def llm_reply(sample_signals):
    """Raw integration reply wrapped in a markdown fence."""
    body = {
        "news_intensity": sample_signals.news_intensity,
        "directional_consensus": sample_signals.directional_consensus,
        "macro_shock": sample_signals.macro_shock,
        "external_probability": sample_signals.external_probability,
        "confidence": sample_signals.confidence,
        "key_indicators": sample_signals.key_indicators,
        "sources": sample_signals.sources,
        "summary": sample_signals.summary,
    }
    return "```json\n" + json.dumps(body, ensure_ascii=False) + "\n```"


@pytest.fixture
def markets_payload(now):
    """Backend-style market dicts, as served by the markets endpoint."""
    return [
        {
            "id": "selic-dez",
            "title": "O Copom vai cortar a Selic em dezembro?",
            "category": "Economia",
            "yes_price": "0.42",
            "volume_24h": 12000,
            "volume_7d_avg": 8000,
            "volume_total": 50000,
            "volatility_24h": 0.08,
            "closing_date": (now + timedelta(days=10)).isoformat().replace("+00:00", "Z"),
            "external": {"news_intensity": 0.6, "macro_shock": 0.1},
            "perf": {"conversion_rate": 0.12, "cpa_normalized": 0.3},
        },
        {
            "id": "brasileirao-fla",
            "title": "Flamengo será campeão brasileiro?",
            "category": "Esportes",
            "yes_price": 0.97,
            "volume_24h": 100,
            "volume_7d_avg": 900,
            "volume_total": 3000,
            "volatility_24h": 0.01,
            "closing_date": (now + timedelta(days=120)).isoformat(),
        },
        {
            "id": "ipca-acima-meta",
            "title": "IPCA de 2026 ficará acima da meta?",
            "category": "Economia",
            "yes_price": 0.5,
        },
    ]


@pytest.fixture
def markets_file(tmp_path, markets_payload):
    path = tmp_path / "markets.json"
    path.write_text(json.dumps({"markets": markets_payload}), encoding="utf-8")
    return path
