"""Tests for raw market JSON normalization."""

from __future__ import annotations

import json
from datetime import timezone

import pytest

from market_intel.markets.loader import load_markets, raw_to_market, raw_to_perf, raw_to_signals
from market_intel.markets.models import Side


def test_raw_to_market(markets_payload):
    market = raw_to_market(markets_payload[0])

    assert market.market_id == "selic-dez"
    assert market.title == "O Copom vai cortar a Selic em dezembro?"
    assert market.yes_price == 0.42
    assert market.volume_24h == 12000.0
    assert market.volume_total == 50000.0
    assert market.closing_date is not None
    assert market.closing_date.tzinfo is not None
    assert market.closing_date.utcoffset() == timezone.utc.utcoffset(None)


def test_raw_to_market_missing_fields_are_none():
    market = raw_to_market({"id": 7})
    assert market.market_id == "7"
    assert market.yes_price is None
    assert market.volume_7d_avg is None
    assert market.closing_date is None


def test_raw_to_market_bad_values_ignored():
    market = raw_to_market({
        "id": "bad",
        "yes_price": "1.7",
        "volume_24h": "lots",
        "closing_date": "next week",
    })
    assert market.yes_price is None
    assert market.volume_24h is None
    assert market.closing_date is None


def test_side_price_defaults():
    market = raw_to_market({"id": "m", "yes_price": 0.3})
    assert market.side_price(Side.YES) == 0.3
    assert market.side_price(Side.NO) == pytest.approx(0.7)

    explicit = raw_to_market({"id": "m", "yes_price": 0.3, "no_price": 0.72})
    assert explicit.side_price(Side.NO) == 0.72


def test_raw_to_signals_and_perf():
    signals = raw_to_signals({"news_intensity": "0.4", "sources": ["IBGE"]})
    assert signals.news_intensity == 0.4
    assert signals.macro_shock is None
    assert signals.sources == ["IBGE"]

    perf = raw_to_perf({"conversion_rate": 0.05})
    assert perf.conversion_rate == 0.05
    assert perf.cpa_normalized is None


def test_load_markets_object(markets_file):
    markets, signals, perf = load_markets(markets_file)

    assert [m.market_id for m in markets] == ["selic-dez", "brasileirao-fla", "ipca-acima-meta"]
    assert set(signals) == {"selic-dez"}
    assert signals["selic-dez"].news_intensity == 0.6
    assert perf["selic-dez"].cpa_normalized == 0.3


def test_load_markets_bare_array(tmp_path, markets_payload):
    path = tmp_path / "bare.json"
    path.write_text(json.dumps(markets_payload + ["junk"]), encoding="utf-8")

    markets, _, _ = load_markets(path)

    assert len(markets) == 3


def test_load_markets_wrong_shape(tmp_path):
    path = tmp_path / "wrong.json"
    path.write_text(json.dumps({"items": []}), encoding="utf-8")

    with pytest.raises(ValueError):
        load_markets(path)


def test_load_markets_invalid_json(tmp_path):
    path = tmp_path / "broken.json"
    path.write_text("[{", encoding="utf-8")

    with pytest.raises(ValueError):
        load_markets(path)


def test_negative_volumes_treated_as_absent():
    market = raw_to_market({"id": "neg", "volume_24h": -5, "volume_7d_avg": "-1", "volume_total": -10})
    assert market.volume_24h is None
    assert market.volume_7d_avg is None
    assert market.volume_total is None
