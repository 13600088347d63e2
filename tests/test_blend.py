"""Tests for logit-space probability blending."""

from __future__ import annotations

import pytest

from market_intel.scoring.blend import blend_probability, liquidity_from_volume
from market_intel.scoring.transforms import logit, sigmoid


class TestBlendProbability:
    @pytest.mark.parametrize("liquidity", [0.0, 0.25, 0.5, 1.0])
    def test_midpoint_agreement(self, liquidity):
        assert blend_probability(0.5, 0.5, 0, liquidity) == pytest.approx(0.5)

    def test_full_liquidity_trusts_market(self):
        """w_m = 1 at liquidity 1, so the external estimate is ignored."""
        assert blend_probability(0.7, 0.2, 0, 1.0) == pytest.approx(0.7)

    def test_zero_liquidity_weights(self):
        expected = sigmoid(0.3 * logit(0.6) + 0.7 * logit(0.8))
        assert blend_probability(0.6, 0.8, 0, 0.0) == pytest.approx(expected)

    def test_default_liquidity(self):
        # w_m = 0.65 at the default liquidity of 0.5
        expected = sigmoid(0.65 * logit(0.4) + 0.35 * logit(0.6))
        assert blend_probability(0.4, 0.6) == pytest.approx(expected)

    def test_news_signal_nudges(self):
        base = blend_probability(0.5, 0.5, 0)
        assert blend_probability(0.5, 0.5, 1.0) > base
        assert blend_probability(0.5, 0.5, -1.0) < base
        assert blend_probability(0.5, 0.5, 1.0) == pytest.approx(sigmoid(0.15))

    def test_confident_agreement_not_diluted(self):
        """Two agreeing confident inputs stay confident."""
        assert blend_probability(0.9, 0.9, 0, 0.3) == pytest.approx(0.9)

    def test_liquidity_above_one_capped(self):
        assert blend_probability(0.7, 0.2, 0, 5.0) == pytest.approx(0.7)


class TestLiquidityFromVolume:
    def test_scaled(self):
        assert liquidity_from_volume(50_000) == pytest.approx(0.5)

    def test_capped(self):
        assert liquidity_from_volume(250_000) == 1.0

    def test_missing_volume(self):
        assert liquidity_from_volume(None) == 0.0
        assert liquidity_from_volume(0) == 0.0

    def test_custom_scale(self):
        assert liquidity_from_volume(500, scale=1000) == pytest.approx(0.5)
