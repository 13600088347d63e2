"""Logit-space blending of market, external and news probabilities."""

from __future__ import annotations

from market_intel.scoring.transforms import logit, sigmoid

# Fixed weight of the directional news nudge (added in logit space)
NEWS_WEIGHT = 0.15

DEFAULT_LIQUIDITY_SCALE = 100_000.0


def blend_probability(
    p_mkt: float,
    p_ext: float,
    news_signal: float = 0,
    liquidity: float = 0.5,
) -> float:
    """Blend the market price with an external estimate and a news signal.

    The market weight grows with liquidity, ``w_m = min(1, 0.3 + 0.7 * liquidity)``,
    the external estimate gets the rest, and the news signal (-1..1) is
    added with a fixed weight. Combining log-odds keeps two confident,
    agreeing inputs from being pulled toward 0.5.

    Inputs are not validated.
    """
    w_m = min(1.0, 0.3 + 0.7 * liquidity)
    w_e = 1.0 - w_m

    combined = w_m * logit(p_mkt) + w_e * logit(p_ext) + NEWS_WEIGHT * news_signal
    return sigmoid(combined)


def liquidity_from_volume(
    volume_total: float | None,
    scale: float = DEFAULT_LIQUIDITY_SCALE,
) -> float:
    """Map lifetime traded volume onto the [0, 1] liquidity input."""
    if not volume_total:
        return 0.0
    return min(1.0, volume_total / scale)
