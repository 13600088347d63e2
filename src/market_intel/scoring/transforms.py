"""Probability transforms and the settlement urgency curve."""

from __future__ import annotations

import math
from datetime import datetime, timezone

from market_intel.common.types import clip

# logit() clips into this band so the result is always finite
_P_MIN = 0.001
_P_MAX = 0.999

_SECONDS_PER_DAY = 86_400.0


def calculate_entropy(p: float) -> float:
    """Binary entropy (nats) of a YES probability.

    Peaks at p = 0.5 (a contested market); 0 outside the open interval (0, 1).
    """
    if p <= 0 or p >= 1:
        return 0.0
    return -(p * math.log(p) + (1 - p) * math.log(1 - p))


def logit(p: float) -> float:
    """Log-odds of *p*, clipped to [0.001, 0.999] first."""
    clipped = clip(p, _P_MIN, _P_MAX)
    return math.log(clipped / (1 - clipped))


def sigmoid(x: float) -> float:
    """Logistic function, saturating to 0.0 / 1.0 for huge |x|."""
    try:
        return 1.0 / (1.0 + math.exp(-x))
    except OverflowError:
        return 0.0


def calculate_urgency(days_to_settlement: float, tau: float = 10) -> float:
    """Exponential decay exp(-days / tau).

    1 at settlement, tends to 0 far out. Overdue markets (negative days)
    score above 1; callers needing a bounded value must clamp.
    """
    try:
        return math.exp(-days_to_settlement / tau)
    except OverflowError:
        return math.inf


def days_until(closing_date: datetime, now: datetime | None = None) -> float:
    """Fractional days from *now* to *closing_date* (naive datetimes are UTC)."""
    if now is None:
        now = datetime.now(timezone.utc)
    if closing_date.tzinfo is None:
        closing_date = closing_date.replace(tzinfo=timezone.utc)
    if now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (closing_date - now).total_seconds() / _SECONDS_PER_DAY
