"""Brazilian real formatting."""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def format_brl(value: float) -> str:
    """Format an amount as pt-BR currency, e.g. ``R$ 1.234,56``.

    Rounds half-up to centavos. Negative amounts get a leading minus sign.
    """
    amount = Decimal(str(value)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    sign = "-" if amount < 0 else ""
    # Format with US separators, then swap them
    us = f"{abs(amount):,.2f}"
    br = us.replace(",", "_").replace(".", ",").replace("_", ".")
    return f"{sign}R$ {br}"
