"""Shared type aliases."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TypeAlias

# JSON-like dict
JsonDict: TypeAlias = dict[str, object]

# LLM integration: (prompt, response JSON schema) -> raw text reply
LLMInvoker: TypeAlias = Callable[[str, JsonDict], Awaitable[str]]


def clip(value: float, low: float, high: float) -> float:
    """Clamp *value* into [low, high]."""
    return max(low, min(high, value))
