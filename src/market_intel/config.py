"""Application configuration via pydantic-settings."""

from __future__ import annotations

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="MARKET_INTEL_",
    )

    # LLM backend for external signals: "anthropic" or "integration"
    llm_backend: str = "anthropic"

    # Anthropic API key and model for the direct backend
    anthropic_api_key: str = ""
    llm_model: str = "claude-haiku-4-5-20251001"
    llm_max_tokens: int = 1024

    # Platform backend exposing /integrations/Core/InvokeLLM
    integrations_api_url: str = "http://localhost:8000/api"
    integrations_api_token: str = ""

    # HTTP request timeout seconds
    http_timeout: float = 30.0

    # Fractional Kelly multiplier (0.25 = quarter-Kelly)
    kelly_multiplier: float = 0.25

    # Absolute ceiling on the bankroll fraction per position
    kelly_cap: float = 0.03

    # Confidence in the trader's own estimate when none is given
    default_confidence: float = 0.7

    # Lifetime volume (BRL) at which a market counts as fully liquid
    liquidity_scale: float = 100_000.0

    @field_validator("llm_backend")
    @classmethod
    def _llm_backend_known(cls, v: str) -> str:
        if v not in ("anthropic", "integration"):
            raise ValueError(f"llm_backend must be 'anthropic' or 'integration', got {v!r}")
        return v

    @field_validator("kelly_multiplier", "kelly_cap")
    @classmethod
    def _fraction_in_range(cls, v: float) -> float:
        if not 0.0 < v <= 1.0:
            raise ValueError(f"Kelly settings must be in (0, 1], got {v}")
        return v

    @field_validator("default_confidence")
    @classmethod
    def _confidence_in_range(cls, v: float) -> float:
        if not 0.0 <= v <= 1.0:
            raise ValueError(f"default_confidence must be in [0, 1], got {v}")
        return v

    @field_validator("liquidity_scale")
    @classmethod
    def _liquidity_scale_positive(cls, v: float) -> float:
        if v <= 0:
            raise ValueError(f"liquidity_scale must be > 0, got {v}")
        return v


def get_settings() -> Settings:
    """Get settings instance."""
    return Settings()
