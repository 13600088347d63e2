"""LLM integration backends used to estimate external market signals.

An invoker is an async callable taking a prompt and a JSON schema for the
expected reply and returning the raw reply text. Two backends exist:

- ``AnthropicInvoker`` talks to the Anthropic Messages API directly.
- ``IntegrationInvoker`` goes through the platform backend's
  ``/integrations/Core/InvokeLLM`` endpoint, which can enrich the prompt
  with internet context.
"""

from __future__ import annotations

import json
import logging

import anthropic

from market_intel.common.http import BackendClient
from market_intel.common.types import JsonDict, LLMInvoker
from market_intel.config import get_settings

logger = logging.getLogger(__name__)


class LLMConfigurationError(ValueError):
    """LLM backend is missing credentials or an endpoint."""


_JSON_ONLY_SYSTEM = """You are a prediction market analyst.
Respond with ONLY a JSON object matching this JSON schema, with no prose and no
markdown:
{schema}"""


class AnthropicInvoker:
    """Send prompts to Claude and return the text reply."""

    def __init__(self, api_key: str | None = None, model: str | None = None,
                 max_tokens: int | None = None) -> None:
        settings = get_settings()
        self.api_key = api_key if api_key is not None else settings.anthropic_api_key
        self.model = model or settings.llm_model
        self.max_tokens = max_tokens or settings.llm_max_tokens

    async def __call__(self, prompt: str, schema: JsonDict) -> str:
        if not self.api_key:
            raise LLMConfigurationError("anthropic_api_key is not set")
        system = _JSON_ONLY_SYSTEM.format(schema=json.dumps(schema))
        async with anthropic.AsyncAnthropic(api_key=self.api_key) as client:
            message = await client.messages.create(
                model=self.model,
                max_tokens=self.max_tokens,
                system=system,
                messages=[{"role": "user", "content": prompt}],
            )
        texts = [block.text for block in message.content if getattr(block, "type", "text") == "text"]
        if not texts:
            raise ValueError("Claude returned no text content")
        return texts[0]


class IntegrationInvoker:
    """Call the backend InvokeLLM integration."""

    path = "/integrations/Core/InvokeLLM"

    def __init__(self, base_url: str | None = None, token: str | None = None) -> None:
        settings = get_settings()
        self.base_url = base_url or settings.integrations_api_url
        self.token = token if token is not None else settings.integrations_api_token

    async def __call__(self, prompt: str, schema: JsonDict) -> str:
        if not self.base_url:
            raise LLMConfigurationError("integrations_api_url is not set")
        payload: JsonDict = {
            "prompt": prompt,
            "add_context_from_internet": True,
            "response_json_schema": schema,
        }
        async with BackendClient(self.base_url, token=self.token) as client:
            body = await client.post_json(self.path, payload)

        # The integration returns the structured object already decoded
        if isinstance(body, str):
            return body
        return json.dumps(body)


def get_invoker() -> LLMInvoker:
    """Build the invoker selected by ``settings.llm_backend``."""
    backend = get_settings().llm_backend
    logger.debug("Using %s LLM backend", backend)
    if backend == "integration":
        return IntegrationInvoker()
    return AnthropicInvoker()
