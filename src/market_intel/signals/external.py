"""External signal estimation through the LLM integration.

The integration is asked for a structured JSON estimate of news
intensity, directional consensus, macro shock and an external probability,
grounded in Brazilian sources. Any failure yields conservative fallback
signals instead of an exception.
"""

from __future__ import annotations

import json
import logging
import re

import anthropic
import httpx

from market_intel.common.llm import LLMConfigurationError, get_invoker
from market_intel.common.types import JsonDict, LLMInvoker
from market_intel.markets.models import Market
from market_intel.signals.models import ExternalSignals

logger = logging.getLogger(__name__)

EXTERNAL_SIGNALS_SCHEMA: JsonDict = {
    "type": "object",
    "properties": {
        "news_intensity": {"type": "number"},
        "directional_consensus": {"type": "number"},
        "macro_shock": {"type": "number"},
        "external_probability": {"type": "number"},
        "confidence": {"type": "number"},
        "key_indicators": {"type": "array", "items": {"type": "string"}},
        "sources": {"type": "array", "items": {"type": "string"}},
        "summary": {"type": "string"},
    },
}

_PROMPT_TEMPLATE = """Analise o seguinte mercado preditivo e forneça sinais externos baseados em fontes confiáveis brasileiras:

Mercado: "{title}"
Categoria: {category}
Preço SIM atual: {yes_pct:.0f}%

Considere fontes como:
- Banco Central do Brasil (para economia/juros)
- IBGE (para indicadores oficiais)
- B3 (para mercados financeiros)
- Notícias Reuters/Valor (para eventos verificáveis)

Retorne análise com:
1. news_intensity (0-1): intensidade noticiosa recente
2. directional_consensus (-1 a 1): consenso direcional (-1=NÃO, 0=neutro, 1=SIM)
3. macro_shock (0-1): mudanças bruscas em indicadores relevantes
4. external_probability (0-1): probabilidade estimada por fontes externas
5. confidence (0-1): confiança na estimativa
6. key_indicators: lista de indicadores chave encontrados
7. sources: fontes consultadas"""

_NUMERIC_FIELDS = (
    "news_intensity",
    "directional_consensus",
    "macro_shock",
    "external_probability",
    "confidence",
)

# Outermost {...} block, tolerating markdown fences around it
_JSON_OBJECT = re.compile(r"\{.*\}", re.DOTALL)


def build_prompt(market: Market) -> str:
    """Render the analysis prompt for *market*."""
    yes_price = market.yes_price if market.yes_price is not None else 0.5
    return _PROMPT_TEMPLATE.format(
        title=market.title or "",
        category=market.category or "",
        yes_pct=yes_price * 100,
    )


def parse_signals(text: str) -> ExternalSignals:
    """Parse the integration reply into ExternalSignals.

    Raises:
        ValueError: no JSON object in the reply, or a field has the wrong type
        json.JSONDecodeError: the JSON object is malformed
    """
    match = _JSON_OBJECT.search(text)
    if match is None:
        raise ValueError("no JSON object in LLM reply")

    data = json.loads(match.group())
    if not isinstance(data, dict):
        raise ValueError("LLM reply is not a JSON object")

    numeric: dict[str, float | None] = {}
    for name in _NUMERIC_FIELDS:
        value = data.get(name)
        numeric[name] = None if value is None else float(value)

    return ExternalSignals(
        **numeric,
        key_indicators=[str(s) for s in data.get("key_indicators") or []],
        sources=[str(s) for s in data.get("sources") or []],
        summary=str(data.get("summary") or ""),
    )


async def fetch_external_signals(
    market: Market,
    invoke: LLMInvoker | None = None,
) -> ExternalSignals:
    """Ask the LLM integration for external signals about *market*.

    Never raises: on any integration or parsing failure the error is logged
    and ``ExternalSignals.fallback(market)`` is returned.
    """
    try:
        if invoke is None:
            invoke = get_invoker()
        reply = await invoke(build_prompt(market), EXTERNAL_SIGNALS_SCHEMA)
        return parse_signals(reply)
    except json.JSONDecodeError as exc:
        logger.warning("External signals reply was invalid JSON: %s", exc)
    except LLMConfigurationError as exc:
        logger.warning("External signals LLM backend not configured: %s", exc)
    except anthropic.APIError as exc:
        logger.warning("External signals LLM API error: %s", exc)
    except anthropic.AnthropicError as exc:
        logger.warning("External signals LLM client error: %s", exc)
    except httpx.HTTPError as exc:
        logger.warning("External signals integration request failed: %s", exc)
    except OSError as exc:
        logger.warning("External signals network error: %s", exc)
    except (ValueError, TypeError, KeyError) as exc:
        logger.warning("External signals parse error: %s", exc)
    except Exception as exc:
        logger.warning("External signals failed unexpectedly: %r", exc)

    return ExternalSignals.fallback(market)
