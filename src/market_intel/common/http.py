"""Async HTTP client for the platform backend, with retry on transient failures."""

from __future__ import annotations

import httpx
from tenacity import retry, retry_if_exception, stop_after_attempt, wait_exponential

from market_intel.common.types import JsonDict
from market_intel.config import get_settings

_RETRYABLE_STATUS = frozenset({408, 429, 500, 502, 503, 504})


def _should_retry(exc: BaseException) -> bool:
    if isinstance(exc, (httpx.TimeoutException, httpx.ConnectError)):
        return True
    if isinstance(exc, httpx.HTTPStatusError):
        return exc.response.status_code in _RETRYABLE_STATUS
    return False


_with_retry = retry(
    retry=retry_if_exception(_should_retry),
    stop=stop_after_attempt(3),
    wait=wait_exponential(multiplier=1, min=1, max=10),
    reraise=True,
)


class BackendClient:
    """Async client for backend endpoints, authenticated with a bearer token."""

    def __init__(self, base_url: str, token: str = "") -> None:
        headers = {"Accept": "application/json"}
        if token:
            headers["Authorization"] = f"Bearer {token}"
        self._client = httpx.AsyncClient(
            base_url=base_url.rstrip("/"),
            headers=headers,
            timeout=httpx.Timeout(get_settings().http_timeout),
        )

    @_with_retry
    async def post_json(self, path: str, payload: JsonDict) -> object:
        """POST *payload* as JSON and return the decoded response body."""
        resp = await self._client.post(path, json=payload)
        resp.raise_for_status()
        return resp.json()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> BackendClient:
        return self

    async def __aexit__(self, *args: object) -> None:
        await self.aclose()
