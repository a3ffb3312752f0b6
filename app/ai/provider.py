from __future__ import annotations

import logging
from typing import Any

import httpx

from app.shared.config import settings
from app.shared.errors import UpstreamError

logger = logging.getLogger(__name__)


class CompletionProvider:
    """Thin client for an OpenAI-compatible chat completion API."""

    def __init__(
        self,
        base_url: str | None = None,
        api_key: str | None = None,
        timeout: float | None = None,
        transport: httpx.BaseTransport | None = None,
    ):
        self.base_url = (base_url or settings.LLM_BASE_URL).rstrip("/")
        self.api_key = api_key if api_key is not None else settings.LLM_API_KEY
        self._client = httpx.Client(
            base_url=self.base_url,
            headers=self._headers(),
            timeout=timeout or settings.LLM_TIMEOUT,
            transport=transport,
        )

    def _headers(self) -> dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"
        return headers

    def close(self) -> None:
        self._client.close()

    def _call(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        try:
            resp = self._client.request(method, path, **kwargs)
            resp.raise_for_status()
            return resp.json()
        except httpx.HTTPStatusError as e:
            logger.error("provider %s %s -> %s: %s", method, path, e.response.status_code, e.response.text[:200])
            raise UpstreamError(f"completion provider returned {e.response.status_code}") from e
        except (httpx.HTTPError, ValueError) as e:
            logger.error("provider %s %s failed: %s", method, path, e)
            raise UpstreamError("completion provider unavailable") from e

    def complete(
        self,
        system_text: str,
        user_text: str,
        model: str | None = None,
        max_tokens: int = 1024,
        temperature: float | None = None,
    ) -> str:
        payload = {
            "model": model or settings.LLM_DEFAULT_MODEL,
            "messages": [
                {"role": "system", "content": system_text},
                {"role": "user", "content": user_text},
            ],
            "temperature": settings.LLM_TEMPERATURE if temperature is None else temperature,
            "max_tokens": max_tokens,
        }
        data = self._call("POST", "/chat/completions", json=payload)
        try:
            return (data["choices"][0]["message"]["content"] or "").strip()
        except (KeyError, IndexError, TypeError) as e:
            raise UpstreamError("malformed completion response") from e

    def list_models(self) -> list[dict[str, Any]]:
        data = self._call("GET", "/models")
        models = data.get("data") if isinstance(data, dict) else None
        if not isinstance(models, list):
            raise UpstreamError("malformed model list")
        return models


# FastAPI dep; tests swap it through app.dependency_overrides
def get_provider():
    provider = CompletionProvider()
    try:
        yield provider
    finally:
        provider.close()
