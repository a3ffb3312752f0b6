from __future__ import annotations

from typing import Any

import httpx

from app.client.http import call


class AIClient:
    """Client for /ai/summarize and /ai/models."""

    def __init__(self, http: httpx.Client):
        self.http = http

    def summarize(self, text: str, model: str | None = None, length: str = "medium", tone: str = "neutral") -> str:
        body: dict[str, Any] = {"text": text, "length": length, "tone": tone}
        if model:
            body["model"] = model
        data = call(self.http, "POST", "/ai/summarize", json=body)
        return data.get("summary") or ""

    def list_models(self) -> list[dict[str, Any]]:
        data = call(self.http, "GET", "/ai/models")
        return list(data.get("data") or [])
