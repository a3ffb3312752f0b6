from __future__ import annotations

from typing import Any, TYPE_CHECKING

import httpx

from app.shared.errors import NetworkError, Unauthenticated, UpstreamError, ValidationError

if TYPE_CHECKING:
    from app.client.session import Session


def _detail(resp: httpx.Response) -> str:
    try:
        body = resp.json()
    except ValueError:
        return resp.text[:200] or resp.reason_phrase
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("error") or body)
    return str(body)


def raise_for_status(resp: httpx.Response) -> None:
    """Map a non-2xx response onto the error taxonomy."""
    if resp.is_success:
        return
    detail = _detail(resp)
    if resp.status_code == 401:
        raise Unauthenticated(detail)
    if resp.status_code in (400, 422):
        raise ValidationError(detail, status_code=resp.status_code)
    raise UpstreamError(detail, status_code=resp.status_code)


def call(
    http: httpx.Client,
    method: str,
    url: str,
    session: "Session | None" = None,
    **kwargs,
) -> Any:
    """Send one request and return the decoded JSON body."""
    headers = dict(kwargs.pop("headers", None) or {})
    if session is not None:
        headers["Authorization"] = f"Bearer {session.access_token}"
    try:
        resp = http.request(method, url, headers=headers, **kwargs)
    except httpx.TransportError as e:
        raise NetworkError(f"{method} {url} failed: {e}") from e
    raise_for_status(resp)
    return resp.json()
