"""HTTP helpers for the Unifai REST endpoints."""

import logging
from collections.abc import Mapping
from typing import Any

import httpx

from unifai.errors import ApiError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0


def build_api_client(
    api_key: str,
    *,
    timeout: float = DEFAULT_TIMEOUT,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Return an AsyncClient that authenticates every request with `api_key`.

    The key's scope (agent or toolkit) decides which endpoints accept it.
    """
    if not api_key:
        raise ValueError("api_key must not be empty")
    headers = {
        "Content-Type": "application/json",
        "Authorization": api_key,
    }
    return httpx.AsyncClient(headers=headers, timeout=timeout, transport=transport)


def _extract_error_message(response: httpx.Response) -> tuple[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        payload = response.text

    if isinstance(payload, dict):
        message = str(payload.get("error") or payload.get("message") or response.reason_phrase)
    else:
        message = str(payload or response.reason_phrase)
    return message, payload


async def send_request(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    json: Any = None,
    timeout: float | None = None,
) -> httpx.Response:
    """Send a request and raise ApiError on transport failure or HTTP >= 400."""
    kwargs: dict[str, Any] = {"params": params, "json": json}
    if timeout is not None:
        kwargs["timeout"] = timeout

    try:
        response = await client.request(method.upper(), url, **kwargs)
    except httpx.RequestError as exc:
        raise ApiError(status_code=0, message=str(exc) or type(exc).__name__) from exc

    if response.status_code >= 400:
        message, payload = _extract_error_message(response)
        logger.warning("%s %s failed: HTTP %d %s", method.upper(), url, response.status_code, message)
        raise ApiError(status_code=response.status_code, message=message, payload=payload)

    return response


async def request_json(
    client: httpx.AsyncClient,
    method: str,
    url: str,
    *,
    params: Mapping[str, Any] | None = None,
    json: Any = None,
    timeout: float | None = None,
) -> Any:
    """Like send_request, but return the decoded JSON body (None when empty)."""
    response = await send_request(client, method, url, params=params, json=json, timeout=timeout)
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError as exc:
        raise ApiError(
            status_code=response.status_code,
            message="Response is not valid JSON",
            payload=response.text,
        ) from exc
