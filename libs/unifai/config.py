"""Platform endpoints and runtime defaults.

Every endpoint can be overridden through the environment. Values are read at
call time so tests and long-running processes pick up changes.
"""

import os

DEFAULT_BACKEND_API_ENDPOINT = "https://backend.unifai.network/api/v1"
DEFAULT_BACKEND_WS_ENDPOINT = "wss://backend.unifai.network/ws"
DEFAULT_FRONTEND_API_ENDPOINT = "https://app.unifai.network/api"
DEFAULT_TRANSACTION_API_ENDPOINT = "https://txbuilder.unifai.network/api"

DEFAULT_ACTION_TIMEOUT = 60.0
CALL_TOOL_TIMEOUT = 50.0
PING_INTERVAL = 30.0


def _endpoint(var: str, default: str) -> str:
    return os.environ.get(var, default).rstrip("/")


def backend_api_endpoint() -> str:
    return _endpoint("UNIFAI_BACKEND_API_ENDPOINT", DEFAULT_BACKEND_API_ENDPOINT)


def backend_ws_endpoint() -> str:
    return _endpoint("UNIFAI_BACKEND_WS_ENDPOINT", DEFAULT_BACKEND_WS_ENDPOINT)


def frontend_api_endpoint() -> str:
    return _endpoint("UNIFAI_FRONTEND_API_ENDPOINT", DEFAULT_FRONTEND_API_ENDPOINT)


def transaction_api_endpoint() -> str:
    return _endpoint("UNIFAI_TRANSACTION_API_ENDPOINT", DEFAULT_TRANSACTION_API_ENDPOINT)


def action_timeout() -> float:
    """Per-call handler timeout in seconds (`UNIFAI_ACTION_TIMEOUT`)."""
    raw = os.environ.get("UNIFAI_ACTION_TIMEOUT")
    if not raw:
        return DEFAULT_ACTION_TIMEOUT
    try:
        value = float(raw)
    except ValueError:
        raise ValueError(f"UNIFAI_ACTION_TIMEOUT must be a number, got {raw!r}") from None
    if value <= 0:
        raise ValueError(f"UNIFAI_ACTION_TIMEOUT must be positive, got {raw!r}")
    return value
