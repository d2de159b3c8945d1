"""Unit tests for HTTP helpers, configuration and ActionContext transactions."""

import json

import httpx
import pytest
from pydantic import BaseModel
from unifai import ActionContext, ApiError, ToolkitError, build_api_client, config
from unifai.client.api import request_json, send_request


class TestBuildApiClient:
    def test_headers(self):
        client = build_api_client("secret")
        assert client.headers["Authorization"] == "secret"
        assert client.headers["Content-Type"] == "application/json"

    def test_empty_key(self):
        with pytest.raises(ValueError):
            build_api_client("")


class TestSendRequest:
    async def test_ok(self, mock_client):
        client = mock_client(lambda r: httpx.Response(200, json={"a": 1}))
        assert await request_json(client, "get", "https://x.test/a") == {"a": 1}

    async def test_empty_body(self, mock_client):
        client = mock_client(lambda r: httpx.Response(204))
        assert await request_json(client, "POST", "https://x.test/a") is None

    async def test_not_json(self, mock_client):
        client = mock_client(lambda r: httpx.Response(200, text="<html>"))
        with pytest.raises(ApiError, match="not valid JSON"):
            await request_json(client, "GET", "https://x.test/a")

    async def test_error_status_text_body(self, mock_client):
        client = mock_client(lambda r: httpx.Response(404, text="missing"))
        with pytest.raises(ApiError) as info:
            await send_request(client, "GET", "https://x.test/a")
        assert info.value.status_code == 404
        assert str(info.value) == "HTTP 404: missing"

    async def test_transport_error(self):
        def _fail(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("connection refused", request=request)

        client = httpx.AsyncClient(transport=httpx.MockTransport(_fail))
        with pytest.raises(ApiError) as info:
            await send_request(client, "GET", "https://x.test/a")
        assert info.value.status_code == 0
        assert "connection refused" in str(info.value)


class TestConfig:
    def test_defaults(self, monkeypatch):
        for var in (
            "UNIFAI_BACKEND_API_ENDPOINT",
            "UNIFAI_BACKEND_WS_ENDPOINT",
            "UNIFAI_FRONTEND_API_ENDPOINT",
            "UNIFAI_TRANSACTION_API_ENDPOINT",
        ):
            monkeypatch.delenv(var, raising=False)
        assert config.backend_api_endpoint() == config.DEFAULT_BACKEND_API_ENDPOINT
        assert config.backend_ws_endpoint() == config.DEFAULT_BACKEND_WS_ENDPOINT
        assert config.frontend_api_endpoint() == config.DEFAULT_FRONTEND_API_ENDPOINT
        assert config.transaction_api_endpoint() == config.DEFAULT_TRANSACTION_API_ENDPOINT

    def test_override_strips_trailing_slash(self, monkeypatch):
        monkeypatch.setenv("UNIFAI_BACKEND_API_ENDPOINT", "http://localhost:8000/api/")
        assert config.backend_api_endpoint() == "http://localhost:8000/api"

    def test_bad_timeout(self, monkeypatch):
        monkeypatch.setenv("UNIFAI_ACTION_TIMEOUT", "soon")
        with pytest.raises(ValueError):
            config.action_timeout()

    def test_non_positive_timeout(self, monkeypatch):
        monkeypatch.setenv("UNIFAI_ACTION_TIMEOUT", "0")
        with pytest.raises(ValueError):
            config.action_timeout()


class _Transfer(BaseModel):
    to: str
    amount: float


class TestCreateTransaction:
    async def test_posts_transaction(self, mock_client, recorded_requests, monkeypatch):
        monkeypatch.setenv("UNIFAI_TRANSACTION_API_ENDPOINT", "https://tx.test/api")
        client = mock_client(lambda r: httpx.Response(200, json={"txId": "abc"}), "toolkit-key")
        ctx = ActionContext(action="pay", agent_id="42", action_id=7, api_client=client)

        result = await ctx.create_transaction("transfer", _Transfer(to="bob", amount=1.5))

        assert result == {"txId": "abc"}
        request = recorded_requests[-1]
        assert str(request.url) == "https://tx.test/api/tx/create"
        assert json.loads(request.content) == {
            "agentId": 42,
            "actionId": 7,
            "actionName": "pay",
            "type": "transfer",
            "payload": {"to": "bob", "amount": 1.5},
        }

    async def test_without_client(self):
        ctx = ActionContext(action="pay", agent_id="42")
        with pytest.raises(ToolkitError):
            await ctx.create_transaction("transfer", {})
