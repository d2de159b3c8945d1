"""Unit tests for the agent-side tools, using httpx.MockTransport."""

import json

import httpx
import pytest
from unifai import (
    ApiError,
    CallTool,
    CallToolArgs,
    ConfigurationError,
    InvalidToolArguments,
    SearchTools,
    SearchToolsArgs,
    ToolNotFoundError,
    ToolSet,
    get_tools,
)


@pytest.fixture(autouse=True)
def backend(monkeypatch):
    monkeypatch.setenv("UNIFAI_BACKEND_API_ENDPOINT", "https://backend.test/api/v1")


class TestSearchTools:
    def test_definition(self):
        definition = SearchTools("agent-key").definition()
        assert definition.name == "search_services"
        assert definition.parameters["required"] == ["query"]
        assert set(definition.parameters["properties"]) == {"query", "limit"}

    def test_as_function(self):
        function = SearchTools("agent-key").definition().as_function()
        assert function["type"] == "function"
        assert function["function"]["name"] == "search_services"
        assert function["function"]["parameters"]["type"] == "object"

    async def test_call(self, mock_client, recorded_requests):
        client = mock_client(lambda r: httpx.Response(200, json=[{"action": "Echo/1/echo"}]), "agent-key")
        tool = SearchTools("agent-key", client=client)

        text = await tool.call(SearchToolsArgs(query="echo", limit=5))

        assert json.loads(text) == [{"action": "Echo/1/echo"}]
        request = recorded_requests[-1]
        assert request.method == "GET"
        assert request.url.path == "/api/v1/actions/search"
        assert request.url.params["query"] == "echo"
        assert request.url.params["limit"] == "5"
        assert request.headers["Authorization"] == "agent-key"

    async def test_limit_omitted_when_unset(self, mock_client, recorded_requests):
        tool = SearchTools("agent-key", client=mock_client())
        await tool.call(SearchToolsArgs(query="solana"))
        assert "limit" not in recorded_requests[-1].url.params

    def test_limit_bounds(self):
        with pytest.raises(InvalidToolArguments):
            SearchTools("agent-key").parse_args({"query": "x", "limit": 500})


class TestCallTool:
    def test_definition(self):
        definition = CallTool("agent-key").definition()
        assert definition.name == "invoke_service"
        assert definition.parameters["required"] == ["action", "payload"]

    async def test_call(self, mock_client, recorded_requests):
        client = mock_client(lambda r: httpx.Response(200, text='{"payload": "ok"}'))
        tool = CallTool("agent-key", client=client)

        text = await tool.call(
            CallToolArgs(action="Echo/1/echo", payload={"content": "How are you"}, payment=1)
        )

        assert text == '{"payload": "ok"}'
        request = recorded_requests[-1]
        assert request.method == "POST"
        assert request.url.path == "/api/v1/actions/call"
        assert json.loads(request.content) == {
            "action": "Echo/1/echo",
            "payload": {"content": "How are you"},
            "payment": 1,
        }

    async def test_http_error(self, mock_client):
        client = mock_client(lambda r: httpx.Response(500, json={"message": "server down"}))
        tool = CallTool("agent-key", client=client)
        with pytest.raises(ApiError) as info:
            await tool.call(CallToolArgs(action="a", payload={}))
        assert info.value.status_code == 500
        assert "server down" in str(info.value)


class TestToolSet:
    async def test_routes_by_name(self, mock_client, recorded_requests):
        client = mock_client(lambda r: httpx.Response(200, text="[]"))
        tools = ToolSet(SearchTools("k", client=client), CallTool("k", client=client))

        text = await tools.call("search_services", '{"query": "weather"}')

        assert text == "[]"
        assert recorded_requests[-1].url.params["query"] == "weather"

    async def test_dict_arguments(self, mock_client, recorded_requests):
        client = mock_client()
        tools = ToolSet(CallTool("k", client=client))
        await tools.call("invoke_service", {"action": "x", "payload": '{"a": 1}'})
        body = json.loads(recorded_requests[-1].content)
        assert body["payload"] == '{"a": 1}'

    async def test_unknown_tool(self):
        with pytest.raises(ToolNotFoundError):
            await ToolSet().call("missing", "{}")

    async def test_invalid_json_arguments(self, mock_client):
        tools = ToolSet(SearchTools("k", client=mock_client()))
        with pytest.raises(InvalidToolArguments, match="not valid JSON"):
            await tools.call("search_services", "{query")

    async def test_missing_required_argument(self, mock_client):
        tools = ToolSet(SearchTools("k", client=mock_client()))
        with pytest.raises(InvalidToolArguments, match="query"):
            await tools.call("search_services", "{}")

    def test_duplicate_names_rejected(self, mock_client):
        client = mock_client()
        with pytest.raises(ConfigurationError, match="search_services"):
            ToolSet(SearchTools("k", client=client), SearchTools("k", client=client))

    def test_functions(self):
        tools = ToolSet.from_api_key("k")
        assert tools.names() == ["search_services", "invoke_service"]
        assert [f["function"]["name"] for f in tools.functions()] == tools.names()


class TestGetTools:
    def test_returns_both(self):
        search, call = get_tools("agent-key")
        assert isinstance(search, SearchTools)
        assert isinstance(call, CallTool)
