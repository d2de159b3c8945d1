"""Agent tools — let an LLM agent search for and invoke Unifai actions."""

import logging
from typing import Any

from unifai.errors import ConfigurationError, ToolNotFoundError
from unifai.tools.base import Tool, ToolDefinition
from unifai.tools.call_tool import CallTool, CallToolArgs
from unifai.tools.search_tools import SearchTools, SearchToolsArgs

logger = logging.getLogger(__name__)


def get_tools(api_key: str) -> tuple[SearchTools, CallTool]:
    """Returns the two tools an agent needs to use Unifai."""
    return SearchTools(api_key), CallTool(api_key)


class ToolSet:
    """Routes LLM tool calls to tools by name.

    Usage:
        tools = ToolSet(*get_tools(api_key))
        functions = tools.functions()          # pass to the LLM
        text = await tools.call(name, arguments_json)
    """

    def __init__(self, *tools: Tool) -> None:
        self._tools: dict[str, Tool] = {}
        for tool in tools:
            if tool.name in self._tools:
                raise ConfigurationError(f"Tool {tool.name!r} is already in this set")
            self._tools[tool.name] = tool

    @classmethod
    def from_api_key(cls, api_key: str) -> "ToolSet":
        return cls(*get_tools(api_key))

    def names(self) -> list[str]:
        return list(self._tools)

    def definitions(self) -> list[ToolDefinition]:
        return [tool.definition() for tool in self._tools.values()]

    def functions(self) -> list[dict[str, Any]]:
        return [d.as_function() for d in self.definitions()]

    async def call(self, name: str, arguments: str | dict[str, Any]) -> str:
        tool = self._tools.get(name)
        if tool is None:
            raise ToolNotFoundError(name)
        logger.debug("Tool call %s(%s)", name, arguments)
        return await tool.call_json(arguments)

    async def aclose(self) -> None:
        for tool in self._tools.values():
            await tool.aclose()


__all__ = [
    "CallTool",
    "CallToolArgs",
    "SearchTools",
    "SearchToolsArgs",
    "Tool",
    "ToolDefinition",
    "ToolSet",
    "get_tools",
]
