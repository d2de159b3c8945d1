"""search_services — find actions on Unifai that match a query."""

import logging

from pydantic import BaseModel, Field

from unifai.client.api import send_request
from unifai.config import backend_api_endpoint
from unifai.tools.base import Tool, ToolDefinition

logger = logging.getLogger(__name__)


class SearchToolsArgs(BaseModel):
    query: str
    limit: int | None = Field(default=None, ge=1, le=100)


class SearchTools(Tool):
    """A tool used to search tools on the Unifai server."""

    NAME = "search_services"
    ARGS = SearchToolsArgs

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.NAME,
            description=(
                "Search for tools. The tools cover a wide range of domains include data "
                "source, API, SDK, etc. Try searching whenever you need to use a tool."
            ),
            parameters={
                "type": "object",
                "properties": {
                    "query": {
                        "type": "string",
                        "description": (
                            "The query to search for tools, you can describe what you want "
                            "to do or what tools you want to use"
                        ),
                    },
                    "limit": {
                        "type": "number",
                        "description": (
                            "The maximum number of tools to return, must be between 1 and 100, "
                            "default is 10, recommend at least 10"
                        ),
                    },
                },
                "required": ["query"],
            },
        )

    async def call(self, args: SearchToolsArgs) -> str:
        url = f"{backend_api_endpoint()}/actions/search"
        params = args.model_dump(exclude_none=True)
        logger.debug("Searching tools: %s", params)
        response = await send_request(self._client, "GET", url, params=params)
        return response.text
