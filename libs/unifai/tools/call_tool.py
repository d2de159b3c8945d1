"""invoke_service — call an action found through search_services."""

import logging
from typing import Any

from pydantic import BaseModel

from unifai.client.api import send_request
from unifai.config import CALL_TOOL_TIMEOUT, backend_api_endpoint
from unifai.models.messages import Payment
from unifai.tools.base import Tool, ToolDefinition

logger = logging.getLogger(__name__)


class CallToolArgs(BaseModel):
    action: str
    payload: Any = None
    payment: Payment = None


class CallTool(Tool):
    """A tool used to call a specific tool on the Unifai server."""

    NAME = "invoke_service"
    ARGS = CallToolArgs

    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name=self.NAME,
            description="Call a tool returned by search_services",
            parameters={
                "type": "object",
                "properties": {
                    "action": {
                        "type": "string",
                        "description": "The exact action you want to call in the search_services result.",
                    },
                    "payload": {
                        "type": "string",
                        "description": (
                            "Action payload, based on the payload schema in the search_services "
                            "result. You can pass either the json object directly or json encoded "
                            "string of the object."
                        ),
                    },
                    "payment": {
                        "type": "number",
                        "description": (
                            "Amount to authorize in USD. Positive number means you will be charged "
                            "no more than this amount, negative number means you are requesting to "
                            "get paid for at least this amount. Only include this field if the "
                            "action you are calling includes payment information."
                        ),
                    },
                },
                "required": ["action", "payload"],
            },
        )

    async def call(self, args: CallToolArgs) -> str:
        url = f"{backend_api_endpoint()}/actions/call"
        logger.info("Invoking %s", args.action)
        response = await send_request(
            self._client,
            "POST",
            url,
            json=args.model_dump(mode="json"),
            timeout=CALL_TOOL_TIMEOUT,
        )
        return response.text
