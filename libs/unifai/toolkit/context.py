"""ActionContext — per-call information handed to action handlers."""

import logging
from dataclasses import dataclass, field
from typing import Any

import httpx
from pydantic import BaseModel

from unifai.client.api import request_json
from unifai.config import transaction_api_endpoint
from unifai.errors import ToolkitError
from unifai.models.messages import Payment

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionContext:
    """Who is calling which action, plus a client for platform side effects."""

    action: str
    agent_id: str
    action_id: int | None = None
    payment: Payment = None
    api_client: httpx.AsyncClient | None = field(default=None, repr=False, compare=False)

    async def create_transaction(self, tx_type: str, payload: BaseModel | Any) -> Any:
        """Create a transaction on behalf of the calling agent.

        Returns the platform's JSON response.
        """
        if self.api_client is None:
            raise ToolkitError("ActionContext has no API client; cannot create transactions")

        if isinstance(payload, BaseModel):
            payload = payload.model_dump(mode="json")

        url = f"{transaction_api_endpoint()}/tx/create"
        agent_id: int | str = (
            int(self.agent_id) if self.agent_id.isascii() and self.agent_id.isdigit() else self.agent_id
        )
        body = {
            "agentId": agent_id,
            "actionId": self.action_id,
            "actionName": self.action,
            "type": tx_type,
            "payload": payload,
        }
        logger.debug("Creating %s transaction for agent %s", tx_type, self.agent_id)
        return await request_json(self.api_client, "POST", url, json=body)
