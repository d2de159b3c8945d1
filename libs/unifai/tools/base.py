"""Tool — base class for agent-side tools backed by the Unifai API."""

import json
import logging
from abc import ABC, abstractmethod
from typing import Any, ClassVar

import httpx
from pydantic import BaseModel, ValidationError

from unifai.client.api import build_api_client
from unifai.errors import InvalidToolArguments
from unifai.helpers.validation import format_validation_error

logger = logging.getLogger(__name__)


class ToolDefinition(BaseModel):
    """A tool as an LLM sees it: name, description and JSON-schema parameters."""

    name: str
    description: str
    parameters: dict[str, Any]

    def as_function(self) -> dict[str, Any]:
        """Return the OpenAI function-calling form of this definition."""
        return {
            "type": "function",
            "function": {
                "name": self.name,
                "description": self.description,
                "parameters": self.parameters,
            },
        }


class Tool(ABC):
    """Subclasses set NAME, ARGS and implement definition() and call()."""

    NAME: ClassVar[str] = ""
    ARGS: ClassVar[type[BaseModel]]

    def __init__(self, api_key: str, *, client: httpx.AsyncClient | None = None) -> None:
        self._client = client or build_api_client(api_key)

    @property
    def name(self) -> str:
        return self.NAME

    @abstractmethod
    def definition(self) -> ToolDefinition: ...

    @abstractmethod
    async def call(self, args: Any) -> str: ...

    def parse_args(self, arguments: str | dict[str, Any] | BaseModel) -> BaseModel:
        """Parse LLM-produced arguments (JSON text or dict) into ARGS."""
        if isinstance(arguments, self.ARGS):
            return arguments
        if isinstance(arguments, str):
            try:
                arguments = json.loads(arguments) if arguments.strip() else {}
            except json.JSONDecodeError as e:
                raise InvalidToolArguments(f"{self.NAME}: arguments are not valid JSON: {e.msg}") from e
        try:
            return self.ARGS.model_validate(arguments)
        except ValidationError as e:
            raise InvalidToolArguments(
                f"{self.NAME}: " + "; ".join(format_validation_error(e))
            ) from e

    async def call_json(self, arguments: str | dict[str, Any]) -> str:
        return await self.call(self.parse_args(arguments))

    async def aclose(self) -> None:
        await self._client.aclose()
