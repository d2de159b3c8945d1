"""Action — base class for every capability a toolkit exposes to agents."""

from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any, ClassVar, Generic, TypeVar

from pydantic import BaseModel

from unifai.models.messages import ActionDefinition, Payment

if TYPE_CHECKING:
    from unifai.toolkit.context import ActionContext

ArgsT = TypeVar("ArgsT")
OutputT = TypeVar("OutputT")


class ActionParams(BaseModel, Generic[ArgsT]):
    """Decoded call arguments handed to Action.call()."""

    payload: ArgsT
    payment: Payment = None


class ActionResult(BaseModel, Generic[OutputT]):
    """What Action.call() returns on success."""

    payload: OutputT
    payment: Payment = None


class Action(ABC):
    """Base class for toolkit actions.

    Subclasses set NAME, DESCRIPTION and optionally PAYLOAD, PAYMENT and
    ARGS, and implement `call(ctx, params)`:

        class EchoArgs(BaseModel):
            content: str

        class Echo(Action):
            NAME = "echo"
            DESCRIPTION = "Echo the message"
            PAYLOAD = {"content": {"type": "string", "required": True}}
            ARGS = EchoArgs

            async def call(self, ctx, params):
                return ActionResult(payload=params.payload.content)

    PAYLOAD is free-form documentation for agents (a string or a dict) and is
    never enforced; ARGS is the pydantic model the incoming payload is decoded
    into. With ARGS = None the handler receives the raw JSON payload.

    Raise ActionError from `call` to report a business failure to the agent.
    """

    NAME: ClassVar[str] = ""
    DESCRIPTION: ClassVar[str] = ""
    PAYLOAD: ClassVar[str | dict[str, Any]] = {}
    PAYMENT: ClassVar[dict[str, Any] | None] = None
    ARGS: ClassVar[type[BaseModel] | None] = None

    @property
    def name(self) -> str:
        return self.NAME

    def definition(self) -> ActionDefinition:
        """Return the definition registered with the platform."""
        return ActionDefinition(
            name=self.NAME,
            description=self.DESCRIPTION,
            payload=self.PAYLOAD,
            payment=self.PAYMENT,
        )

    @abstractmethod
    async def call(self, ctx: "ActionContext", params: ActionParams[Any]) -> ActionResult[Any] | Any:
        """Execute the action.

        Returns an ActionResult, or a bare value that is sent as the output.
        """
