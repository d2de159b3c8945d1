"""Message types and data models for the toolkit wire protocol."""

from enum import StrEnum
from typing import Any

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    PrivateAttr,
    field_serializer,
    field_validator,
    model_validator,
)


class MessageType(StrEnum):
    """All toolkit message types exchanged over the websocket."""

    ACTION = "action"
    ACTION_RESULT = "actionResult"
    REGISTER_ACTIONS = "registerActions"


class ErrorKind(StrEnum):
    """Why a call produced an error result instead of an output."""

    UNKNOWN_ACTION = "unknown_action"
    INVALID_ARGUMENTS = "invalid_arguments"
    HANDLER_ERROR = "handler_error"
    TIMEOUT = "timeout"
    INTERNAL_ERROR = "internal_error"


Payment = int | float | None


class ActionDefinition(BaseModel):
    """What a toolkit tells the platform about one of its actions."""

    name: str
    description: str
    payload: str | dict[str, Any] = Field(default_factory=dict)
    payment: dict[str, Any] | None = None


class ActionCall(BaseModel):
    """Inbound call request routed to a toolkit by the platform.

    Accepts both the platform's camelCase ids (`actionID`, `agentID`) and
    snake_case names. Numeric agent ids are kept as strings; `wire_agent_id`
    returns the id in the form the platform sent it.
    """

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    action: str
    action_id: int | None = Field(
        default=None,
        validation_alias=AliasChoices("actionID", "action_id"),
        serialization_alias="actionID",
    )
    agent_id: str = Field(
        validation_alias=AliasChoices("agentID", "agent_id"),
        serialization_alias="agentID",
    )
    payload: Any = None
    payment: Payment = None

    _wire_agent_id: int | None = PrivateAttr(default=None)

    @model_validator(mode="wrap")
    @classmethod
    def _remember_agent_id(cls, data: Any, handler: Any) -> "ActionCall":
        call = handler(data)
        if isinstance(data, dict):
            raw = data.get("agentID", data.get("agent_id"))
            if isinstance(raw, int) and not isinstance(raw, bool):
                call._wire_agent_id = raw
        return call

    @property
    def wire_agent_id(self) -> int | str:
        return self.agent_id if self._wire_agent_id is None else self._wire_agent_id


class CallError(BaseModel):
    kind: ErrorKind
    message: str


class CallResult(BaseModel):
    """Outcome of dispatching one ActionCall: an output or an error."""

    output: Any = None
    error: CallError | None = None
    payment: Payment = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, output: Any, payment: Payment = None) -> "CallResult":
        return cls(output=output, payment=payment)

    @classmethod
    def failure(cls, kind: ErrorKind, message: str) -> "CallResult":
        return cls(error=CallError(kind=kind, message=message))

    def to_wire(self) -> dict[str, Any]:
        """Return `{"output": ...}` or `{"error": {...}}`, plus payment on success."""
        if self.error is not None:
            return {"error": self.error.model_dump(mode="json")}
        wire: dict[str, Any] = {"output": self.output}
        if self.payment is not None:
            wire["payment"] = self.payment
        return wire


class ActionCallResult(BaseModel):
    """Outbound result for an ActionCall, echoing its routing ids."""

    model_config = ConfigDict(populate_by_name=True)

    action: str
    action_id: int | None = Field(default=None, alias="actionID")
    # Echoed exactly as received: 42 stays 42, "0042" stays "0042".
    agent_id: int | str = Field(alias="agentID")
    payload: Any = None
    payment: Payment = None


class ActionsRegister(BaseModel):
    """Registers every action definition of a toolkit, keyed by name.

    On the wire the name is only the key, so it is dropped from each
    definition when serializing and restored from the key when parsing.
    """

    actions: dict[str, ActionDefinition]

    @classmethod
    def from_definitions(cls, definitions: list[ActionDefinition]) -> "ActionsRegister":
        return cls(actions={d.name: d for d in definitions})

    @field_validator("actions", mode="before")
    @classmethod
    def _names_from_keys(cls, value: Any) -> Any:
        if not isinstance(value, dict):
            return value
        return {
            name: {"name": name, **definition} if isinstance(definition, dict) else definition
            for name, definition in value.items()
        }

    @field_serializer("actions")
    def _drop_names(self, actions: dict[str, ActionDefinition]) -> dict[str, Any]:
        return {
            name: definition.model_dump(mode="json", exclude={"name"})
            for name, definition in actions.items()
        }


class ToolkitInfo(BaseModel):
    """Display metadata for a toolkit."""

    name: str
    description: str


# Registry mapping message types to their data models
PAYLOAD_REGISTRY: dict[MessageType, type[BaseModel]] = {
    MessageType.ACTION: ActionCall,
    MessageType.ACTION_RESULT: ActionCallResult,
    MessageType.REGISTER_ACTIONS: ActionsRegister,
}
