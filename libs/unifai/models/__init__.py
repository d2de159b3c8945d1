from unifai.models.envelope import Envelope
from unifai.models.messages import (
    PAYLOAD_REGISTRY,
    ActionCall,
    ActionCallResult,
    ActionDefinition,
    ActionsRegister,
    CallError,
    CallResult,
    ErrorKind,
    MessageType,
    ToolkitInfo,
)

__all__ = [
    "ActionCall",
    "ActionCallResult",
    "ActionDefinition",
    "ActionsRegister",
    "CallError",
    "CallResult",
    "Envelope",
    "ErrorKind",
    "MessageType",
    "PAYLOAD_REGISTRY",
    "ToolkitInfo",
]
