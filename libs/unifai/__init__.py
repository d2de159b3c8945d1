"""Unifai SDK — dynamic tools for AI agents and the toolkits that serve them."""

from unifai.client.api import build_api_client
from unifai.client.connection import ToolkitConnection
from unifai.errors import (
    ActionError,
    ApiError,
    ConfigurationError,
    InvalidToolArguments,
    ToolError,
    ToolkitError,
    ToolNotFoundError,
    UnifaiError,
)
from unifai.helpers.factory import create_message, parse_message, parse_payload
from unifai.helpers.validation import format_validation_error, validate_message
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
from unifai.toolkit import (
    Action,
    ActionContext,
    ActionParams,
    ActionRegistry,
    ActionResult,
    Dispatcher,
    ServiceState,
    ToolkitService,
)
from unifai.tools import (
    CallTool,
    CallToolArgs,
    SearchTools,
    SearchToolsArgs,
    Tool,
    ToolDefinition,
    ToolSet,
    get_tools,
)

__all__ = [
    # Client
    "ToolkitConnection",
    "build_api_client",
    # Toolkit SDK
    "Action",
    "ActionContext",
    "ActionParams",
    "ActionRegistry",
    "ActionResult",
    "Dispatcher",
    "ServiceState",
    "ToolkitService",
    # Agent tools
    "CallTool",
    "CallToolArgs",
    "SearchTools",
    "SearchToolsArgs",
    "Tool",
    "ToolDefinition",
    "ToolSet",
    "get_tools",
    # Models
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
    # Errors
    "ActionError",
    "ApiError",
    "ConfigurationError",
    "InvalidToolArguments",
    "ToolError",
    "ToolNotFoundError",
    "ToolkitError",
    "UnifaiError",
    # Helpers
    "create_message",
    "format_validation_error",
    "parse_message",
    "parse_payload",
    "validate_message",
]
