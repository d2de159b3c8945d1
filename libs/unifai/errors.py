"""Exception hierarchy for the Unifai SDK."""

from typing import Any


class UnifaiError(Exception):
    """Base class for every error raised by this SDK."""


class ToolkitError(UnifaiError):
    """Errors raised by the toolkit runtime."""


class ConfigurationError(ToolkitError):
    """A toolkit was set up incorrectly (duplicate action, bad state, ...).

    Raised at startup, never deferred to dispatch time.
    """


class ActionError(ToolkitError):
    """Business-logic failure reported by an action handler.

    Handlers raise this (or a subclass) to send a `handler_error` result
    carrying the message back to the calling agent.
    """


class ApiError(UnifaiError):
    """An HTTP call to the platform failed."""

    def __init__(self, status_code: int, message: str, payload: Any = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.payload = payload

    def __str__(self) -> str:
        if self.status_code:
            return f"HTTP {self.status_code}: {self.message}"
        return self.message


class ToolError(UnifaiError):
    """Errors raised while routing an agent tool call."""


class ToolNotFoundError(ToolError):
    def __init__(self, name: str) -> None:
        super().__init__(f"Unknown tool: {name!r}")
        self.name = name


class InvalidToolArguments(ToolError):
    """Tool call arguments could not be parsed into the tool's argument model."""
