"""Toolkit SDK — serve actions to Unifai agents."""

from unifai.errors import ActionError, ConfigurationError, ToolkitError
from unifai.models.messages import ActionDefinition, ToolkitInfo
from unifai.toolkit.action import Action, ActionParams, ActionResult
from unifai.toolkit.context import ActionContext
from unifai.toolkit.dispatcher import Dispatcher
from unifai.toolkit.registry import ActionRegistry
from unifai.toolkit.service import ServiceState, ToolkitService

__all__ = [
    "Action",
    "ActionContext",
    "ActionDefinition",
    "ActionError",
    "ActionParams",
    "ActionRegistry",
    "ActionResult",
    "ConfigurationError",
    "Dispatcher",
    "ServiceState",
    "ToolkitError",
    "ToolkitInfo",
    "ToolkitService",
]
