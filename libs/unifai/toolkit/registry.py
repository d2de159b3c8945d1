"""ActionRegistry — name → Action mapping, frozen once a toolkit is running."""

import inspect
import logging
from collections.abc import Iterator

from pydantic import BaseModel

from unifai.errors import ConfigurationError
from unifai.models.messages import ActionDefinition
from unifai.toolkit.action import Action

logger = logging.getLogger(__name__)


class ActionRegistry:
    """Holds the actions a toolkit serves.

    Names are matched exactly (case-sensitive). Registering a name twice is
    rejected, as is any registration after freeze().
    """

    def __init__(self) -> None:
        self._actions: dict[str, Action] = {}
        self._frozen = False

    @property
    def frozen(self) -> bool:
        return self._frozen

    def register(self, action: Action) -> None:
        """Add an action. Raises ConfigurationError on any invalid registration."""
        if self._frozen:
            raise ConfigurationError(
                f"Cannot register action {getattr(action, 'NAME', action)!r}: registry is frozen"
            )
        _check_action(action)
        name = action.name
        if name in self._actions:
            raise ConfigurationError(f"Action {name!r} is already registered")
        self._actions[name] = action
        logger.debug("Registered action %s", name)

    def freeze(self) -> None:
        self._frozen = True

    def get(self, name: str) -> Action | None:
        return self._actions.get(name)

    def names(self) -> list[str]:
        return list(self._actions)

    def definitions(self) -> list[ActionDefinition]:
        return [action.definition() for action in self._actions.values()]

    def __contains__(self, name: object) -> bool:
        return name in self._actions

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions.values())


def _check_action(action: Action) -> None:
    if not isinstance(action, Action):
        raise ConfigurationError(f"Expected an Action instance, got {type(action).__name__}")

    name = action.name
    if not isinstance(name, str) or not name.strip():
        raise ConfigurationError(f"{type(action).__name__} must define a non-empty NAME")
    if not isinstance(action.DESCRIPTION, str):
        raise ConfigurationError(f"Action {name!r}: DESCRIPTION must be a string")
    if not isinstance(action.PAYLOAD, (str, dict)):
        raise ConfigurationError(f"Action {name!r}: PAYLOAD must be a string or a dict")
    if action.PAYMENT is not None and not isinstance(action.PAYMENT, dict):
        raise ConfigurationError(f"Action {name!r}: PAYMENT must be a dict or None")
    args = action.ARGS
    if args is not None and not (inspect.isclass(args) and issubclass(args, BaseModel)):
        raise ConfigurationError(f"Action {name!r}: ARGS must be a pydantic model class or None")
    if not inspect.iscoroutinefunction(action.call):
        raise ConfigurationError(f"Action {name!r}: call() must be a coroutine function")
