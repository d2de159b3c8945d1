"""ToolkitService — registers actions with Unifai and serves their calls."""

import asyncio
import logging
from enum import StrEnum
from typing import Any

import httpx
from pydantic import ValidationError

from unifai.client.api import build_api_client, send_request
from unifai.client.connection import ToolkitConnection
from unifai.config import frontend_api_endpoint
from unifai.errors import ConfigurationError
from unifai.helpers.factory import create_message, parse_message
from unifai.helpers.validation import validate_message
from unifai.models.envelope import Envelope
from unifai.models.messages import (
    ActionCall,
    ActionCallResult,
    ActionsRegister,
    CallResult,
    ErrorKind,
    MessageType,
    ToolkitInfo,
)
from unifai.toolkit.action import Action
from unifai.toolkit.dispatcher import INTERNAL_ERROR_MESSAGE, Dispatcher
from unifai.toolkit.registry import ActionRegistry

logger = logging.getLogger(__name__)


class ServiceState(StrEnum):
    CREATED = "created"
    REGISTERING = "registering"
    RUNNING = "running"
    STOPPED = "stopped"


class ToolkitService:
    """Runs a toolkit: owns its action registry, connection and dispatcher.

    Usage:
        service = ToolkitService(api_key)
        await service.update_info(ToolkitInfo(name="Echo Slam", description="..."))
        service.add_action(EchoSlam())
        runner = await service.start()
        await runner            # or: await service.stop()

    Lifecycle: created → registering → running → stopped. Actions can only be
    added before start(); the registry is frozen once the service runs.
    """

    def __init__(
        self,
        api_key: str,
        *,
        call_timeout: float | None = None,
        max_concurrency: int | None = None,
        connection: ToolkitConnection | None = None,
        api_client: httpx.AsyncClient | None = None,
    ) -> None:
        self._api_key = api_key
        self._registry = ActionRegistry()
        self._api_client = api_client or build_api_client(api_key)
        self._dispatcher = Dispatcher(
            self._registry,
            timeout=call_timeout,
            max_concurrency=max_concurrency,
            api_client=self._api_client,
        )
        self._connection = connection or ToolkitConnection(api_key)
        self._state = ServiceState.CREATED
        self._runner: asyncio.Task[None] | None = None
        self._calls: set[asyncio.Task[None]] = set()

    @property
    def state(self) -> ServiceState:
        return self._state

    @property
    def registry(self) -> ActionRegistry:
        return self._registry

    @property
    def dispatcher(self) -> Dispatcher:
        return self._dispatcher

    def add_action(self, action: Action) -> None:
        """Register an action to be announced when the service starts."""
        if self._state in (ServiceState.RUNNING, ServiceState.STOPPED):
            raise ConfigurationError(
                f"Cannot add action {getattr(action, 'NAME', action)!r}: toolkit service is {self._state}"
            )
        self._registry.register(action)
        self._state = ServiceState.REGISTERING

    async def update_info(self, info: ToolkitInfo) -> None:
        """Update the toolkit's name and description on the platform."""
        url = f"{frontend_api_endpoint()}/toolkits/fields/"
        await send_request(self._api_client, "POST", url, json=info.model_dump(mode="json"))
        logger.info("Updated toolkit info: %s", info.name)

    async def start(self) -> asyncio.Task[None]:
        """Connect, register every action and start serving calls.

        Returns the task running the receive loop; it finishes when the
        connection closes.
        """
        if self._state in (ServiceState.RUNNING, ServiceState.STOPPED):
            raise ConfigurationError(f"Toolkit service cannot start: it is {self._state}")
        if len(self._registry) == 0:
            logger.warning("Starting toolkit service with no actions")

        await self._connection.connect()

        register = ActionsRegister.from_definitions(self._registry.definitions())
        await self._connection.send(
            create_message(msg_type=MessageType.REGISTER_ACTIONS, data=register)
        )

        self._registry.freeze()
        self._state = ServiceState.RUNNING
        logger.info("Toolkit service running with actions: %s", ", ".join(self._registry.names()))

        self._runner = asyncio.create_task(self._run())
        return self._runner

    async def stop(self) -> None:
        """Stop serving calls and release the connection."""
        if self._runner is not None and not self._runner.done():
            self._runner.cancel()
            try:
                await self._runner
            except asyncio.CancelledError:
                pass
        calls = list(self._calls)
        for task in calls:
            task.cancel()
        await asyncio.gather(*calls, return_exceptions=True)
        await self._dispatcher.cancel_abandoned()
        await self._connection.close()
        await self._api_client.aclose()
        self._state = ServiceState.STOPPED
        logger.info("Toolkit service stopped")

    async def _run(self) -> None:
        try:
            await self._connection.listen(self._on_message)
        finally:
            if self._state is ServiceState.RUNNING:
                self._state = ServiceState.STOPPED
                logger.info("Toolkit connection closed")

    async def _on_message(self, raw: str) -> None:
        """Spawn one task per inbound frame so slow actions don't block others."""
        task = asyncio.create_task(self.handle_message(raw))
        self._calls.add(task)
        task.add_done_callback(self._calls.discard)

    async def handle_message(self, raw: str | bytes | dict[str, Any]) -> CallResult | None:
        """Process one inbound frame; reply to action calls.

        Returns the CallResult sent for an action call, None for anything else.
        """
        try:
            envelope = parse_message(raw)
        except (ValueError, ValidationError) as e:
            logger.warning("Received unknown message: %s", e)
            return None

        if envelope.type != MessageType.ACTION:
            logger.debug("Ignoring %s message", envelope.type)
            return None

        errors = validate_message(envelope)
        if errors:
            logger.warning("Dropping malformed action call: %s", "; ".join(errors))
            return None

        call = ActionCall.model_validate(envelope.data)
        result = await self._dispatcher.dispatch(call)
        return await self._reply(call, result)

    async def _reply(self, call: ActionCall, result: CallResult) -> CallResult:
        """Send the actionResult for `call`; returns the result actually sent."""
        try:
            message = self._result_message(call, result)
        except Exception:
            logger.exception("Could not encode result for %s", call.action)
            result = CallResult.failure(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)
            message = self._result_message(call, result)
        try:
            await self._connection.send(message)
        except Exception:
            logger.exception("Failed to send result for %s", call.action)
        return result

    @staticmethod
    def _result_message(call: ActionCall, result: CallResult) -> Envelope:
        payload: Any = result.output if result.ok else result.to_wire()
        reply = ActionCallResult(
            action=call.action,
            action_id=call.action_id,
            agent_id=call.wire_agent_id,
            payload=payload,
            payment=result.payment,
        )
        return create_message(msg_type=MessageType.ACTION_RESULT, data=reply)
