"""Dispatcher — routes inbound ActionCalls to registered actions.

`dispatch()` always returns exactly one CallResult per call. Unknown
actions, undecodable payloads, handler failures, timeouts and unexpected
exceptions all become error results; nothing escapes to the caller.
"""

import asyncio
import json
import logging
from typing import Any

import httpx
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticSerializationError, to_jsonable_python

from unifai.config import action_timeout
from unifai.errors import ActionError
from unifai.helpers.validation import format_validation_error
from unifai.models.messages import ActionCall, CallResult, ErrorKind
from unifai.toolkit.action import Action, ActionParams, ActionResult
from unifai.toolkit.context import ActionContext
from unifai.toolkit.registry import ActionRegistry

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "An unexpected error occurred, please report to the toolkit developer"


class InvalidArguments(Exception):
    """Payload could not be decoded into the action's ARGS model."""


class Dispatcher:
    """Executes calls against an ActionRegistry.

    Safe to call concurrently: the registry is only read. `timeout` bounds
    each handler in seconds (default: UNIFAI_ACTION_TIMEOUT or 60);
    `max_concurrency` optionally caps how many handlers run at once,
    timed-out handlers included until they finish.
    """

    def __init__(
        self,
        registry: ActionRegistry,
        *,
        timeout: float | None = None,
        max_concurrency: int | None = None,
        api_client: httpx.AsyncClient | None = None,
    ) -> None:
        if max_concurrency is not None and max_concurrency < 1:
            raise ValueError("max_concurrency must be at least 1")
        self._registry = registry
        self._timeout = action_timeout() if timeout is None else timeout
        self._semaphore = asyncio.Semaphore(max_concurrency) if max_concurrency else None
        self._api_client = api_client
        # Timed-out handlers keep running; hold references until they finish.
        self._abandoned: set[asyncio.Task[Any]] = set()

    @property
    def timeout(self) -> float:
        return self._timeout

    @property
    def abandoned(self) -> int:
        """Number of timed-out handlers still running."""
        return len(self._abandoned)

    async def dispatch(self, call: ActionCall) -> CallResult:
        try:
            return await self._dispatch(call)
        except Exception:
            logger.exception("Dispatch of %s for agent %s failed", call.action, call.agent_id)
            return CallResult.failure(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

    async def _dispatch(self, call: ActionCall) -> CallResult:
        action = self._registry.get(call.action)
        if action is None:
            logger.warning("Action not found: %s", call.action)
            return CallResult.failure(ErrorKind.UNKNOWN_ACTION, f"Unknown action: {call.action!r}")

        try:
            args = decode_payload(action, call.payload)
        except InvalidArguments as e:
            logger.info("Invalid arguments for %s: %s", call.action, e)
            return CallResult.failure(ErrorKind.INVALID_ARGUMENTS, str(e))

        ctx = ActionContext(
            action=call.action,
            agent_id=call.agent_id,
            action_id=call.action_id,
            payment=call.payment,
            api_client=self._api_client,
        )
        params = ActionParams(payload=args, payment=call.payment)

        logger.info("Action call: %s from agent %s", call.action, call.agent_id)
        return await self._run(action, ctx, params)

    async def _run(self, action: Action, ctx: ActionContext, params: ActionParams[Any]) -> CallResult:
        if self._semaphore is not None:
            # The slot belongs to the handler task and outlives a timeout.
            await self._semaphore.acquire()
        try:
            task = asyncio.ensure_future(action.call(ctx, params))
        except BaseException:
            self._release_slot()
            raise
        if self._semaphore is not None:
            task.add_done_callback(self._release_slot)

        try:
            done, _ = await asyncio.wait({task}, timeout=self._timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise

        if not done:
            self._abandon(task, ctx)
            return CallResult.failure(
                ErrorKind.TIMEOUT,
                f"Action {ctx.action!r} did not complete within {self._timeout:g}s",
            )

        if task.cancelled():
            logger.warning("Action %s was cancelled", ctx.action)
            return CallResult.failure(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)
        try:
            result = task.result()
        except ActionError as e:
            logger.info("Action %s failed: %s", ctx.action, e)
            return CallResult.failure(ErrorKind.HANDLER_ERROR, str(e) or type(e).__name__)
        except Exception:
            logger.exception("Action %s raised unexpectedly", ctx.action)
            return CallResult.failure(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

        if not isinstance(result, ActionResult):
            result = ActionResult(payload=result)
        try:
            output = to_jsonable_python(result.payload)
        except PydanticSerializationError:
            logger.exception("Action %s returned an output that is not JSON serializable", ctx.action)
            return CallResult.failure(ErrorKind.INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE)

        logger.info("Action call result: %s for agent %s", ctx.action, ctx.agent_id)
        return CallResult.success(output, payment=result.payment)

    def _release_slot(self, _task: asyncio.Task[Any] | None = None) -> None:
        if self._semaphore is not None:
            self._semaphore.release()

    async def cancel_abandoned(self) -> None:
        """Cancel timed-out handlers that are still running and wait for them to end."""
        tasks = list(self._abandoned)
        for task in tasks:
            task.cancel()
        if tasks:
            logger.info("Cancelling %d abandoned action(s)", len(tasks))
            await asyncio.gather(*tasks, return_exceptions=True)

    def _abandon(self, task: asyncio.Task[Any], ctx: ActionContext) -> None:
        logger.warning(
            "Action %s for agent %s timed out after %gs; abandoning it",
            ctx.action,
            ctx.agent_id,
            self._timeout,
        )
        self._abandoned.add(task)

        def _finished(t: asyncio.Task[Any]) -> None:
            self._abandoned.discard(t)
            if t.cancelled():
                return
            exc = t.exception()
            if exc is not None:
                logger.warning("Abandoned action %s finished with %r", ctx.action, exc)
            else:
                logger.info("Abandoned action %s finished late", ctx.action)

        task.add_done_callback(_finished)


def decode_payload(action: Action, payload: Any) -> Any:
    """Decode a raw call payload into the action's ARGS model.

    JSON-encoded strings are parsed first, since agents may send either form.
    """
    args_model: type[BaseModel] | None = action.ARGS
    if args_model is None:
        return payload

    if isinstance(payload, (str, bytes)):
        try:
            payload = json.loads(payload)
        except json.JSONDecodeError as e:
            raise InvalidArguments(f"payload is not valid JSON: {e.msg}") from e
    if payload is None:
        payload = {}

    try:
        return args_model.model_validate(payload)
    except ValidationError as e:
        raise InvalidArguments("; ".join(format_validation_error(e, prefix="payload"))) from e
