"""Shared test fixtures."""

import asyncio
import os
from collections.abc import Callable, Coroutine
from typing import Any

import httpx
import pytest
from unifai import Envelope, ToolkitService, parse_message

from toolkits.echo.action import EchoSlam


class FakeConnection:
    """In-memory stand-in for ToolkitConnection.

    Frames pushed with `feed()` are delivered to the listen() handler; every
    sent envelope is recorded in `sent`.
    """

    def __init__(self) -> None:
        self.sent: list[Envelope] = []
        self.connected = False
        self.closed = False
        self._inbox: asyncio.Queue[str | None] = asyncio.Queue()
        self._sent_event = asyncio.Event()

    @property
    def is_connected(self) -> bool:
        return self.connected and not self.closed

    async def connect(self) -> None:
        self.connected = True

    async def send(self, envelope: Envelope) -> None:
        # Round-trip through JSON like the real socket does.
        self.sent.append(parse_message(envelope.model_dump_json(by_alias=True)))
        self._sent_event.set()

    async def listen(self, handler: Callable[[str], Coroutine[Any, Any, None]]) -> None:
        while True:
            frame = await self._inbox.get()
            if frame is None:
                return
            await handler(frame)

    def feed(self, frame: str) -> None:
        self._inbox.put_nowait(frame)

    def hang_up(self) -> None:
        self._inbox.put_nowait(None)

    async def close(self) -> None:
        self.closed = True
        self.hang_up()

    async def wait_for_sent(self, count: int, timeout: float = 2.0) -> list[Envelope]:
        async def _wait() -> None:
            while len(self.sent) < count:
                self._sent_event.clear()
                await self._sent_event.wait()

        await asyncio.wait_for(_wait(), timeout=timeout)
        return self.sent


@pytest.fixture
def fake_connection() -> FakeConnection:
    return FakeConnection()


@pytest.fixture
def recorded_requests() -> list[httpx.Request]:
    return []


@pytest.fixture
def mock_client(recorded_requests: list[httpx.Request]) -> Callable[..., httpx.AsyncClient]:
    """Build an authenticated AsyncClient whose requests hit a handler instead of the network."""

    def _make(
        handler: Callable[[httpx.Request], httpx.Response] | None = None,
        api_key: str = "test-key",
    ) -> httpx.AsyncClient:
        def _record(request: httpx.Request) -> httpx.Response:
            recorded_requests.append(request)
            if handler is None:
                return httpx.Response(200, json={})
            return handler(request)

        return httpx.AsyncClient(
            headers={"Content-Type": "application/json", "Authorization": api_key},
            transport=httpx.MockTransport(_record),
        )

    return _make


@pytest.fixture
async def echo_service(fake_connection: FakeConnection, mock_client) -> ToolkitService:
    """A ToolkitService serving EchoSlam over a fake connection."""
    service = ToolkitService(
        "toolkit-key",
        call_timeout=1.0,
        connection=fake_connection,  # type: ignore[arg-type]
        api_client=mock_client(api_key="toolkit-key"),
    )
    service.add_action(EchoSlam())
    yield service  # type: ignore[misc]
    await service.stop()


@pytest.fixture
def toolkit_api_key() -> str:
    key = os.environ.get("UNIFAI_TOOLKIT_API_KEY")
    if not key:
        pytest.skip("UNIFAI_TOOLKIT_API_KEY not set")
    return key


@pytest.fixture
def agent_api_key() -> str:
    key = os.environ.get("UNIFAI_AGENT_API_KEY")
    if not key:
        pytest.skip("UNIFAI_AGENT_API_KEY not set")
    return key
