"""ToolkitConnection — async wrapper around the toolkit websocket."""

import asyncio
import logging
from collections.abc import Callable, Coroutine
from typing import Any

import aiohttp

from unifai.config import PING_INTERVAL, backend_ws_endpoint
from unifai.models.envelope import Envelope

logger = logging.getLogger(__name__)


class ToolkitConnection:
    """Long-lived websocket link between a toolkit and the Unifai backend.

    Usage:
        conn = ToolkitConnection(api_key)
        await conn.connect()
        await conn.send(envelope)
        await conn.listen(handler)   # returns when the socket closes
        await conn.close()
    """

    def __init__(
        self,
        api_key: str,
        url: str | None = None,
        ping_interval: float = PING_INTERVAL,
    ) -> None:
        self._api_key = api_key
        self._url = url
        self._ping_interval = ping_interval
        self._session: aiohttp.ClientSession | None = None
        self._ws: aiohttp.ClientWebSocketResponse | None = None
        self._send_lock = asyncio.Lock()

    @property
    def is_connected(self) -> bool:
        return self._ws is not None and not self._ws.closed

    async def connect(self) -> None:
        """Open the websocket. aiohttp sends a ping every `ping_interval` seconds."""
        url = self._url or backend_ws_endpoint()
        self._session = aiohttp.ClientSession()
        try:
            self._ws = await self._session.ws_connect(
                url,
                params={"type": "toolkit", "api-key": self._api_key},
                heartbeat=self._ping_interval,
            )
        except Exception:
            await self._session.close()
            self._session = None
            raise
        logger.info("Connected to %s", url)

    async def send(self, envelope: Envelope) -> None:
        """Send one envelope as a JSON text frame."""
        if self._ws is None:
            raise RuntimeError("Not connected. Call connect() first.")
        data = envelope.model_dump_json(by_alias=True)
        async with self._send_lock:
            await self._ws.send_str(data)
        logger.debug("Sent %s message", envelope.type)

    async def listen(self, handler: Callable[[str], Coroutine[Any, Any, None]]) -> None:
        """Feed every text frame to `handler` until the socket closes."""
        ws = self._ws
        if ws is None:
            raise RuntimeError("Not connected. Call connect() first.")

        async for msg in ws:
            if msg.type == aiohttp.WSMsgType.TEXT:
                await handler(msg.data)
            elif msg.type == aiohttp.WSMsgType.ERROR:
                logger.error("Websocket error: %s", ws.exception())
                break
        logger.info("Websocket closed (code=%s)", ws.close_code)

    async def close(self) -> None:
        """Close the websocket and its HTTP session."""
        if self._ws is not None:
            await self._ws.close()
            self._ws = None
        if self._session is not None:
            await self._session.close()
            self._session = None
        logger.info("Disconnected from Unifai")
