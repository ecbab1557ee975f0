"""
WebSocket protocol.

One persistent connection; a background reader correlates incoming frames
with in-flight requests so several queries can be pending at once.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from websockets.asyncio.client import ClientConnection, connect
from websockets.exceptions import ConnectionClosed, WebSocketException

from kuzzle.errors import KuzzleConnectionError, NotConnectedError

from .base import BaseProtocol

if TYPE_CHECKING:
    from kuzzle.types.request import Request

logger = logging.getLogger(__name__)


class WebSocket(BaseProtocol):
    """
    WebSocket transport.

    Example:
        ws = WebSocket("localhost", 7512)
        assert ws.url == "ws://localhost:7512"
    """

    def __init__(
        self,
        host: str,
        port: int = 7512,
        ssl: bool = False,
        *,
        timeout: float | None = 30.0,
    ):
        super().__init__(timeout=timeout)
        self.host = host
        self.port = port
        self.ssl = ssl

        self._ws: ClientConnection | None = None
        self._reader: asyncio.Task | None = None

    @property
    def url(self) -> str:
        scheme = "wss" if self.ssl else "ws"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def is_connected(self) -> bool:
        return self._ws is not None

    async def connect(self) -> None:
        if self._ws is not None:
            logger.warning("Already connected")
            return

        logger.debug(f"Connecting to {self.url}")
        try:
            self._ws = await connect(self.url, open_timeout=self.timeout)
        except (OSError, WebSocketException, asyncio.TimeoutError) as e:
            raise KuzzleConnectionError(f"Cannot connect to {self.url}: {e}") from e

        self._reader = asyncio.create_task(self._read_loop())
        logger.info(f"Connected to {self.url}")

    async def disconnect(self) -> None:
        if self._ws is None:
            raise NotConnectedError("WebSocket connection already closed")

        ws, self._ws = self._ws, None
        reader, self._reader = self._reader, None

        if reader is not None:
            reader.cancel()
            try:
                await reader
            except asyncio.CancelledError:
                pass

        await ws.close()
        self._pending.fail_all(KuzzleConnectionError("Connection closed"))
        logger.info(f"Disconnected from {self.url}")

    async def send(self, request: "Request") -> str:
        if self._ws is None:
            raise NotConnectedError("WebSocket is not connected")

        future = self._pending.register(request.request_id)
        logger.debug(
            f"[WebSocket] Sending {request.controller}:{request.action} "
            f"({request.request_id})"
        )
        try:
            await self._ws.send(request.to_json())
        except ConnectionClosed as e:
            self._pending.discard(request.request_id)
            raise KuzzleConnectionError(f"Connection closed while sending: {e}") from e

        return await self._await_response(request.request_id, future)

    async def _read_loop(self) -> None:
        """Read frames until the connection drops."""
        ws = self._ws
        if ws is None:
            return

        try:
            async for frame in ws:
                self._dispatch(frame)
        except ConnectionClosed as e:
            logger.warning(f"[WebSocket] Connection lost: {e}")
        finally:
            # Closed by the server rather than by disconnect()
            if self._ws is ws:
                self._ws = None
                self._reader = None
                self._pending.fail_all(KuzzleConnectionError("Connection lost"))
