"""
Protocol contract and shared request/response correlation.

A protocol delivers serialized requests to the backend and hands back the
raw text of each correlated response. Multiplexed transports (WebSocket,
MQTT) share the bookkeeping implemented here.
"""

from __future__ import annotations

import asyncio
import json
import logging
from typing import TYPE_CHECKING, Any, Callable, Protocol, runtime_checkable

from kuzzle.errors import KuzzleError, RequestTimeoutError

if TYPE_CHECKING:
    from kuzzle.types.request import Request

logger = logging.getLogger(__name__)

NotificationHandler = Callable[[dict[str, Any]], None]


@runtime_checkable
class KuzzleProtocol(Protocol):
    """
    Interface for the transports a Kuzzle client can use.

    Implementations: WebSocket, Http, Mqtt, FakeProtocol (testing)
    """

    on_notification: NotificationHandler | None

    @property
    def is_connected(self) -> bool: ...

    async def connect(self) -> None:
        """Open the underlying connection."""
        ...

    async def disconnect(self) -> None:
        """Close the underlying connection."""
        ...

    async def send(self, request: "Request") -> str:
        """Send one request and return the raw text of its response."""
        ...


class PendingRequests:
    """
    In-flight requests awaiting a response, keyed by request id.

    A request id can only be in flight once, so each request receives at
    most one response.
    """

    def __init__(self):
        self._futures: dict[str, asyncio.Future[str]] = {}

    def __len__(self) -> int:
        return len(self._futures)

    def __contains__(self, request_id: object) -> bool:
        return request_id in self._futures

    def register(self, request_id: str) -> asyncio.Future[str]:
        if request_id in self._futures:
            raise KuzzleError(f"Request {request_id} is already in flight")

        future: asyncio.Future[str] = asyncio.get_running_loop().create_future()
        self._futures[request_id] = future
        return future

    def resolve(self, request_id: str, raw: str) -> bool:
        """Complete the request. Returns False if nobody waits for this id."""
        future = self._futures.pop(request_id, None)
        if future is None or future.done():
            return False
        future.set_result(raw)
        return True

    def discard(self, request_id: str) -> None:
        future = self._futures.pop(request_id, None)
        if future is not None and not future.done():
            future.cancel()

    def fail_all(self, exc: BaseException) -> None:
        """Fail every in-flight request (connection lost or closed)."""
        futures, self._futures = self._futures, {}
        for future in futures.values():
            if not future.done():
                future.set_exception(exc)
        if futures:
            logger.debug(f"Failed {len(futures)} pending request(s): {exc}")


class BaseProtocol:
    """
    Shared state for multiplexed protocols.

    Subclasses write frames themselves and feed every incoming frame to
    _dispatch(); responses are matched on requestId, frames addressed to
    another room are forwarded to on_notification.
    """

    def __init__(self, timeout: float | None = 30.0):
        self.timeout = timeout
        self.on_notification: NotificationHandler | None = None
        self._pending = PendingRequests()

    @property
    def pending_count(self) -> int:
        return len(self._pending)

    def _dispatch(self, raw: str | bytes) -> None:
        """Route one incoming frame to its waiting request or to notifications."""
        try:
            if isinstance(raw, bytes):
                raw = raw.decode("utf-8")
            message = json.loads(raw)
        except ValueError:
            logger.warning(f"Dropping undecodable frame: {raw[:200]!r}")
            return

        if not isinstance(message, dict):
            logger.warning(f"Dropping unexpected frame: {raw[:200]!r}")
            return

        request_id = message.get("requestId")
        room = message.get("room")

        # The backend echoes the requestId as room on responses
        if isinstance(request_id, str) and room in (None, request_id):
            if not self._pending.resolve(request_id, raw):
                logger.debug(f"Dropping response to unknown request {request_id}")
            return

        if room is not None:
            if self.on_notification is None:
                logger.debug(f"No notification handler, dropping frame for room {room}")
                return
            self.on_notification(message)
            return

        # Heartbeats and other protocol-level frames
        logger.debug(f"Ignoring frame without requestId: {raw[:200]!r}")

    async def _await_response(
        self, request_id: str, future: asyncio.Future[str]
    ) -> str:
        try:
            return await asyncio.wait_for(future, self.timeout)
        except asyncio.TimeoutError:
            self._pending.discard(request_id)
            raise RequestTimeoutError(
                f"No response for request {request_id} in {self.timeout:.2f} sec"
            )
