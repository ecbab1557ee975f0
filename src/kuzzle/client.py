"""
Kuzzle - client façade over a protocol.

Serializes requests, delegates delivery to the chosen protocol and parses
what comes back. Unsolicited messages (realtime notifications) are queued
for async iteration.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any, Mapping

from kuzzle.errors import KuzzleError
from kuzzle.protocols import KuzzleProtocol, create_protocol
from kuzzle.types import Notification, Request, Response, build_request

if TYPE_CHECKING:
    from kuzzle.config.settings import ConnectionConfig

logger = logging.getLogger(__name__)


class Kuzzle:
    """
    Client for the Kuzzle backend.

    Example:
        kuzzle = Kuzzle(WebSocket("localhost"))
        await kuzzle.connect()

        response = await kuzzle.query({"controller": "server", "action": "now"})
        if response.result is not None:
            print(response.result["now"])

        await kuzzle.disconnect()

    Realtime notifications:
        async for notification in kuzzle:
            print(notification.room, notification.result)
    """

    def __init__(
        self,
        protocol: KuzzleProtocol,
        *,
        notification_queue_size: int = 1000,
    ):
        self.protocol = protocol
        self.jwt: str | None = None

        self._notifications: asyncio.Queue[Notification] = asyncio.Queue(
            maxsize=notification_queue_size
        )
        self.protocol.on_notification = self._queue_notification

    @classmethod
    def from_config(cls, config: "ConnectionConfig", **kwargs: Any) -> "Kuzzle":
        """Create a client with the protocol described by config."""
        return cls(create_protocol(config), **kwargs)

    @property
    def is_connected(self) -> bool:
        return self.protocol.is_connected

    # --- Connection lifecycle ---

    async def connect(self) -> None:
        await self.protocol.connect()

    async def disconnect(self) -> None:
        await self.protocol.disconnect()

    async def __aenter__(self) -> "Kuzzle":
        await self.connect()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        if self.protocol.is_connected:
            await self.disconnect()

    # --- Requests ---

    async def query(self, request: Request | Mapping[str, Any]) -> Response:
        """
        Send a request and wait for its response.

        Error responses are returned, not raised: check response.error (or
        call response.raise_for_error()). A response may have no result.

        Raises:
            NotConnectedError: If the protocol is not connected
            KuzzleConnectionError: If the connection fails or is lost
            RequestTimeoutError: If no response arrives in time
            ResponseParseError: If the response cannot be parsed
            pydantic.ValidationError: If a mapping is not a valid request
        """
        if not isinstance(request, Request):
            request = build_request(request)

        if request.jwt is None and self.jwt is not None:
            request = request.model_copy(update={"jwt": self.jwt})

        raw = await self.protocol.send(request)
        response = Response.from_json(raw)

        if response.request_id is not None and response.request_id != request.request_id:
            logger.warning(
                f"Response id {response.request_id} does not match "
                f"request id {request.request_id}"
            )
        if response.error is not None:
            logger.debug(
                f"{request.controller}:{request.action} failed: {response.error.message}"
            )
        return response

    async def now(self) -> int:
        """
        Get the backend's current Epoch timestamp in milliseconds.

        Raises:
            ApiError: If the backend answers with an error
            KuzzleError: If the response carries no timestamp
        """
        response = await self.query({"controller": "server", "action": "now"})
        response.raise_for_error()

        if not isinstance(response.result, dict) or "now" not in response.result:
            raise KuzzleError("No timestamp was received from the server")
        return response.result["now"]

    # --- Authentication ---

    async def login(
        self,
        strategy: str,
        credentials: dict[str, Any],
        expires_in: str | int | None = None,
    ) -> str:
        """
        Authenticate and keep the returned JWT for subsequent requests.

        Raises:
            ApiError: If the credentials are rejected
        """
        fields: dict[str, Any] = {
            "controller": "auth",
            "action": "login",
            "strategy": strategy,
            "body": credentials,
        }
        if expires_in is not None:
            fields["expiresIn"] = expires_in

        response = await self.query(fields)
        response.raise_for_error()

        jwt = (response.result or {}).get("jwt")
        if not jwt:
            raise KuzzleError("Login succeeded but no token was returned")

        self.jwt = jwt
        logger.info(f"Logged in with strategy '{strategy}'")
        return jwt

    async def logout(self) -> None:
        """Invalidate the current JWT on the backend and forget it."""
        if self.jwt is None:
            return

        try:
            response = await self.query({"controller": "auth", "action": "logout"})
            response.raise_for_error()
        finally:
            self.jwt = None
        logger.info("Logged out")

    # --- Notifications ---

    def __aiter__(self):
        """Return self to allow async iteration over notifications."""
        return self

    async def __anext__(self) -> Notification:
        """Get next notification. Blocks until one is available."""
        return await self._notifications.get()

    def _queue_notification(self, message: dict[str, Any]) -> None:
        """Queue notification for async iteration. Logs warning if queue is full."""
        try:
            notification = Notification.model_validate(message)
        except ValueError as e:
            logger.warning(f"Dropping invalid notification: {e}")
            return

        try:
            self._notifications.put_nowait(notification)
        except asyncio.QueueFull:
            logger.warning(
                f"Notification queue full, dropping notification for room "
                f"{notification.room}"
            )
