"""
HTTP protocol.

Every request is an independent ``POST /_query`` carrying the raw request
JSON. Request/response only: the backend cannot push notifications.
"""

from __future__ import annotations

import json
import logging
from typing import TYPE_CHECKING

import httpx

from kuzzle.errors import KuzzleConnectionError, NotConnectedError, RequestTimeoutError

from .base import NotificationHandler

if TYPE_CHECKING:
    from kuzzle.types.request import Request

logger = logging.getLogger(__name__)


class Http:
    """HTTP transport backed by a pooled httpx.AsyncClient."""

    QUERY_PATH = "/_query"
    PROBE_PATH = "/_publicApi"

    def __init__(
        self,
        host: str,
        port: int = 7512,
        ssl: bool = False,
        *,
        timeout: float | None = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Args:
            host: Backend host name
            port: Backend HTTP port
            ssl: Use https instead of http
            timeout: Per-request timeout in seconds (None disables it)
            transport: Custom httpx transport (tests, proxies)
        """
        self.host = host
        self.port = port
        self.ssl = ssl
        self.timeout = timeout
        self.on_notification: NotificationHandler | None = None

        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def url(self) -> str:
        scheme = "https" if self.ssl else "http"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def is_connected(self) -> bool:
        return self._client is not None

    async def connect(self) -> None:
        if self._client is not None:
            logger.warning("Already connected")
            return

        client = httpx.AsyncClient(
            base_url=self.url,
            timeout=self.timeout,
            transport=self._transport,
        )
        try:
            response = await client.get(self.PROBE_PATH)
            response.raise_for_status()
        except httpx.HTTPError as e:
            await client.aclose()
            raise KuzzleConnectionError(f"Cannot reach {self.url}: {e}") from e

        self._client = client
        logger.info(f"Connected to {self.url}")

    async def disconnect(self) -> None:
        if self._client is None:
            raise NotConnectedError("HTTP client already closed")

        client, self._client = self._client, None
        await client.aclose()
        logger.info(f"Disconnected from {self.url}")

    async def send(self, request: "Request") -> str:
        if self._client is None:
            raise NotConnectedError("HTTP client is not connected")

        # The token travels in the Authorization header, not in the body
        payload = request.to_dict()
        jwt = payload.pop("jwt", None)
        headers = {"Content-Type": "application/json"}
        if jwt:
            headers["Authorization"] = f"Bearer {jwt}"

        logger.debug(
            f"[HTTP] Sending {request.controller}:{request.action} "
            f"({request.request_id})"
        )
        try:
            response = await self._client.post(
                self.QUERY_PATH,
                content=json.dumps(payload),
                headers=headers,
            )
        except httpx.TimeoutException as e:
            raise RequestTimeoutError(
                f"No response for request {request.request_id}: {e}"
            ) from e
        except httpx.HTTPError as e:
            raise KuzzleConnectionError(f"HTTP request failed: {e}") from e

        # Error statuses still carry a Kuzzle JSON body
        return response.text
