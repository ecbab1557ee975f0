"""
MQTT protocol.

Requests are published on the backend's request topic; responses come back
on the response topic and are correlated by requestId. Any message on
another topic is treated as a notification.

paho-mqtt runs its network loop in a thread; every callback hops back to
the event loop with call_soon_threadsafe before touching protocol state.
"""

from __future__ import annotations

import asyncio
import logging
import uuid
from typing import TYPE_CHECKING, Any

import paho.mqtt.client as mqtt

from kuzzle.errors import KuzzleConnectionError, NotConnectedError

from .base import BaseProtocol

if TYPE_CHECKING:
    from kuzzle.types.request import Request

logger = logging.getLogger(__name__)


class Mqtt(BaseProtocol):
    """MQTT transport (requires the backend's MQTT protocol to be enabled)."""

    def __init__(
        self,
        host: str,
        port: int = 1883,
        ssl: bool = False,
        *,
        timeout: float | None = 30.0,
        client_id: str | None = None,
        request_topic: str = "Kuzzle/request",
        response_topic: str = "Kuzzle/response",
        keepalive: int = 60,
    ):
        super().__init__(timeout=timeout)
        self.host = host
        self.port = port
        self.ssl = ssl
        self.client_id = client_id or f"kuzzle-py-{uuid.uuid4().hex[:12]}"
        self.request_topic = request_topic
        self.response_topic = response_topic
        self.keepalive = keepalive

        self._client: mqtt.Client | None = None
        self._loop: asyncio.AbstractEventLoop | None = None
        self._connack: asyncio.Future[None] | None = None
        self._shutdown_task: asyncio.Task[None] | None = None
        self._is_connected = False

    @property
    def url(self) -> str:
        scheme = "mqtts" if self.ssl else "mqtt"
        return f"{scheme}://{self.host}:{self.port}"

    @property
    def is_connected(self) -> bool:
        return self._is_connected

    async def connect(self) -> None:
        if self._is_connected:
            logger.warning("Already connected")
            return
        await self._wait_shutdown()

        self._loop = asyncio.get_running_loop()
        self._connack = self._loop.create_future()

        client = mqtt.Client(
            callback_api_version=mqtt.CallbackAPIVersion.VERSION2,
            client_id=self.client_id,
        )
        if self.ssl:
            client.tls_set()
        client.on_connect = self._on_connect
        client.on_connect_fail = self._on_connect_fail
        client.on_disconnect = self._on_disconnect
        client.on_message = self._on_message
        self._client = client

        logger.debug(f"Connecting to {self.url}")
        try:
            client.connect_async(self.host, self.port, keepalive=self.keepalive)
            client.loop_start()
            await asyncio.wait_for(self._connack, self.timeout)
        except (OSError, KuzzleConnectionError, asyncio.TimeoutError) as e:
            self._client = None
            await self._shutdown(client)
            raise KuzzleConnectionError(f"Cannot connect to {self.url}: {e}") from e

        self._is_connected = True
        logger.info(f"Connected to {self.url}")

    async def disconnect(self) -> None:
        await self._wait_shutdown()
        if not self._is_connected or self._client is None:
            raise NotConnectedError("MQTT connection already closed")

        client, self._client = self._client, None
        self._is_connected = False
        await self._shutdown(client)
        self._pending.fail_all(KuzzleConnectionError("Connection closed"))
        logger.info(f"Disconnected from {self.url}")

    async def send(self, request: "Request") -> str:
        if not self._is_connected or self._client is None:
            raise NotConnectedError("MQTT client is not connected")

        future = self._pending.register(request.request_id)
        logger.debug(
            f"[MQTT] Publishing {request.controller}:{request.action} "
            f"({request.request_id})"
        )
        info = self._client.publish(self.request_topic, request.to_json())
        if info.rc != mqtt.MQTT_ERR_SUCCESS:
            self._pending.discard(request.request_id)
            raise KuzzleConnectionError(
                f"Publish failed: {mqtt.error_string(info.rc)}"
            )

        return await self._await_response(request.request_id, future)

    async def _shutdown(self, client: mqtt.Client) -> None:
        client.disconnect()
        # loop_stop() joins the network thread
        await asyncio.to_thread(client.loop_stop)

    async def _wait_shutdown(self) -> None:
        """Wait for the shutdown started after a lost connection, if any."""
        task, self._shutdown_task = self._shutdown_task, None
        if task is not None:
            await asyncio.gather(task, return_exceptions=True)

    def _call_in_loop(self, callback, *args: Any) -> None:
        if self._loop is None or self._loop.is_closed():
            return
        self._loop.call_soon_threadsafe(callback, *args)

    # --- paho callbacks (network thread) ---

    def _on_connect(self, client, userdata, flags, reason_code, properties) -> None:
        if not reason_code.is_failure:
            client.subscribe(self.response_topic)
        self._call_in_loop(self._handle_connack, str(reason_code), reason_code.is_failure)

    def _on_connect_fail(self, client, userdata) -> None:
        self._call_in_loop(self._handle_connack, "connection failed", True)

    def _on_disconnect(self, client, userdata, flags, reason_code, properties) -> None:
        self._call_in_loop(self._handle_connection_lost, str(reason_code))

    def _on_message(self, client, userdata, message) -> None:
        self._call_in_loop(self._handle_message, message.topic, message.payload)

    # --- event loop side ---

    def _handle_connack(self, reason: str, failed: bool) -> None:
        if self._connack is None or self._connack.done():
            return
        if failed:
            self._connack.set_exception(KuzzleConnectionError(reason))
        else:
            self._connack.set_result(None)

    def _handle_connection_lost(self, reason: str) -> None:
        if not self._is_connected:
            return

        logger.warning(f"[MQTT] Connection lost: {reason}")
        client, self._client = self._client, None
        self._is_connected = False
        self._pending.fail_all(KuzzleConnectionError("Connection lost"))
        if client is not None:
            self._shutdown_task = asyncio.get_running_loop().create_task(
                self._shutdown(client)
            )
            self._shutdown_task.add_done_callback(self._log_shutdown_failure)

    def _log_shutdown_failure(self, task: "asyncio.Task[None]") -> None:
        if not task.cancelled() and task.exception() is not None:
            logger.warning(f"[MQTT] Shutdown after connection loss failed: {task.exception()}")

    def _handle_message(self, topic: str, payload: bytes) -> None:
        if topic != self.response_topic:
            logger.debug(f"[MQTT] Message on {topic}")
        self._dispatch(payload)
