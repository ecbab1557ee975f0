"""
Kuzzle SDK - Asynchronous Python client for the Kuzzle backend.

Client:
    Kuzzle: Façade over one protocol (connect, query, disconnect)

Protocols:
    WebSocket: Persistent connection, concurrent requests, notifications
    Http: Request/response over POST /_query
    Mqtt: Request/response over the MQTT entrypoint

Types:
    Request / build_request: Controller + action request
    Response: Result or error returned by the backend
    Notification: Unsolicited realtime message

Configuration:
    ConnectionConfig, KuzzleSettings, load_connection_config

Example:
    from kuzzle import Kuzzle, WebSocket, build_request

    kuzzle = Kuzzle(WebSocket("localhost"))
    await kuzzle.connect()

    request = build_request({"controller": "server", "action": "now"})
    response = await kuzzle.query(request)

    if response.result is not None:
        print(f"Kuzzle current Epoch timestamp: {response.result['now']}")
    else:
        print("No timestamp was received from the Kuzzle server!")

    await kuzzle.disconnect()
"""

from .client import Kuzzle

from .config import ConnectionConfig, KuzzleSettings, load_connection_config
from .errors import (
    ApiError,
    KuzzleConnectionError,
    KuzzleError,
    NotConnectedError,
    RequestTimeoutError,
    ResponseParseError,
)
from .protocols import Http, KuzzleProtocol, Mqtt, WebSocket, create_protocol
from .types import Notification, Request, Response, ResponseError, build_request

__all__ = [
    # Client
    "Kuzzle",
    # Protocols
    "KuzzleProtocol",
    "WebSocket",
    "Http",
    "Mqtt",
    "create_protocol",
    # Types
    "Request",
    "build_request",
    "Response",
    "ResponseError",
    "Notification",
    # Configuration
    "ConnectionConfig",
    "KuzzleSettings",
    "load_connection_config",
    # Errors
    "KuzzleError",
    "KuzzleConnectionError",
    "NotConnectedError",
    "RequestTimeoutError",
    "ResponseParseError",
    "ApiError",
]

__version__ = "0.1.0"
