"""
Transports used to talk to the backend.

Components:
    KuzzleProtocol: Interface every transport implements
    WebSocket: Persistent multiplexed connection (notifications supported)
    Http: One POST per request
    Mqtt: Publish/subscribe over the backend's MQTT entrypoint
    create_protocol: Factory from a ConnectionConfig
"""

from .base import BaseProtocol, KuzzleProtocol, PendingRequests
from .factory import create_protocol
from .http import Http
from .mqtt import Mqtt
from .websocket import WebSocket

__all__ = [
    "KuzzleProtocol",
    "BaseProtocol",
    "PendingRequests",
    "WebSocket",
    "Http",
    "Mqtt",
    "create_protocol",
]
