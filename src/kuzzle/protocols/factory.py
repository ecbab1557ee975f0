"""Build a protocol instance from connection settings."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from .base import KuzzleProtocol
from .http import Http
from .mqtt import Mqtt
from .websocket import WebSocket

if TYPE_CHECKING:
    from kuzzle.config.settings import ConnectionConfig

logger = logging.getLogger(__name__)

PROTOCOLS = {
    "websocket": WebSocket,
    "http": Http,
    "mqtt": Mqtt,
}

DEFAULT_PORTS = {
    "websocket": 7512,
    "http": 7512,
    "mqtt": 1883,
}


def create_protocol(config: "ConnectionConfig") -> KuzzleProtocol:
    """
    Create the protocol described by a ConnectionConfig.

    Raises:
        ValueError: If the protocol name is unknown
    """
    name = config.protocol.lower()
    protocol_class = PROTOCOLS.get(name)
    if protocol_class is None:
        raise ValueError(
            f"Unknown protocol '{config.protocol}'. "
            f"Expected one of: {', '.join(PROTOCOLS)}"
        )

    port = config.port or DEFAULT_PORTS[name]
    logger.debug(f"Creating {name} protocol for {config.host}:{port}")
    return protocol_class(config.host, port, config.ssl, timeout=config.timeout)
