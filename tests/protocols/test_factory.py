"""Tests for create_protocol."""

import pytest

from kuzzle.config import ConnectionConfig
from kuzzle.protocols import Http, Mqtt, WebSocket, create_protocol


@pytest.mark.parametrize(
    "name, protocol_class, default_port",
    [
        ("websocket", WebSocket, 7512),
        ("http", Http, 7512),
        ("mqtt", Mqtt, 1883),
    ],
)
def test_creates_protocol_with_default_port(name, protocol_class, default_port):
    protocol = create_protocol(ConnectionConfig(protocol=name, host="kuzzle"))

    assert isinstance(protocol, protocol_class)
    assert protocol.host == "kuzzle"
    assert protocol.port == default_port


def test_passes_port_ssl_and_timeout():
    config = ConnectionConfig(
        protocol="websocket", host="kuzzle.io", port=443, ssl=True, timeout=5.0
    )

    protocol = create_protocol(config)

    assert protocol.url == "wss://kuzzle.io:443"
    assert protocol.timeout == 5.0


def test_unknown_protocol_raises():
    config = ConnectionConfig.model_construct(protocol="carrier-pigeon", host="x")

    with pytest.raises(ValueError) as exc_info:
        create_protocol(config)

    assert "carrier-pigeon" in str(exc_info.value)
