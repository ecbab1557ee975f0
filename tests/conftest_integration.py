"""Fixtures for integration tests against a real backend.

These tests require a running backend (see docker-compose.yml at the
project root). Settings are loaded from .env.test automatically.

Run integration tests:
    docker compose up -d
    KUZZLE_INTEGRATION=1 pytest tests/integration/ -v

Skip integration tests (run only unit tests):
    pytest tests/ --ignore=tests/integration/
"""

from pathlib import Path

import pytest
from pydantic_settings import BaseSettings, SettingsConfigDict

from kuzzle import Http, Kuzzle, Mqtt, WebSocket


class TestSettings(BaseSettings):
    """Settings for integration tests, loaded from .env.test."""

    kuzzle_integration: bool = False
    kuzzle_host: str = "localhost"
    kuzzle_http_port: int = 7512
    kuzzle_mqtt_port: int = 1883

    model_config = SettingsConfigDict(
        env_file=Path(__file__).parent.parent / ".env.test",
        case_sensitive=False,
        extra="ignore",
    )


# Load settings from .env.test
test_settings = TestSettings()


# Skip marker for integration tests
requires_kuzzle = pytest.mark.skipif(
    not test_settings.kuzzle_integration,
    reason="KUZZLE_INTEGRATION environment variable not set",
)


@pytest.fixture
def integration_settings() -> TestSettings:
    return test_settings


@pytest.fixture(params=["websocket", "http", "mqtt"])
async def connected_kuzzle(request, integration_settings):
    """Connected client, once per protocol."""
    host = integration_settings.kuzzle_host
    protocols = {
        "websocket": lambda: WebSocket(host, integration_settings.kuzzle_http_port),
        "http": lambda: Http(host, integration_settings.kuzzle_http_port),
        "mqtt": lambda: Mqtt(host, integration_settings.kuzzle_mqtt_port),
    }
    kuzzle = Kuzzle(protocols[request.param]())
    await kuzzle.connect()
    yield kuzzle
    if kuzzle.is_connected:
        await kuzzle.disconnect()
