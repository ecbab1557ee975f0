"""
Pytest fixtures for kuzzle SDK tests.

Provides fake protocols and clients for fast testing without a real backend.
"""

import os

import pytest

from kuzzle import Kuzzle
from kuzzle.testing import FakeProtocol


def pytest_ignore_collect(collection_path):
    """Skip integration tests in CI environment.

    GitHub Actions sets CI=true automatically.
    This allows CI to run unit tests while skipping integration tests
    that require a running backend.
    """
    if os.environ.get("CI") == "true":
        if "integration" in str(collection_path):
            return True
    return False


@pytest.fixture
def fake_protocol() -> FakeProtocol:
    """Disconnected in-memory protocol."""
    return FakeProtocol()


@pytest.fixture
async def kuzzle_client(fake_protocol) -> Kuzzle:
    """Kuzzle client connected through a FakeProtocol."""
    kuzzle = Kuzzle(fake_protocol)
    await kuzzle.connect()
    return kuzzle


@pytest.fixture
def server_now_request() -> dict:
    return {"controller": "server", "action": "now"}
