"""Pytest configuration for integration tests.

Re-exports fixtures from the parent module.
Settings are loaded from .env.test automatically.
"""

from tests.conftest_integration import (
    connected_kuzzle,
    integration_settings,
    requires_kuzzle,
    test_settings,
)

__all__ = [
    "connected_kuzzle",
    "integration_settings",
    "requires_kuzzle",
    "test_settings",
]
