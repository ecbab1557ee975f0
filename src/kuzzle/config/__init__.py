"""
Connection configuration utilities.

Usage:
    from kuzzle.config import load_connection_config, KuzzleSettings

    config = load_connection_config("local")
    config = KuzzleSettings().to_connection_config()
"""

from kuzzle.config.loader import get_config_path, load_connection_config
from kuzzle.config.settings import ConnectionConfig, KuzzleSettings

__all__ = [
    "ConnectionConfig",
    "KuzzleSettings",
    "get_config_path",
    "load_connection_config",
]
