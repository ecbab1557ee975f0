"""
Connection profile loading.

This module loads named connection profiles from a YAML configuration file
at the project root, e.g.:

    local:
      protocol: websocket
      host: localhost
      port: 7512
    production:
      protocol: http
      host: kuzzle.example.com
      ssl: true
"""

import logging
import os
import yaml
from pathlib import Path

from pydantic import ValidationError

from kuzzle.config.settings import ConnectionConfig

logger = logging.getLogger(__name__)


def get_config_path() -> Path:
    """
    Get the path to the connection configuration file.

    Looks for kuzzle_config.yaml in the current working directory (project root).
    """
    return Path(os.getcwd()) / "kuzzle_config.yaml"


def load_connection_config(profile: str) -> ConnectionConfig:
    """
    Load a connection profile from YAML file at project root.

    Args:
        profile: The key identifying the profile in the config file

    Returns:
        Validated ConnectionConfig

    Raises:
        FileNotFoundError: If kuzzle_config.yaml doesn't exist
        ValueError: If the profile is missing, has no host, or has invalid values
        RuntimeError: If the file cannot be read or parsed
    """
    config_path = get_config_path()
    logger.debug(f"Loading config from: {config_path}")

    if not config_path.exists():
        raise FileNotFoundError(
            f"kuzzle_config.yaml not found at {config_path}. "
            "Copy kuzzle_config.yaml.example to kuzzle_config.yaml and configure your profiles."
        )

    try:
        with open(config_path, "r") as f:
            config = yaml.safe_load(f) or {}

        profile_config = config.get(profile, {})

        if not profile_config:
            raise ValueError(
                f"Profile '{profile}' not found in {config_path}. "
                f"Please add the profile configuration."
            )

        if not profile_config.get("host"):
            raise ValueError(
                f"Missing required field for profile '{profile}': host. "
                f"Please add the backend host to {config_path}"
            )

        try:
            return ConnectionConfig(**profile_config)
        except ValidationError as e:
            raise ValueError(f"Invalid configuration for profile '{profile}': {e}")
    except ValueError:
        raise
    except Exception as e:
        raise RuntimeError(f"Error loading connection config: {e}")
