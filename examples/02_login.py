"""
Authenticate with the local strategy and call an authenticated action.

Run with:
    KUZZLE_USERNAME=admin KUZZLE_PASSWORD=secret python 02_login.py
"""

import asyncio
import logging
import os

from dotenv import load_dotenv

from setup_logging import setup_logging
from kuzzle import ApiError, Kuzzle, load_connection_config

setup_logging()
logger = logging.getLogger(__name__)


async def main():
    load_dotenv()

    username = os.getenv("KUZZLE_USERNAME")
    password = os.getenv("KUZZLE_PASSWORD")

    if not username or not password:
        raise ValueError("KUZZLE_USERNAME and KUZZLE_PASSWORD environment variables are required")

    # Load connection profile from kuzzle_config.yaml
    config = load_connection_config("local")

    async with Kuzzle.from_config(config) as kuzzle:
        try:
            await kuzzle.login("local", {"username": username, "password": password})
        except ApiError as e:
            logger.error(f"Login failed: {e}")
            return

        response = await kuzzle.query({"controller": "auth", "action": "getCurrentUser"})
        logger.info(f"Logged in as: {response.result['_id']}")

        await kuzzle.logout()


if __name__ == "__main__":
    asyncio.run(main())
