"""
Ask the backend for its current time.

Run with:
    KUZZLE_HOST=localhost KUZZLE_PROTOCOL=websocket python 01_server_now.py
"""

import asyncio
import logging

from dotenv import load_dotenv

from setup_logging import setup_logging
from kuzzle import Kuzzle, KuzzleSettings, build_request

setup_logging()
logger = logging.getLogger(__name__)


async def main():
    load_dotenv()

    settings = KuzzleSettings()
    kuzzle = Kuzzle.from_config(settings.to_connection_config())
    await kuzzle.connect()

    request = build_request({"controller": "server", "action": "now"})
    response = await kuzzle.query(request)

    if response.result is not None:
        logger.info(f"Kuzzle current Epoch timestamp: {response.result['now']}")
    else:
        logger.error("No timestamp was received from the Kuzzle server!")

    await kuzzle.disconnect()


if __name__ == "__main__":
    asyncio.run(main())
