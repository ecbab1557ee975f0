"""
Subscribe to document changes in a collection and print notifications.

Notifications require a persistent connection (WebSocket or MQTT).

Run with:
    python 03_realtime.py nyc-open-data yellow-taxi
"""

import asyncio
import logging
import sys

from setup_logging import setup_logging
from kuzzle import Kuzzle, WebSocket

setup_logging()
logger = logging.getLogger(__name__)


async def main(index: str, collection: str):
    async with Kuzzle(WebSocket("localhost")) as kuzzle:
        response = await kuzzle.query(
            {
                "controller": "realtime",
                "action": "subscribe",
                "index": index,
                "collection": collection,
                "body": {},
            }
        )
        response.raise_for_error()
        logger.info(f"Subscribed to room {response.result['roomId']}")

        async for notification in kuzzle:
            logger.info(
                f"{notification.type} notification ({notification.action}): "
                f"{notification.result}"
            )


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print("Usage: python 03_realtime.py <index> <collection>")
        sys.exit(1)
    asyncio.run(main(sys.argv[1], sys.argv[2]))
