"""Mock data factories for unit tests.

This module provides factory functions to create backend payloads
(responses, errors, notifications) for testing without a real server.
"""

import json
import uuid
from typing import Any, Dict, Optional


def make_uuid() -> str:
    """Generate a random UUID string."""
    return str(uuid.uuid4())


class MockDataFactory:
    """Factory for creating raw backend payloads."""

    @staticmethod
    def response(
        request_id: Optional[str] = None,
        status: int = 200,
        controller: str = "server",
        action: str = "now",
        result: Any = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        """Create a successful response payload."""
        request_id = request_id or make_uuid()
        payload = {
            "requestId": request_id,
            "status": status,
            "node": "knode-test",
            "controller": controller,
            "action": action,
            "index": None,
            "collection": None,
            "error": None,
            "result": result,
            "volatile": None,
            "room": request_id,
        }
        payload.update(extra)
        return payload

    @staticmethod
    def error_response(
        request_id: Optional[str] = None,
        status: int = 401,
        message: str = "Invalid token.",
        error_id: str = "security.token.invalid",
        controller: str = "auth",
        action: str = "checkToken",
    ) -> Dict[str, Any]:
        """Create an error response payload."""
        return {
            "requestId": request_id or make_uuid(),
            "status": status,
            "controller": controller,
            "action": action,
            "error": {
                "message": message,
                "status": status,
                "id": error_id,
                "code": 117506049,
            },
            "result": None,
        }

    @staticmethod
    def notification(
        room: str = "room-123",
        action: str = "create",
        result: Any = None,
        **extra: Any,
    ) -> Dict[str, Any]:
        """Create a document notification payload."""
        payload = {
            "status": 200,
            "requestId": make_uuid(),
            "timestamp": 1700000000000,
            "volatile": {},
            "index": "nyc-open-data",
            "collection": "yellow-taxi",
            "controller": "document",
            "action": action,
            "protocol": "websocket",
            "scope": "in",
            "result": result if result is not None else {"_id": "doc-1", "_source": {}},
            "type": "document",
            "room": room,
        }
        payload.update(extra)
        return payload

    @staticmethod
    def dumps(payload: Dict[str, Any]) -> str:
        return json.dumps(payload)


# Convenience instance
factory = MockDataFactory()
