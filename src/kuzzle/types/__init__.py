"""Request and response types exchanged with the backend."""

from kuzzle.types.request import Request, build_request
from kuzzle.types.response import Notification, Response, ResponseError

__all__ = [
    "Request",
    "build_request",
    "Response",
    "ResponseError",
    "Notification",
]
