"""
Exceptions raised by the Kuzzle SDK.

Every error the SDK raises on purpose derives from KuzzleError, so callers
can catch a single type around connect/query/disconnect.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from kuzzle.types.response import Response


class KuzzleError(Exception):
    """Base class for all SDK errors."""


class KuzzleConnectionError(KuzzleError):
    """The protocol could not establish or maintain a connection."""


class NotConnectedError(KuzzleError):
    """The operation requires an open connection."""


class RequestTimeoutError(KuzzleError):
    """A request did not receive a timely response."""


class ResponseParseError(KuzzleError):
    """A response frame is not a valid Kuzzle response."""


class ApiError(KuzzleError):
    """
    The backend answered a request with an error.

    Attributes:
        status: HTTP-like status code of the response
        error_id: Backend error identifier (e.g. "security.token.invalid")
        message: Human readable error message
        response: The full Response object
    """

    def __init__(
        self,
        message: str,
        status: int | None = None,
        error_id: str | None = None,
        response: "Response | None" = None,
    ):
        super().__init__(message)
        self.message = message
        self.status = status
        self.error_id = error_id
        self.response = response

    def __str__(self) -> str:
        details = []
        if self.error_id:
            details.append(f"id={self.error_id}")
        if self.status is not None:
            details.append(f"status={self.status}")
        if not details:
            return self.message
        return f"{self.message} ({', '.join(details)})"
