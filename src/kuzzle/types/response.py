"""
Kuzzle API responses and realtime notifications.

Using Pydantic for runtime validation; unknown fields are kept so newer
backend versions do not break parsing.
"""

from __future__ import annotations

from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from kuzzle.errors import ApiError, ResponseParseError


class ResponseError(BaseModel):
    """Error object within an error response."""

    model_config = ConfigDict(extra="allow")

    message: str
    status: Optional[int] = None
    id: Optional[str] = None
    code: Optional[int] = None
    stack: Optional[str] = None


class Response(BaseModel):
    """Answer to a single request."""

    model_config = ConfigDict(extra="allow", populate_by_name=True)

    request_id: Optional[str] = Field(default=None, alias="requestId")
    status: int
    node: Optional[str] = None
    controller: Optional[str] = None
    action: Optional[str] = None
    index: Optional[str] = None
    collection: Optional[str] = None
    error: Optional[ResponseError] = None
    result: Optional[Any] = None
    volatile: Optional[dict[str, Any]] = None

    @classmethod
    def from_json(cls, raw: str | bytes):
        """
        Parse a raw response frame.

        Raises:
            ResponseParseError: If the text is not JSON or lacks required fields
        """
        try:
            return cls.model_validate_json(raw)
        except ValidationError as e:
            raise ResponseParseError(f"Invalid response from server: {e}") from e

    @property
    def is_error(self) -> bool:
        return self.error is not None or self.status >= 400

    def raise_for_error(self) -> "Response":
        """Raise ApiError if this is an error response, else return self."""
        if not self.is_error:
            return self

        if self.error is not None:
            raise ApiError(
                self.error.message,
                status=self.error.status or self.status,
                error_id=self.error.id,
                response=self,
            )
        raise ApiError(
            f"Request failed with status {self.status}",
            status=self.status,
            response=self,
        )


class Notification(Response):
    """Unsolicited message pushed by the backend (realtime subscriptions)."""

    status: int = 200
    room: Optional[str] = None
    channel: Optional[str] = None
    type: Optional[str] = None  # "document", "user", "TokenExpired"
    scope: Optional[str] = None  # "in", "out"
    state: Optional[str] = None  # "pending", "done"
    timestamp: Optional[int] = None
