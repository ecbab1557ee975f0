"""
Kuzzle API request.

A request addresses one controller action on the backend. Top-level API
arguments that have no dedicated field (``_id``, ``refresh``, ``size``...)
are kept as extra fields and serialized as-is.
"""

from __future__ import annotations

import uuid
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field


def _new_request_id() -> str:
    return str(uuid.uuid4())


class Request(BaseModel):
    """Request sent to the backend (controller + action + optional body)."""

    model_config = ConfigDict(
        extra="allow",
        populate_by_name=True,
    )

    request_id: str = Field(default_factory=_new_request_id, alias="requestId")
    controller: str
    action: str
    index: Optional[str] = None
    collection: Optional[str] = None
    jwt: Optional[str] = None
    body: Optional[Any] = None
    volatile: Optional[dict[str, Any]] = None

    def to_dict(self) -> dict[str, Any]:
        """Wire representation, None fields omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_json(self) -> str:
        """Serialize to the JSON text sent over the wire."""
        return self.model_dump_json(by_alias=True, exclude_none=True)


def build_request(data: Mapping[str, Any] | None = None, **fields: Any) -> Request:
    """
    Build and validate a Request from a mapping.

    Keyword fields are merged over ``data``. Both wire names (``requestId``)
    and attribute names (``request_id``) are accepted.

    Example:
        request = build_request({"controller": "server", "action": "now"})
        request = build_request(controller="document", action="get",
                                index="nyc", collection="taxi", _id="42")

    Raises:
        pydantic.ValidationError: If controller or action is missing
    """
    payload = dict(data or {})
    payload.update(fields)
    return Request.model_validate(payload)
