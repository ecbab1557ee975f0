"""Tests for Response, ResponseError and Notification parsing."""

import pytest

from kuzzle.errors import ApiError, ResponseParseError
from kuzzle.types import Notification, Response
from tests.fixtures import factory


class TestResponseParsing:
    """Test parsing raw response frames."""

    def test_parses_full_error_response(self):
        """Should parse every documented field."""
        raw = """{
            "requestId": "0",
            "status": 200,
            "node": "foo",
            "action": "bar",
            "controller": "baz",
            "index": "qux",
            "collection": "quux",
            "error": {
                "message": "error message",
                "code": 1
            }
        }"""

        response = Response.from_json(raw)

        assert response.request_id == "0"
        assert response.status == 200
        assert response.node == "foo"
        assert response.action == "bar"
        assert response.controller == "baz"
        assert response.index == "qux"
        assert response.collection == "quux"
        assert response.error.message == "error message"
        assert response.error.code == 1
        assert response.result is None
        assert response.volatile is None

    def test_parses_result(self):
        """Should expose the result payload."""
        raw = factory.dumps(factory.response(result={"now": 1700000000000}))

        response = Response.from_json(raw)

        assert response.result["now"] == 1700000000000
        assert response.error is None

    def test_parses_bytes(self):
        raw = factory.dumps(factory.response(result={"success": True})).encode()

        response = Response.from_json(raw)

        assert response.result == {"success": True}

    def test_minimal_response(self):
        """Only status is required."""
        response = Response.from_json('{"status": 200, "result": {"success": true}}')

        assert response.status == 200
        assert response.request_id is None
        assert response.result["success"] is True

    def test_invalid_json_raises(self):
        """Should raise ResponseParseError for non-JSON text."""
        with pytest.raises(ResponseParseError):
            Response.from_json("NOT A VALID JSON STRING")

    def test_missing_status_raises(self):
        """Should raise ResponseParseError when status is missing."""
        with pytest.raises(ResponseParseError):
            Response.from_json('{"requestId": "r-1"}')

    def test_keeps_extra_fields(self):
        """Unknown fields from newer backends should not break parsing."""
        raw = factory.dumps(factory.response(deprecations=[{"message": "old"}]))

        response = Response.from_json(raw)

        assert response.model_extra["deprecations"] == [{"message": "old"}]


class TestResponseErrors:
    """Test error detection and raise_for_error()."""

    def test_success_is_not_error(self):
        response = Response.model_validate(factory.response(result={}))

        assert response.is_error is False
        assert response.raise_for_error() is response

    def test_error_payload_is_error(self):
        response = Response.model_validate(factory.error_response())

        assert response.is_error is True

    def test_error_status_without_payload_is_error(self):
        response = Response.model_validate(factory.response(status=500))

        assert response.is_error is True

    def test_raise_for_error_carries_details(self):
        """ApiError should carry message, status and error id."""
        response = Response.model_validate(
            factory.error_response(
                status=401,
                message="Invalid token.",
                error_id="security.token.invalid",
            )
        )

        with pytest.raises(ApiError) as exc_info:
            response.raise_for_error()

        error = exc_info.value
        assert error.message == "Invalid token."
        assert error.status == 401
        assert error.error_id == "security.token.invalid"
        assert error.response is response
        assert "security.token.invalid" in str(error)

    def test_raise_for_error_status_only(self):
        response = Response.model_validate(factory.response(status=503))

        with pytest.raises(ApiError) as exc_info:
            response.raise_for_error()

        assert exc_info.value.status == 503
        assert exc_info.value.error_id is None


class TestNotification:
    """Test notification parsing."""

    def test_parses_document_notification(self):
        notification = Notification.model_validate(
            factory.notification(room="room-1", action="update")
        )

        assert notification.room == "room-1"
        assert notification.type == "document"
        assert notification.action == "update"
        assert notification.scope == "in"
        assert notification.timestamp == 1700000000000

    def test_status_defaults_to_200(self):
        """TokenExpired notifications may omit status."""
        notification = Notification.model_validate(
            {"type": "TokenExpired", "message": "Authentication Token Expired"}
        )

        assert notification.status == 200
        assert notification.type == "TokenExpired"
