"""Testing utilities for code built on the SDK."""

from kuzzle.testing.fake_protocol import FakeProtocol

__all__ = ["FakeProtocol"]
