"""
Connection settings.

ConnectionConfig is the validated description of how to reach the backend.
KuzzleSettings reads the same fields from KUZZLE_* environment variables
(or a .env file).
"""

from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict

ProtocolName = Literal["websocket", "http", "mqtt"]


class ConnectionConfig(BaseModel):
    """How to reach the backend."""

    protocol: ProtocolName = "websocket"
    host: str = "localhost"
    port: Optional[int] = Field(default=None, gt=0, lt=65536)
    ssl: bool = False
    timeout: Optional[float] = 30.0


class KuzzleSettings(BaseSettings):
    """Connection settings loaded from KUZZLE_* environment variables."""

    protocol: ProtocolName = "websocket"
    host: str = "localhost"
    port: Optional[int] = None
    ssl: bool = False
    timeout: Optional[float] = 30.0

    model_config = SettingsConfigDict(
        env_prefix="KUZZLE_",
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
    )

    def to_connection_config(self) -> ConnectionConfig:
        return ConnectionConfig(
            protocol=self.protocol,
            host=self.host,
            port=self.port,
            ssl=self.ssl,
            timeout=self.timeout,
        )
