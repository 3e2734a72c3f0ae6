"""Configuration objects for the Mochow Python SDK."""

from __future__ import annotations

import dataclasses
import os
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional

from .auth import Credentials
from .retry import (
    DEFAULT_MAX_DELAY_IN_MILLIS,
    DEFAULT_MAX_ERROR_RETRY,
    DEFAULT_RETRY_POLICY,
    DefaultRetryPolicy,
    RetryPolicy,
)

SDK_VERSION = "0.1.0"

DEFAULT_CONNECTION_TIMEOUT_IN_MILLIS = 50 * 1000
DEFAULT_SOCKET_TIMEOUT_IN_MILLIS = 50 * 1000
DEFAULT_MAX_CONNECTIONS = 50


class Protocol(Enum):
    HTTP = ("http", 80)
    HTTPS = ("https", 443)

    def __init__(self, scheme: str, default_port: int) -> None:
        self.scheme = scheme
        self.default_port = default_port

    def __str__(self) -> str:
        return self.scheme

    @classmethod
    def parse(cls, value: str) -> "Protocol":
        for member in cls:
            if member.scheme == value.strip().lower():
                return member
        raise ValueError(f"Unknown protocol: {value}")


@dataclass
class ClientConfiguration:
    endpoint: Optional[str] = None
    credentials: Optional[Credentials] = None
    protocol: Protocol = Protocol.HTTP
    retry_policy: RetryPolicy = DEFAULT_RETRY_POLICY
    max_connections: int = DEFAULT_MAX_CONNECTIONS
    socket_timeout_in_millis: int = DEFAULT_SOCKET_TIMEOUT_IN_MILLIS
    connection_timeout_in_millis: int = DEFAULT_CONNECTION_TIMEOUT_IN_MILLIS
    socket_buffer_size_in_bytes: int = 0
    local_address: Optional[str] = None
    io_thread_count: int = field(default_factory=lambda: os.cpu_count() or 1)
    user_agent: str = f"mochow-sdk-python/{SDK_VERSION}"
    headers: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        self.validate()

    def validate(self) -> None:
        if self.protocol is None:
            self.protocol = Protocol.HTTP
        if self.retry_policy is None:
            self.retry_policy = DEFAULT_RETRY_POLICY
        for name in (
            "max_connections",
            "socket_timeout_in_millis",
            "connection_timeout_in_millis",
            "socket_buffer_size_in_bytes",
            "io_thread_count",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} should not be negative.")

    @property
    def resolved_endpoint(self) -> Optional[str]:
        """Endpoint with the configured protocol prefixed when it carries no scheme."""
        url = self.endpoint
        if url and "://" not in url:
            url = f"{self.protocol.scheme}://{url}"
        return url

    def copy(self, **overrides: Any) -> "ClientConfiguration":
        overrides.setdefault("headers", dict(self.headers))
        return dataclasses.replace(self, **overrides)

    def with_endpoint(self, endpoint: str) -> "ClientConfiguration":
        if endpoint is None:
            raise ValueError("endpoint should not be None.")
        return self.copy(endpoint=endpoint)

    @classmethod
    def from_env(cls) -> "ClientConfiguration":
        credentials = None
        account = os.environ.get("MOCHOW_ACCOUNT")
        api_key = os.environ.get("MOCHOW_API_KEY")
        if account and api_key:
            credentials = Credentials(account=account, api_key=api_key)

        retry_policy = DefaultRetryPolicy(
            max_error_retry=int(os.environ.get("MOCHOW_MAX_ERROR_RETRY", DEFAULT_MAX_ERROR_RETRY)),
            max_delay_in_millis=int(os.environ.get("MOCHOW_MAX_DELAY_MS", DEFAULT_MAX_DELAY_IN_MILLIS)),
        )

        return cls(
            endpoint=os.environ.get("MOCHOW_ENDPOINT"),
            credentials=credentials,
            protocol=Protocol.parse(os.environ.get("MOCHOW_PROTOCOL", "http")),
            retry_policy=retry_policy,
            max_connections=int(os.environ.get("MOCHOW_MAX_CONNECTIONS", DEFAULT_MAX_CONNECTIONS)),
            connection_timeout_in_millis=int(
                os.environ.get("MOCHOW_CONNECTION_TIMEOUT_MS", DEFAULT_CONNECTION_TIMEOUT_IN_MILLIS)
            ),
            socket_timeout_in_millis=int(
                os.environ.get("MOCHOW_SOCKET_TIMEOUT_MS", DEFAULT_SOCKET_TIMEOUT_IN_MILLIS)
            ),
        )


__all__ = ["ClientConfiguration", "Protocol", "SDK_VERSION"]
