"""Exception types raised by the Mochow SDK."""

from __future__ import annotations

from enum import Enum
from typing import Optional


class MochowClientError(Exception):
    """Raised when the client cannot complete a request.

    Transport faults and serialization failures are wrapped in this type with
    the original exception chained as ``__cause__``.
    """


class ErrorType(str, Enum):
    CLIENT = "Client"
    SERVICE = "Service"
    UNKNOWN = "Unknown"


class MochowServiceError(MochowClientError):
    """Structured error returned by the Mochow service."""

    def __init__(
        self,
        error_message: Optional[str],
        *,
        error_code: int = 0,
        request_id: Optional[str] = None,
        status_code: int = 0,
        error_type: ErrorType = ErrorType.UNKNOWN,
    ) -> None:
        super().__init__(error_message)
        self.error_message = error_message
        self.error_code = error_code
        self.request_id = request_id
        self.status_code = status_code
        self.error_type = error_type

    def __str__(self) -> str:
        return (
            f"{self.error_message} (Status Code: {self.status_code}; "
            f"Error Code: {self.error_code}; Request ID: {self.request_id})"
        )


__all__ = ["ErrorType", "MochowClientError", "MochowServiceError"]
