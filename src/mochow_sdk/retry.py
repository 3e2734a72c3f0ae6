"""Retry decisions for failed requests."""

from __future__ import annotations

import logging
from typing import Optional

import httpx

from .exceptions import MochowClientError, MochowServiceError

logger = logging.getLogger("mochow_sdk.retry")

DEFAULT_MAX_ERROR_RETRY = 3
DEFAULT_MAX_DELAY_IN_MILLIS = 20 * 1000

RETRYABLE_STATUS_CODES = frozenset({500, 502, 503})


class RetryPolicy:
    """Maps a failure and the number of retries so far to a delay in millis.

    ``None`` means the request must not be retried, including once
    ``retries_attempted`` reaches ``max_error_retry``.
    """

    @property
    def max_error_retry(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    @property
    def max_delay_in_millis(self) -> int:  # pragma: no cover - interface
        raise NotImplementedError

    def delay_before_next_retry(
        self, error: MochowClientError, retries_attempted: int
    ) -> Optional[int]:  # pragma: no cover - interface
        raise NotImplementedError


class DefaultRetryPolicy(RetryPolicy):
    SCALE_FACTOR = 300

    def __init__(
        self,
        max_error_retry: int = DEFAULT_MAX_ERROR_RETRY,
        max_delay_in_millis: int = DEFAULT_MAX_DELAY_IN_MILLIS,
    ) -> None:
        if max_error_retry < 0:
            raise ValueError("max_error_retry should be a non-negative.")
        if max_delay_in_millis < 0:
            raise ValueError("max_delay_in_millis should be a non-negative.")
        self._max_error_retry = max_error_retry
        self._max_delay_in_millis = max_delay_in_millis

    @property
    def max_error_retry(self) -> int:
        return self._max_error_retry

    @property
    def max_delay_in_millis(self) -> int:
        return self._max_delay_in_millis

    def delay_before_next_retry(self, error: MochowClientError, retries_attempted: int) -> Optional[int]:
        if retries_attempted >= self._max_error_retry:
            return None
        if not self.should_retry(error, retries_attempted):
            return None
        if retries_attempted < 0:
            return 0
        delay = (1 << (retries_attempted + 1)) * self.SCALE_FACTOR
        return min(self._max_delay_in_millis, delay)

    def should_retry(self, error: MochowClientError, retries_attempted: int) -> bool:
        if is_io_failure(error):
            logger.debug("Retry for I/O failure: %s", error.__cause__)
            return True
        if isinstance(error, MochowServiceError):
            if error.status_code in RETRYABLE_STATUS_CODES:
                logger.debug("Retry for service status %s", error.status_code)
                return True
        return False

    def __repr__(self) -> str:
        return (
            f"DefaultRetryPolicy(max_error_retry={self._max_error_retry}, "
            f"max_delay_in_millis={self._max_delay_in_millis})"
        )


def is_io_failure(error: BaseException) -> bool:
    """True when the cause chain holds a low-level network or I/O failure."""
    seen = set()
    cause = error.__cause__
    while cause is not None and id(cause) not in seen:
        if isinstance(cause, (httpx.TransportError, OSError)):
            return True
        seen.add(id(cause))
        cause = cause.__cause__
    return False


DEFAULT_RETRY_POLICY = DefaultRetryPolicy()


__all__ = [
    "DEFAULT_MAX_DELAY_IN_MILLIS",
    "DEFAULT_MAX_ERROR_RETRY",
    "DEFAULT_RETRY_POLICY",
    "DefaultRetryPolicy",
    "RetryPolicy",
    "is_io_failure",
]
