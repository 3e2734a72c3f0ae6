"""Wrapper around a raw HTTP response and the metadata copied from it."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, Optional

import httpx

logger = logging.getLogger("mochow_sdk.http")

REQUEST_ID = "x-bce-request-id"
CONTENT_LENGTH = "Content-Length"
CONTENT_TYPE = "Content-Type"


@dataclass
class ResponseMetadata:
    request_id: Optional[str] = None
    content_length: int = -1
    content_type: Optional[str] = None


class MochowHttpResponse:
    def __init__(self, response: httpx.Response) -> None:
        self._response = response

    @property
    def http_response(self) -> httpx.Response:
        return self._response

    def get_header(self, name: str) -> Optional[str]:
        return self._response.headers.get(name)

    def get_header_as_int(self, name: str) -> int:
        value = self.get_header(name)
        if value is None:
            return -1
        try:
            return int(value)
        except ValueError:
            logger.warning("Invalid %s: %s", name, value)
            return -1

    @property
    def content(self) -> Optional[bytes]:
        data = self._response.content
        return data if data else None

    @property
    def status_code(self) -> int:
        return self._response.status_code

    @property
    def status_text(self) -> str:
        return self._response.reason_phrase

    @property
    def headers(self) -> Dict[str, str]:
        return dict(self._response.headers.items())

    def close(self) -> None:
        self._response.close()


__all__ = ["CONTENT_LENGTH", "CONTENT_TYPE", "MochowHttpResponse", "REQUEST_ID", "ResponseMetadata"]
