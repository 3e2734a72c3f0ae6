"""Mutable request envelope built for every call."""

from __future__ import annotations

import io
from enum import Enum
from typing import Any, Dict, Iterable, Iterator, Optional

from .auth import SignOptions
from .exceptions import MochowClientError


class HttpMethod(str, Enum):
    GET = "GET"
    PUT = "PUT"
    POST = "POST"
    DELETE = "DELETE"
    HEAD = "HEAD"
    PATCH = "PATCH"


class RestartableStream:
    """Request body that may be rewound before a retry."""

    restartable = True

    def restart(self) -> None:  # pragma: no cover - interface
        raise NotImplementedError

    def read(self) -> bytes:  # pragma: no cover - interface
        raise NotImplementedError

    def iter_chunks(self) -> Iterator[bytes]:
        yield self.read()

    def close(self) -> None:
        return None


class BytesStream(RestartableStream):
    def __init__(self, data: bytes) -> None:
        self._buffer = io.BytesIO(data)
        self._length = len(data)

    def __len__(self) -> int:
        return self._length

    def restart(self) -> None:
        self._buffer.seek(0)

    def read(self) -> bytes:
        return self._buffer.read()

    def close(self) -> None:
        self._buffer.close()


class ResettableStream(RestartableStream):
    """Wraps a seekable reader, restarting at the offset it had when wrapped."""

    def __init__(self, reader: Any) -> None:
        if reader is None:
            raise ValueError("reader should not be None.")
        if not reader.seekable():
            raise ValueError("reader does not support seek.")
        self._reader = reader
        self._mark = reader.tell()

    def restart(self) -> None:
        try:
            self._reader.seek(self._mark)
        except OSError as exc:
            raise MochowClientError("Fail to reset the underlying input stream.") from exc

    def read(self) -> bytes:
        return self._reader.read()

    def close(self) -> None:
        self._reader.close()


class OneShotStream(RestartableStream):
    """Body that can be sent exactly once, e.g. a generator of chunks."""

    restartable = False

    def __init__(self, chunks: Iterable[bytes]) -> None:
        self._chunks = chunks

    def restart(self) -> None:
        raise MochowClientError("Request body cannot be restarted.")

    def read(self) -> bytes:
        return b"".join(self._chunks)

    def iter_chunks(self) -> Iterator[bytes]:
        yield from self._chunks


def wrap_content(content: Any) -> RestartableStream:
    if isinstance(content, RestartableStream):
        return content
    if isinstance(content, str):
        content = content.encode("utf-8")
    if isinstance(content, (bytes, bytearray)):
        return BytesStream(bytes(content))
    seekable = getattr(content, "seekable", None)
    if seekable is not None and seekable():
        return ResettableStream(content)
    if hasattr(content, "read"):
        return OneShotStream(iter(lambda: content.read(64 * 1024), b""))
    return OneShotStream(content)


class InternalRequest:
    """Not thread safe; build a new one per call."""

    def __init__(self, http_method: HttpMethod, uri: str) -> None:
        self.http_method = http_method
        self.uri = uri
        self.headers: Dict[str, str] = {}
        self.parameters: Dict[str, str] = {}
        self.content: Optional[RestartableStream] = None
        self.sign_options: Optional[SignOptions] = None
        self.redirects_enabled: Optional[bool] = None
        self.max_redirects = 1

    def add_header(self, name: str, value: str) -> None:
        self.headers[name] = value

    def add_parameter(self, name: str, value: str) -> None:
        self.parameters[name] = value

    def set_headers(self, headers: Dict[str, str]) -> None:
        self.headers.clear()
        self.headers.update(headers)

    def set_parameters(self, parameters: Dict[str, str]) -> None:
        self.parameters.clear()
        self.parameters.update(parameters)

    def has_header(self, name: str) -> bool:
        lowered = name.lower()
        return any(key.lower() == lowered for key in self.headers)

    def __repr__(self) -> str:
        return (
            f"InternalRequest(http_method={self.http_method.value}, uri={self.uri}, "
            f"parameters={self.parameters}, headers={_redact(self.headers)})"
        )


def _redact(headers: Dict[str, str]) -> Dict[str, str]:
    return {key: ("***" if key.lower() == "authorization" else value) for key, value in headers.items()}


__all__ = [
    "BytesStream",
    "HttpMethod",
    "InternalRequest",
    "OneShotStream",
    "ResettableStream",
    "RestartableStream",
    "wrap_content",
]
