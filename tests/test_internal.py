from __future__ import annotations

import io

import pytest

from mochow_sdk.exceptions import MochowClientError
from mochow_sdk.internal import BytesStream, HttpMethod, InternalRequest, OneShotStream, ResettableStream, wrap_content


def test_bytes_stream_restarts() -> None:
    stream = BytesStream(b"payload")
    assert len(stream) == 7
    assert stream.read() == b"payload"
    assert stream.read() == b""
    stream.restart()
    assert stream.read() == b"payload"


def test_resettable_stream_returns_to_mark() -> None:
    reader = io.BytesIO(b"skip-body")
    reader.seek(5)
    stream = ResettableStream(reader)
    assert stream.read() == b"body"
    stream.restart()
    assert stream.read() == b"body"


def test_one_shot_stream_cannot_restart() -> None:
    stream = OneShotStream(iter([b"a", b"b"]))
    assert not stream.restartable
    assert list(stream.iter_chunks()) == [b"a", b"b"]
    with pytest.raises(MochowClientError):
        stream.restart()


def test_wrap_content_picks_stream_type() -> None:
    assert isinstance(wrap_content("text"), BytesStream)
    assert isinstance(wrap_content(b"bytes"), BytesStream)
    assert isinstance(wrap_content(io.BytesIO(b"seekable")), ResettableStream)
    assert isinstance(wrap_content(iter([b"x"])), OneShotStream)
    existing = BytesStream(b"")
    assert wrap_content(existing) is existing


def test_request_envelope_last_write_wins() -> None:
    request = InternalRequest(HttpMethod.PUT, "http://h/v1/row")
    request.add_header("Content-Type", "text/plain")
    request.add_header("Content-Type", "application/json")
    request.add_parameter("upsert", "")
    assert request.headers == {"Content-Type": "application/json"}
    assert request.has_header("content-type")
    assert request.max_redirects == 1
    assert request.redirects_enabled is None

    request.set_parameters({"database": "db"})
    assert request.parameters == {"database": "db"}
    request.set_headers({})
    assert not request.has_header("Content-Type")
    assert "PUT" in repr(request)
