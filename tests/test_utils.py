from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from mochow_sdk.exceptions import MochowClientError
from mochow_sdk.utils import (
    append_uri,
    canonical_query_string,
    format_alternate_iso8601_date,
    format_rfc822_date,
    from_json_bytes,
    normalize,
    to_json_bytes,
)


def test_normalize_keeps_unreserved() -> None:
    assert normalize("aZ09-._~") == "aZ09-._~"
    assert normalize("a b/c") == "a%20b%2Fc"
    assert normalize("é") == "%C3%A9"


def test_canonical_query_string_sorted() -> None:
    assert canonical_query_string({"table": "t 1", "database": "db", "create": ""}) == "create=&database=db&table=t%201"
    assert canonical_query_string({}) == ""


def test_canonical_query_string_for_signature() -> None:
    params = {"flag": None, "authorization": "x", "a": "1"}
    assert canonical_query_string(params, for_signature=True) == "a=1&flag="
    assert canonical_query_string({"flag": None}) == "flag"


def test_append_uri() -> None:
    assert append_uri("http://127.0.0.1:5287", "v1", "database") == "http://127.0.0.1:5287/v1/database"
    assert append_uri("http://h/", "v1") == "http://h/v1"
    assert append_uri("http://h", "/v1", "", "row") == "http://h/v1/row"


def test_date_formats() -> None:
    moment = datetime(2024, 1, 2, 3, 4, 5, tzinfo=timezone.utc)
    assert format_alternate_iso8601_date(moment) == "2024-01-02T03:04:05Z"
    assert format_rfc822_date(moment) == "Tue, 02 Jan 2024 03:04:05 GMT"


def test_date_formats_convert_to_utc() -> None:
    moment = datetime(2024, 1, 2, 11, 4, 5, tzinfo=timezone(timedelta(hours=8)))
    assert format_alternate_iso8601_date(moment) == "2024-01-02T03:04:05Z"


def test_json_round_trip_is_compact() -> None:
    assert to_json_bytes({"a": [1, 2], "b": "向量"}) == '{"a":[1,2],"b":"向量"}'.encode("utf-8")
    assert from_json_bytes(b'{"a":1}') == {"a": 1}


def test_json_failures_raise_client_error() -> None:
    with pytest.raises(MochowClientError, match="Unable to parse Json String"):
        from_json_bytes(b"{not json")
    with pytest.raises(MochowClientError, match="Fail to convert request to json"):
        to_json_bytes({"a": object()})


def test_path_normalization_keeps_slashes() -> None:
    assert append_uri("http://h", "v1/row", "a b") == "http://h/v1/row/a%20b"
    assert format_rfc822_date(datetime(2024, 2, 29, 23, 59, 59)) == "Thu, 29 Feb 2024 23:59:59 GMT"
