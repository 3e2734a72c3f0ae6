from __future__ import annotations

import httpx
import pytest

from mochow_sdk.exceptions import ErrorType, MochowClientError, MochowServiceError
from mochow_sdk.handlers import ErrorResponseHandler, JsonResponseHandler, MetadataResponseHandler
from mochow_sdk.models.responses import ListDatabaseResponse, MochowResponse
from mochow_sdk.response import MochowHttpResponse


def _wrap(response: httpx.Response) -> MochowHttpResponse:
    return MochowHttpResponse(response)


def test_metadata_handler_copies_headers() -> None:
    http_response = _wrap(
        httpx.Response(200, content=b'{"databases":[]}', headers={"x-bce-request-id": "req-1", "Content-Type": "application/json"})
    )
    response = MochowResponse()
    assert MetadataResponseHandler().handle(http_response, response) is False
    assert response.metadata.request_id == "req-1"
    assert response.metadata.content_length == len(b'{"databases":[]}')
    assert response.metadata.content_type == "application/json"


def test_metadata_handler_tolerates_bad_length() -> None:
    http_response = _wrap(httpx.Response(200, headers={"Content-Length": "abc"}))
    response = MochowResponse()
    MetadataResponseHandler().handle(http_response, response)
    assert response.metadata.content_length == -1
    assert response.metadata.request_id is None


def test_error_handler_passes_success() -> None:
    assert ErrorResponseHandler().handle(_wrap(httpx.Response(204)), MochowResponse()) is False


def test_error_handler_uses_service_body() -> None:
    http_response = _wrap(httpx.Response(409, json={"code": 51, "msg": "Database already exist", "requestId": "r-9"}))
    with pytest.raises(MochowServiceError) as excinfo:
        ErrorResponseHandler().handle(http_response, MochowResponse())
    error = excinfo.value
    assert error.error_code == 51
    assert error.error_message == "Database already exist"
    assert error.request_id == "r-9"
    assert error.status_code == 409
    assert error.error_type is ErrorType.CLIENT
    assert str(error) == "Database already exist (Status Code: 409; Error Code: 51; Request ID: r-9)"


def test_error_handler_falls_back_to_status_text() -> None:
    response = MochowResponse()
    response.metadata.request_id = "r-1"
    http_response = _wrap(httpx.Response(503, text="<html>upstream</html>"))
    with pytest.raises(MochowServiceError) as excinfo:
        ErrorResponseHandler().handle(http_response, response)
    error = excinfo.value
    assert error.error_message == "Service Unavailable"
    assert error.request_id == "r-1"
    assert error.error_type is ErrorType.SERVICE


def test_json_handler_loads_body() -> None:
    body = b'{"databases":["db1","db2"]}'
    http_response = _wrap(httpx.Response(200, content=body))
    response = ListDatabaseResponse()
    MetadataResponseHandler().handle(http_response, response)
    assert JsonResponseHandler().handle(http_response, response) is True
    assert response.databases == ["db1", "db2"]


def test_json_handler_skips_empty_body() -> None:
    http_response = _wrap(httpx.Response(200))
    response = ListDatabaseResponse()
    MetadataResponseHandler().handle(http_response, response)
    assert JsonResponseHandler().handle(http_response, response) is True
    assert response.databases == []


def test_json_handler_rejects_malformed_body() -> None:
    http_response = _wrap(httpx.Response(200, content=b"{not json"))
    response = ListDatabaseResponse()
    MetadataResponseHandler().handle(http_response, response)
    with pytest.raises(MochowClientError):
        JsonResponseHandler().handle(http_response, response)


def test_error_handler_tolerates_null_code_and_numeric_request_id() -> None:
    http_response = _wrap(httpx.Response(409, json={"code": None, "msg": "exists", "requestId": "r1"}))
    with pytest.raises(MochowServiceError) as excinfo:
        ErrorResponseHandler().handle(http_response, MochowResponse())
    assert excinfo.value.error_message == "exists"
    assert excinfo.value.error_code == 0
    assert excinfo.value.request_id == "r1"

    http_response = _wrap(httpx.Response(500, json={"code": 1, "msg": "Internal Error", "requestId": 123456}))
    with pytest.raises(MochowServiceError) as excinfo:
        ErrorResponseHandler().handle(http_response, MochowResponse())
    assert excinfo.value.error_message == "Internal Error"
    assert excinfo.value.request_id == "123456"
    assert excinfo.value.error_type is ErrorType.SERVICE
