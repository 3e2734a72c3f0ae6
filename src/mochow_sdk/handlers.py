"""Response handler chain applied to every HTTP response."""

from __future__ import annotations

from typing import Tuple

from .exceptions import ErrorType, MochowClientError, MochowServiceError
from .models.responses import ErrorResponse, MochowResponse
from .response import CONTENT_LENGTH, CONTENT_TYPE, REQUEST_ID, MochowHttpResponse
from .utils import from_json_bytes


class ResponseHandler:
    def handle(self, http_response: MochowHttpResponse, response: MochowResponse) -> bool:  # pragma: no cover - interface
        """Return True when the response is fully handled and the chain should stop."""
        raise NotImplementedError


class MetadataResponseHandler(ResponseHandler):
    def handle(self, http_response: MochowHttpResponse, response: MochowResponse) -> bool:
        metadata = response.metadata
        metadata.request_id = http_response.get_header(REQUEST_ID)
        metadata.content_length = http_response.get_header_as_int(CONTENT_LENGTH)
        metadata.content_type = http_response.get_header(CONTENT_TYPE)
        return False


class ErrorResponseHandler(ResponseHandler):
    def handle(self, http_response: MochowHttpResponse, response: MochowResponse) -> bool:
        if http_response.status_code // 100 == 2:
            return False

        error = None
        content = http_response.content
        if content is not None:
            payload = _error_payload(content)
            if payload is not None and payload.msg is not None:
                error = MochowServiceError(payload.msg, error_code=payload.code, request_id=payload.request_id)
        if error is None:
            error = MochowServiceError(http_response.status_text, request_id=response.metadata.request_id)

        error.status_code = http_response.status_code
        error.error_type = ErrorType.SERVICE if error.status_code >= 500 else ErrorType.CLIENT
        raise error


class JsonResponseHandler(ResponseHandler):
    def handle(self, http_response: MochowHttpResponse, response: MochowResponse) -> bool:
        content = http_response.content
        if content is not None and response.metadata.content_length > 0:
            response.load_json(from_json_bytes(content))
        return True


def _error_payload(content: bytes):
    try:
        data = from_json_bytes(content)
    except MochowClientError:
        return None
    if not isinstance(data, dict):
        return None
    try:
        return ErrorResponse.model_validate(data)
    except ValueError:
        return None


DEFAULT_HANDLERS: Tuple[ResponseHandler, ...] = (
    MetadataResponseHandler(),
    ErrorResponseHandler(),
    JsonResponseHandler(),
)


__all__ = [
    "DEFAULT_HANDLERS",
    "ErrorResponseHandler",
    "JsonResponseHandler",
    "MetadataResponseHandler",
    "ResponseHandler",
]
