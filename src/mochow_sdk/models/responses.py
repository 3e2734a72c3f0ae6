"""Typed responses populated by the response handler chain."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pydantic
from pydantic import ConfigDict, PrivateAttr, field_validator

from ..exceptions import MochowClientError
from ..response import ResponseMetadata
from .base import MochowModel
from .entities import BatchRowResults, IndexField, RowResult, Table


class MochowResponse(MochowModel):
    _metadata: ResponseMetadata = PrivateAttr(default_factory=ResponseMetadata)

    @property
    def metadata(self) -> ResponseMetadata:
        return self._metadata

    def load_json(self, data: Any) -> None:
        """Populate this instance in place from a decoded JSON body."""
        if not isinstance(data, dict):
            raise MochowClientError(f"Expected a JSON object, got {type(data).__name__}")
        try:
            parsed = type(self).model_validate(data)
        except pydantic.ValidationError as exc:
            raise MochowClientError("Unable to parse Json String.") from exc
        for name in type(self).model_fields:
            setattr(self, name, getattr(parsed, name))


class ListDatabaseResponse(MochowResponse):
    databases: List[str] = pydantic.Field(default_factory=list)


class ListTableResponse(MochowResponse):
    tables: List[str] = pydantic.Field(default_factory=list)


class DescribeTableResponse(MochowResponse):
    table: Optional[Table] = None


class ShowTableStatsResponse(MochowResponse):
    row_count: int = 0
    memory_size_in_byte: int = 0
    disk_size_in_byte: int = 0


class DescribeIndexResponse(MochowResponse):
    index: Optional[IndexField] = None


class InsertResponse(MochowResponse):
    affected_count: int = 0


class UpsertResponse(MochowResponse):
    affected_count: int = 0


class QueryResponse(MochowResponse):
    row: Dict[str, Any] = pydantic.Field(default_factory=dict)


class SearchResponse(MochowResponse):
    rows: List[RowResult] = pydantic.Field(default_factory=list)


class BatchSearchResponse(MochowResponse):
    results: List[BatchRowResults] = pydantic.Field(default_factory=list)


class SelectResponse(MochowResponse):
    is_truncated: bool = False
    next_marker: Optional[Dict[str, Any]] = None
    rows: List[Dict[str, Any]] = pydantic.Field(default_factory=list)


class ErrorResponse(MochowModel):
    model_config = ConfigDict(coerce_numbers_to_str=True)

    code: int = 0
    msg: Optional[str] = None
    request_id: Optional[str] = None

    @field_validator("code", mode="before")
    @classmethod
    def _null_code(cls, value: Any) -> Any:
        return 0 if value is None else value


__all__ = [
    "BatchSearchResponse",
    "DescribeIndexResponse",
    "DescribeTableResponse",
    "ErrorResponse",
    "InsertResponse",
    "ListDatabaseResponse",
    "ListTableResponse",
    "MochowResponse",
    "QueryResponse",
    "SearchResponse",
    "SelectResponse",
    "ShowTableStatsResponse",
    "UpsertResponse",
]
