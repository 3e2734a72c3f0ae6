"""Request bodies for the Mochow HTTP API."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pydantic

from .base import MochowModel
from .entities import ANNSearchParams, BatchANNSearchParams, IndexField, PartitionParams, Schema
from .enums import ReadConsistency


class MochowRequest(MochowModel):
    pass


class CreateDatabaseRequest(MochowRequest):
    database: str


class ListTableRequest(MochowRequest):
    database: str


class CreateTableRequest(MochowRequest):
    database: str
    table: str
    description: Optional[str] = None
    replication: Optional[int] = None
    partition: Optional[PartitionParams] = None
    table_schema: Optional[Schema] = pydantic.Field(default=None, alias="schema")
    enable_dynamic_field: Optional[bool] = None


class DescribeTableRequest(MochowRequest):
    database: str
    table: str


class AddFieldRequest(MochowRequest):
    database: str
    table: str
    table_schema: Schema = pydantic.Field(alias="schema")


class AliasTableRequest(MochowRequest):
    database: str
    table: str
    alias: str


class UnaliasTableRequest(MochowRequest):
    database: str
    table: str
    alias: str


class ShowTableStatsRequest(MochowRequest):
    database: str
    table: str


class CreateIndexRequest(MochowRequest):
    database: str
    table: str
    indexes: List[IndexField]


class DescribeIndexRequest(MochowRequest):
    database: str
    table: str
    index_name: str


class ModifyIndexRequest(MochowRequest):
    database: str
    table: str
    index: IndexField


class RebuildIndexRequest(MochowRequest):
    database: str
    table: str
    index_name: str


class InsertRequest(MochowRequest):
    database: str
    table: str
    rows: List[Dict[str, Any]]


class UpsertRequest(MochowRequest):
    database: str
    table: str
    rows: List[Dict[str, Any]]


class DeleteRequest(MochowRequest):
    database: str
    table: str
    primary_key: Optional[Dict[str, Any]] = None
    partition_key: Optional[Dict[str, Any]] = None
    filter: Optional[str] = None


class QueryRequest(MochowRequest):
    database: str
    table: str
    primary_key: Dict[str, Any]
    partition_key: Optional[Dict[str, Any]] = None
    projections: List[str] = pydantic.Field(default_factory=list)
    retrieve_vector: bool = False
    read_consistency: ReadConsistency = ReadConsistency.EVENTUAL


class SearchRequest(MochowRequest):
    database: str
    table: str
    anns: ANNSearchParams
    partition_key: Optional[Dict[str, Any]] = None
    retrieve_vector: bool = False
    projections: List[str] = pydantic.Field(default_factory=list)
    read_consistency: ReadConsistency = ReadConsistency.EVENTUAL


class BatchSearchRequest(MochowRequest):
    database: str
    table: str
    anns: BatchANNSearchParams
    partition_key: Optional[Dict[str, Any]] = None
    retrieve_vector: bool = False
    projections: List[str] = pydantic.Field(default_factory=list)
    read_consistency: ReadConsistency = ReadConsistency.EVENTUAL


class UpdateRequest(MochowRequest):
    database: str
    table: str
    primary_key: Dict[str, Any]
    partition_key: Optional[Dict[str, Any]] = None
    update: Dict[str, Any]


class SelectRequest(MochowRequest):
    """One page of a filtered scan; feed ``next_marker`` back as ``marker``."""

    database: str
    table: str
    filter: Optional[str] = None
    marker: Optional[Dict[str, Any]] = None
    limit: Optional[int] = None
    projections: List[str] = pydantic.Field(default_factory=list)
    read_consistency: Optional[ReadConsistency] = None


__all__ = [
    "AddFieldRequest",
    "AliasTableRequest",
    "BatchSearchRequest",
    "CreateDatabaseRequest",
    "CreateIndexRequest",
    "CreateTableRequest",
    "DeleteRequest",
    "DescribeIndexRequest",
    "DescribeTableRequest",
    "InsertRequest",
    "ListTableRequest",
    "ModifyIndexRequest",
    "MochowRequest",
    "QueryRequest",
    "RebuildIndexRequest",
    "SearchRequest",
    "SelectRequest",
    "ShowTableStatsRequest",
    "UnaliasTableRequest",
    "UpdateRequest",
    "UpsertRequest",
]
