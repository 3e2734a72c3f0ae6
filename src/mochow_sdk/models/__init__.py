"""Typed request, response and entity models."""

from .base import MochowModel
from .entities import (
    ANNSearchParams,
    AutoBuildPolicy,
    BatchANNSearchParams,
    BatchRowResults,
    Field,
    FLATSearchParams,
    HNSWParams,
    HNSWSearchParams,
    IndexField,
    IndexParams,
    PartitionParams,
    PUCKParams,
    PUCKSearchParams,
    RowResult,
    Schema,
    SearchParams,
    SecondaryIndex,
    Table,
    VectorIndex,
)
from .enums import (
    AutoBuildPolicyType,
    FieldType,
    IndexState,
    IndexType,
    MetricType,
    PartitionType,
    ReadConsistency,
    ServerErrorCode,
    TableState,
)
from .requests import (
    AddFieldRequest,
    AliasTableRequest,
    BatchSearchRequest,
    CreateDatabaseRequest,
    CreateIndexRequest,
    CreateTableRequest,
    DeleteRequest,
    DescribeIndexRequest,
    DescribeTableRequest,
    InsertRequest,
    ListTableRequest,
    ModifyIndexRequest,
    MochowRequest,
    QueryRequest,
    RebuildIndexRequest,
    SearchRequest,
    SelectRequest,
    ShowTableStatsRequest,
    UnaliasTableRequest,
    UpdateRequest,
    UpsertRequest,
)
from .responses import (
    BatchSearchResponse,
    DescribeIndexResponse,
    DescribeTableResponse,
    ErrorResponse,
    InsertResponse,
    ListDatabaseResponse,
    ListTableResponse,
    MochowResponse,
    QueryResponse,
    SearchResponse,
    SelectResponse,
    ShowTableStatsResponse,
    UpsertResponse,
)

__all__ = [
    "ANNSearchParams",
    "AddFieldRequest",
    "AliasTableRequest",
    "AutoBuildPolicy",
    "AutoBuildPolicyType",
    "BatchANNSearchParams",
    "BatchRowResults",
    "BatchSearchRequest",
    "BatchSearchResponse",
    "CreateDatabaseRequest",
    "CreateIndexRequest",
    "CreateTableRequest",
    "DeleteRequest",
    "DescribeIndexRequest",
    "DescribeIndexResponse",
    "DescribeTableRequest",
    "DescribeTableResponse",
    "ErrorResponse",
    "FLATSearchParams",
    "Field",
    "FieldType",
    "HNSWParams",
    "HNSWSearchParams",
    "IndexField",
    "IndexParams",
    "IndexState",
    "IndexType",
    "InsertRequest",
    "InsertResponse",
    "ListDatabaseResponse",
    "ListTableRequest",
    "ListTableResponse",
    "MetricType",
    "MochowModel",
    "MochowRequest",
    "MochowResponse",
    "ModifyIndexRequest",
    "PUCKParams",
    "PUCKSearchParams",
    "PartitionParams",
    "PartitionType",
    "QueryRequest",
    "QueryResponse",
    "ReadConsistency",
    "RebuildIndexRequest",
    "RowResult",
    "Schema",
    "SearchParams",
    "SearchRequest",
    "SearchResponse",
    "SecondaryIndex",
    "SelectRequest",
    "SelectResponse",
    "ServerErrorCode",
    "ShowTableStatsRequest",
    "ShowTableStatsResponse",
    "Table",
    "TableState",
    "UnaliasTableRequest",
    "UpdateRequest",
    "UpsertRequest",
    "UpsertResponse",
    "VectorIndex",
]
