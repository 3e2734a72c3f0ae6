"""Typed client for the Mochow vector database HTTP API."""

from __future__ import annotations

import time
from typing import Callable, Optional, Type, TypeVar

import httpx

from .auth import SignOptions, Signer
from .config import ClientConfiguration
from .handlers import DEFAULT_HANDLERS
from .internal import BytesStream, HttpMethod, InternalRequest
from .models.requests import (
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
from .models.responses import (
    BatchSearchResponse,
    DescribeIndexResponse,
    DescribeTableResponse,
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
from .transport import HttpClient
from .utils import append_uri, format_alternate_iso8601_date, format_rfc822_date

T = TypeVar("T", bound=MochowResponse)

URL_PREFIX = "v1"
CONTENT_TYPE_JSON = "application/json"
DEFAULT_CONTENT_TYPE = "application/json; charset=utf-8"

DATABASE_PREFIX = "database"
TABLE_PREFIX = "table"
INDEX_PREFIX = "index"
ROW_PREFIX = "row"

CREATE = "create"
LIST = "list"
DESC = "desc"
ADD_FIELD = "addField"
ALIAS = "alias"
UNALIAS = "unalias"
STATS = "stats"
MODIFY = "modify"
REBUILD = "rebuild"
INSERT = "insert"
UPSERT = "upsert"
DELETE = "delete"
QUERY = "query"
SEARCH = "search"
BATCH_SEARCH = "batchSearch"
UPDATE = "update"
SELECT = "select"


class MochowClient:
    def __init__(
        self,
        config: Optional[ClientConfiguration] = None,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        async_put_enabled: bool = False,
        async_transport: Optional[httpx.AsyncBaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = (config or ClientConfiguration()).copy()
        self._config.validate()
        self._endpoint = self._compute_endpoint()
        self._client = HttpClient(
            self._config,
            Signer(),
            async_put_enabled=async_put_enabled,
            transport=transport,
            async_transport=async_transport,
            sleep=sleep,
        )
        self._handlers = DEFAULT_HANDLERS

    def __enter__(self) -> "MochowClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @property
    def endpoint(self) -> str:
        return self._endpoint

    def _compute_endpoint(self) -> str:
        endpoint = self._config.resolved_endpoint
        if not endpoint:
            raise ValueError("endpoint should not be empty.")
        try:
            url = httpx.URL(endpoint)
        except httpx.InvalidURL as exc:
            raise ValueError(f"Invalid endpoint.{endpoint}") from exc
        if url.scheme not in ("http", "https") or not url.host:
            raise ValueError(f"Invalid endpoint.{endpoint}")
        return endpoint

    # database

    def create_database(self, database_name: str) -> None:
        request = self._create_request(HttpMethod.POST, DATABASE_PREFIX, CREATE)
        self._fill_payload(request, CreateDatabaseRequest(database=database_name))
        self._invoke(request, MochowResponse)

    def drop_database(self, database_name: str) -> None:
        request = self._create_request(HttpMethod.DELETE, DATABASE_PREFIX)
        request.add_parameter("database", database_name)
        self._invoke(request, MochowResponse)

    def list_database(self) -> ListDatabaseResponse:
        request = self._create_request(HttpMethod.POST, DATABASE_PREFIX, LIST)
        return self._invoke(request, ListDatabaseResponse)

    def has_database(self, database_name: str) -> bool:
        return database_name in self.list_database().databases

    # table

    def create_table(self, request: CreateTableRequest) -> None:
        self._post(TABLE_PREFIX, CREATE, request, MochowResponse)

    def has_table(self, database_name: str, table_name: str) -> bool:
        if not self.has_database(database_name):
            return False
        return table_name in self.list_table(database_name).tables

    def drop_table(self, database_name: str, table_name: str) -> None:
        request = self._create_request(HttpMethod.DELETE, TABLE_PREFIX)
        request.add_parameter("database", database_name)
        request.add_parameter("table", table_name)
        self._invoke(request, MochowResponse)

    def list_table(self, database_name: str) -> ListTableResponse:
        return self._post(TABLE_PREFIX, LIST, ListTableRequest(database=database_name), ListTableResponse)

    def describe_table(self, database_name: str, table_name: str) -> DescribeTableResponse:
        body = DescribeTableRequest(database=database_name, table=table_name)
        return self._post(TABLE_PREFIX, DESC, body, DescribeTableResponse)

    def add_field(self, request: AddFieldRequest) -> None:
        self._post(TABLE_PREFIX, ADD_FIELD, request, MochowResponse)

    def alias_table(self, request: AliasTableRequest) -> None:
        self._post(TABLE_PREFIX, ALIAS, request, MochowResponse)

    def unalias_table(self, request: UnaliasTableRequest) -> None:
        self._post(TABLE_PREFIX, UNALIAS, request, MochowResponse)

    def show_table_stats(self, database_name: str, table_name: str) -> ShowTableStatsResponse:
        body = ShowTableStatsRequest(database=database_name, table=table_name)
        return self._post(TABLE_PREFIX, STATS, body, ShowTableStatsResponse)

    # index

    def create_index(self, request: CreateIndexRequest) -> None:
        self._post(INDEX_PREFIX, CREATE, request, MochowResponse)

    def describe_index(self, database_name: str, table_name: str, index_name: str) -> DescribeIndexResponse:
        body = DescribeIndexRequest(database=database_name, table=table_name, index_name=index_name)
        return self._post(INDEX_PREFIX, DESC, body, DescribeIndexResponse)

    def modify_index(self, request: ModifyIndexRequest) -> None:
        self._post(INDEX_PREFIX, MODIFY, request, MochowResponse)

    def drop_index(self, database_name: str, table_name: str, index_name: str) -> None:
        request = self._create_request(HttpMethod.DELETE, INDEX_PREFIX)
        request.add_parameter("database", database_name)
        request.add_parameter("table", table_name)
        request.add_parameter("indexName", index_name)
        self._invoke(request, MochowResponse)

    def rebuild_index(self, database_name: str, table_name: str, index_name: str) -> None:
        body = RebuildIndexRequest(database=database_name, table=table_name, index_name=index_name)
        self._post(INDEX_PREFIX, REBUILD, body, MochowResponse)

    # row

    def insert(self, request: InsertRequest) -> InsertResponse:
        return self._post(ROW_PREFIX, INSERT, request, InsertResponse)

    def upsert(self, request: UpsertRequest) -> UpsertResponse:
        return self._post(ROW_PREFIX, UPSERT, request, UpsertResponse)

    def delete(self, request: DeleteRequest) -> None:
        self._post(ROW_PREFIX, DELETE, request, MochowResponse)

    def query(self, request: QueryRequest) -> QueryResponse:
        return self._post(ROW_PREFIX, QUERY, request, QueryResponse)

    def search(self, request: SearchRequest) -> SearchResponse:
        return self._post(ROW_PREFIX, SEARCH, request, SearchResponse)

    def batch_search(self, request: BatchSearchRequest) -> BatchSearchResponse:
        return self._post(ROW_PREFIX, BATCH_SEARCH, request, BatchSearchResponse)

    def update(self, request: UpdateRequest) -> None:
        self._post(ROW_PREFIX, UPDATE, request, MochowResponse)

    def select(self, request: SelectRequest) -> SelectResponse:
        """Fetch one page. Loop while ``is_truncated``, passing ``next_marker`` as ``marker``."""
        return self._post(ROW_PREFIX, SELECT, request, SelectResponse)

    def _post(self, resource: str, action: str, body: MochowRequest, response_cls: Type[T]) -> T:
        request = self._create_request(HttpMethod.POST, resource, action)
        self._fill_payload(request, body)
        return self._invoke(request, response_cls)

    def _create_request(self, method: HttpMethod, resource: str, action: Optional[str] = None) -> InternalRequest:
        request = InternalRequest(method, append_uri(self._endpoint, URL_PREFIX, resource))
        request.add_header("Content-Type", CONTENT_TYPE_JSON)
        request.add_header("Date", format_alternate_iso8601_date())
        request.sign_options = SignOptions()
        if action is not None:
            request.add_parameter(action, "")
        return request

    @staticmethod
    def _fill_payload(request: InternalRequest, body: MochowRequest) -> None:
        content = body.to_json()
        request.add_header("Content-Length", str(len(content)))
        request.add_header("Content-Type", DEFAULT_CONTENT_TYPE)
        request.content = BytesStream(content)

    def _invoke(self, request: InternalRequest, response_cls: Type[T]) -> T:
        if not request.has_header("Content-Type"):
            request.add_header("Content-Type", DEFAULT_CONTENT_TYPE)
        if not request.has_header("Date"):
            request.add_header("Date", format_rfc822_date())
        return self._client.execute(request, response_cls, self._handlers)

    def close(self) -> None:
        self._client.close()

    shutdown = close


__all__ = ["MochowClient"]
