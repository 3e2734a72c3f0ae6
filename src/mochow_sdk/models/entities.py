"""Schema, index and search-parameter entities."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

import pydantic
from pydantic import ValidationInfo, field_validator

from .base import MochowModel
from .enums import (
    AutoBuildPolicyType,
    FieldType,
    IndexState,
    IndexType,
    MetricType,
    PartitionType,
    TableState,
)


class Field(MochowModel):
    field_name: str
    field_type: FieldType
    primary_key: bool = False
    partition_key: bool = False
    auto_increment: bool = False
    not_null: bool = False
    dimension: Optional[int] = None


class IndexParams(MochowModel):
    pass


class HNSWParams(IndexParams):
    m: int = pydantic.Field(alias="M")
    ef_construction: int


class PUCKParams(IndexParams):
    coarse_cluster_count: int
    fine_cluster_count: int


_INDEX_PARAMS_BY_TYPE = {
    IndexType.HNSW: HNSWParams,
    IndexType.PUCK: PUCKParams,
}


class AutoBuildPolicy(MochowModel):
    policy_type: AutoBuildPolicyType
    timing: Optional[str] = None
    period_in_second: Optional[int] = None
    row_count_increment: Optional[int] = None
    row_count_increment_ratio: Optional[float] = None


class IndexField(MochowModel):
    index_name: Optional[str] = None
    field: Optional[str] = None
    index_type: Optional[IndexType] = None
    state: Optional[IndexState] = None
    metric_type: Optional[MetricType] = None
    params: Optional[IndexParams] = None
    auto_build: bool = False
    auto_build_policy: Optional[AutoBuildPolicy] = None

    @field_validator("params", mode="before")
    @classmethod
    def _params_for_index_type(cls, value: Any, info: ValidationInfo) -> Any:
        if value is None or isinstance(value, IndexParams):
            return value
        params_cls = _INDEX_PARAMS_BY_TYPE.get(info.data.get("index_type"))
        if params_cls is None:
            return None
        return params_cls.model_validate(value)

    @property
    def is_vector_index(self) -> bool:
        return self.index_type is not None and self.index_type.is_vector


def VectorIndex(
    index_name: str,
    field: str,
    index_type: IndexType,
    metric_type: MetricType,
    params: Optional[IndexParams] = None,
    auto_build: bool = False,
    auto_build_policy: Optional[AutoBuildPolicy] = None,
) -> IndexField:
    if not index_type.is_vector:
        raise ValueError(f"{index_type.value} is not a vector index type")
    return IndexField(
        index_name=index_name,
        field=field,
        index_type=index_type,
        metric_type=metric_type,
        params=params,
        auto_build=auto_build,
        auto_build_policy=auto_build_policy,
    )


def SecondaryIndex(index_name: str, field: str) -> IndexField:
    return IndexField(index_name=index_name, field=field, index_type=IndexType.SECONDARY)


class PartitionParams(MochowModel):
    partition_type: PartitionType = PartitionType.HASH
    partition_num: int


class Schema(MochowModel):
    fields: List[Field] = pydantic.Field(default_factory=list)
    indexes: List[IndexField] = pydantic.Field(default_factory=list)


class Table(MochowModel):
    database: Optional[str] = None
    table: Optional[str] = None
    create_time: Optional[str] = None
    description: Optional[str] = None
    replication: int = 0
    partition: Optional[PartitionParams] = None
    enable_dynamic_field: Optional[bool] = None
    state: Optional[TableState] = None
    aliases: List[str] = pydantic.Field(default_factory=list)
    table_schema: Optional[Schema] = pydantic.Field(default=None, alias="schema")


class SearchParams(MochowModel):
    limit: Optional[int] = 50


class HNSWSearchParams(SearchParams):
    ef: Optional[int] = None
    distance_far: Optional[float] = None
    distance_near: Optional[float] = None
    pruning: Optional[bool] = None


class FLATSearchParams(SearchParams):
    distance_far: Optional[float] = None
    distance_near: Optional[float] = None


class PUCKSearchParams(SearchParams):
    search_coarse_count: Optional[int] = None


class ANNSearchParams(MochowModel):
    vector_field: str
    vector_floats: List[float]
    params: Optional[SearchParams] = None
    filter: Optional[str] = None


class BatchANNSearchParams(MochowModel):
    vector_field: str
    vector_floats: List[List[float]]
    params: Optional[SearchParams] = None
    filter: Optional[str] = None


class RowResult(MochowModel):
    row: Dict[str, Any] = pydantic.Field(default_factory=dict)
    distance: Optional[float] = None
    score: Optional[float] = None


class BatchRowResults(MochowModel):
    search_vector_floats: List[float] = pydantic.Field(default_factory=list)
    rows: List[RowResult] = pydantic.Field(default_factory=list)


__all__ = [
    "ANNSearchParams",
    "AutoBuildPolicy",
    "BatchANNSearchParams",
    "BatchRowResults",
    "FLATSearchParams",
    "Field",
    "HNSWParams",
    "HNSWSearchParams",
    "IndexField",
    "IndexParams",
    "PUCKParams",
    "PUCKSearchParams",
    "PartitionParams",
    "RowResult",
    "Schema",
    "SearchParams",
    "SecondaryIndex",
    "Table",
    "VectorIndex",
]
