# Copyright 2026 Firefly Software Solutions Inc.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
"""Pydantic schemas that turn raw input into a validated :class:`QuerySpec`.

Engines trust their input, so everything reaching one goes through
:func:`parse_query_spec` first. Both the camelCase wire names
(``pageSize``, ``pageIndex``) and snake_case are accepted.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from queryfly.config.properties.query import QueryProperties
from queryfly.data.filter import FilterCondition, FilterOperator
from queryfly.data.pageable import PaginationSpec, SortDirection, SortSpec
from queryfly.data.query import QuerySpec
from queryfly.kernel.exceptions import ValidationException
from queryfly.validation.helpers import validate_model

MAX_PAGE_SIZE = 100
DEFAULT_PAGE_SIZE = 20


class _WireModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)


class FilterConditionModel(_WireModel):
    field: str = Field(min_length=1)
    op: FilterOperator
    value: Any = None

    def to_condition(self) -> FilterCondition[str]:
        return FilterCondition(self.field, self.op, self.value)


class SortSpecModel(_WireModel):
    field: str = Field(min_length=1)
    direction: SortDirection

    def to_sort(self) -> SortSpec[str]:
        return SortSpec(self.field, self.direction)


class PaginationSpecModel(_WireModel):
    page_size: int = Field(default=DEFAULT_PAGE_SIZE, ge=1, le=MAX_PAGE_SIZE)
    page_index: int | None = Field(default=None, ge=0)
    cursor: str | None = None

    def to_pagination(self) -> PaginationSpec:
        return PaginationSpec(page_size=self.page_size, page_index=self.page_index, cursor=self.cursor)


class QuerySpecModel(_WireModel):
    filters: list[FilterConditionModel] = Field(default_factory=list)
    sorting: list[SortSpecModel] = Field(default_factory=list)
    pagination: PaginationSpecModel

    def to_spec(self) -> QuerySpec[str]:
        return QuerySpec(
            pagination=self.pagination.to_pagination(),
            filters=tuple(f.to_condition() for f in self.filters),
            sorting=tuple(s.to_sort() for s in self.sorting),
        )


def parse_query_spec(data: Any, properties: QueryProperties | None = None) -> QuerySpec[str]:
    """Validate raw input (a dict or an existing :class:`QuerySpec`) into a QuerySpec.

    *properties* may lower the page-size ceiling and change the default
    page size; the ceiling never rises above 100.

    Raises:
        ValidationException: For any shape, range or enum violation.
    """
    if isinstance(data, QuerySpec):
        data = dump_query_spec(data)

    if properties is not None and isinstance(data, dict):
        pagination = data.get("pagination")
        if isinstance(pagination, dict) and "pageSize" not in pagination and "page_size" not in pagination:
            data = {**data, "pagination": {**pagination, "page_size": properties.default_page_size}}

    spec = validate_model(QuerySpecModel, data).to_spec()

    if properties is not None and spec.pagination.page_size > properties.max_page_size:
        raise ValidationException(
            f"Validation failed: pagination.pageSize: must be <= {properties.max_page_size}",
            code="VALIDATION_ERROR",
            context={"field": "pagination.pageSize", "max": properties.max_page_size},
        )
    return spec


def dump_query_spec(spec: QuerySpec[Any]) -> dict[str, Any]:
    """Render a QuerySpec as camelCase plain data (the inverse of :func:`parse_query_spec`)."""
    pagination: dict[str, Any] = {"pageSize": spec.pagination.page_size}
    if spec.pagination.page_index is not None:
        pagination["pageIndex"] = spec.pagination.page_index
    if spec.pagination.cursor is not None:
        pagination["cursor"] = spec.pagination.cursor
    return {
        "filters": [
            {"field": f.field, "op": f.op.value if isinstance(f.op, FilterOperator) else f.op, "value": f.value}
            for f in spec.filters
        ],
        "sorting": [{"field": s.field, "direction": s.direction} for s in spec.sorting],
        "pagination": pagination,
    }
