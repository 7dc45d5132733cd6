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
"""CollectionService: one DataSource behind a uniform query/get_by_id/get_count API."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

import structlog

from queryfly.data.filter import FilterCondition
from queryfly.data.page import QueryResult
from queryfly.data.ports.outbound import DataSource, SupportsGetById, SupportsGetCount
from queryfly.data.query import QuerySpec
from queryfly.kernel.result import Result

T = TypeVar("T")

logger = structlog.get_logger("queryfly.services.collection")

GET_BY_ID_NOT_SUPPORTED = "getById not supported"
GET_COUNT_NOT_SUPPORTED = "getCount not supported"
UNSUPPORTED_OPERATION = "UNSUPPORTED_OPERATION"


class CollectionService(Generic[T]):
    """Pass-through to a bound DataSource.

    Holds no state beyond the binding. Optional operations the source does
    not implement come back as failed results with a fixed message rather
    than raising.
    """

    def __init__(self, data_source: DataSource[T], entity_name: str = "entity") -> None:
        self._data_source = data_source
        self.entity_name = entity_name

    @property
    def data_source(self) -> DataSource[T]:
        return self._data_source

    async def query(self, spec: QuerySpec[Any]) -> Result[QueryResult[T]]:
        return await self._data_source.query(spec)

    async def get_by_id(self, id: str) -> Result[T | None]:
        if not isinstance(self._data_source, SupportsGetById):
            logger.info("operation_not_supported", entity=self.entity_name, operation="get_by_id")
            return Result.failure(GET_BY_ID_NOT_SUPPORTED, code=UNSUPPORTED_OPERATION)
        return await self._data_source.get_by_id(id)

    async def get_count(self, filters: Sequence[FilterCondition[Any]] | None = None) -> Result[int]:
        if not isinstance(self._data_source, SupportsGetCount):
            logger.info("operation_not_supported", entity=self.entity_name, operation="get_count")
            return Result.failure(GET_COUNT_NOT_SUPPORTED, code=UNSUPPORTED_OPERATION)
        return await self._data_source.get_count(filters)


def create_collection_service(data_source: DataSource[T], entity_name: str = "entity") -> CollectionService[T]:
    return CollectionService(data_source, entity_name)
