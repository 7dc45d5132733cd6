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
"""DataSource over an in-process collection of entities."""

from __future__ import annotations

import threading
from collections.abc import Iterable, Sequence
from typing import Any, Generic, TypeVar

import structlog

from queryfly.config.properties.query import QueryProperties
from queryfly.core.config import Config
from queryfly.data.engine import apply_filters, execute_query, read_field
from queryfly.data.filter import FilterCondition
from queryfly.data.page import QueryResult
from queryfly.data.query import QuerySpec
from queryfly.kernel.result import Result

T = TypeVar("T")

logger = structlog.get_logger("queryfly.data.adapters.memory")


class InMemoryDataSource(Generic[T]):
    """Executes every part of a QuerySpec in memory.

    Entities may be mappings or objects; each must expose an ``id``. The
    collection is held as an immutable snapshot, and :meth:`replace_all`
    swaps in a new one under a lock, so a query in flight always sees a
    consistent collection.

    Usage::

        users = InMemoryDataSource(generate_dummy_users(100))
        result = await users.query(spec)
        if result.ok:
            render(result.value.items)
    """

    def __init__(self, items: Iterable[T] = (), *, fail_open_unknown_operators: bool = True) -> None:
        self._items: tuple[T, ...] = tuple(items)
        self._lock = threading.Lock()
        self._fail_open = fail_open_unknown_operators

    @classmethod
    def from_config(cls, items: Iterable[T], config: Config) -> InMemoryDataSource[T]:
        props = config.bind(QueryProperties)
        return cls(items, fail_open_unknown_operators=props.fail_open_unknown_operators)

    def snapshot(self) -> tuple[T, ...]:
        with self._lock:
            return self._items

    def replace_all(self, items: Iterable[T]) -> None:
        """Swap the backing collection; queries already running keep the old one."""
        new_items = tuple(items)
        with self._lock:
            self._items = new_items

    def __len__(self) -> int:
        return len(self.snapshot())

    async def query(self, spec: QuerySpec[Any]) -> Result[QueryResult[T]]:
        try:
            result = execute_query(self.snapshot(), spec, fail_open=self._fail_open)
        except Exception as exc:
            logger.warning("query_failed", error=str(exc), error_type=type(exc).__name__)
            return Result.from_exception(exc)
        logger.debug(
            "query_executed",
            filters=len(spec.filters),
            sorting=len(spec.sorting),
            returned=len(result.items),
            has_next_page=result.page_info.has_next_page,
        )
        return Result.success(result)

    async def get_by_id(self, id: str) -> Result[T | None]:
        for item in self.snapshot():
            if read_field(item, "id") == id:
                return Result.success(item)
        return Result.success(None)

    async def get_count(self, filters: Sequence[FilterCondition[Any]] | None = None) -> Result[int]:
        items = self.snapshot()
        if not filters:
            return Result.success(len(items))
        try:
            return Result.success(len(apply_filters(items, filters, fail_open=self._fail_open)))
        except Exception as exc:
            logger.warning("count_failed", error=str(exc), error_type=type(exc).__name__)
            return Result.from_exception(exc, "Count failed")
