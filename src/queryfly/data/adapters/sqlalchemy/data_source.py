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
"""DataSource backed by a SQLAlchemy 2.0 async session.

Filters whose operator the configured :class:`OperatorCapabilities` allows
compile to SQL; the rest run in memory on the rows SQL returns. When
nothing is left for memory, sorting and pagination are pushed down as
well, otherwise the pushed-down query is fetched whole and the in-memory
engine finishes the job. The results are identical either way.

``contains``, ``startsWith`` and ``endsWith`` compile to ``ilike``, which
SQLAlchemy renders as ``lower(col) LIKE lower(:needle)`` on SQLite. SQLite's
``lower()`` folds ASCII only, so a non-ASCII needle such as ``"É"`` can
match differently than the in-memory ``str.lower()``. Mixed-case ASCII
needles agree in both engines.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Generic, TypeVar

import structlog
from sqlalchemy import ColumnElement, Select, String, false, func, inspect, or_, select, true
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from queryfly.config.properties.query import QueryProperties
from queryfly.core.config import Config
from queryfly.data.capabilities import ALL_OPERATORS, FilterSplit, OperatorCapabilities
from queryfly.data.cursor import decode_cursor, encode_cursor
from queryfly.data.engine import apply_filters, apply_sorting, paginate, to_text
from queryfly.data.filter import FilterCondition, FilterOperator
from queryfly.data.page import PageInfo, QueryResult
from queryfly.data.pageable import PaginationSpec, SortSpec
from queryfly.data.query import QuerySpec
from queryfly.kernel.result import Result

T = TypeVar("T")

logger = structlog.get_logger("queryfly.data.adapters.sqlalchemy")

_TEXT_OPERATORS = frozenset({FilterOperator.CONTAINS, FilterOperator.STARTS_WITH, FilterOperator.ENDS_WITH})


def _escape_like(text: str) -> str:
    return text.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


class SqlAlchemyDataSource(Generic[T]):
    """Executes QuerySpecs against one mapped model.

    Type Parameters:
        T: The mapped entity class.

    Usage::

        users = SqlAlchemyDataSource(
            async_sessionmaker(engine),
            UserRow,
            capabilities=OperatorCapabilities(pushdown=KEY_VALUE_PUSHDOWN),
        )
        result = await users.query(spec)
    """

    def __init__(
        self,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[T],
        *,
        capabilities: OperatorCapabilities | None = None,
        fail_open_unknown_operators: bool = True,
    ) -> None:
        self._session_factory = session_factory
        self._model = model
        self._capabilities = capabilities or OperatorCapabilities(pushdown=ALL_OPERATORS)
        self._fail_open = fail_open_unknown_operators

        mapper = inspect(model)
        self._columns: dict[str, Any] = {attr.key: attr.columns[0] for attr in mapper.column_attrs}
        self._primary_key = tuple(mapper.primary_key)

    @classmethod
    def from_config(
        cls,
        session_factory: async_sessionmaker[AsyncSession],
        model: type[T],
        config: Config,
        *,
        pushdown: frozenset[FilterOperator] = ALL_OPERATORS,
    ) -> SqlAlchemyDataSource[T]:
        """Build a source whose strictness comes from ``queryfly.query``."""
        props = config.bind(QueryProperties)
        return cls(
            session_factory,
            model,
            capabilities=OperatorCapabilities(pushdown=pushdown, strict=props.strict_operators),
            fail_open_unknown_operators=props.fail_open_unknown_operators,
        )

    # ── compilation ────────────────────────────────────────────

    def _split(self, filters: Sequence[FilterCondition[Any]]) -> FilterSplit:
        """Split by capability, then keep text operators on non-text columns in memory."""
        split = self._capabilities.split_filters(filters, pushable_fields=frozenset(self._columns))
        pushed: list[FilterCondition[Any]] = []
        post_fetch = list(split.post_fetch)
        for condition in split.pushed:
            column = self._columns[condition.field]
            if condition.operator in _TEXT_OPERATORS and not isinstance(column.type, String):
                post_fetch.append(condition)
            else:
                pushed.append(condition)
        return FilterSplit(pushed=tuple(pushed), post_fetch=tuple(post_fetch))

    def _compile(self, condition: FilterCondition[Any]) -> ColumnElement[bool]:
        col = getattr(self._model, condition.field)
        value = condition.value
        if condition.operator in _TEXT_OPERATORS and to_text(value) == "":
            # An empty needle matches every row, NULLs included.
            return true()
        match condition.operator:
            case FilterOperator.EQ:
                return col.is_(None) if value is None else col == value
            case FilterOperator.NEQ:
                return col.is_not(None) if value is None else or_(col != value, col.is_(None))
            case FilterOperator.CONTAINS:
                return col.ilike(f"%{_escape_like(to_text(value))}%", escape="\\")
            case FilterOperator.STARTS_WITH:
                return col.ilike(f"{_escape_like(to_text(value))}%", escape="\\")
            case FilterOperator.ENDS_WITH:
                return col.ilike(f"%{_escape_like(to_text(value))}", escape="\\")
            case FilterOperator.GT if value is not None:
                return col > value
            case FilterOperator.LT if value is not None:
                return col < value
            case FilterOperator.GTE if value is not None:
                return col >= value
            case FilterOperator.LTE if value is not None:
                return col <= value
            case FilterOperator.IN if isinstance(value, (list, tuple, set, frozenset)):
                return col.in_(list(value))
            case _:
                return false()

    def _where(self, stmt: Select[Any], conditions: Sequence[FilterCondition[Any]]) -> Select[Any]:
        for condition in conditions:
            stmt = stmt.where(self._compile(condition))
        return stmt

    def _can_sort(self, sorting: Sequence[SortSpec[Any]]) -> bool:
        return all(s.field in self._columns for s in sorting)

    def _order(self, stmt: Select[Any], sorting: Sequence[SortSpec[Any]]) -> Select[Any]:
        for s in sorting:
            col = getattr(self._model, s.field)
            # NULLs last ascending, first descending, as in memory.
            stmt = stmt.order_by(col.asc().nulls_last() if s.direction == "asc" else col.desc().nulls_first())
        return stmt.order_by(*self._primary_key)

    # ── DataSource ─────────────────────────────────────────────

    async def query(self, spec: QuerySpec[Any]) -> Result[QueryResult[T]]:
        try:
            split = self._split(spec.filters)
            sort_in_sql = self._can_sort(spec.sorting)
            logger.debug(
                "filters_split",
                model=self._model.__name__,
                pushed=len(split.pushed),
                post_fetch=len(split.post_fetch),
                sort_in_sql=sort_in_sql,
            )
            stmt = self._where(select(self._model), split.pushed)
            stmt = self._order(stmt, spec.sorting if sort_in_sql else ())

            async with self._session_factory() as session:
                if not split.needs_post_fetch and sort_in_sql:
                    result = await self._paginate_in_sql(session, stmt, split, spec.pagination)
                else:
                    rows = list((await session.execute(stmt)).scalars().all())
                    rows = apply_filters(rows, split.post_fetch, fail_open=self._fail_open)
                    if not sort_in_sql:
                        rows = apply_sorting(rows, spec.sorting)
                    result = paginate(rows, spec.pagination)
        except Exception as exc:
            logger.warning("query_failed", model=self._model.__name__, error=str(exc), error_type=type(exc).__name__)
            return Result.from_exception(exc)
        return Result.success(result)

    async def _paginate_in_sql(
        self,
        session: AsyncSession,
        stmt: Select[Any],
        split: FilterSplit,
        pagination: PaginationSpec,
    ) -> QueryResult[T]:
        size = pagination.page_size
        if pagination.is_cursor_mode:
            start = decode_cursor(pagination.cursor or "")
            # One extra row tells us whether another page exists.
            rows = list((await session.execute(stmt.offset(start).limit(size + 1))).scalars().all())
            has_more = len(rows) > size
            return QueryResult(
                items=tuple(rows[:size]),
                page_info=PageInfo(has_next_page=has_more, next_cursor=encode_cursor(start + size) if has_more else None),
            )

        total = await self._count(session, split.pushed)
        start = pagination.offset
        rows = list((await session.execute(stmt.offset(start).limit(size))).scalars().all())
        return QueryResult(
            items=tuple(rows),
            page_info=PageInfo(has_next_page=start + size < total, total_count=total),
        )

    async def _count(self, session: AsyncSession, conditions: Sequence[FilterCondition[Any]]) -> int:
        stmt = self._where(select(func.count()).select_from(self._model), conditions)
        return int((await session.execute(stmt)).scalar_one())

    async def get_by_id(self, id: str) -> Result[T | None]:
        try:
            async with self._session_factory() as session:
                return Result.success(await session.get(self._model, id))
        except Exception as exc:
            logger.warning(
                "get_by_id_failed", model=self._model.__name__, error=str(exc), error_type=type(exc).__name__
            )
            return Result.from_exception(exc, "Lookup failed")

    async def get_count(self, filters: Sequence[FilterCondition[Any]] | None = None) -> Result[int]:
        try:
            split = self._split(filters or ())
            async with self._session_factory() as session:
                if not split.needs_post_fetch:
                    return Result.success(await self._count(session, split.pushed))
                stmt = self._where(select(self._model), split.pushed)
                rows = (await session.execute(stmt)).scalars().all()
                return Result.success(len(apply_filters(rows, split.post_fetch, fail_open=self._fail_open)))
        except Exception as exc:
            logger.warning("count_failed", model=self._model.__name__, error=str(exc), error_type=type(exc).__name__)
            return Result.from_exception(exc, "Count failed")
