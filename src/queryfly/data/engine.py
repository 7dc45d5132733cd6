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
"""In-memory execution of a :class:`QuerySpec`: filter, then sort, then paginate.

Every function here is pure: it reads the items and the spec and returns
new sequences, never touching its inputs. Shape validation happens before
this module is reached (see :mod:`queryfly.data.schema`); an exception
raised here, such as a comparison between incompatible types, is reported
by the calling engine as a failed query.

Example::

    spec = QuerySpec(
        filters=(FilterCondition("userType", FilterOperator.EQ, "LEAD"),),
        sorting=(SortSpec.asc("displayName"),),
        pagination=PaginationSpec(page_size=10),
    )
    result = execute_query(users, spec)
"""

from __future__ import annotations

import functools
from collections.abc import Callable, Iterable, Mapping, Sequence
from typing import Any, TypeVar

from queryfly.data.cursor import decode_cursor, encode_cursor
from queryfly.data.filter import FilterCondition, FilterOperator
from queryfly.data.page import PageInfo, QueryResult
from queryfly.data.pageable import PaginationSpec, SortSpec
from queryfly.data.query import QuerySpec

T = TypeVar("T")

_MEMBERSHIP_TYPES = (list, tuple, set, frozenset)


# ---------------------------------------------------------------------------
# Field access and coercion
# ---------------------------------------------------------------------------


def read_field(item: Any, field: str) -> Any:
    """Read *field* off a mapping or an object; absent fields read as ``None``."""
    if isinstance(item, Mapping):
        return item.get(field)
    return getattr(item, field, None)


def to_text(value: Any) -> str:
    """Coerce a field or filter value to the text used by the string operators."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def strict_equals(left: Any, right: Any) -> bool:
    """Equality that never treats a bool as equal to a number."""
    if isinstance(left, bool) != isinstance(right, bool):
        return False
    return bool(left == right)


# ---------------------------------------------------------------------------
# Filter stage
# ---------------------------------------------------------------------------


def _text_test(test: Callable[[str, str], bool]) -> Callable[[Any, Any], bool]:
    return lambda actual, expected: test(to_text(actual).lower(), to_text(expected).lower())


def _relational(test: Callable[[Any, Any], bool]) -> Callable[[Any, Any], bool]:
    # An absent field never satisfies an ordering comparison; any other
    # pairing is left to Python and may raise TypeError.
    return lambda actual, expected: actual is not None and expected is not None and test(actual, expected)


def _member_of(actual: Any, expected: Any) -> bool:
    if not isinstance(expected, _MEMBERSHIP_TYPES):
        return False
    return any(strict_equals(actual, candidate) for candidate in expected)


_OPERATORS: dict[FilterOperator, Callable[[Any, Any], bool]] = {
    FilterOperator.EQ: strict_equals,
    FilterOperator.NEQ: lambda actual, expected: not strict_equals(actual, expected),
    FilterOperator.CONTAINS: _text_test(lambda a, e: e in a),
    FilterOperator.STARTS_WITH: _text_test(str.startswith),
    FilterOperator.ENDS_WITH: _text_test(str.endswith),
    FilterOperator.GT: _relational(lambda a, e: a > e),
    FilterOperator.LT: _relational(lambda a, e: a < e),
    FilterOperator.GTE: _relational(lambda a, e: a >= e),
    FilterOperator.LTE: _relational(lambda a, e: a <= e),
    FilterOperator.IN: _member_of,
}


def matches(item: Any, condition: FilterCondition[Any], *, fail_open: bool = True) -> bool:
    """Evaluate a single condition against *item*.

    An operator this module does not know passes every item when
    *fail_open* is true and rejects every item otherwise.
    """
    operator = condition.operator
    if operator is None:
        return fail_open
    return _OPERATORS[operator](read_field(item, condition.field), condition.value)


def apply_filters(
    items: Iterable[T],
    filters: Sequence[FilterCondition[Any]],
    *,
    fail_open: bool = True,
) -> list[T]:
    """Keep the items that satisfy every condition (logical AND)."""
    return [item for item in items if all(matches(item, f, fail_open=fail_open) for f in filters)]


# ---------------------------------------------------------------------------
# Sort stage
# ---------------------------------------------------------------------------


def compare_values(left: Any, right: Any) -> int:
    """Three-way comparison using ``<`` and ``>``; ``None`` sorts after any value."""
    if left is None or right is None:
        return (left is None) - (right is None)
    if left < right:
        return -1
    if left > right:
        return 1
    return 0


def apply_sorting(items: Iterable[T], sorting: Sequence[SortSpec[Any]]) -> list[T]:
    """Sort by each spec in turn; later specs only break earlier ties.

    ``sorted`` is stable, so items tied on every key keep their input order.
    """

    def _compare(a: T, b: T) -> int:
        for spec in sorting:
            result = compare_values(read_field(a, spec.field), read_field(b, spec.field))
            if result != 0:
                return -result if spec.direction == "desc" else result
        return 0

    if not sorting:
        return list(items)
    return sorted(items, key=functools.cmp_to_key(_compare))


# ---------------------------------------------------------------------------
# Pagination stage
# ---------------------------------------------------------------------------


def paginate(items: Sequence[T], pagination: PaginationSpec) -> QueryResult[T]:
    """Slice one page out of the filtered, sorted items.

    Cursor-mode reports ``next_cursor`` and no total; offset-mode reports
    ``total_count`` and no cursor. A page past the end is simply empty.
    """
    total = len(items)
    size = pagination.page_size

    if pagination.is_cursor_mode:
        start = decode_cursor(pagination.cursor or "")
        end = start + size
        has_more = end < total
        return QueryResult(
            items=tuple(items[start:end]),
            page_info=PageInfo(
                has_next_page=has_more,
                next_cursor=encode_cursor(end) if has_more else None,
            ),
        )

    start = pagination.offset
    end = start + size
    return QueryResult(
        items=tuple(items[start:end]),
        page_info=PageInfo(has_next_page=end < total, total_count=total),
    )


def execute_query(items: Iterable[T], spec: QuerySpec[Any], *, fail_open: bool = True) -> QueryResult[T]:
    """Run the full filter → sort → paginate pipeline over *items*."""
    filtered = apply_filters(items, spec.filters, fail_open=fail_open)
    if spec.sorting:
        filtered = apply_sorting(filtered, spec.sorting)
    return paginate(filtered, spec.pagination)
