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
"""QuerySpec: the backend-agnostic filter/sort/paginate request.

A spec is plain data. Engines only read it, and every change a caller
makes (new filters, a different sort, the next page) produces a new spec
through the ``with_*`` methods.

``TField`` narrows field names for type checkers only; at runtime a field
name is just a non-empty string.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from typing import Generic, TypeVar

from queryfly.data.filter import FilterCondition
from queryfly.data.page import PageInfo
from queryfly.data.pageable import PaginationSpec, SortSpec

TField = TypeVar("TField", bound=str)


@dataclass(frozen=True)
class QuerySpec(Generic[TField]):
    """Filters (ANDed), ordered sort keys, and one pagination request."""

    pagination: PaginationSpec
    filters: tuple[FilterCondition[TField], ...] = field(default_factory=tuple)
    sorting: tuple[SortSpec[TField], ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        if not isinstance(self.filters, tuple):
            object.__setattr__(self, "filters", tuple(self.filters))
        if not isinstance(self.sorting, tuple):
            object.__setattr__(self, "sorting", tuple(self.sorting))

    def with_filters(self, filters: Iterable[FilterCondition[TField]]) -> QuerySpec[TField]:
        return replace(self, filters=tuple(filters))

    def with_sorting(self, sorting: Iterable[SortSpec[TField]]) -> QuerySpec[TField]:
        return replace(self, sorting=tuple(sorting))

    def with_pagination(self, pagination: PaginationSpec) -> QuerySpec[TField]:
        return replace(self, pagination=pagination)

    def next_page(self, page_info: PageInfo) -> QuerySpec[TField] | None:
        """Return the spec for the page after the one described by *page_info*.

        Cursor-mode continues from ``next_cursor`` whenever one was issued,
        offset-mode advances ``page_index``. ``None`` when there is no next page.
        """
        if not page_info.has_next_page:
            return None
        size = self.pagination.page_size
        if page_info.next_cursor:
            return self.with_pagination(PaginationSpec(page_size=size, cursor=page_info.next_cursor))
        return self.with_pagination(PaginationSpec(page_size=size, page_index=(self.pagination.page_index or 0) + 1))
