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
"""Paginated query results."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")
U = TypeVar("U")


@dataclass(frozen=True)
class PageInfo:
    """Pagination metadata for a :class:`QueryResult`.

    Attributes:
        has_next_page: Whether another page follows this one.
        next_cursor: Opaque cursor for the next page (cursor-mode only).
        total_count: Number of items matching the filters (offset-mode only;
            an engine may omit it when counting is expensive).
    """

    has_next_page: bool
    next_cursor: str | None = None
    total_count: int | None = None


@dataclass(frozen=True)
class QueryResult(Generic[T]):
    """A page of items plus its :class:`PageInfo`.

    ``items`` is stored as a tuple so consumers cannot mutate it.
    """

    items: tuple[T, ...]
    page_info: PageInfo

    def __post_init__(self) -> None:
        if not isinstance(self.items, tuple):
            object.__setattr__(self, "items", tuple(self.items))

    def __len__(self) -> int:
        return len(self.items)

    @staticmethod
    def empty() -> QueryResult[T]:
        return QueryResult(items=(), page_info=PageInfo(has_next_page=False, total_count=0))

    def map(self, func: Callable[[T], U]) -> QueryResult[U]:
        """Transform items, preserving pagination metadata."""
        return QueryResult(items=tuple(func(item) for item in self.items), page_info=self.page_info)
