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
"""Sort and pagination request types."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Literal, TypeVar

TField = TypeVar("TField", bound=str)

SortDirection = Literal["asc", "desc"]


@dataclass(frozen=True)
class SortSpec(Generic[TField]):
    """A single sort key: field name + direction.

    A query carries an ordered sequence of these; the first is the primary
    key and each later one only breaks ties left by those before it.
    """

    field: TField
    direction: SortDirection = "asc"

    @staticmethod
    def asc(field: str) -> SortSpec[str]:
        return SortSpec(field=field, direction="asc")

    @staticmethod
    def desc(field: str) -> SortSpec[str]:
        return SortSpec(field=field, direction="desc")


@dataclass(frozen=True)
class PaginationSpec:
    """Pagination request.

    There is no explicit mode field. A non-empty ``cursor`` selects
    cursor-mode; anything else (including ``cursor=""``) is offset-mode
    driven by ``page_index``, which defaults to 0.
    """

    page_size: int = 20
    page_index: int | None = None
    cursor: str | None = None

    @property
    def is_cursor_mode(self) -> bool:
        return isinstance(self.cursor, str) and self.cursor != ""

    @property
    def offset(self) -> int:
        """Start offset for offset-mode."""
        return (self.page_index or 0) * self.page_size

    @staticmethod
    def of(page_index: int, page_size: int = 20) -> PaginationSpec:
        return PaginationSpec(page_size=page_size, page_index=page_index)

    @staticmethod
    def after(cursor: str | None, page_size: int = 20) -> PaginationSpec:
        return PaginationSpec(page_size=page_size, cursor=cursor)
