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
"""Outbound ports: the DataSource contract and its optional capabilities.

A DataSource binds one entity type to one backing store and executes
:class:`QuerySpec` requests against it. It never mutates the spec and
never raises across this boundary: failures come back as
``Result.failure(...)``, and an empty page is a successful result.

``get_by_id`` and ``get_count`` are optional; an engine advertises them by
also satisfying :class:`SupportsGetById` / :class:`SupportsGetCount`.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any, Protocol, TypeVar, runtime_checkable

from queryfly.data.filter import FilterCondition
from queryfly.data.page import QueryResult
from queryfly.data.query import QuerySpec
from queryfly.kernel.result import Result

T = TypeVar("T")


@runtime_checkable
class DataSource(Protocol[T]):
    """Executes a QuerySpec against one backing store."""

    async def query(self, spec: QuerySpec[Any]) -> Result[QueryResult[T]]: ...


@runtime_checkable
class SupportsGetById(Protocol[T]):
    """Direct lookup by id; a missing id is a successful ``None``."""

    async def get_by_id(self, id: str) -> Result[T | None]: ...


@runtime_checkable
class SupportsGetCount(Protocol):
    """Count of entities matching optional filters."""

    async def get_count(self, filters: Sequence[FilterCondition[Any]] | None = None) -> Result[int]: ...
