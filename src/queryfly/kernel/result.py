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
"""Tagged success/failure wrapper returned by every DataSource and service."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

from queryfly.kernel.exceptions import (
    QueryExecutionException,
    QueryFlyException,
    UnsupportedOperationException,
    UnsupportedOperatorException,
    ValidationException,
)

T = TypeVar("T")
U = TypeVar("U")

_EXCEPTIONS_BY_CODE: dict[str, type[QueryFlyException]] = {
    "VALIDATION_ERROR": ValidationException,
    "UNSUPPORTED_OPERATION": UnsupportedOperationException,
    "UNSUPPORTED_OPERATOR": UnsupportedOperatorException,
}


@dataclass(frozen=True)
class Result(Generic[T]):
    """Either ``ok=True`` with a ``value`` or ``ok=False`` with an ``error``.

    Callers branch on :attr:`ok`; nothing is raised across the boundary
    that produces a Result. Use :meth:`unwrap` where an exception is the
    more convenient control flow. A failure may carry the machine-readable
    ``code`` of the exception that caused it.
    """

    ok: bool
    value: Any = None
    error: str | None = None
    code: str | None = None

    # ── factories ──────────────────────────────────────────────

    @staticmethod
    def success(value: T) -> Result[T]:
        return Result(ok=True, value=value)

    @staticmethod
    def failure(error: str, code: str | None = None) -> Result[Any]:
        return Result(ok=False, error=error, code=code)

    @staticmethod
    def from_exception(exc: Exception, fallback: str = "Query failed") -> Result[Any]:
        """Failure carrying *exc*'s message, and its code for QueryFly exceptions."""
        code = exc.code if isinstance(exc, QueryFlyException) else None
        return Result.failure(str(exc) or fallback, code=code)

    # ── helpers ────────────────────────────────────────────────

    def unwrap(self) -> T:
        """Return the value or raise the exception matching the failure code.

        Unknown or missing codes raise :class:`QueryExecutionException`.
        """
        if not self.ok:
            exc_type = _EXCEPTIONS_BY_CODE.get(self.code or "", QueryExecutionException)
            raise exc_type(self.error or "Query failed", code=self.code or "QUERY_FAILED")
        return self.value

    def map(self, func: Callable[[T], U]) -> Result[U]:
        """Transform a successful value; failures pass through untouched."""
        if not self.ok:
            return self  # type: ignore[return-value]
        return Result.success(func(self.value))
