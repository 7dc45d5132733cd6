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
"""Unified exception hierarchy for QueryFly.

All library exceptions inherit from QueryFlyException. They are raised
inside engines and the validation layer, and converted into failed
:class:`~queryfly.kernel.result.Result` values before they reach a
DataSource or service caller.

Categories:
- ValidationException: malformed query input, rejected before execution
- UnsupportedOperationException: optional DataSource operation not implemented
- UnsupportedOperatorException: strict engine refusing a filter operator
- QueryExecutionException: unexpected fault while filtering, sorting or paging
"""

from __future__ import annotations


class QueryFlyException(Exception):
    """Base exception for all QueryFly errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "VALIDATION_ERROR").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ValidationException(QueryFlyException):
    """Query input failed schema validation."""


class UnsupportedOperationException(QueryFlyException):
    """An optional DataSource operation was invoked on an engine that lacks it."""


class UnsupportedOperatorException(QueryFlyException):
    """A strict engine was asked to execute a filter operator it cannot run."""


class QueryExecutionException(QueryFlyException):
    """Filtering, sorting or pagination failed unexpectedly."""
