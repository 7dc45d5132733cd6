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
"""Filter operators and conditions shared by every query engine.

The operator list is a stability contract: engines split filters into
push-down and post-fetch subsets keyed off these exact names, so
operators may be added but never removed.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Generic, TypeVar

TField = TypeVar("TField", bound=str)


class FilterOperator(str, Enum):
    """Comparison applied between an entity field and a filter value."""

    EQ = "eq"
    NEQ = "neq"
    CONTAINS = "contains"
    STARTS_WITH = "startsWith"
    ENDS_WITH = "endsWith"
    GT = "gt"
    LT = "lt"
    GTE = "gte"
    LTE = "lte"
    IN = "in"

    @classmethod
    def parse(cls, value: FilterOperator | str) -> FilterOperator | None:
        """Return the operator named *value*, or ``None`` when it is not one of ours."""
        if isinstance(value, FilterOperator):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


@dataclass(frozen=True)
class FilterCondition(Generic[TField]):
    """A single ``field <op> value`` criterion.

    ``op`` is normalised to :class:`FilterOperator` when it names a known
    operator and kept verbatim otherwise, leaving unknown operators to the
    executing engine's policy. ``value`` is never type-checked against
    ``op``.
    """

    field: TField
    op: FilterOperator | str
    value: Any = None

    def __post_init__(self) -> None:
        known = FilterOperator.parse(self.op)
        if known is not None:
            object.__setattr__(self, "op", known)

    @property
    def operator(self) -> FilterOperator | None:
        """The known operator, or ``None`` for an operator this library does not define."""
        return self.op if isinstance(self.op, FilterOperator) else None

    @staticmethod
    def eq(field: str, value: Any) -> FilterCondition[Any]:
        return FilterCondition(field, FilterOperator.EQ, value)

    @staticmethod
    def neq(field: str, value: Any) -> FilterCondition[Any]:
        return FilterCondition(field, FilterOperator.NEQ, value)

    @staticmethod
    def contains(field: str, value: Any) -> FilterCondition[Any]:
        return FilterCondition(field, FilterOperator.CONTAINS, value)

    @staticmethod
    def in_list(field: str, values: list[Any] | tuple[Any, ...]) -> FilterCondition[Any]:
        return FilterCondition(field, FilterOperator.IN, values)
