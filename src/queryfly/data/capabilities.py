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
"""Push-down / post-fetch negotiation for engines backed by a real store.

An engine declares which operators its store executes natively. The
remaining filters are applied in memory to whatever the store returns, so
callers never see which half ran where. In strict mode the engine refuses
instead of post-fetching.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from queryfly.data.filter import FilterCondition, FilterOperator
from queryfly.kernel.exceptions import UnsupportedOperatorException

ALL_OPERATORS: frozenset[FilterOperator] = frozenset(FilterOperator)

KEY_VALUE_PUSHDOWN: frozenset[FilterOperator] = frozenset(
    {
        FilterOperator.EQ,
        FilterOperator.GT,
        FilterOperator.LT,
        FilterOperator.GTE,
        FilterOperator.LTE,
        FilterOperator.IN,
    }
)


@dataclass(frozen=True)
class FilterSplit:
    """Filters partitioned into the natively executed half and the in-memory half."""

    pushed: tuple[FilterCondition[Any], ...] = ()
    post_fetch: tuple[FilterCondition[Any], ...] = ()

    @property
    def needs_post_fetch(self) -> bool:
        return bool(self.post_fetch)


@dataclass(frozen=True)
class OperatorCapabilities:
    """Operators a backing store can run natively, plus the strictness policy."""

    pushdown: frozenset[FilterOperator] = field(default=ALL_OPERATORS)
    strict: bool = False

    def supports(self, condition: FilterCondition[Any]) -> bool:
        return condition.operator in self.pushdown

    def split_filters(
        self,
        filters: Iterable[FilterCondition[Any]],
        *,
        pushable_fields: frozenset[str] | None = None,
    ) -> FilterSplit:
        """Partition *filters* by what the store can execute.

        A condition on a field outside *pushable_fields* is post-fetched
        whatever its operator.

        Raises:
            UnsupportedOperatorException: In strict mode, for an operator
                outside :attr:`pushdown`.
        """
        pushed: list[FilterCondition[Any]] = []
        post_fetch: list[FilterCondition[Any]] = []
        for condition in filters:
            if not self.supports(condition):
                if self.strict:
                    op = condition.operator.value if condition.operator else condition.op
                    raise UnsupportedOperatorException(
                        f"Operator '{op}' is not supported by this data source",
                        code="UNSUPPORTED_OPERATOR",
                        context={"field": condition.field, "op": op},
                    )
                post_fetch.append(condition)
            elif pushable_fields is not None and condition.field not in pushable_fields:
                post_fetch.append(condition)
            else:
                pushed.append(condition)
        return FilterSplit(pushed=tuple(pushed), post_fetch=tuple(post_fetch))
