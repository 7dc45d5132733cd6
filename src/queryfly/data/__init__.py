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
"""QueryFly Data: the query contract, its in-memory engine, and the DataSource port.

The contract types (QuerySpec, FilterCondition, SortSpec, PaginationSpec,
QueryResult, PageInfo) are plain frozen data. Engines implement
:class:`~queryfly.data.ports.outbound.DataSource`:

    - :class:`~queryfly.data.adapters.memory.InMemoryDataSource` executes everything in memory.
    - :class:`~queryfly.data.adapters.sqlalchemy.SqlAlchemyDataSource` pushes what SQL can
      run down to the database and post-fetches the rest.
"""

from queryfly.data.adapters.memory import InMemoryDataSource
from queryfly.data.capabilities import ALL_OPERATORS, KEY_VALUE_PUSHDOWN, FilterSplit, OperatorCapabilities
from queryfly.data.cursor import decode_cursor, encode_cursor, start_cursor
from queryfly.data.engine import apply_filters, apply_sorting, execute_query, matches, paginate
from queryfly.data.filter import FilterCondition, FilterOperator
from queryfly.data.page import PageInfo, QueryResult
from queryfly.data.pageable import PaginationSpec, SortDirection, SortSpec
from queryfly.data.ports.outbound import DataSource, SupportsGetById, SupportsGetCount
from queryfly.data.query import QuerySpec
from queryfly.data.schema import dump_query_spec, parse_query_spec

__all__ = [
    "ALL_OPERATORS",
    "KEY_VALUE_PUSHDOWN",
    "DataSource",
    "FilterCondition",
    "FilterOperator",
    "FilterSplit",
    "InMemoryDataSource",
    "OperatorCapabilities",
    "PageInfo",
    "PaginationSpec",
    "QueryResult",
    "QuerySpec",
    "SortDirection",
    "SortSpec",
    "SupportsGetById",
    "SupportsGetCount",
    "apply_filters",
    "apply_sorting",
    "decode_cursor",
    "dump_query_spec",
    "encode_cursor",
    "execute_query",
    "matches",
    "paginate",
    "parse_query_spec",
    "start_cursor",
]
