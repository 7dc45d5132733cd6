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
"""Query engine configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from queryfly.core.config import config_properties


@config_properties(prefix="queryfly.query")
@dataclass
class QueryProperties:
    """Configuration for query validation and execution (queryfly.query.*)."""

    default_page_size: int = 20
    max_page_size: int = 100
    strict_operators: bool = False
    fail_open_unknown_operators: bool = True
