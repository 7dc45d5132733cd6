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
"""The DataSource instances the application's services are bound to.

Each collection is wired explicitly; moving users to another backend
means changing the one line that constructs ``users_data_source``.
"""

from __future__ import annotations

from typing import Any

from queryfly.data.adapters.memory import InMemoryDataSource
from queryfly.data.dummy import generate_dummy_locations, generate_dummy_users

users_data_source: InMemoryDataSource[dict[str, Any]] = InMemoryDataSource(generate_dummy_users(100))
locations_data_source: InMemoryDataSource[dict[str, Any]] = InMemoryDataSource(generate_dummy_locations(20))
