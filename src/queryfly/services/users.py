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
"""User collection service."""

from __future__ import annotations

from queryfly.data.instances import users_data_source
from queryfly.services.collection import create_collection_service

service = create_collection_service(users_data_source, "user")

query_users = service.query
get_user_by_id = service.get_by_id
get_user_count = service.get_count

__all__ = ["get_user_by_id", "get_user_count", "query_users", "service"]
