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
"""User entity."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class UserType(str, Enum):
    MEMBER = "MEMBER"
    LEAD = "LEAD"


class User(BaseModel):
    """A member of the organisation.

    Serialised with camelCase keys (``displayName``, ``userType``), which are
    also the field names used in queries against the users collection.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    email: str = Field(pattern=r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
    image: str | None = None
    phone: str | None = None
    display_name: str = Field(min_length=1)
    user_type: UserType
    is_admin: bool = False
    active_location_id: str | None = None
    created_at: datetime
    updated_at: datetime


UserField = Literal[
    "id",
    "email",
    "image",
    "phone",
    "displayName",
    "userType",
    "isAdmin",
    "activeLocationId",
    "createdAt",
    "updatedAt",
]
