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
"""Location entity."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel


class Location(BaseModel):
    """A physical site. ``code`` is stored upper-cased."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True)

    id: str = Field(min_length=1)
    code: str = Field(min_length=2, max_length=10)
    name: str = Field(min_length=1)
    address: str | None = None
    city: str | None = None
    state: str | None = None
    zip_code: str | None = None
    is_active: bool = True
    created_at: datetime
    updated_at: datetime

    @field_validator("code")
    @classmethod
    def _upper_code(cls, value: str) -> str:
        return value.upper()


LocationField = Literal[
    "id",
    "code",
    "name",
    "address",
    "city",
    "state",
    "zipCode",
    "isActive",
    "createdAt",
    "updatedAt",
]
