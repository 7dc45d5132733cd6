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
"""Generated sample users and locations for development without a database.

Entities are validated through the domain models and returned as
camelCase dicts, the shape the in-memory engine queries. Pass ``seed``
(and ``now``) for reproducible output.
"""

from __future__ import annotations

import random
import uuid
from datetime import UTC, datetime, timedelta
from typing import Any

from queryfly.domain.location import Location
from queryfly.domain.user import User, UserType

FIRST_NAMES = (
    "Alice", "Bob", "Charlie", "Diana", "Ethan", "Fiona", "George", "Hannah",
    "Isaac", "Julia", "Kevin", "Laura", "Michael", "Nina", "Oscar", "Patricia",
)  # fmt: skip

LAST_NAMES = (
    "Smith", "Johnson", "Williams", "Brown", "Jones", "Garcia",
    "Miller", "Davis", "Rodriguez", "Martinez", "Wilson", "Anderson",
)  # fmt: skip

CITIES = (
    ("Seattle", "WA", 98101),
    ("Portland", "OR", 97201),
    ("San Francisco", "CA", 94102),
    ("Los Angeles", "CA", 90001),
    ("Denver", "CO", 80201),
    ("Austin", "TX", 73301),
    ("Chicago", "IL", 60601),
    ("Boston", "MA", 2101),
)

_USER_TYPES = (UserType.MEMBER, UserType.LEAD)


def _timestamps(rng: random.Random, now: datetime) -> tuple[datetime, datetime]:
    created = now - timedelta(days=rng.random() * 365)
    updated = created + timedelta(days=rng.random() * 30)
    return created, updated


def _new_id(rng: random.Random) -> str:
    return str(uuid.UUID(int=rng.getrandbits(128), version=4))


def generate_dummy_users(count: int, seed: int | None = None, now: datetime | None = None) -> list[dict[str, Any]]:
    """Generate *count* users cycling through first and last names.

    User types alternate MEMBER/LEAD, the first user is an admin, every
    third user has an avatar and every second a phone number.
    """
    rng = random.Random(seed)
    now = now or datetime.now(UTC)
    users: list[dict[str, Any]] = []

    for i in range(count):
        first = FIRST_NAMES[i % len(FIRST_NAMES)]
        last = LAST_NAMES[(i // len(FIRST_NAMES)) % len(LAST_NAMES)]
        email = f"{first.lower()}.{last.lower()}{i}@example.com"
        created, updated = _timestamps(rng, now)

        user = User(
            id=_new_id(rng),
            email=email,
            display_name=f"{first} {last}",
            user_type=_USER_TYPES[i % len(_USER_TYPES)],
            is_admin=i == 0,
            image=f"https://i.pravatar.cc/150?u={email}" if i % 3 == 0 else None,
            phone=f"+1{rng.randrange(10**10):010d}" if i % 2 == 0 else None,
            created_at=created,
            updated_at=updated,
        )
        users.append(user.model_dump(mode="json", by_alias=True))

    return users


def generate_dummy_locations(
    count: int, seed: int | None = None, now: datetime | None = None
) -> list[dict[str, Any]]:
    """Generate *count* community centres across a fixed set of cities; every tenth is inactive."""
    rng = random.Random(seed)
    now = now or datetime.now(UTC)
    locations: list[dict[str, Any]] = []

    for i in range(count):
        city, state, zip_base = CITIES[i % len(CITIES)]
        created, updated = _timestamps(rng, now)

        location = Location(
            id=_new_id(rng),
            code=f"LOC{i + 1:03d}",
            name=f"{city} Community Center {i + 1}",
            address=f"{100 + i} Main Street",
            city=city,
            state=state,
            zip_code=str(zip_base + i),
            is_active=i % 10 != 9,
            created_at=created,
            updated_at=updated,
        )
        locations.append(location.model_dump(mode="json", by_alias=True))

    return locations
