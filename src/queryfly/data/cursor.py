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
"""Opaque pagination cursors.

A cursor is the base64 encoding of a decimal start offset. Consumers must
treat it as opaque; only the engine that issued it decodes it.
"""

from __future__ import annotations

import base64
import binascii


def encode_cursor(offset: int) -> str:
    """Encode a start offset as a cursor string."""
    return base64.b64encode(str(offset).encode("ascii")).decode("ascii")


def decode_cursor(cursor: str) -> int:
    """Decode a cursor back into a start offset.

    Missing base64 padding is tolerated. Anything that does not decode to a
    non-negative integer yields 0.
    """
    try:
        padded = cursor + "=" * (-len(cursor) % 4)
        offset = int(base64.b64decode(padded, validate=True).decode("ascii"))
    except (binascii.Error, UnicodeDecodeError, ValueError, TypeError):
        return 0
    return offset if offset >= 0 else 0


def start_cursor() -> str:
    """Cursor addressing the first item, for opening a cursor-mode walk."""
    return encode_cursor(0)
