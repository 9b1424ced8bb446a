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
"""Attribute value codec."""

from __future__ import annotations

import json
from typing import Any

from flysession.kernel.exceptions import SerializationException


class JsonSerializer:
    """Serializes attribute values to UTF-8 JSON.

    Any JSON-compatible value round-trips: str, int, float, bool, None,
    lists and dicts with string keys. Anything else is rejected rather than
    silently coerced.
    """

    def dumps(self, value: Any) -> bytes:
        try:
            return json.dumps(value, ensure_ascii=False, allow_nan=False).encode("utf-8")
        except (TypeError, ValueError) as exc:
            raise SerializationException(
                f"Cannot serialize value of type {type(value).__name__}",
                context={"type": type(value).__name__},
            ) from exc

    def loads(self, raw: bytes | str) -> Any:
        try:
            return json.loads(raw)
        except (json.JSONDecodeError, UnicodeDecodeError, TypeError) as exc:
            raise SerializationException("Stored session value is not valid JSON") from exc
