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
"""Tests for JsonSerializer."""

import pytest

from flysession.kernel.exceptions import SerializationException
from flysession.session.serializer import JsonSerializer


class TestJsonSerializer:
    @pytest.mark.parametrize(
        "value",
        [
            "hello",
            "ünïcødé ✓",
            42,
            True,
            False,
            None,
            {"user": {"id": 7, "roles": ["admin", "dev"]}},
            [1, "two", {"three": 3}],
        ],
    )
    def test_round_trip(self, value):
        serializer = JsonSerializer()
        restored = serializer.loads(serializer.dumps(value))
        assert restored == value
        assert type(restored) is type(value)

    def test_dumps_returns_bytes(self):
        assert JsonSerializer().dumps({"a": 1}) == b'{"a": 1}'

    def test_loads_accepts_str(self):
        assert JsonSerializer().loads('{"a": 1}') == {"a": 1}

    @pytest.mark.parametrize("value", [object(), {1, 2}, b"raw", float("nan")])
    def test_unserializable_value_raises(self, value):
        with pytest.raises(SerializationException) as exc_info:
            JsonSerializer().dumps(value)
        assert exc_info.value.code == "SESSION_SERIALIZATION"

    def test_malformed_payload_raises(self):
        with pytest.raises(SerializationException):
            JsonSerializer().loads(b"{not json")

    def test_invalid_utf8_raises(self):
        with pytest.raises(SerializationException):
            JsonSerializer().loads(b"\xff\xfe\x00")
