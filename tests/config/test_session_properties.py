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
"""Tests for SessionProperties binding and defaults."""

import pytest

from flysession.config.properties import LoggingProperties, SessionProperties
from flysession.core.config import Config


class TestSessionPropertiesDefaults:
    def test_defaults(self):
        props = SessionProperties()
        assert props.name == "session_id"
        assert props.key_prefix == "SESSION:"
        assert props.id_length == 26
        assert props.max_lifetime == 7200
        assert props.cookie_path == "/"
        assert props.cookie_domain == ""
        assert props.cookie_secure is False
        assert props.cookie_http_only is False
        assert props.cookie_same_site is None
        assert props.store == "memory"
        assert props.redis.url == "redis://localhost:6379/0"
        assert props.pool.max_connections == 10
        assert props.pool.acquire_timeout is None

    def test_bind_empty_config_uses_defaults(self):
        assert Config({}).bind(SessionProperties) == SessionProperties()


class TestSessionPropertiesBinding:
    def test_bind_overrides(self):
        config = Config(
            {
                "flysession": {
                    "session": {
                        "name": "sid",
                        "id_length": "8",
                        "max_lifetime": 60,
                        "cookie_secure": "true",
                        "cookie_same_site": "strict",
                        "store": "redis",
                        "redis": {"url": "redis://cache:6379/2", "max_connections": 32},
                    }
                }
            }
        )
        props = config.bind(SessionProperties)
        assert props.name == "sid"
        assert props.id_length == 8
        assert props.max_lifetime == 60
        assert props.cookie_secure is True
        assert props.cookie_same_site == "strict"
        assert props.store == "redis"
        assert props.redis.url == "redis://cache:6379/2"
        assert props.redis.max_connections == 32

    @pytest.mark.parametrize(
        "section",
        [
            {"id_length": 0},
            {"max_lifetime": -1},
            {"store": "memcached"},
            {"cookie_same_site": "sometimes"},
            {"pool": {"max_connections": 0}},
        ],
    )
    def test_invalid_values_fail_fast(self, section):
        config = Config({"flysession": {"session": section}})
        with pytest.raises(ValueError, match="SessionProperties"):
            config.bind(SessionProperties)


class TestLoggingProperties:
    def test_defaults(self):
        props = Config({}).bind(LoggingProperties)
        assert props.format == "console"
        assert props.level == {"root": "INFO"}

    def test_bind(self):
        config = Config({"flysession": {"logging": {"format": "json", "level": {"root": "DEBUG"}}}})
        props = config.bind(LoggingProperties)
        assert props.format == "json"
        assert props.level == {"root": "DEBUG"}
