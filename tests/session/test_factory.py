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
"""Tests for building session stores, filters and middleware from configuration."""

import logging

import pytest
import structlog
from starlette.applications import Starlette
from starlette.requests import Request
from starlette.responses import PlainTextResponse
from starlette.routing import Route
from starlette.testclient import TestClient

from flysession.core.config import Config
from flysession.session.adapters.memory import InMemoryConnectionPool
from flysession.session.adapters.redis import RedisConnectionPool
from flysession.session.adapters.starlette import SessionMiddleware
from flysession.session.factory import create_session_filter, create_session_middleware, create_session_store
from flysession.session.filter import SessionFilter
from flysession.session.store import HashSessionStore


class TestCreateSessionStore:
    def test_defaults_to_memory(self):
        store = create_session_store(Config({}))
        assert isinstance(store, HashSessionStore)
        assert isinstance(store._pool, InMemoryConnectionPool)
        assert store.key_prefix == "SESSION:"

    def test_memory_pool_settings(self):
        config = Config(
            {"flysession": {"session": {"key_prefix": "app:", "pool": {"max_connections": 3, "acquire_timeout": 0.5}}}}
        )
        store = create_session_store(config)
        assert store.key_prefix == "app:"
        assert store._pool._max_connections == 3
        assert store._pool._acquire_timeout == 0.5

    def test_redis_store(self):
        config = Config(
            {"flysession": {"session": {"store": "redis", "redis": {"url": "redis://cache:6380/1", "max_connections": 8}}}}
        )
        store = create_session_store(config)
        assert isinstance(store._pool, RedisConnectionPool)
        assert store._pool._pool.max_connections == 8
        assert store._pool._pool.connection_kwargs["host"] == "cache"

    def test_env_overrides_reach_the_store(self, monkeypatch):
        monkeypatch.setenv("FLYSESSION_SESSION_KEY_PREFIX", "env:")
        monkeypatch.setenv("FLYSESSION_SESSION_POOL_MAX_CONNECTIONS", "4")
        store = create_session_store(Config({"flysession": {"session": {"key_prefix": "file:"}}}))
        assert store.key_prefix == "env:"
        assert store._pool._max_connections == 4

    def test_redis_url_placeholder_is_resolved(self, monkeypatch):
        monkeypatch.setenv("REDIS_URL", "redis://cache:6380/1")
        config = Config({"flysession": {"session": {"store": "redis", "redis": {"url": "${REDIS_URL}"}}}})
        store = create_session_store(config)
        assert store._pool._pool.connection_kwargs["host"] == "cache"
        assert store._pool._pool.connection_kwargs["db"] == 1

    def test_invalid_store_type(self):
        with pytest.raises(ValueError):
            create_session_store(Config({"flysession": {"session": {"store": "sqlite"}}}))


class TestCreateSessionFilter:
    def test_builds_filter_with_properties(self):
        config = Config({"flysession": {"session": {"name": "SID", "max_lifetime": 300}}})
        session_filter = create_session_filter(config)
        assert isinstance(session_filter, SessionFilter)
        assert session_filter._properties.name == "SID"
        assert session_filter._properties.max_lifetime == 300

    def test_reuses_given_store(self):
        store = HashSessionStore(InMemoryConnectionPool())
        assert create_session_filter(Config({}), store=store)._store is store

    def test_env_override_reaches_filter_properties(self, monkeypatch):
        monkeypatch.setenv("FLYSESSION_SESSION_MAX_LIFETIME", "60")
        assert create_session_filter(Config({}))._properties.max_lifetime == 60


@pytest.fixture
def restore_logging():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    structlog.reset_defaults()


async def _visit(request: Request) -> PlainTextResponse:
    session = request.state.session
    await session.set("visits", await session.get("visits", 0) + 1)
    return PlainTextResponse(str(await session.get("visits")))


class TestCreateSessionMiddleware:
    def test_wraps_app_and_configures_logging(self, restore_logging):
        config = Config(
            {"flysession": {"session": {"name": "SID", "max_lifetime": 90}, "logging": {"level": {"root": "WARNING"}}}}
        )
        middleware = create_session_middleware(Starlette(routes=[Route("/", _visit)]), config)

        assert isinstance(middleware, SessionMiddleware)
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert isinstance(root.handlers[0].formatter, structlog.stdlib.ProcessorFormatter)

        client = TestClient(middleware)
        response = client.get("/")
        assert response.text == "1"
        assert "SID=" in response.headers["set-cookie"]
        assert "Max-Age=90" in response.headers["set-cookie"]
        assert client.get("/").text == "2"

    def test_disabled_sessions_leave_requests_unbound(self, restore_logging):
        async def session_state(request: Request) -> PlainTextResponse:
            return PlainTextResponse("bound" if hasattr(request.state, "session") else "unbound")

        config = Config({"flysession": {"session": {"enabled": False}}})
        middleware = create_session_middleware(Starlette(routes=[Route("/", session_state)]), config)

        response = TestClient(middleware).get("/")
        assert response.text == "unbound"
        assert "set-cookie" not in response.headers
