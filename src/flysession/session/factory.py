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
"""Builds session stores, filters and middleware from configuration."""

from __future__ import annotations

import logging

from starlette.types import ASGIApp

from flysession.config.properties.session import SessionProperties
from flysession.core.config import Config
from flysession.logging.setup import configure_logging
from flysession.session.adapters.memory import InMemoryConnectionPool
from flysession.session.adapters.redis import RedisConnectionPool
from flysession.session.adapters.starlette import SessionMiddleware
from flysession.session.filter import SessionFilter
from flysession.session.ports.outbound import ConnectionPool
from flysession.session.store import HashSessionStore

_logger = logging.getLogger(__name__)


def create_connection_pool(properties: SessionProperties) -> ConnectionPool:
    """Return the connection pool for the configured ``store`` type."""
    if properties.store == "redis":
        _logger.info("Using Redis session store at %s", properties.redis.url)
        return RedisConnectionPool.from_url(
            properties.redis.url,
            max_connections=properties.redis.max_connections,
        )

    _logger.info("Using in-memory session store")
    return InMemoryConnectionPool(
        max_connections=properties.pool.max_connections,
        acquire_timeout=properties.pool.acquire_timeout,
    )


def create_session_store(config: Config) -> HashSessionStore:
    """Build the session store described by ``flysession.session.*``."""
    properties = config.bind(SessionProperties)
    return HashSessionStore(create_connection_pool(properties), key_prefix=properties.key_prefix)


def create_session_filter(config: Config, store: HashSessionStore | None = None) -> SessionFilter:
    """Build the HTTP session filter, creating a store unless one is given."""
    properties = config.bind(SessionProperties)
    return SessionFilter(store=store or create_session_store(config), properties=properties)


def create_session_middleware(
    app: ASGIApp,
    config: Config,
    store: HashSessionStore | None = None,
    url_patterns: list[str] | None = None,
    exclude_patterns: list[str] | None = None,
) -> SessionMiddleware:
    """Wrap *app* in session handling configured from *config*.

    Logging is set up from ``flysession.logging`` first so the store and
    filter log through the configured renderer and levels from the first
    request on.
    """
    configure_logging(config)
    properties = config.bind(SessionProperties)
    session_filter = SessionFilter(
        store=store or create_session_store(config),
        properties=properties,
        url_patterns=url_patterns,
        exclude_patterns=exclude_patterns,
    )
    _logger.info("Session middleware installed (enabled=%s, cookie=%s)", properties.enabled, properties.name)
    return SessionMiddleware(app, session_filter)
