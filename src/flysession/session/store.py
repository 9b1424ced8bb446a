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
"""HashSessionStore — one backend hash per session over a connection pool."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from flysession.session.ports.outbound import Connection, ConnectionPool
from flysession.session.serializer import JsonSerializer

_logger = logging.getLogger(__name__)

DEFAULT_KEY_PREFIX = "SESSION:"


class HashSessionStore:
    """Session handler storing each session as a hash under ``<prefix><id>``.

    A connection is borrowed from the pool for each operation and returned
    as soon as the operation completes. If the operation raises, including
    on cancellation, the connection is discarded instead so that a possibly
    broken connection never goes back into the pool.

    Because no connection or session id is held between calls, a single
    instance is safe to share across concurrent requests.
    """

    def __init__(
        self,
        pool: ConnectionPool,
        key_prefix: str = DEFAULT_KEY_PREFIX,
        serializer: JsonSerializer | None = None,
    ) -> None:
        self._pool = pool
        self._key_prefix = key_prefix
        self._serializer = serializer or JsonSerializer()

    @property
    def key_prefix(self) -> str:
        return self._key_prefix

    def save_key(self, session_id: str) -> str:
        """Return the backend key holding *session_id*'s record."""
        return f"{self._key_prefix}{session_id}"

    @asynccontextmanager
    async def _connection(self) -> AsyncIterator[Connection]:
        conn = await self._pool.acquire()
        try:
            yield conn
        except BaseException:
            _logger.warning("Discarding session backend connection after a failed operation")
            await conn.discard()
            raise
        try:
            await conn.release()
        except BaseException:
            await conn.discard()
            raise

    async def exists(self, session_id: str) -> bool:
        """Check whether the session record exists."""
        async with self._connection() as conn:
            return await conn.exists(self.save_key(session_id))

    async def set(self, session_id: str, name: str, value: Any, max_lifetime: int) -> bool:
        """Write one attribute and reset the record TTL to *max_lifetime* seconds."""
        raw = self._serializer.dumps(value)
        key = self.save_key(session_id)
        async with self._connection() as conn:
            await conn.hset(key, name, raw)
            return await conn.expire(key, max_lifetime)

    async def get(self, session_id: str, name: str, default: Any = None) -> Any:
        """Read one attribute, or *default* when the field or record is absent."""
        async with self._connection() as conn:
            raw = await conn.hget(self.save_key(session_id), name)
        if raw is None:
            return default
        return self._serializer.loads(raw)

    async def get_attributes(self, session_id: str) -> dict[str, Any]:
        """Read every attribute; an absent record yields an empty dict."""
        async with self._connection() as conn:
            raw_fields = await conn.hgetall(self.save_key(session_id))
        return {name: self._serializer.loads(raw) for name, raw in raw_fields.items()}

    async def delete(self, session_id: str, name: str) -> bool:
        """Remove one attribute. Returns True if it existed."""
        async with self._connection() as conn:
            return await conn.hdel(self.save_key(session_id), name)

    async def clear(self, session_id: str) -> bool:
        """Remove the whole record. Returns True if it existed."""
        async with self._connection() as conn:
            return await conn.delete(self.save_key(session_id))

    async def has(self, session_id: str, name: str) -> bool:
        """Check whether one attribute exists."""
        async with self._connection() as conn:
            return await conn.hexists(self.save_key(session_id), name)
