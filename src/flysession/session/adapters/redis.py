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
"""Redis-backed session connections over ``redis.asyncio``."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar, cast

import redis.asyncio as aioredis
from redis.asyncio.retry import Retry
from redis.backoff import NoBackoff
from redis.exceptions import RedisError

from flysession.kernel.exceptions import BackendUnavailableException

_logger = logging.getLogger(__name__)

T = TypeVar("T")

ClientFactory = Callable[[], Any]


class RedisConnection:
    """One pooled Redis connection, wrapped in a single-connection client.

    Client errors are translated into :class:`BackendUnavailableException`.
    Field names come back as ``str``; field values stay ``bytes``.
    """

    def __init__(self, client: Any) -> None:
        self._client = client
        self._closed = False

    @property
    def closed(self) -> bool:
        return self._closed

    async def _call(self, command: str, operation: Awaitable[T]) -> T:
        try:
            return await operation
        except RedisError as exc:
            raise BackendUnavailableException(
                f"Redis {command} failed: {exc}",
                context={"command": command},
            ) from exc

    async def exists(self, key: str) -> bool:
        count = await self._call("EXISTS", self._client.exists(key))
        return cast(bool, count > 0)

    async def hset(self, key: str, field: str, value: bytes) -> bool:
        added = await self._call("HSET", self._client.hset(key, field, value))
        return cast(bool, added > 0)

    async def hget(self, key: str, field: str) -> bytes | None:
        return cast("bytes | None", await self._call("HGET", self._client.hget(key, field)))

    async def hgetall(self, key: str) -> dict[str, bytes]:
        raw = await self._call("HGETALL", self._client.hgetall(key))
        return {(k.decode() if isinstance(k, bytes) else k): v for k, v in raw.items()}

    async def hdel(self, key: str, field: str) -> bool:
        count = await self._call("HDEL", self._client.hdel(key, field))
        return cast(bool, count > 0)

    async def hexists(self, key: str, field: str) -> bool:
        return bool(await self._call("HEXISTS", self._client.hexists(key, field)))

    async def delete(self, key: str) -> bool:
        count = await self._call("DEL", self._client.delete(key))
        return cast(bool, count > 0)

    async def expire(self, key: str, seconds: int) -> bool:
        return bool(await self._call("EXPIRE", self._client.expire(key, seconds)))

    async def release(self) -> None:
        """Return the connection to the Redis pool. Repeated calls are ignored."""
        if self._closed:
            return
        self._closed = True
        await self._client.aclose()

    async def discard(self) -> None:
        """Disconnect the connection, then hand it back to the Redis pool.

        The socket is closed so no half-read reply can leak into another
        borrower. The pool keeps its slot and reconnects the connection for
        the next borrower.
        """
        if self._closed:
            return
        self._closed = True
        conn = self._client.connection
        self._client.connection = None
        if conn is None:
            return
        try:
            await conn.disconnect()
        except (RedisError, OSError):
            _logger.warning("Error while disconnecting a discarded Redis connection", exc_info=True)
        await self._client.connection_pool.release(conn)


class RedisConnectionPool:
    """Borrows connections from a ``redis.asyncio.ConnectionPool``.

    Each :meth:`acquire` builds a single-connection ``Redis`` client bound
    to *pool* and checks a connection out immediately, so exhaustion and
    connect errors surface at acquire time.
    """

    def __init__(self, pool: Any, client_factory: ClientFactory | None = None) -> None:
        self._pool = pool
        self._client_factory = client_factory or self._default_client

    @classmethod
    def from_url(cls, url: str, max_connections: int | None = None) -> RedisConnectionPool:
        """Create a pool for *url* whose connections never retry failed commands."""
        pool = aioredis.ConnectionPool.from_url(
            url,
            max_connections=max_connections,
            retry=Retry(NoBackoff(), 0),
        )
        return cls(pool)

    def _default_client(self) -> Any:
        return aioredis.Redis(connection_pool=self._pool, single_connection_client=True)

    async def acquire(self) -> RedisConnection:
        client = self._client_factory()
        try:
            await client.initialize()
        except RedisError as exc:
            await client.aclose()
            raise BackendUnavailableException(f"Cannot acquire Redis connection: {exc}") from exc
        return RedisConnection(client)

    async def disconnect(self) -> None:
        """Close every connection held by the underlying pool."""
        await self._pool.disconnect()
