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
"""In-memory hash backend with TTL expiry and a bounded connection pool."""

from __future__ import annotations

import asyncio
import itertools
import time

from flysession.kernel.exceptions import BackendUnavailableException


class InMemoryBackend:
    """Process-local keyspace of hash records with per-key expiry.

    Suitable for development, testing, and single-process applications.
    """

    def __init__(self) -> None:
        self._records: dict[str, tuple[dict[str, bytes], float | None]] = {}

    def _live(self, key: str) -> dict[str, bytes] | None:
        entry = self._records.get(key)
        if entry is None:
            return None
        fields, expires_at = entry
        if expires_at is not None and time.monotonic() > expires_at:
            del self._records[key]
            return None
        return fields

    def exists(self, key: str) -> bool:
        return self._live(key) is not None

    def hset(self, key: str, field: str, value: bytes) -> bool:
        """Set a field. Returns True if the field is new."""
        fields = self._live(key)
        if fields is None:
            fields = {}
            self._records[key] = (fields, None)
        is_new = field not in fields
        fields[field] = value
        return is_new

    def hget(self, key: str, field: str) -> bytes | None:
        fields = self._live(key)
        return None if fields is None else fields.get(field)

    def hgetall(self, key: str) -> dict[str, bytes]:
        return dict(self._live(key) or {})

    def hdel(self, key: str, field: str) -> bool:
        fields = self._live(key)
        if fields is None or field not in fields:
            return False
        del fields[field]
        # An empty hash does not exist.
        if not fields:
            del self._records[key]
        return True

    def hexists(self, key: str, field: str) -> bool:
        fields = self._live(key)
        return fields is not None and field in fields

    def delete(self, key: str) -> bool:
        if self._live(key) is None:
            return False
        del self._records[key]
        return True

    def expire(self, key: str, seconds: int) -> bool:
        fields = self._live(key)
        if fields is None:
            return False
        self._records[key] = (fields, time.monotonic() + seconds)
        return True

    def ttl(self, key: str) -> float | None:
        """Remaining lifetime of *key* in seconds, or None if it has no expiry or is absent."""
        if self._live(key) is None:
            return None
        _, expires_at = self._records[key]
        return None if expires_at is None else expires_at - time.monotonic()


class InMemoryConnection:
    """A pooled handle onto an :class:`InMemoryBackend`."""

    def __init__(self, pool: InMemoryConnectionPool, backend: InMemoryBackend, connection_id: int) -> None:
        self._pool = pool
        self._backend = backend
        self.connection_id = connection_id

    async def exists(self, key: str) -> bool:
        return self._backend.exists(key)

    async def hset(self, key: str, field: str, value: bytes) -> bool:
        return self._backend.hset(key, field, value)

    async def hget(self, key: str, field: str) -> bytes | None:
        return self._backend.hget(key, field)

    async def hgetall(self, key: str) -> dict[str, bytes]:
        return self._backend.hgetall(key)

    async def hdel(self, key: str, field: str) -> bool:
        return self._backend.hdel(key, field)

    async def hexists(self, key: str, field: str) -> bool:
        return self._backend.hexists(key, field)

    async def delete(self, key: str) -> bool:
        return self._backend.delete(key)

    async def expire(self, key: str, seconds: int) -> bool:
        return self._backend.expire(key, seconds)

    async def release(self) -> None:
        """Return this connection to the pool. Repeated calls are ignored."""
        self._pool._release(self)

    async def discard(self) -> None:
        """Drop this connection without returning it for reuse. Idempotent."""
        self._pool._discard(self)


class InMemoryConnectionPool:
    """Bounded pool of :class:`InMemoryConnection` objects.

    Up to *max_connections* connections may be borrowed at once. When
    *acquire_timeout* is set, a borrower that cannot get a slot in time gets
    :class:`BackendUnavailableException`; otherwise it waits.
    """

    def __init__(
        self,
        backend: InMemoryBackend | None = None,
        max_connections: int = 10,
        acquire_timeout: float | None = None,
    ) -> None:
        if max_connections < 1:
            raise ValueError(f"max_connections must be positive, got {max_connections}")
        self.backend = backend or InMemoryBackend()
        self._max_connections = max_connections
        self._acquire_timeout = acquire_timeout
        self._slots = asyncio.Semaphore(max_connections)
        self._idle: list[InMemoryConnection] = []
        self._in_use: set[InMemoryConnection] = set()
        self._ids = itertools.count(1)
        self.discarded = 0

    @property
    def in_use(self) -> int:
        return len(self._in_use)

    @property
    def idle(self) -> int:
        return len(self._idle)

    async def acquire(self) -> InMemoryConnection:
        """Borrow a connection, reusing an idle one when available."""
        if self._acquire_timeout is None:
            await self._slots.acquire()
        else:
            try:
                await asyncio.wait_for(self._slots.acquire(), self._acquire_timeout)
            except TimeoutError as exc:
                raise BackendUnavailableException(
                    "Connection pool exhausted",
                    context={"max_connections": self._max_connections, "timeout": self._acquire_timeout},
                ) from exc

        conn = self._idle.pop() if self._idle else InMemoryConnection(self, self.backend, next(self._ids))
        self._in_use.add(conn)
        return conn

    def _release(self, conn: InMemoryConnection) -> None:
        if conn not in self._in_use:
            return
        self._in_use.remove(conn)
        self._idle.append(conn)
        self._slots.release()

    def _discard(self, conn: InMemoryConnection) -> None:
        if conn not in self._in_use:
            return
        self._in_use.remove(conn)
        self.discarded += 1
        self._slots.release()
