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
"""Session handler and key-value backend protocols."""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class SessionHandler(Protocol):
    """Session-scoped attribute storage.

    Every operation takes the session id explicitly, so one handler instance
    can serve any number of concurrent sessions. Alternate backends implement
    this protocol rather than subclassing a concrete store.
    """

    def save_key(self, session_id: str) -> str: ...

    async def exists(self, session_id: str) -> bool: ...

    async def set(self, session_id: str, name: str, value: Any, max_lifetime: int) -> bool: ...

    async def get(self, session_id: str, name: str, default: Any = None) -> Any: ...

    async def get_attributes(self, session_id: str) -> dict[str, Any]: ...

    async def delete(self, session_id: str, name: str) -> bool: ...

    async def clear(self, session_id: str) -> bool: ...

    async def has(self, session_id: str, name: str) -> bool: ...


@runtime_checkable
class Connection(Protocol):
    """A key-value backend connection borrowed from a :class:`ConnectionPool`.

    ``release()`` hands a healthy connection back for reuse. ``discard()``
    drops a connection whose last call failed so the pool never reuses it.
    Both are idempotent.
    """

    async def exists(self, key: str) -> bool: ...

    async def hset(self, key: str, field: str, value: bytes) -> bool: ...

    async def hget(self, key: str, field: str) -> bytes | None: ...

    async def hgetall(self, key: str) -> dict[str, bytes]: ...

    async def hdel(self, key: str, field: str) -> bool: ...

    async def hexists(self, key: str, field: str) -> bool: ...

    async def delete(self, key: str) -> bool: ...

    async def expire(self, key: str, seconds: int) -> bool: ...

    async def release(self) -> None: ...

    async def discard(self) -> None: ...


@runtime_checkable
class ConnectionPool(Protocol):
    """Hands out exclusive-use connections to concurrent borrowers."""

    async def acquire(self) -> Connection: ...
