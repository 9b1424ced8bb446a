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
"""SessionManager — binds one request/response exchange to a session record."""

from __future__ import annotations

import logging
from typing import Any

from flysession.config.properties.session import SessionProperties
from flysession.kernel.exceptions import SessionIdCollisionException, SessionNotInitializedException
from flysession.session.cookie import SessionCookie
from flysession.session.identifier import IdentifierGenerator
from flysession.session.ports.inbound import SessionRequest, SessionResponse
from flysession.session.ports.outbound import SessionHandler

_logger = logging.getLogger(__name__)


class SessionManager:
    """Owns the identity of a single session for one request.

    ``init()`` loads the session id from the request, or mints a fresh one
    that is not yet in use. Attribute operations then delegate to the
    handler with the bound id; ``set()`` also issues the session cookie.

    A manager is created per request and must not be shared between
    concurrent requests. Store failures propagate unchanged.
    """

    def __init__(
        self,
        handler: SessionHandler,
        request: SessionRequest,
        response: SessionResponse,
        properties: SessionProperties | None = None,
        id_generator: IdentifierGenerator | None = None,
    ) -> None:
        self._handler = handler
        self._request = request
        self._response = response
        self._properties = properties or SessionProperties()
        self._id_generator = id_generator or IdentifierGenerator(self._properties.id_length)
        self._session_id: str | None = None
        self._is_new = False

    @property
    def id(self) -> str:
        """The bound session id."""
        if self._session_id is None:
            raise SessionNotInitializedException()
        return self._session_id

    def get_id(self) -> str:
        return self.id

    @property
    def is_new(self) -> bool:
        """``True`` if the id was minted during this request."""
        return self._is_new

    @property
    def initialized(self) -> bool:
        return self._session_id is not None

    @property
    def properties(self) -> SessionProperties:
        return self._properties

    async def init(self) -> str:
        """Load the session id from the request, or create a new one."""
        session_id = self._request.get_attribute(self._properties.name)
        if not session_id:
            return await self.create_id()
        self._session_id = session_id
        self._is_new = False
        return session_id

    async def create_id(self) -> str:
        """Generate a session id that no existing record uses, and bind it."""
        for attempt in range(1, self._properties.id_max_attempts + 1):
            candidate = self._id_generator.generate()
            if not await self._handler.exists(candidate):
                self._session_id = candidate
                self._is_new = True
                _logger.debug("Created new session id after %d attempt(s)", attempt)
                return candidate
        raise SessionIdCollisionException(self._properties.id_max_attempts)

    async def set(self, name: str, value: Any) -> bool:
        """Store an attribute and attach the session cookie to the response."""
        session_id = self.id
        success = await self._handler.set(session_id, name, value, self._properties.max_lifetime)
        self._response.with_cookie(self._build_cookie(session_id))
        return success

    async def get(self, name: str, default: Any = None) -> Any:
        return await self._handler.get(self.id, name, default)

    async def get_attributes(self) -> dict[str, Any]:
        return await self._handler.get_attributes(self.id)

    async def delete(self, name: str) -> bool:
        return await self._handler.delete(self.id, name)

    async def clear(self) -> bool:
        """Remove every attribute of the session."""
        return await self._handler.clear(self.id)

    async def has(self, name: str) -> bool:
        return await self._handler.has(self.id, name)

    async def exists(self) -> bool:
        """Check whether the bound session has a stored record."""
        return await self._handler.exists(self.id)

    def _build_cookie(self, session_id: str) -> SessionCookie:
        props = self._properties
        return SessionCookie(
            name=props.name,
            value=session_id,
            max_age=props.max_lifetime,
            path=props.cookie_path,
            domain=props.cookie_domain,
            secure=props.cookie_secure,
            http_only=props.cookie_http_only,
            same_site=props.cookie_same_site,
        )
