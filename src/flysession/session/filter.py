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
"""SessionFilter — binds a SessionManager to each HTTP request via a cookie."""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from fnmatch import fnmatch
from typing import Any

import structlog

from flysession.config.properties.session import SessionProperties
from flysession.session.cookie import SessionCookie
from flysession.session.manager import SessionManager
from flysession.session.ports.outbound import SessionHandler

CallNext = Callable[..., Coroutine[Any, Any, Any]]

logger = structlog.get_logger("flysession.session")


class CookieSessionRequest:
    """Reads the inbound session id from the request's cookies."""

    def __init__(self, request: Any) -> None:
        self._cookies = getattr(request, "cookies", {}) or {}

    def get_attribute(self, name: str) -> str | None:
        return self._cookies.get(name)


class CookieCollector:
    """Collects cookies issued during a request and writes them to a response.

    A later cookie with the same name replaces an earlier one, so a handler
    that sets several attributes still produces one ``Set-Cookie`` per name.
    """

    def __init__(self) -> None:
        self._cookies: dict[str, SessionCookie] = {}

    def with_cookie(self, cookie: SessionCookie) -> None:
        self._cookies[cookie.name] = cookie

    @property
    def cookies(self) -> list[SessionCookie]:
        return list(self._cookies.values())

    def apply(self, response: Any) -> None:
        """Emit every collected cookie through ``response.set_cookie()``."""
        for cookie in self._cookies.values():
            response.set_cookie(
                key=cookie.name,
                value=cookie.value,
                max_age=cookie.max_age,
                path=cookie.path,
                domain=cookie.domain or None,
                secure=cookie.secure,
                httponly=cookie.http_only,
                samesite=cookie.same_site,
            )


class SessionFilter:
    """Manages server-side sessions for each matching request.

    Resolves the session from the configured cookie (creating a new id when
    the cookie is missing), exposes the :class:`SessionManager` as
    ``request.state.session``, and writes the session cookie to the response
    when the handler stored an attribute.

    With ``enabled`` set to false every request passes through untouched.

    Attributes:
        url_patterns: Glob patterns this filter applies to. Empty means all paths.
        exclude_patterns: Glob patterns skipped even when ``url_patterns`` match.
    """

    def __init__(
        self,
        store: SessionHandler,
        properties: SessionProperties | None = None,
        url_patterns: list[str] | None = None,
        exclude_patterns: list[str] | None = None,
    ) -> None:
        self._store = store
        self._properties = properties or SessionProperties()
        self.url_patterns = list(url_patterns or [])
        self.exclude_patterns = list(exclude_patterns or [])

    def should_not_filter(self, request: Any) -> bool:
        """Return ``True`` if sessions are disabled or the path does not match this filter's patterns."""
        if not self._properties.enabled:
            return True

        path: str = request.url.path

        if self.url_patterns and not any(fnmatch(path, p) for p in self.url_patterns):
            return True

        return bool(self.exclude_patterns and any(fnmatch(path, p) for p in self.exclude_patterns))

    async def do_filter(self, request: Any, call_next: CallNext) -> Any:
        collector = CookieCollector()
        session = SessionManager(
            handler=self._store,
            request=CookieSessionRequest(request),
            response=collector,
            properties=self._properties,
        )
        await session.init()
        request.state.session = session
        logger.debug("session_bound", path=request.url.path, is_new=session.is_new)

        response = await call_next(request)

        collector.apply(response)
        return response
