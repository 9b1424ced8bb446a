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
"""HTTP exchange protocols consumed by the session manager.

Kept free of any web framework so that vendor request/response types stay
confined to the adapter layer.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from flysession.session.cookie import SessionCookie


@runtime_checkable
class SessionRequest(Protocol):
    """Read side of the exchange: where the inbound session id comes from."""

    def get_attribute(self, name: str) -> str | None: ...


@runtime_checkable
class SessionResponse(Protocol):
    """Write side of the exchange: receives the session cookie."""

    def with_cookie(self, cookie: SessionCookie) -> None: ...
