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
"""SessionCookie — the Set-Cookie directive that carries the session id."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SessionCookie:
    """Cookie attributes emitted to the client when a session is written.

    An empty ``domain`` means a host-only cookie.
    """

    name: str
    value: str
    max_age: int
    path: str = "/"
    domain: str = ""
    secure: bool = False
    http_only: bool = False
    same_site: str | None = None
