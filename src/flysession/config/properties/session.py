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
"""Session subsystem configuration properties."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

from flysession.core.config import config_properties


class RedisProperties(BaseModel):
    """Redis backend settings (flysession.session.redis.*)."""

    url: str = "redis://localhost:6379/0"
    max_connections: int | None = Field(default=None, ge=1)


class PoolProperties(BaseModel):
    """In-memory pool settings (flysession.session.pool.*)."""

    max_connections: int = Field(default=10, ge=1)
    acquire_timeout: float | None = Field(default=None, gt=0)


@config_properties(prefix="flysession.session")
class SessionProperties(BaseModel):
    """Configuration for server-side sessions (flysession.session.*).

    Cookie attributes are emitted on every ``set``; ``max_lifetime`` is both
    the record TTL in seconds and the cookie ``Max-Age``.
    """

    enabled: bool = True
    name: str = "session_id"
    key_prefix: str = "SESSION:"
    id_length: int = Field(default=26, ge=1)
    id_max_attempts: int = Field(default=100, ge=1)
    max_lifetime: int = Field(default=7200, ge=1)
    cookie_path: str = "/"
    cookie_domain: str = ""
    cookie_secure: bool = False
    cookie_http_only: bool = False
    cookie_same_site: Literal["lax", "strict", "none"] | None = None
    store: Literal["memory", "redis"] = "memory"
    redis: RedisProperties = Field(default_factory=RedisProperties)
    pool: PoolProperties = Field(default_factory=PoolProperties)
