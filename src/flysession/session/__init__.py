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
"""flysession — server-side sessions stored as expiring key-value hashes.

Import concrete backends from the adapter package::

    from flysession.session.adapters.memory import InMemoryConnectionPool
    from flysession.session.adapters.redis import RedisConnectionPool
"""

from flysession.session.cookie import SessionCookie
from flysession.session.filter import SessionFilter
from flysession.session.identifier import IdentifierGenerator
from flysession.session.manager import SessionManager
from flysession.session.ports.inbound import SessionRequest, SessionResponse
from flysession.session.ports.outbound import Connection, ConnectionPool, SessionHandler
from flysession.session.serializer import JsonSerializer
from flysession.session.store import HashSessionStore

__all__ = [
    "Connection",
    "ConnectionPool",
    "HashSessionStore",
    "IdentifierGenerator",
    "JsonSerializer",
    "SessionCookie",
    "SessionFilter",
    "SessionHandler",
    "SessionManager",
    "SessionRequest",
    "SessionResponse",
]
