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
"""Unified exception hierarchy for flysession.

All library exceptions inherit from FlySessionException so that callers can
catch the whole family at the HTTP boundary, or pick a specific subclass.

Categories:
- BusinessException: misuse of the session API (state, identity)
- InfrastructureException: backend, pool and serialization failures

A missing attribute or session is never an exception: reads return the
caller's default, an empty mapping or ``False``.
"""

from __future__ import annotations

# ---------------------------------------------------------------------------
# Base
# ---------------------------------------------------------------------------


class FlySessionException(Exception):
    """Base exception for all flysession errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "SESSION_BACKEND_UNAVAILABLE").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


# ---------------------------------------------------------------------------
# Business
# ---------------------------------------------------------------------------


class BusinessException(FlySessionException):
    """Session API used in a way its current state does not allow."""


class SessionNotInitializedException(BusinessException):
    """An attribute operation ran before the session identity was bound."""

    def __init__(self, message: str = "Session has not been initialized; call init() first") -> None:
        super().__init__(message, code="SESSION_NOT_INITIALIZED")


class SessionIdCollisionException(BusinessException):
    """Every generated identifier was already in use."""

    def __init__(self, attempts: int) -> None:
        super().__init__(
            f"Could not generate a free session id after {attempts} attempts",
            code="SESSION_ID_COLLISION",
            context={"attempts": attempts},
        )


# ---------------------------------------------------------------------------
# Infrastructure
# ---------------------------------------------------------------------------


class InfrastructureException(FlySessionException):
    """Infrastructure failures: key-value backend, connection pool, codec."""


class BackendUnavailableException(InfrastructureException):
    """The pool is exhausted or a backend call failed on its connection."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="SESSION_BACKEND_UNAVAILABLE", context=context)


class SerializationException(InfrastructureException):
    """An attribute value could not be serialized or deserialized."""

    def __init__(self, message: str, context: dict | None = None) -> None:
        super().__init__(message, code="SESSION_SERIALIZATION", context=context)
