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
"""Random alphanumeric session identifiers."""

from __future__ import annotations

import secrets
import string

ALPHANUMERIC = string.ascii_letters + string.digits

DEFAULT_ID_LENGTH = 26


class IdentifierGenerator:
    """Generates fixed-length identifiers drawn uniformly from 62 symbols.

    At the default length of 26 an identifier carries about 154 bits of
    entropy, so the existence check performed by the session manager almost
    never needs a second attempt.
    """

    def __init__(self, length: int = DEFAULT_ID_LENGTH, alphabet: str = ALPHANUMERIC) -> None:
        if length < 1:
            raise ValueError(f"Session id length must be positive, got {length}")
        self._length = length
        self._alphabet = alphabet

    @property
    def length(self) -> int:
        return self._length

    def generate(self, length: int | None = None) -> str:
        """Return a new identifier of *length* characters (default: configured length)."""
        size = self._length if length is None else length
        if size < 1:
            raise ValueError(f"Session id length must be positive, got {size}")
        return "".join(secrets.choice(self._alphabet) for _ in range(size))
