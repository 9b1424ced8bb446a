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
"""flysession — server-side session state over a pooled key-value store."""

from flysession.core.config import Config
from flysession.kernel.exceptions import (
    BackendUnavailableException,
    FlySessionException,
    SerializationException,
)
from flysession.session import HashSessionStore, SessionFilter, SessionManager

__version__ = "0.1.0"

__all__ = [
    "BackendUnavailableException",
    "Config",
    "FlySessionException",
    "HashSessionStore",
    "SerializationException",
    "SessionFilter",
    "SessionManager",
    "__version__",
]
