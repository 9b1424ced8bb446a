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
"""Logging setup for session-enabled applications."""

from __future__ import annotations

import logging
import sys

import structlog

from flysession.config.properties.logging import LoggingProperties
from flysession.core.config import Config


def _level(name: str) -> int:
    return getattr(logging, name.upper(), logging.INFO)


def _shared_processors(fmt: str) -> list[structlog.types.Processor]:
    processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]
    if fmt == "json":
        processors.append(structlog.processors.format_exc_info)
    return processors


def configure_logging(config: Config) -> LoggingProperties:
    """Route structlog events and stdlib session logs through one renderer.

    Reads ``flysession.logging.format`` (``console`` or ``json``) and
    ``flysession.logging.level``, a mapping of logger name to level where
    ``root`` sets the root logger. Calling it again replaces the previous
    setup.
    """
    props = config.bind(LoggingProperties)
    fmt = props.format.lower()
    levels = {str(name): str(level) for name, level in props.level.items()}
    root_level = levels.pop("root", "INFO")

    shared = _shared_processors(fmt)
    renderer: structlog.types.Processor = (
        structlog.processors.JSONRenderer() if fmt == "json" else structlog.dev.ConsoleRenderer()
    )

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )
    root = logging.getLogger()
    root.handlers[:] = [handler]
    root.setLevel(_level(root_level))

    for name, level in levels.items():
        logging.getLogger(name).setLevel(_level(level))

    return props
