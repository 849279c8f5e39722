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
"""StructlogAdapter — default LoggingPort, structlog events on stdlib loggers.

Loggers handed out here carry their own processor chain through
``structlog.wrap_logger``, so configuring FlyCORS logging never touches the
application's global ``structlog.configure()`` state.
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog

from flycors.config.properties.logging import LoggingProperties
from flycors.core.config import Config

ROOT_LOGGER = "flycors"
_HANDLER_NAME = "flycors.stream"


class StructlogAdapter:
    """Renders FlyCORS log events as console lines or JSON objects."""

    def __init__(self, properties: LoggingProperties | None = None) -> None:
        self._properties = properties or LoggingProperties()
        self._processors = self._build_processors()

    @property
    def properties(self) -> LoggingProperties:
        return self._properties

    def configure(self, config: Config) -> None:
        """Bind ``flycors.logging.*`` and apply levels, renderer and stream handler."""
        self._properties = config.bind(LoggingProperties)
        self._processors = self._build_processors()
        self._apply_levels()
        if self._properties.stream:
            self._install_stream_handler()

    def get_logger(self, name: str) -> Any:
        return structlog.wrap_logger(
            logging.getLogger(name),
            processors=self._processors,
            wrapper_class=structlog.stdlib.BoundLogger,
        )

    def set_level(self, name: str, level: str) -> None:
        """Set the log level for a specific stdlib logger."""
        log_level = getattr(logging, level.upper(), logging.INFO)
        logging.getLogger(name).setLevel(log_level)

    def _build_processors(self) -> list[Any]:
        processors: list[Any] = [
            structlog.stdlib.filter_by_level,
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
        ]
        if self._properties.format == "json":
            processors.append(structlog.processors.JSONRenderer())
        else:
            processors.append(structlog.dev.ConsoleRenderer(colors=False))
        return processors

    def _apply_levels(self) -> None:
        self.set_level(ROOT_LOGGER, self._properties.level)
        for module, level in self._properties.levels.items():
            self.set_level(module, level)

    def _install_stream_handler(self) -> None:
        root = logging.getLogger(ROOT_LOGGER)
        if any(h.get_name() == _HANDLER_NAME for h in root.handlers):
            return
        handler = logging.StreamHandler(sys.stdout)
        handler.set_name(_HANDLER_NAME)
        handler.setFormatter(logging.Formatter("%(message)s"))
        root.addHandler(handler)
