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
"""LoggingPort and the process-wide logger lookup used by FlyCORS modules.

Library code calls :func:`get_logger`. Until :func:`configure_logging` has
installed a port, loggers come straight from ``structlog.get_logger`` and
follow whatever structlog setup the application has.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import structlog

if TYPE_CHECKING:
    from flycors.core.config import Config


@runtime_checkable
class LoggingPort(Protocol):
    """Port defining the logging contract for FlyCORS."""

    def configure(self, config: Config) -> None: ...
    def get_logger(self, name: str) -> Any: ...


_active_port: LoggingPort | None = None


def configure_logging(config: Config, port: LoggingPort | None = None) -> LoggingPort:
    """Configure *port* (a :class:`StructlogAdapter` by default) and route FlyCORS logs through it."""
    global _active_port

    if port is None:
        from flycors.logging.structlog_adapter import StructlogAdapter

        port = StructlogAdapter()
    port.configure(config)
    _active_port = port
    return port


def active_port() -> LoggingPort | None:
    return _active_port


def reset_logging() -> None:
    """Forget the configured port; loggers fall back to plain structlog."""
    global _active_port
    _active_port = None


def get_logger(name: str) -> Any:
    if _active_port is not None:
        return _active_port.get_logger(name)
    return structlog.get_logger(name)
