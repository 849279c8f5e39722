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
"""Logging configuration properties (flycors.logging.*)."""

from __future__ import annotations

from dataclasses import dataclass, field

from flycors.core.config import config_properties
from flycors.kernel.exceptions import ConfigurationError

LOG_FORMATS = ("console", "json")


@config_properties(prefix="flycors.logging")
@dataclass
class LoggingProperties:
    """How FlyCORS renders its own log events.

    ``level`` applies to the ``flycors`` logger tree; ``levels`` overrides it
    per module (``{"flycors.web": "DEBUG"}``). With ``stream`` on, events
    are also written to stdout.
    """

    level: str = "INFO"
    format: str = "console"
    levels: dict[str, str] = field(default_factory=dict)
    stream: bool = True

    def __post_init__(self) -> None:
        self.level = str(self.level).upper()
        self.format = str(self.format).lower()
        self.levels = {name: str(lvl).upper() for name, lvl in self.levels.items()}
        if self.format not in LOG_FORMATS:
            raise ConfigurationError(
                f"Unknown log format {self.format!r}, expected one of {', '.join(LOG_FORMATS)}",
                code="CONFIG_VALIDATION",
                context={"format": self.format},
            )
