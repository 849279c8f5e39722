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
"""CORS configuration properties (flycors.cors.*)."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from flycors.core.config import config_properties
from flycors.web.cors import DEFAULT_MAX_AGE, DEFAULT_METHODS


@config_properties(prefix="flycors.cors")
class CorsProperties(BaseModel):
    """Startup settings for a :class:`~flycors.web.cors.CORSPolicy`.

    Keys are accepted in snake_case or kebab-case (``max_age`` / ``max-age``).
    """

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=lambda name: name.replace("_", "-"),
    )

    allowed_methods: list[str] = Field(default_factory=lambda: list(DEFAULT_METHODS))
    allowed_origin: str | None = None
    max_age: int = Field(default=DEFAULT_MAX_AGE, ge=0)
