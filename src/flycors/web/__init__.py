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
"""FlyCORS Web — CORS policy plus the exchange ports it plugs into.

Default adapter (Starlette) exports are re-exported for convenience.
"""

from flycors.web.adapters.starlette import (
    CORSFilter,
    CORSMiddleware,
    StreamedResponse,
    WebFilterChainMiddleware,
    install_cors,
)
from flycors.web.cors import ALLOWED_HEADERS, DEFAULT_MAX_AGE, DEFAULT_METHODS, CORSPolicy
from flycors.web.ports.exchange import CallNext, HeaderSink, WebFilter

__all__ = [
    # Framework-agnostic
    "ALLOWED_HEADERS",
    "CORSPolicy",
    "CallNext",
    "DEFAULT_MAX_AGE",
    "DEFAULT_METHODS",
    "HeaderSink",
    "WebFilter",
    # Default adapter (Starlette)
    "CORSFilter",
    "CORSMiddleware",
    "StreamedResponse",
    "WebFilterChainMiddleware",
    "install_cors",
]
