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
"""FlyCORS — CORS response headers for ASGI applications.

Build a :class:`CORSPolicy` once at startup and host it with
:class:`CORSMiddleware` (pure ASGI) or :class:`CORSFilter` (inside a
:class:`WebFilterChainMiddleware`)::

    from starlette.applications import Starlette
    from flycors import CORSPolicy, install_cors

    app = Starlette(routes=[...])
    install_cors(app, CORSPolicy.new(["GET", "POST"], None, 600))
"""

from flycors.kernel.exceptions import ConfigurationError, FlyCorsException
from flycors.web import (
    CORSFilter,
    CORSMiddleware,
    CORSPolicy,
    WebFilterChainMiddleware,
    install_cors,
)

__version__ = "0.1.0"

__all__ = [
    "CORSFilter",
    "CORSMiddleware",
    "CORSPolicy",
    "ConfigurationError",
    "FlyCorsException",
    "WebFilterChainMiddleware",
    "install_cors",
]
