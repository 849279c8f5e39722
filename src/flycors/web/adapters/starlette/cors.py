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
"""CORS middleware for Starlette — pure ASGI."""

from __future__ import annotations

from typing import Any

from starlette.datastructures import Headers, MutableHeaders
from starlette.types import ASGIApp, Receive, Scope, Send

from flycors.web.cors import CORSPolicy


class CORSMiddleware:
    """Adds CORS headers to every HTTP response.

    Headers are written on the ``http.response.start`` message, so streaming
    bodies pass through without being buffered. Non-HTTP scopes (lifespan,
    websocket) are forwarded untouched.
    """

    def __init__(self, app: ASGIApp, policy: CORSPolicy | None = None) -> None:
        self.app = app
        self._policy = policy or CORSPolicy.default()

    @property
    def policy(self) -> CORSPolicy:
        return self._policy

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        origin = Headers(scope=scope).get("origin")
        policy = self._policy

        async def send_with_cors(message: Any) -> None:
            if message["type"] == "http.response.start":
                # "headers" is optional in ASGI
                message.setdefault("headers", [])
                policy.apply(origin, MutableHeaders(scope=message))
            await send(message)

        await self.app(scope, receive, send_with_cors)


def install_cors(app: Any, policy: CORSPolicy | None = None) -> None:
    """Register :class:`CORSMiddleware` on a Starlette (or FastAPI) application."""
    app.add_middleware(CORSMiddleware, policy=policy or CORSPolicy.default())
