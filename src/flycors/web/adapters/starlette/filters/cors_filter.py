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
"""CORS filter — writes the CORS headers from inside a WebFilter chain."""

from __future__ import annotations

from collections.abc import Iterable
from fnmatch import fnmatch

from starlette.requests import Request
from starlette.responses import Response

from flycors.container.ordering import HIGHEST_PRECEDENCE, order
from flycors.web.cors import CORSPolicy
from flycors.web.ports.exchange import CallNext


@order(HIGHEST_PRECEDENCE + 350)
class CORSFilter:
    """Adds CORS headers to responses passing through the filter chain.

    Args:
        policy: The shared policy; ``CORSPolicy.default()`` when omitted.
        include: Glob patterns of paths to decorate. Empty means every path.
        exclude: Glob patterns of paths to leave alone, checked after
            ``include``.
    """

    def __init__(
        self,
        policy: CORSPolicy | None = None,
        *,
        include: Iterable[str] = (),
        exclude: Iterable[str] = (),
    ) -> None:
        self._policy = policy or CORSPolicy.default()
        self._include = tuple(include)
        self._exclude = tuple(exclude)

    @property
    def policy(self) -> CORSPolicy:
        return self._policy

    def should_not_filter(self, request: Request) -> bool:
        path = request.url.path
        if self._include and not any(fnmatch(path, p) for p in self._include):
            return True
        return any(fnmatch(path, p) for p in self._exclude)

    async def do_filter(self, request: Request, call_next: CallNext) -> Response:
        response = await call_next(request)
        self._policy.apply(request.headers.get("origin"), response.headers)
        return response
