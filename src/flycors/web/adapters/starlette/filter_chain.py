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
"""WebFilterChainMiddleware — runs WebFilters around an ASGI app without buffering.

The downstream app runs in its own task and writes its ASGI messages into an
in-memory stream. As soon as ``http.response.start`` arrives, ``call_next``
returns a :class:`StreamedResponse` built from that message alone, so
filters can rewrite the status and headers while the body is still being
produced. Sending the response replays the remaining messages as they come.
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Any, cast

import anyio
from anyio.abc import TaskGroup
from anyio.streams.memory import MemoryObjectReceiveStream
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp, Message, Receive, Scope, Send

from flycors.web.ports.exchange import CallNext, WebFilter


class StreamedResponse(Response):
    """Response whose head is known and whose body is still arriving.

    ``headers`` and ``status_code`` may be changed by filters until the
    response is sent. Every later message of the downstream app (body
    chunks, trailers) is forwarded unchanged.
    """

    def __init__(
        self,
        start: Message,
        messages: MemoryObjectReceiveStream[Message],
        failures: list[Exception],
    ) -> None:
        self.status_code = start["status"]
        self.raw_headers = list(start.get("headers", []))
        self.background = None
        self._start = start
        self._messages = messages
        self._failures = failures

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        await send({**self._start, "status": self.status_code, "headers": self.raw_headers})
        async with self._messages:
            async for message in self._messages:
                await send(message)
        if self._failures:
            raise self._failures[0]


class WebFilterChainMiddleware:
    """Pure ASGI middleware that executes a chain of :class:`WebFilter` instances.

    The first filter is the outermost one. A filter whose
    ``should_not_filter()`` returns ``True`` hands straight to the next link.
    A filter may also return its own response without calling ``call_next``;
    the app is then never started.
    """

    def __init__(self, app: ASGIApp, filters: Sequence[WebFilter] = ()) -> None:
        self.app = app
        self._filters = list(filters)

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http" or not self._filters:
            await self.app(scope, receive, send)
            return

        request = Request(scope, receive, send)
        failure: Exception | None = None

        async with anyio.create_task_group() as task_group:
            chain: CallNext = _terminal(self.app, scope, receive, task_group)
            for f in reversed(self._filters):
                chain = _wrap(f, chain)

            try:
                response = cast(Response, await chain(request))
                await response(scope, receive, send)
            except Exception as exc:
                # raised outside the group so callers see the bare exception
                failure = exc
                task_group.cancel_scope.cancel()

        if failure is not None:
            raise failure


def _terminal(app: ASGIApp, scope: Scope, receive: Receive, task_group: TaskGroup) -> CallNext:
    """Last link: start *app* and return once its response head is known."""

    async def _call_app(request: Any) -> Response:
        send_stream, receive_stream = anyio.create_memory_object_stream(math.inf)
        failures: list[Exception] = []

        async def _run() -> None:
            async with send_stream:
                try:
                    await app(scope, receive, send_stream.send)
                except Exception as exc:
                    failures.append(exc)

        task_group.start_soon(_run)

        try:
            start = await receive_stream.receive()
        except anyio.EndOfStream:
            receive_stream.close()
            if failures:
                raise failures[0] from None
            raise RuntimeError("No response returned.") from None

        if start["type"] != "http.response.start":
            receive_stream.close()
            raise RuntimeError(f"Expected http.response.start, got {start['type']!r}")

        return StreamedResponse(start, receive_stream, failures)

    return _call_app


def _wrap(web_filter: WebFilter, next_call: CallNext) -> CallNext:
    """Create a closure that conditionally invokes *web_filter*."""

    async def _inner(request: Request) -> Response:
        if web_filter.should_not_filter(request):
            return cast(Response, await next_call(request))
        return cast(Response, await web_filter.do_filter(request, next_call))

    return _inner
