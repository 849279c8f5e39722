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
"""Exchange ports — what a CORS host must offer around one request.

A host needs three things: read access to the request's ``Origin`` header,
write access to the response headers (:class:`HeaderSink`), and a hook that
runs code after the handler produced its response (:class:`WebFilter` with
its :data:`CallNext` continuation).

Request and response are typed ``Any`` here; Starlette types stay in
``flycors.web.adapters.starlette``.
"""

from __future__ import annotations

from collections.abc import Callable, Coroutine
from typing import Any, Protocol, runtime_checkable

# Runs the rest of the chain and yields its response.
# Concrete type: Callable[[Request], Coroutine[Any, Any, Response]]
CallNext = Callable[..., Coroutine[Any, Any, Any]]


@runtime_checkable
class HeaderSink(Protocol):
    """Anything that accepts ``sink[name] = value`` with last-write-wins.

    Satisfied by ``starlette.datastructures.MutableHeaders`` and by a plain
    ``dict``. A policy never reads from it.
    """

    def __setitem__(self, name: str, value: str) -> None: ...


@runtime_checkable
class WebFilter(Protocol):
    """A before/after hook over one handler invocation.

    ``do_filter`` gets the request and the continuation, and returns the
    response, usually the one ``call_next`` produced with headers added.
    ``should_not_filter`` lets the chain skip the hook for a request.
    """

    async def do_filter(self, request: Any, call_next: CallNext) -> Any: ...

    def should_not_filter(self, request: Any) -> bool: ...
