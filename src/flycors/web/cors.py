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
"""CORS policy — decides and writes the CORS response headers.

A :class:`CORSPolicy` is built once at startup and shared read-only by every
request. Its one operation, :meth:`CORSPolicy.apply`, writes five headers
into a response:

=================================  ==========================================
Header                             Value
=================================  ==========================================
Access-Control-Allow-Credentials   ``true``
Access-Control-Allow-Origin        fixed origin, echoed request Origin, or ``*``
Access-Control-Allow-Headers       ``Authorization, Content-Type``
Access-Control-Allow-Methods       configured methods, ``", "``-joined
Access-Control-Max-Age             configured max age in seconds
=================================  ==========================================

When a fixed origin is configured it is sent no matter what the request's
Origin header says. Otherwise the request origin is echoed back without any
whitelist check.
"""

from __future__ import annotations

import re
from collections.abc import Iterable
from dataclasses import dataclass
from http import HTTPMethod
from typing import TYPE_CHECKING

from flycors.kernel.exceptions import ConfigurationError
from flycors.logging.port import get_logger
from flycors.web.ports.exchange import HeaderSink

if TYPE_CHECKING:
    from flycors.config.properties.cors import CorsProperties
    from flycors.core.config import Config

ALLOW_CREDENTIALS_HEADER = "Access-Control-Allow-Credentials"
ALLOW_ORIGIN_HEADER = "Access-Control-Allow-Origin"
ALLOW_HEADERS_HEADER = "Access-Control-Allow-Headers"
ALLOW_METHODS_HEADER = "Access-Control-Allow-Methods"
MAX_AGE_HEADER = "Access-Control-Max-Age"

ALLOWED_HEADERS: tuple[str, ...] = ("Authorization", "Content-Type")
ALLOW_CREDENTIALS = "true"
ANY_ORIGIN = "*"

DEFAULT_METHODS: tuple[str, ...] = ("DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT")
DEFAULT_MAX_AGE: int = 86400

# RFC 9110 token characters
_TOKEN_RE = re.compile(r"[!#$%&'*+\-.^_`|~0-9A-Za-z]+")


def _normalize_methods(methods: Iterable[str | HTTPMethod]) -> tuple[str, ...]:
    if isinstance(methods, str):
        raise ConfigurationError(
            "allowed_methods must be a sequence of method tokens, not a single string",
            code="CORS_INVALID_METHOD",
            context={"methods": methods},
        )

    normalized: list[str] = []
    for method in methods:
        if not isinstance(method, str) or not _TOKEN_RE.fullmatch(method):
            raise ConfigurationError(
                f"Invalid HTTP method token: {method!r}",
                code="CORS_INVALID_METHOD",
                context={"method": method},
            )
        normalized.append(str(method).upper())

    if not normalized:
        raise ConfigurationError(
            "CORS policy requires at least one allowed method",
            code="CORS_EMPTY_METHODS",
        )
    return tuple(normalized)


@dataclass(frozen=True)
class CORSPolicy:
    """Immutable CORS settings plus the header-writing operation.

    Prefer :meth:`new` or :meth:`default` over calling the constructor;
    all three validate the same way.

    Raises:
        ConfigurationError: ``allowed_methods`` is empty or holds something
            that is not a method token, or ``max_age`` is not a
            non-negative integer.
    """

    allowed_methods: tuple[str, ...] = DEFAULT_METHODS
    fixed_origin: str | None = None
    max_age: int = DEFAULT_MAX_AGE

    def __post_init__(self) -> None:
        object.__setattr__(self, "allowed_methods", _normalize_methods(self.allowed_methods))

        # bool is an int subclass
        if isinstance(self.max_age, bool) or not isinstance(self.max_age, int) or self.max_age < 0:
            raise ConfigurationError(
                f"max_age must be a non-negative integer, got {self.max_age!r}",
                code="CORS_INVALID_MAX_AGE",
                context={"max_age": self.max_age},
            )

        get_logger("flycors.web").debug(
            "cors_policy_created",
            methods=list(self.allowed_methods),
            origin=self.fixed_origin,
            max_age=self.max_age,
        )

    @classmethod
    def new(
        cls,
        methods: Iterable[str | HTTPMethod],
        origin: str | None = None,
        max_age: int = DEFAULT_MAX_AGE,
    ) -> CORSPolicy:
        """Build a policy from a method list, an optional fixed origin and a max age."""
        return cls(allowed_methods=methods, fixed_origin=origin, max_age=max_age)  # type: ignore[arg-type]

    @classmethod
    def default(cls) -> CORSPolicy:
        """All seven common methods, origin echoed per request, one day max age."""
        return cls.new(DEFAULT_METHODS, None, DEFAULT_MAX_AGE)

    @classmethod
    def from_properties(cls, props: CorsProperties) -> CORSPolicy:
        """Build a policy from already-bound :class:`CorsProperties`."""
        return cls.new(props.allowed_methods, props.allowed_origin, props.max_age)

    @classmethod
    def from_config(cls, config: Config) -> CORSPolicy:
        """Bind ``flycors.cors.*`` from *config* and build a policy from it."""
        from flycors.config.properties.cors import CorsProperties

        return cls.from_properties(config.bind(CorsProperties))

    @property
    def allow_methods_value(self) -> str:
        return ", ".join(self.allowed_methods)

    @property
    def allow_headers_value(self) -> str:
        return ", ".join(ALLOWED_HEADERS)

    def resolve_origin(self, request_origin: str | None) -> str:
        """Pick the Access-Control-Allow-Origin value for one request."""
        if self.fixed_origin is not None:
            return self.fixed_origin
        if request_origin is not None:
            return request_origin
        return ANY_ORIGIN

    def headers_for(self, request_origin: str | None) -> dict[str, str]:
        """Return the five CORS headers for a request, in write order."""
        return {
            ALLOW_CREDENTIALS_HEADER: ALLOW_CREDENTIALS,
            ALLOW_ORIGIN_HEADER: self.resolve_origin(request_origin),
            ALLOW_HEADERS_HEADER: self.allow_headers_value,
            ALLOW_METHODS_HEADER: self.allow_methods_value,
            MAX_AGE_HEADER: str(self.max_age),
        }

    def apply(self, request_origin: str | None, headers: HeaderSink) -> None:
        """Write the CORS headers into *headers*, overwriting earlier values.

        Args:
            request_origin: The request's ``Origin`` header, or ``None``.
            headers: The outbound response's headers. Only written to.
        """
        for name, value in self.headers_for(request_origin).items():
            headers[name] = value
