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
"""Tests for CORSFilter inside WebFilterChainMiddleware."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from starlette.applications import Starlette
from starlette.middleware import Middleware
from starlette.requests import Request
from starlette.responses import PlainTextResponse, Response
from starlette.routing import Route
from starlette.testclient import TestClient

from flycors.container.ordering import HIGHEST_PRECEDENCE, get_order
from flycors.web.adapters.starlette.filter_chain import WebFilterChainMiddleware
from flycors.web.adapters.starlette.filters import CORSFilter
from flycors.web.cors import CORSPolicy
from flycors.web.ports.exchange import WebFilter


async def _ok_handler(request: Request) -> PlainTextResponse:
    return PlainTextResponse("OK")


def _make_client(*filters) -> TestClient:
    app = Starlette(
        routes=[
            Route("/api/data", _ok_handler),
            Route("/health", _ok_handler),
        ],
        middleware=[Middleware(WebFilterChainMiddleware, filters=list(filters))],
    )
    return TestClient(app)


class TestCORSFilterContract:
    def test_is_webfilter(self):
        assert isinstance(CORSFilter(), WebFilter)

    def test_order(self):
        assert get_order(CORSFilter) == HIGHEST_PRECEDENCE + 350


class TestCORSFilterInChain:
    def test_default_policy(self):
        resp = _make_client(CORSFilter()).get("/api/data")

        assert resp.status_code == 200
        assert resp.text == "OK"
        assert resp.headers["Access-Control-Allow-Origin"] == "*"
        assert resp.headers["Access-Control-Max-Age"] == "86400"
        assert resp.headers["Access-Control-Allow-Credentials"] == "true"

    def test_echoes_origin(self):
        resp = _make_client(CORSFilter()).get("/api/data", headers={"Origin": "http://foo.example"})
        assert resp.headers["Access-Control-Allow-Origin"] == "http://foo.example"

    def test_custom_policy(self):
        policy = CORSPolicy.new(["GET", "HEAD", "OPTIONS", "DELETE"], "http://www.example.com", 1000)
        resp = _make_client(CORSFilter(policy)).get(
            "/api/data", headers={"Origin": "http://foo.example"}
        )

        assert resp.headers["Access-Control-Allow-Origin"] == "http://www.example.com"
        assert resp.headers["Access-Control-Max-Age"] == "1000"
        assert resp.headers["Access-Control-Allow-Methods"] == "GET, HEAD, OPTIONS, DELETE"

    def test_excluded_path_skipped(self):
        client = _make_client(CORSFilter(exclude=["/health"]))

        assert "Access-Control-Allow-Origin" not in client.get("/health").headers
        assert client.get("/api/data").headers["Access-Control-Allow-Origin"] == "*"


class TestCORSFilterDirect:
    @pytest.mark.asyncio
    async def test_do_filter_writes_headers(self):
        request = MagicMock()
        request.headers = {"origin": "http://foo.example"}
        response = Response("body")

        async def call_next(req):  # noqa: ANN001
            assert req is request
            return response

        result = await CORSFilter().do_filter(request, call_next)

        assert result is response
        assert response.headers["access-control-allow-origin"] == "http://foo.example"
        assert response.headers["access-control-allow-methods"].startswith("DELETE, GET")

    @pytest.mark.asyncio
    async def test_do_filter_without_origin(self):
        request = MagicMock()
        request.headers = {}

        async def call_next(req):  # noqa: ANN001
            return Response("body")

        result = await CORSFilter().do_filter(request, call_next)
        assert result.headers["access-control-allow-origin"] == "*"
