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
"""Tests for the exchange ports and CORSFilter path scoping."""

from __future__ import annotations

from unittest.mock import MagicMock

from starlette.datastructures import MutableHeaders

from flycors.web.adapters.starlette.filters import CORSFilter
from flycors.web.cors import CORSPolicy
from flycors.web.ports.exchange import HeaderSink, WebFilter


class _DuckFilter:
    """Implements WebFilter via duck typing (no inheritance)."""

    async def do_filter(self, request, call_next):
        return await call_next(request)

    def should_not_filter(self, request) -> bool:
        return False


def _make_request(path: str) -> MagicMock:
    req = MagicMock()
    req.url.path = path
    return req


class TestWebFilterProtocol:
    def test_duck_typed_class_is_webfilter(self):
        assert isinstance(_DuckFilter(), WebFilter)

    def test_cors_filter_is_webfilter(self):
        assert isinstance(CORSFilter(), WebFilter)

    def test_non_filter_is_not_webfilter(self):
        class _NotAFilter:
            async def do_filter(self, request, call_next):
                return None

        assert not isinstance(_NotAFilter(), WebFilter)


class TestHeaderSinkProtocol:
    def test_dict_is_sink(self):
        assert isinstance({}, HeaderSink)

    def test_mutable_headers_is_sink(self):
        assert isinstance(MutableHeaders(), HeaderSink)

    def test_read_only_mapping_is_not_sink(self):
        assert not isinstance(frozenset(), HeaderSink)


class TestCORSFilterPaths:
    def test_no_patterns_matches_all(self):
        f = CORSFilter()
        assert not f.should_not_filter(_make_request("/anything"))
        assert not f.should_not_filter(_make_request("/api/v1/users"))

    def test_include_patterns(self):
        f = CORSFilter(include=["/api/*"])
        assert not f.should_not_filter(_make_request("/api/users"))
        assert f.should_not_filter(_make_request("/health"))

    def test_exclude_patterns(self):
        f = CORSFilter(exclude=["/health", "/internal/*"])
        assert f.should_not_filter(_make_request("/health"))
        assert f.should_not_filter(_make_request("/internal/metrics"))
        assert not f.should_not_filter(_make_request("/api/users"))

    def test_include_and_exclude_combined(self):
        f = CORSFilter(include=["/api/*"], exclude=["/api/private/*"])
        assert f.should_not_filter(_make_request("/api/private/keys"))
        assert not f.should_not_filter(_make_request("/api/users"))
        assert f.should_not_filter(_make_request("/health"))

    def test_patterns_accept_any_iterable(self):
        f = CORSFilter(include=(p for p in ["/api/*"]))
        assert not f.should_not_filter(_make_request("/api/users"))
        assert not f.should_not_filter(_make_request("/api/items"))
        assert f.should_not_filter(_make_request("/health"))

    def test_patterns_are_per_instance(self):
        CORSFilter(include=["/api/*"])
        assert not CORSFilter().should_not_filter(_make_request("/health"))

    def test_keeps_policy(self):
        policy = CORSPolicy.new(["GET"])
        assert CORSFilter(policy).policy is policy
