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
"""Tests for CorsProperties binding and CORSPolicy.from_config()."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from flycors.config.properties import CorsProperties
from flycors.core.config import Config
from flycors.kernel.exceptions import ConfigurationError
from flycors.web.cors import CORSPolicy


class TestCorsPropertiesBind:
    def test_bind_defaults(self):
        props = Config({"flycors": {"cors": {}}}).bind(CorsProperties)

        assert props.allowed_methods == ["DELETE", "GET", "HEAD", "OPTIONS", "PATCH", "POST", "PUT"]
        assert props.allowed_origin is None
        assert props.max_age == 86400

    def test_bind_kebab_case(self):
        config = Config(
            {
                "flycors": {
                    "cors": {
                        "allowed-methods": ["GET", "HEAD", "OPTIONS", "DELETE"],
                        "allowed-origin": "http://www.example.com",
                        "max-age": 1000,
                    }
                }
            }
        )
        props = config.bind(CorsProperties)

        assert props.allowed_methods == ["GET", "HEAD", "OPTIONS", "DELETE"]
        assert props.allowed_origin == "http://www.example.com"
        assert props.max_age == 1000

    def test_bind_snake_case(self):
        config = Config({"flycors": {"cors": {"max_age": 5, "allowed_origin": "http://a.example"}}})
        props = config.bind(CorsProperties)
        assert props.max_age == 5
        assert props.allowed_origin == "http://a.example"

    def test_negative_max_age_rejected(self):
        config = Config({"flycors": {"cors": {"max-age": -1}}})

        with pytest.raises(ConfigurationError) as exc_info:
            config.bind(CorsProperties)

        assert exc_info.value.code == "CONFIG_VALIDATION"
        assert isinstance(exc_info.value.__cause__, ValidationError)


class TestCORSPolicyFromConfig:
    def test_from_empty_config_is_default(self):
        assert CORSPolicy.from_config(Config({})) == CORSPolicy.default()

    def test_from_yaml_file(self, tmp_path):
        path = tmp_path / "flycors.yaml"
        path.write_text(
            "flycors:\n"
            "  cors:\n"
            "    allowed-methods: [get, head, options, delete]\n"
            "    allowed-origin: http://www.example.com\n"
            "    max-age: 1000\n"
        )

        policy = CORSPolicy.from_config(Config.from_file(path))

        assert policy == CORSPolicy.new(
            ["GET", "HEAD", "OPTIONS", "DELETE"], "http://www.example.com", 1000
        )

    def test_empty_method_list_rejected(self):
        config = Config({"flycors": {"cors": {"allowed-methods": []}}})

        with pytest.raises(ConfigurationError) as exc_info:
            CORSPolicy.from_config(config)

        assert exc_info.value.code == "CORS_EMPTY_METHODS"

    def test_from_properties(self):
        props = CorsProperties(allowed_methods=["POST"], allowed_origin=None, max_age=0)
        policy = CORSPolicy.from_properties(props)
        assert policy.allowed_methods == ("POST",)
        assert policy.max_age == 0


class TestCORSPolicyFromConfigPlaceholders:
    def test_placeholder_resolved_from_other_key(self):
        config = Config({"site": {"ttl": 600}, "flycors": {"cors": {"max-age": "${site.ttl:600}"}}})

        policy = CORSPolicy.from_config(config)

        assert policy.max_age == 600

    def test_placeholder_default_used(self):
        config = Config({"flycors": {"cors": {"max-age": "${site.ttl:120}"}}})
        assert CORSPolicy.from_config(config).max_age == 120

    def test_placeholders_in_origin_and_method_list(self):
        config = Config(
            {
                "site": {"url": "http://www.example.com", "write": "delete"},
                "flycors": {
                    "cors": {
                        "allowed-origin": "${site.url}",
                        "allowed-methods": ["GET", "${site.write}"],
                    }
                },
            }
        )

        policy = CORSPolicy.from_config(config)

        assert policy.fixed_origin == "http://www.example.com"
        assert policy.allowed_methods == ("GET", "DELETE")

    def test_unresolvable_placeholder_rejected(self):
        config = Config({"flycors": {"cors": {"allowed-origin": "${site.url}"}}})

        with pytest.raises(ConfigurationError) as exc_info:
            CORSPolicy.from_config(config)

        assert exc_info.value.code == "CONFIG_PLACEHOLDER"
