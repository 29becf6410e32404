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
"""Tests for Config loading and @config_properties binding."""

from __future__ import annotations

from dataclasses import dataclass

import pytest

from safeweb.config.properties import LoggingProperties, XsrfProperties
from safeweb.core.config import Config, config_properties


class TestConfigGet:
    def test_dot_notation(self):
        config = Config({"safeweb": {"xsrf": {"strategy": "angular"}}})
        assert config.get("safeweb.xsrf.strategy") == "angular"

    def test_missing_key_default(self):
        assert Config({}).get("safeweb.xsrf.strategy", "default") == "default"

    def test_env_override(self, monkeypatch):
        monkeypatch.setenv("SAFEWEB_XSRF_COOKIE_NAME", "from-env")
        config = Config({"safeweb": {"xsrf": {"cookie-name": "from-file"}}})
        assert config.get("safeweb.xsrf.cookie-name") == "from-env"

    def test_placeholder_from_env(self, monkeypatch):
        monkeypatch.setenv("APP_SECRET", "s3cret")
        config = Config({"safeweb": {"xsrf": {"secret-key": "${APP_SECRET}"}}})
        assert config.get("safeweb.xsrf.secret-key") == "s3cret"

    def test_placeholder_default(self):
        config = Config({"safeweb": {"xsrf": {"secret-key": "${UNSET_SAFEWEB_SECRET:fallback}"}}})
        assert config.get("safeweb.xsrf.secret-key") == "fallback"

    def test_unresolvable_placeholder(self):
        config = Config({"a": "${UNSET_SAFEWEB_VALUE}"})
        with pytest.raises(ValueError):
            config.get("a")

    def test_get_section(self):
        config = Config({"safeweb": {"xsrf": {"strategy": "default"}}})
        assert config.get_section("safeweb.xsrf") == {"strategy": "default"}
        assert config.get_section("safeweb.missing") == {}


class TestConfigFromFile:
    def test_yaml_with_profile(self, tmp_path):
        (tmp_path / "app.yaml").write_text("safeweb:\n  xsrf:\n    strategy: default\n    token-timeout: 60\n")
        (tmp_path / "app-prod.yaml").write_text("safeweb:\n  xsrf:\n    token-timeout: 3600\n")
        config = Config.from_file(tmp_path / "app.yaml", active_profiles=["prod"])
        assert config.get("safeweb.xsrf.strategy") == "default"
        assert config.get("safeweb.xsrf.token-timeout") == 3600
        assert len(config.loaded_sources) == 2

    def test_toml(self, tmp_path):
        (tmp_path / "app.toml").write_text('[safeweb.xsrf]\nstrategy = "angular"\n')
        assert Config.from_file(tmp_path / "app.toml").get("safeweb.xsrf.strategy") == "angular"

    def test_missing_file_is_empty(self, tmp_path):
        config = Config.from_file(tmp_path / "absent.yaml")
        assert config.to_dict() == {}
        assert config.loaded_sources == []


class TestBind:
    def test_xsrf_defaults(self):
        props = Config({}).bind(XsrfProperties)
        assert props.strategy == "default"
        assert props.cookie_name == "xsrf-cookie"
        assert props.token_field == "xsrf-token"
        assert props.token_timeout == 86400
        assert props.max_multipart_size == 32 * 1024 * 1024
        assert props.exclude_patterns == []

    def test_xsrf_kebab_case_keys(self):
        config = Config(
            {"safeweb": {"xsrf": {"cookie-name": "sid", "header-name": "X-CSRF", "exclude-patterns": ["/hooks/*"]}}}
        )
        props = config.bind(XsrfProperties)
        assert props.cookie_name == "sid"
        assert props.header_name == "X-CSRF"
        assert props.exclude_patterns == ["/hooks/*"]

    def test_env_coerced_per_field(self, monkeypatch):
        monkeypatch.setenv("SAFEWEB_XSRF_TOKEN_TIMEOUT", "120")
        monkeypatch.setenv("SAFEWEB_XSRF_STRATEGY", "angular")
        props = Config({}).bind(XsrfProperties)
        assert props.token_timeout == 120
        assert props.strategy == "angular"

    def test_placeholder_in_bound_value(self, monkeypatch):
        monkeypatch.setenv("APP_SECRET", "s3cret")
        props = Config({"safeweb": {"xsrf": {"secret-key": "${APP_SECRET}"}}}).bind(XsrfProperties)
        assert props.secret_key == "s3cret"

    def test_logging_properties(self):
        props = Config({"safeweb": {"logging": {"format": "json"}}}).bind(LoggingProperties)
        assert props.format == "json"
        assert props.level == {"root": "INFO"}

    def test_undecorated_class_rejected(self):
        @dataclass
        class Plain:
            value: int = 0

        with pytest.raises(ValueError):
            Config({}).bind(Plain)

    def test_custom_prefix(self):
        @config_properties(prefix="myapp.limits")
        @dataclass
        class Limits:
            ratio: float = 0.5
            strict: bool = False

        limits = Config({"myapp": {"limits": {"ratio": "0.75", "strict": "yes"}}}).bind(Limits)
        assert limits.ratio == 0.75
        assert limits.strict is True
