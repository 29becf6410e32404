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
"""Tests for StructlogAdapter — levels, rendering and redaction."""

import logging

import pytest
import structlog

from safeweb.config.properties.logging import LoggingProperties
from safeweb.core.config import Config
from safeweb.logging import REDACTED, LoggingPort, StructlogAdapter, redact_fields


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"
        assert adapter._redact == ["token", "cookie", "secret_key"]

    def test_configure_reads_root_level_and_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"safeweb": {"logging": {"level": {"root": "debug"}, "format": "JSON"}}}))
        assert adapter._root_level == "DEBUG"
        assert adapter._format == "json"

    def test_configure_applies_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"safeweb": {"logging": {"level": {"root": "INFO", "safeweb.security.xsrf": "DEBUG"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"safeweb.security.xsrf": "DEBUG"}
        assert logging.getLogger("safeweb.security.xsrf").level == logging.DEBUG

    def test_unknown_format_rejected(self):
        with pytest.raises(ValueError):
            StructlogAdapter().apply(LoggingProperties(format="xml"))

    def test_get_logger(self):
        adapter = StructlogAdapter()
        adapter.apply(LoggingProperties())
        logger = adapter.get_logger("safeweb.web")
        assert callable(getattr(logger, "info", None))


class TestRedaction:
    def test_listed_fields_masked(self):
        redact = redact_fields(["token", "cookie"])
        event = redact(None, "info", {"event": "xsrf_issued", "token": "abc:1", "cookie": "c2Vzc2lvbg==", "path": "/form"})
        assert event == {"event": "xsrf_issued", "token": REDACTED, "cookie": REDACTED, "path": "/form"}

    def test_absent_fields_untouched(self):
        event = redact_fields(["token"])(None, "info", {"event": "xsrf_request_rejected", "status_code": 403})
        assert event == {"event": "xsrf_request_rejected", "status_code": 403}

    def test_configured_pipeline_masks_secrets(self):
        StructlogAdapter().apply(LoggingProperties(format="json"))
        event = {"event": "configured", "secret_key": "application-secret"}
        for processor in structlog.get_config()["processors"][:-1]:
            event = processor(logging.getLogger("safeweb.web"), "info", event)
        assert event["secret_key"] == REDACTED
        assert event["logger"] == "safeweb.web"
