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
"""Tests for StructlogAdapter and the LoggingPort protocol."""

import logging
from typing import Any

import pytest
import structlog

from secheaders.core.config import Config
from secheaders.logging.port import LoggingPort
from secheaders.logging.structlog_adapter import PACKAGE_LOGGER, StructlogAdapter


@pytest.fixture(autouse=True)
def _restore_logging():
    yield
    structlog.reset_defaults()
    logging.getLogger(PACKAGE_LOGGER).setLevel(logging.NOTSET)


class TestLoggingPortProtocol:
    def test_adapter_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_non_conforming_class_is_not_instance(self):
        class Incomplete:
            def get_logger(self, name: str) -> Any:
                pass

        assert not isinstance(Incomplete(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_packaged_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config.with_defaults())
        assert adapter.properties.level == {"root": "INFO"}
        assert adapter.properties.format == "console"
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.INFO

    def test_root_key_targets_package_tree_only(self):
        process_root = logging.getLogger().level
        adapter = StructlogAdapter()
        adapter.configure(Config({"secheaders": {"logging": {"level": {"root": "debug"}}}}))
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.DEBUG
        assert logging.getLogger().level == process_root

    def test_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"secheaders": {"logging": {"level": {"root": "WARNING", "secheaders.web": "DEBUG"}}}})
        adapter.configure(config)
        assert logging.getLogger(PACKAGE_LOGGER).level == logging.WARNING
        assert logging.getLogger("secheaders.web").level == logging.DEBUG

    def test_json_format_selects_json_renderer(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"secheaders": {"logging": {"format": "JSON"}}}))
        processors = structlog.get_config()["processors"]
        assert isinstance(processors[-1], structlog.processors.JSONRenderer)

    def test_console_format_selects_console_renderer(self):
        StructlogAdapter().configure(Config({}))
        assert isinstance(structlog.get_config()["processors"][-1], structlog.dev.ConsoleRenderer)


class TestStructlogAdapterLoggers:
    def test_get_logger_returns_bound_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        logger = adapter.get_logger("secheaders.test")
        assert callable(getattr(logger, "info", None))
        assert callable(getattr(logger, "debug", None))

    def test_header_events_are_captured(self):
        StructlogAdapter().configure(Config({}))
        with structlog.testing.capture_logs() as logs:
            structlog.get_logger("secheaders.headers").error("security_header_configuration_error", header="hsts")
        assert logs == [{"event": "security_header_configuration_error", "header": "hsts", "log_level": "error"}]

    def test_unknown_level_falls_back_to_info(self):
        StructlogAdapter().set_level("secheaders.web", "chatty")
        assert logging.getLogger("secheaders.web").level == logging.INFO
