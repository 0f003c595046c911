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
"""Tests for LoggingPort and StructlogAdapter."""

from __future__ import annotations

import logging
from typing import Any

import pytest
import structlog

from flycsrf.core.config import Config
from flycsrf.logging.port import LoggingPort
from flycsrf.logging.structlog_adapter import StructlogAdapter, redact_secrets


@pytest.fixture(autouse=True)
def _reset_structlog():
    yield
    structlog.reset_defaults()
    logging.getLogger("flycsrf.csrf").setLevel(logging.NOTSET)


class TestLoggingPort:
    def test_conforming_class_is_instance(self):
        class FakeLogging:
            def configure(self, config: Any) -> None:
                pass

            def get_logger(self, name: str) -> Any:
                pass

            def set_level(self, name: str, level: str) -> None:
                pass

        assert isinstance(FakeLogging(), LoggingPort)
        assert isinstance(StructlogAdapter(), LoggingPort)


class TestStructlogAdapterConfigure:
    def test_configure_with_library_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config.defaults())
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_and_module_levels(self):
        adapter = StructlogAdapter()
        config = Config(
            {"flycsrf": {"logging": {"level": {"root": "debug", "flycsrf.csrf": "warning"}}}}
        )
        adapter.configure(config)
        assert adapter._root_level == "DEBUG"
        assert logging.getLogger("flycsrf.csrf").level == logging.WARNING

    def test_configure_json_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"flycsrf": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"


class TestRedactSecrets:
    def test_masks_secret_keys(self):
        event = {"event": "x", "secret": "abc", "authenticity_token": "def", "path": "/"}
        result = redact_secrets(None, "info", event)
        assert result["secret"] == "***"
        assert result["authenticity_token"] == "***"
        assert result["path"] == "/"
