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
"""Tests for StructlogAdapter — default LoggingPort implementation."""

import logging

from fastlykv.core.config import Config
from fastlykv.logging import EventLogger, LoggingPort, StructlogAdapter


class TestStructlogAdapterConformance:
    def test_implements_logging_port(self):
        assert isinstance(StructlogAdapter(), LoggingPort)

    def test_loggers_satisfy_event_logger(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert isinstance(adapter.get_logger("fastlykv.cache"), EventLogger)


class TestStructlogAdapterConfigure:
    def test_configure_with_defaults(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({}))
        assert adapter._root_level == "INFO"
        assert adapter._format == "console"

    def test_configure_reads_root_level(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"fastlykv": {"logging": {"level": {"root": "debug"}}}}))
        assert adapter._root_level == "DEBUG"

    def test_configure_reads_format(self):
        adapter = StructlogAdapter()
        adapter.configure(Config({"fastlykv": {"logging": {"format": "JSON"}}}))
        assert adapter._format == "json"

    def test_configure_applies_per_module_levels(self):
        adapter = StructlogAdapter()
        config = Config({"fastlykv": {"logging": {"level": {"root": "INFO", "fastlykv.cache": "WARNING"}}}})
        adapter.configure(config)
        assert adapter._module_levels == {"fastlykv.cache": "WARNING"}
        assert logging.getLogger("fastlykv.cache").level == logging.WARNING

    def test_configure_does_not_mutate_config(self):
        config = Config({"fastlykv": {"logging": {"level": {"root": "INFO"}}}})
        StructlogAdapter().configure(config)
        assert config.get("fastlykv.logging.level.root") == "INFO"


class TestStructlogAdapterSetLevel:
    def test_set_level_updates_module_level(self):
        adapter = StructlogAdapter()
        adapter.set_level("fastlykv.tests", "DEBUG")
        assert logging.getLogger("fastlykv.tests").level == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        adapter = StructlogAdapter()
        adapter.set_level("fastlykv.tests.unknown", "CHATTY")
        assert logging.getLogger("fastlykv.tests.unknown").level == logging.INFO
