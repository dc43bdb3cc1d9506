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
"""Tests for cache configuration properties."""

import pytest

from fastlykv.config.properties import CacheProperties, FastlyKvProperties
from fastlykv.core.config import Config
from fastlykv.kernel.exceptions import ConfigurationException


class TestCacheProperties:
    def test_defaults(self):
        props = Config({}).bind(CacheProperties)
        assert props.enabled is True
        assert props.provider == "auto"

    def test_bound_values(self):
        config = Config({"fastlykv": {"cache": {"enabled": "false", "provider": "memory"}}})
        props = config.bind(CacheProperties)
        assert props.enabled is False
        assert props.provider == "memory"


class TestFastlyKvProperties:
    def test_defaults(self):
        props = Config({}).bind(FastlyKvProperties)
        assert props.api_token.get_secret_value() == ""
        assert props.store_id == ""
        assert props.base_url == "https://api.fastly.com"
        assert props.timeout == 30.0
        assert props.user_agent == "fastlykv/1.0"

    def test_token_is_masked(self):
        props = FastlyKvProperties(api_token="T1", store_id="S1")
        assert "T1" not in repr(props)
        assert props.api_token.get_secret_value() == "T1"

    def test_bound_from_config(self):
        config = Config(
            {"fastlykv": {"cache": {"fastly": {"api_token": "T1", "store_id": "S1", "timeout": "2.5"}}}}
        )
        props = config.bind(FastlyKvProperties)
        assert props.store_id == "S1"
        assert props.timeout == 2.5

    def test_non_positive_timeout_rejected(self):
        config = Config({"fastlykv": {"cache": {"fastly": {"timeout": 0}}}})
        with pytest.raises(ConfigurationException):
            config.bind(FastlyKvProperties)

    def test_packaged_defaults_bind(self, tmp_path, monkeypatch):
        monkeypatch.delenv("FASTLY_API_TOKEN", raising=False)
        monkeypatch.delenv("FASTLY_KV_STORE_ID", raising=False)
        props = Config.from_file(tmp_path / "fastlykv.yaml").bind(FastlyKvProperties)
        assert props.store_id == ""
        assert props.base_url == "https://api.fastly.com"
