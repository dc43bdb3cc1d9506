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
"""Cache subsystem configuration properties."""

from __future__ import annotations

from dataclasses import dataclass

from pydantic import BaseModel, Field, SecretStr

from fastlykv.core.config import config_properties

DEFAULT_BASE_URL = "https://api.fastly.com"
DEFAULT_USER_AGENT = "fastlykv/1.0"


@config_properties(prefix="fastlykv.cache")
@dataclass
class CacheProperties:
    """Configuration for backend selection (fastlykv.cache.*)."""

    enabled: bool = True
    provider: str = "auto"


@config_properties(prefix="fastlykv.cache.fastly")
class FastlyKvProperties(BaseModel):
    """Connection settings for the Fastly KV Store (fastlykv.cache.fastly.*).

    ``api_token`` and ``store_id`` may bind empty; the cache backend refuses
    to construct without them.
    """

    api_token: SecretStr = SecretStr("")
    store_id: str = ""
    base_url: str = DEFAULT_BASE_URL
    timeout: float = Field(default=30.0, gt=0)
    user_agent: str = DEFAULT_USER_AGENT
