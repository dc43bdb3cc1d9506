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
"""Cache backend selection from configuration."""

from __future__ import annotations

import httpx
import structlog

from fastlykv.cache.ports.outbound import CacheAdapter
from fastlykv.config.properties.cache import CacheProperties, FastlyKvProperties
from fastlykv.core.config import Config
from fastlykv.kernel.exceptions import ConfigurationException
from fastlykv.logging.port import EventLogger, LoggingPort

logger = structlog.get_logger("fastlykv.cache.auto")

PROVIDERS = ("auto", "fastly", "memory")


def detect_provider(properties: FastlyKvProperties) -> str:
    """Pick ``fastly`` when a store is configured, ``memory`` otherwise."""
    return "fastly" if properties.store_id else "memory"


def create_cache_adapter(
    config: Config,
    event_logger: EventLogger | None = None,
    logging_port: LoggingPort | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
) -> CacheAdapter:
    """Build the cache backend described by ``fastlykv.cache.*``.

    The Fastly backend logs through *event_logger* when given, otherwise
    through the ``fastlykv.cache`` logger of *logging_port*, so per-module
    levels under ``fastlykv.logging.level`` apply to its failure events.

    Raises ConfigurationException for an unknown provider, or when the
    Fastly backend is selected without an API token or store id.
    """
    cache_properties = config.bind(CacheProperties)
    if not cache_properties.enabled:
        raise ConfigurationException("Cache is disabled (fastlykv.cache.enabled=false)", code="CACHE_DISABLED")

    if cache_properties.provider not in PROVIDERS:
        raise ConfigurationException(
            f"Unknown cache provider '{cache_properties.provider}'",
            code="CACHE_PROVIDER",
            context={"provider": cache_properties.provider, "supported": list(PROVIDERS)},
        )

    fastly_properties = config.bind(FastlyKvProperties)
    provider = cache_properties.provider
    if provider == "auto":
        provider = detect_provider(fastly_properties)

    logger.info("cache_configured", provider=provider, configured=cache_properties.provider)

    if provider == "fastly":
        from fastlykv.cache.adapters.fastly import CACHE_LOGGER_NAME, FastlyKvCache

        if event_logger is None and logging_port is not None:
            event_logger = logging_port.get_logger(CACHE_LOGGER_NAME)

        return FastlyKvCache.from_properties(fastly_properties, logger=event_logger, transport=transport)

    from fastlykv.cache.adapters.memory import InMemoryCache

    return InMemoryCache()
