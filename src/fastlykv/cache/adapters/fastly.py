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
"""Fastly KV Store cache adapter.

Maps cache operations onto the KV Store REST API:

    GET    /resources/stores/kv/{store_id}/keys/{key}   read
    PUT    /resources/stores/kv/{store_id}/keys/{key}   write (octet-stream body)
    DELETE /resources/stores/kv/{store_id}/keys/{key}   remove

Any non-2xx status, transport failure or timeout becomes a miss or ``False``.
See https://developer.fastly.com/reference/api/key-value-store/
"""

from __future__ import annotations

from datetime import timedelta
from typing import Any
from urllib.parse import quote

import httpx
import structlog

from fastlykv.cache.ports.outbound import CacheValue
from fastlykv.config.properties.cache import DEFAULT_BASE_URL, DEFAULT_USER_AGENT, FastlyKvProperties
from fastlykv.kernel.exceptions import ConfigurationException, RemoteStoreException
from fastlykv.logging.port import EventLogger

# RFC 3986 sub-delims plus ":" and "@" stay literal inside a path segment.
_SEGMENT_SAFE = ":@!$&'()*+,;="

CACHE_LOGGER_NAME = "fastlykv.cache"


class FastlyKvCache:
    """Cache adapter backed by a Fastly Key-Value Store.

    Every call opens its own ``httpx.AsyncClient`` and makes exactly one
    round trip (two for :meth:`add`); nothing is cached locally.
    """

    def __init__(
        self,
        api_token: str,
        store_id: str,
        base_url: str = DEFAULT_BASE_URL,
        timeout: timedelta = timedelta(seconds=30),
        user_agent: str = DEFAULT_USER_AGENT,
        logger: EventLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        if not api_token or not store_id:
            raise ConfigurationException(
                "api_token and store_id are required",
                code="FASTLY_KV_CONFIG",
                context={"has_api_token": bool(api_token), "store_id": store_id},
            )
        self._api_token = api_token
        self._store_id = store_id
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._user_agent = user_agent
        self._logger: Any = logger if logger is not None else structlog.get_logger(CACHE_LOGGER_NAME)
        self._transport = transport

    @classmethod
    def from_properties(
        cls,
        properties: FastlyKvProperties,
        logger: EventLogger | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> FastlyKvCache:
        return cls(
            api_token=properties.api_token.get_secret_value(),
            store_id=properties.store_id,
            base_url=properties.base_url,
            timeout=timedelta(seconds=properties.timeout),
            user_agent=properties.user_agent,
            logger=logger,
            transport=transport,
        )

    @property
    def store_id(self) -> str:
        return self._store_id

    @property
    def base_url(self) -> str:
        return self._base_url

    def key_url(self, key: str) -> str:
        """Absolute URL of *key*. Only characters that would leave the key's path segment are encoded."""
        return f"{self._base_url}/resources/stores/kv/{self._store_id}/keys/{quote(key, safe=_SEGMENT_SAFE)}"

    async def get(self, key: str) -> bytes | None:
        """Return the stored bytes, or ``None`` on a miss or any failure."""
        if not key:
            return None
        try:
            response = await self._request("GET", key)
        except RemoteStoreException:
            return None
        return response.content

    async def set(self, key: str, value: CacheValue, duration: int | None = 0) -> bool:
        """Write *value* under *key*.

        *duration* is not forwarded to the store; a positive one is logged
        as ignored.
        """
        if not key:
            return False
        if duration and duration > 0:
            self._logger.warning(
                "fastly_kv_duration_ignored",
                key=key,
                duration=duration,
                store_id=self._store_id,
            )
        content = value.encode() if isinstance(value, str) else value
        try:
            await self._request("PUT", key, content=content)
        except RemoteStoreException:
            return False
        return True

    async def add(self, key: str, value: CacheValue, duration: int | None = 0) -> bool:
        """Write only if *key* currently misses.

        Check-then-act: two concurrent callers can both observe the miss and
        both write.
        """
        if await self.get(key) is not None:
            return False
        return await self.set(key, value, duration)

    async def delete(self, key: str) -> bool:
        if not key:
            return False
        try:
            await self._request("DELETE", key)
        except RemoteStoreException:
            return False
        return True

    async def flush(self) -> bool:
        """Unsupported: the KV Store API cannot clear a whole store. Always ``False``."""
        return False

    def _headers(self, has_body: bool) -> dict[str, str]:
        headers = {
            "Fastly-Key": self._api_token,
            "Accept": "application/json",
            "User-Agent": self._user_agent,
        }
        if has_body:
            headers["Content-Type"] = "application/octet-stream"
        return headers

    async def _request(self, method: str, key: str, content: bytes | None = None) -> httpx.Response:
        """Send one request; raise RemoteStoreException unless the status is 2xx."""
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout.total_seconds(),
                follow_redirects=True,
                verify=True,
                transport=self._transport,
            ) as client:
                response = await client.request(
                    method,
                    self.key_url(key),
                    headers=self._headers(content is not None),
                    content=content,
                )
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            self._logger.error(
                "fastly_kv_transport_error",
                method=method,
                key=key,
                store_id=self._store_id,
                error=repr(exc),
            )
            raise RemoteStoreException(
                f"Fastly KV {method} failed: {exc}",
                code="FASTLY_KV_TRANSPORT",
                context={"method": method, "key": key, "error": repr(exc)},
            ) from exc

        if not response.is_success:
            self._logger.error(
                "fastly_kv_error",
                method=method,
                key=key,
                store_id=self._store_id,
                status=response.status_code,
                body=response.text,
            )
            raise RemoteStoreException(
                f"Fastly KV {method} returned {response.status_code}",
                code="FASTLY_KV_STATUS",
                context={"method": method, "key": key, "status": response.status_code, "body": response.text},
            )
        return response
