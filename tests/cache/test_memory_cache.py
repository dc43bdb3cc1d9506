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
"""Tests for the in-memory cache backend."""

import asyncio

import pytest

from fastlykv.cache.adapters import InMemoryCache
from fastlykv.cache.ports.outbound import CacheAdapter


class TestInMemoryCache:
    def test_protocol_compliance(self):
        assert isinstance(InMemoryCache(), CacheAdapter)

    @pytest.mark.asyncio
    async def test_set_and_get(self):
        c = InMemoryCache()
        assert await c.set("key1", b"value1") is True
        assert await c.get("key1") == b"value1"

    @pytest.mark.asyncio
    async def test_str_values_are_stored_as_bytes(self):
        c = InMemoryCache()
        await c.set("key1", "value1")
        assert await c.get("key1") == b"value1"

    @pytest.mark.asyncio
    async def test_get_missing_returns_none(self):
        assert await InMemoryCache().get("missing") is None

    @pytest.mark.asyncio
    async def test_empty_key_is_rejected(self):
        c = InMemoryCache()
        assert await c.set("", b"v") is False
        assert len(c) == 0

    @pytest.mark.asyncio
    async def test_delete(self):
        c = InMemoryCache()
        await c.set("key1", b"value1")
        assert await c.delete("key1") is True
        assert await c.get("key1") is None

    @pytest.mark.asyncio
    async def test_delete_missing_returns_false(self):
        assert await InMemoryCache().delete("missing") is False

    @pytest.mark.asyncio
    async def test_add_does_not_overwrite(self):
        c = InMemoryCache()
        assert await c.add("k", b"v1") is True
        assert await c.add("k", b"v2") is False
        assert await c.get("k") == b"v1"

    @pytest.mark.asyncio
    async def test_concurrent_add_has_single_winner(self):
        c = InMemoryCache()
        results = await asyncio.gather(*(c.add("k", f"v{i}") for i in range(10)))
        assert results.count(True) == 1

    @pytest.mark.asyncio
    async def test_duration_expires_entry(self):
        c = InMemoryCache()
        await c.set("k", b"v", duration=1)
        c._store["k"] = (b"v", 0.0)
        assert await c.get("k") is None

    @pytest.mark.asyncio
    async def test_add_replaces_expired_entry(self):
        c = InMemoryCache()
        await c.set("k", b"old", duration=1)
        c._store["k"] = (b"old", 0.0)
        assert await c.add("k", b"new") is True
        assert await c.get("k") == b"new"

    @pytest.mark.asyncio
    async def test_zero_duration_never_expires(self):
        c = InMemoryCache()
        await c.set("k", b"v", duration=0)
        assert c._store["k"][1] is None

    @pytest.mark.asyncio
    async def test_flush(self):
        c = InMemoryCache()
        await c.set("a", b"1")
        await c.set("b", b"2")
        assert await c.flush() is True
        assert len(c) == 0

    @pytest.mark.asyncio
    async def test_none_duration_never_expires(self):
        c = InMemoryCache()
        assert await c.set("k", b"v", duration=None) is True
        assert c._store["k"][1] is None
        assert await c.add("other", b"v", None) is True
