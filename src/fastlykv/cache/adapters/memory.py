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
"""Process-local cache backend."""

from __future__ import annotations

import time

from fastlykv.cache.ports.outbound import CacheValue


class InMemoryCache:
    """In-memory cache honouring ``duration`` as a TTL in seconds.

    Suitable for development, testing and single-process applications.
    A duration of ``0`` means the entry never expires.
    """

    def __init__(self) -> None:
        self._store: dict[str, tuple[bytes, float | None]] = {}

    async def get(self, key: str) -> bytes | None:
        entry = self._store.get(key)
        if entry is None:
            return None

        value, expires_at = entry
        if expires_at is not None and time.monotonic() > expires_at:
            del self._store[key]
            return None

        return value

    async def set(self, key: str, value: CacheValue, duration: int | None = 0) -> bool:
        if not key:
            return False
        expires_at = time.monotonic() + duration if duration and duration > 0 else None
        raw = value.encode() if isinstance(value, str) else bytes(value)
        self._store[key] = (raw, expires_at)
        return True

    async def add(self, key: str, value: CacheValue, duration: int | None = 0) -> bool:
        """Store only if absent. Atomic within one event loop: no await between check and write."""
        entry = self._store.get(key)
        if entry is not None and (entry[1] is None or time.monotonic() <= entry[1]):
            return False
        return await self.set(key, value, duration)

    async def delete(self, key: str) -> bool:
        """Remove a key. Returns True if the key existed."""
        return self._store.pop(key, None) is not None

    async def flush(self) -> bool:
        self._store.clear()
        return True

    def __len__(self) -> int:
        return len(self._store)
