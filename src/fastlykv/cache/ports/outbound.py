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
"""Cache adapter protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable

CacheValue = bytes | str


@runtime_checkable
class CacheAdapter(Protocol):
    """Capability interface a generic caching layer consumes.

    Key prefixing, serialization and default durations belong to that
    layer; backends only move opaque values. ``get`` returns ``None`` on a
    miss, every other operation reports success as a bool.
    """

    async def get(self, key: str) -> bytes | None: ...

    async def set(self, key: str, value: CacheValue, duration: int | None = 0) -> bool: ...

    async def add(self, key: str, value: CacheValue, duration: int | None = 0) -> bool: ...

    async def delete(self, key: str) -> bool: ...

    async def flush(self) -> bool: ...
