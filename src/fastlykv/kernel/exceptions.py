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
"""Exception hierarchy for fastlykv.

All package exceptions inherit from FastlyKvException so callers can catch
one type for everything raised here.

Categories:
- ConfigurationException: missing or invalid settings, raised at construction
- InfrastructureException: remote store and network failures
"""

from __future__ import annotations


class FastlyKvException(Exception):
    """Base exception for all fastlykv errors.

    Args:
        message: Human-readable error description.
        code: Machine-readable error code (e.g. "CONFIG_001").
        context: Arbitrary key-value pairs for error context and debugging.
    """

    def __init__(
        self,
        message: str,
        code: str | None = None,
        context: dict | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.context: dict = context if context is not None else {}


class ConfigurationException(FastlyKvException):
    """Required settings are missing or failed validation."""


class InfrastructureException(FastlyKvException):
    """Remote service, network and transport failures."""


class RemoteStoreException(InfrastructureException):
    """The key-value store answered with a non-2xx status or could not be reached."""
