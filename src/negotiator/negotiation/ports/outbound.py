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
"""Outbound ports — pluggable collaborators of the negotiator."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from pathlib import Path
from typing import Protocol, runtime_checkable


@runtime_checkable
class UserAgentClassifier(Protocol):
    """Maps a ``User-Agent`` string to the device/browser tags it matches.

    Only tags of the base vocabulary are expected; the negotiator derives
    the paired ``non<tag>`` entries itself.
    """

    def classify(self, user_agent: str) -> Mapping[str, bool]: ...


@runtime_checkable
class DirectoryWatcher(Protocol):
    """Source of change notifications for scanned directories.

    ``watch`` may raise when a watch cannot be installed; callers treat that
    as "no invalidation" for the directory.
    """

    def watch(self, directory: Path, on_change: Callable[[], None]) -> None: ...

    async def close(self) -> None: ...
