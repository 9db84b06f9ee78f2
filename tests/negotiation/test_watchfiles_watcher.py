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
"""Tests for WatchfilesDirectoryWatcher."""

from __future__ import annotations

import asyncio

import pytest

from negotiator.negotiation.adapters.watchfiles_watcher import WatchfilesDirectoryWatcher
from negotiator.negotiation.ports.outbound import DirectoryWatcher


class TestWatchfilesDirectoryWatcher:
    def test_implements_port(self):
        assert isinstance(WatchfilesDirectoryWatcher(), DirectoryWatcher)

    @pytest.mark.asyncio
    async def test_missing_directory_raises(self, tmp_path):
        watcher = WatchfilesDirectoryWatcher()
        with pytest.raises(NotADirectoryError):
            watcher.watch(tmp_path / "missing", lambda: None)
        await watcher.close()

    @pytest.mark.asyncio
    async def test_directory_is_watched_once(self, tmp_path):
        watcher = WatchfilesDirectoryWatcher()
        watcher.watch(tmp_path, lambda: None)
        watcher.watch(tmp_path, lambda: None)

        assert watcher.watched == [tmp_path.resolve()]
        await watcher.close()
        assert watcher.watched == []

    @pytest.mark.asyncio
    async def test_change_triggers_callback(self, tmp_path):
        changed = asyncio.Event()
        watcher = WatchfilesDirectoryWatcher(debounce_ms=50)
        watcher.watch(tmp_path, changed.set)
        await asyncio.sleep(0.5)

        (tmp_path / "index.da.html").write_text("hej")
        try:
            await asyncio.wait_for(changed.wait(), timeout=10)
        finally:
            await watcher.close()

        assert changed.is_set()

    @pytest.mark.asyncio
    async def test_every_callback_for_a_directory_fires(self, tmp_path):
        plain, encoded = asyncio.Event(), asyncio.Event()
        watcher = WatchfilesDirectoryWatcher(debounce_ms=50)
        watcher.watch(tmp_path, plain.set)
        watcher.watch(tmp_path, encoded.set)
        await asyncio.sleep(0.5)

        (tmp_path / "index.en.html").write_text("hi")
        try:
            await asyncio.wait_for(asyncio.gather(plain.wait(), encoded.wait()), timeout=10)
        finally:
            await watcher.close()

        assert watcher.watched == []
