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
"""Directory watcher backed by watchfiles."""

from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import structlog
from watchfiles import awatch

logger = structlog.get_logger("negotiator.watch")


class WatchfilesDirectoryWatcher:
    """Runs one ``awatch`` task per directory on the running event loop.

    Each directory is watched at most once, non-recursively; callbacks
    registered for an already watched directory share its task.  A watch
    that dies is logged and not restarted.
    """

    def __init__(self, debounce_ms: int = 200) -> None:
        self._debounce_ms = debounce_ms
        self._tasks: dict[Path, asyncio.Task[None]] = {}
        self._callbacks: dict[Path, list[Callable[[], None]]] = {}
        self._stop = asyncio.Event()

    @property
    def watched(self) -> list[Path]:
        return list(self._tasks)

    def watch(self, directory: Path, on_change: Callable[[], None]) -> None:
        directory = directory.resolve()
        if directory in self._tasks:
            self._callbacks[directory].append(on_change)
            return
        if not directory.is_dir():
            raise NotADirectoryError(str(directory))
        loop = asyncio.get_running_loop()
        self._callbacks[directory] = [on_change]
        self._tasks[directory] = loop.create_task(self._run(directory))

    async def _run(self, directory: Path) -> None:
        try:
            async for _changes in awatch(
                directory,
                watch_filter=None,
                debounce=self._debounce_ms,
                recursive=False,
                stop_event=self._stop,
            ):
                for on_change in list(self._callbacks.get(directory, ())):
                    on_change()
        except asyncio.CancelledError:
            raise
        except Exception as exc:
            logger.warning("directory_watch_failed", directory=str(directory), error=str(exc))

    async def close(self) -> None:
        """Stop all watches and wait for their tasks to finish."""
        self._stop.set()
        tasks = list(self._tasks.values())
        self._tasks.clear()
        self._callbacks.clear()
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
