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
"""Keyed single-flight cache for async loaders."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

K = TypeVar("K")
V = TypeVar("V")


class SingleFlightCache(Generic[K, V]):
    """Caches the result of an async *loader* per key, forever.

    Concurrent misses for the same key share one pending load.  Each waiter
    awaits the load through :func:`asyncio.shield`, so a cancelled waiter
    never cancels the load for the others.  A failed load is not cached:
    every waiter sees the exception and the next ``get`` retries.

    Entries leave the cache only through :meth:`evict` or :meth:`clear`.
    Evicting a key while its load is pending discards that load's result.
    """

    def __init__(self, loader: Callable[[K], Awaitable[V]]) -> None:
        self._loader = loader
        self._values: dict[K, V] = {}
        self._pending: dict[K, asyncio.Task[V]] = {}

    async def get(self, key: K) -> V:
        """Return the cached value for *key*, loading it on first use."""
        if key in self._values:
            return self._values[key]

        task = self._pending.get(key)
        if task is None:
            task = asyncio.ensure_future(self._load(key))
            self._pending[key] = task
        return await asyncio.shield(task)

    async def _load(self, key: K) -> V:
        current = asyncio.current_task()
        try:
            value = await self._loader(key)
        except BaseException:
            if self._pending.get(key) is current:
                del self._pending[key]
            raise
        if self._pending.get(key) is current:
            del self._pending[key]
            self._values[key] = value
        return value

    def evict(self, key: K) -> bool:
        """Forget *key*. Returns True if a value or pending load existed."""
        existed = key in self._values or key in self._pending
        self._values.pop(key, None)
        self._pending.pop(key, None)
        return existed

    def exists(self, key: K) -> bool:
        """True when a resolved value is cached for *key*."""
        return key in self._values

    def clear(self) -> None:
        """Remove all entries, including pending loads."""
        self._values.clear()
        self._pending.clear()
