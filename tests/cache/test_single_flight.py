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
"""Tests for SingleFlightCache."""

from __future__ import annotations

import asyncio

import pytest

from negotiator.cache.single_flight import SingleFlightCache


class CountingLoader:
    def __init__(self) -> None:
        self.calls: list[str] = []
        self.release = asyncio.Event()
        self.fail_next = False

    async def __call__(self, key: str) -> str:
        self.calls.append(key)
        await self.release.wait()
        if self.fail_next:
            self.fail_next = False
            raise OSError("disk on fire")
        return f"value-{key}-{len(self.calls)}"


class TestSingleFlightCache:
    @pytest.mark.asyncio
    async def test_concurrent_misses_share_one_load(self):
        loader = CountingLoader()
        cache: SingleFlightCache[str, str] = SingleFlightCache(loader)

        waiters = [asyncio.ensure_future(cache.get("/")) for _ in range(5)]
        await asyncio.sleep(0)
        loader.release.set()
        results = await asyncio.gather(*waiters)

        assert loader.calls == ["/"]
        assert results == ["value-/-1"] * 5
        assert cache.exists("/")

    @pytest.mark.asyncio
    async def test_hit_does_not_reload(self):
        loader = CountingLoader()
        loader.release.set()
        cache: SingleFlightCache[str, str] = SingleFlightCache(loader)

        await cache.get("/")
        await cache.get("/")

        assert loader.calls == ["/"]

    @pytest.mark.asyncio
    async def test_failure_is_not_cached(self):
        loader = CountingLoader()
        loader.release.set()
        loader.fail_next = True
        cache: SingleFlightCache[str, str] = SingleFlightCache(loader)

        with pytest.raises(OSError):
            await cache.get("/")
        assert not cache.exists("/")

        assert await cache.get("/") == "value-/-2"

    @pytest.mark.asyncio
    async def test_failure_reaches_every_waiter(self):
        loader = CountingLoader()
        loader.fail_next = True
        cache: SingleFlightCache[str, str] = SingleFlightCache(loader)

        waiters = [asyncio.ensure_future(cache.get("/")) for _ in range(3)]
        await asyncio.sleep(0)
        loader.release.set()
        results = await asyncio.gather(*waiters, return_exceptions=True)

        assert all(isinstance(result, OSError) for result in results)
        assert loader.calls == ["/"]

    @pytest.mark.asyncio
    async def test_cancelled_waiter_does_not_cancel_load(self):
        loader = CountingLoader()
        cache: SingleFlightCache[str, str] = SingleFlightCache(loader)

        first = asyncio.ensure_future(cache.get("/"))
        second = asyncio.ensure_future(cache.get("/"))
        await asyncio.sleep(0)
        first.cancel()
        loader.release.set()

        assert await second == "value-/-1"
        assert first.cancelled()

    @pytest.mark.asyncio
    async def test_evict_forces_reload(self):
        loader = CountingLoader()
        loader.release.set()
        cache: SingleFlightCache[str, str] = SingleFlightCache(loader)

        await cache.get("/")
        assert cache.evict("/") is True
        assert cache.evict("/") is False
        assert await cache.get("/") == "value-/-2"

    @pytest.mark.asyncio
    async def test_evict_during_load_discards_result(self):
        loader = CountingLoader()
        cache: SingleFlightCache[str, str] = SingleFlightCache(loader)

        pending = asyncio.ensure_future(cache.get("/"))
        await asyncio.sleep(0)
        assert cache.evict("/") is True
        loader.release.set()

        assert await pending == "value-/-1"
        assert not cache.exists("/")

    @pytest.mark.asyncio
    async def test_clear(self):
        loader = CountingLoader()
        loader.release.set()
        cache: SingleFlightCache[str, str] = SingleFlightCache(loader)

        await cache.get("/a/")
        await cache.get("/b/")
        cache.clear()

        assert not cache.exists("/a/")
        assert not cache.exists("/b/")
