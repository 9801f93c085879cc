"""
Tests for the single-flight TTL cache.
"""

import asyncio
import gc
from unittest.mock import AsyncMock

import pytest

from dashboard.core.cache import TTLCache


class FakeClock:
    """Manually advanced time source."""

    def __init__(self, now: float = 1000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(clock):
    return TTLCache("test", ttl=60, maxsize=2, clock=clock)


class TestTTLCache:
    """Test cases for get/set with TTL."""

    def test_set_and_get(self, cache):
        cache.set("key", "value")
        assert cache.get("key") == "value"
        assert len(cache) == 1

    def test_get_missing_key(self, cache):
        assert cache.get("missing") is None

    def test_entries_expire_after_ttl(self, cache, clock):
        cache.set("key", "value")
        clock.now += 59
        assert cache.get("key") == "value"

        clock.now += 1
        assert cache.get("key") is None
        assert len(cache) == 0

    def test_no_ttl_never_expires(self, clock):
        cache = TTLCache("forever", ttl=None, clock=clock)
        cache.set("key", "value")
        clock.now += 10**9
        assert cache.get("key") == "value"

    def test_oldest_entry_evicted_when_full(self, cache):
        cache.set("a", 1)
        cache.set("b", 2)
        cache.set("c", 3)

        assert cache.get("a") is None
        assert cache.get("b") == 2
        assert cache.get("c") == 3

    def test_get_returns_independent_copy(self, cache):
        cache.set("key", {"heroes": ["Abrams"]})

        first = cache.get("key")
        first["heroes"].append("Haze")

        assert cache.get("key") == {"heroes": ["Abrams"]}

    def test_clear(self, cache):
        cache.set("a", 1)
        cache.clear()
        assert len(cache) == 0
        assert cache.stats()["hits"] == 0


async def test_get_or_load_loads_once_within_ttl(cache):
    loader = AsyncMock(return_value={"value": 1})

    assert await cache.get_or_load("key", loader) == {"value": 1}
    assert await cache.get_or_load("key", loader) == {"value": 1}

    loader.assert_awaited_once()
    assert cache.loads == 1


async def test_get_or_load_reloads_after_expiry(cache, clock):
    loader = AsyncMock(side_effect=["first", "second"])

    assert await cache.get_or_load("key", loader) == "first"
    clock.now += 61
    assert await cache.get_or_load("key", loader) == "second"
    assert loader.await_count == 2


async def test_concurrent_misses_share_one_load(cache):
    release = asyncio.Event()
    calls = 0

    async def loader():
        nonlocal calls
        calls += 1
        await release.wait()
        return ["catalog"]

    first = asyncio.create_task(cache.get_or_load("key", loader))
    second = asyncio.create_task(cache.get_or_load("key", loader))
    await asyncio.sleep(0)
    release.set()

    results = await asyncio.gather(first, second)

    assert calls == 1
    assert results == [["catalog"], ["catalog"]]
    assert results[0] is not results[1]


async def test_failed_load_is_not_cached(cache):
    loader = AsyncMock(side_effect=[RuntimeError("upstream down"), "recovered"])

    with pytest.raises(RuntimeError, match="upstream down"):
        await cache.get_or_load("key", loader)

    assert len(cache) == 0
    assert cache.stats()["inflight"] == 0
    assert await cache.get_or_load("key", loader) == "recovered"


async def test_failed_load_raises_to_every_waiter(cache):
    release = asyncio.Event()

    async def loader():
        await release.wait()
        raise ValueError("bad payload")

    first = asyncio.create_task(cache.get_or_load("key", loader))
    second = asyncio.create_task(cache.get_or_load("key", loader))
    await asyncio.sleep(0)
    release.set()

    results = await asyncio.gather(first, second, return_exceptions=True)

    assert all(isinstance(result, ValueError) for result in results)
    assert cache.loads == 1


async def test_cancelled_caller_does_not_cancel_shared_load(cache):
    release = asyncio.Event()

    async def loader():
        await release.wait()
        return "value"

    waiter = asyncio.create_task(cache.get_or_load("key", loader))
    await asyncio.sleep(0)
    waiter.cancel()
    with pytest.raises(asyncio.CancelledError):
        await waiter

    follower = asyncio.create_task(cache.get_or_load("key", loader))
    await asyncio.sleep(0)
    release.set()

    assert await follower == "value"
    assert cache.loads == 1


async def test_failed_load_after_all_callers_cancelled_is_not_reported_unretrieved(cache):
    loop = asyncio.get_running_loop()
    reported = []
    loop.set_exception_handler(lambda loop, context: reported.append(context))
    release = asyncio.Event()

    async def loader():
        await release.wait()
        raise ValueError("upstream down")

    try:
        waiter = asyncio.create_task(cache.get_or_load("key", loader))
        await asyncio.sleep(0)
        load = cache._inflight["key"]
        waiter.cancel()
        with pytest.raises(asyncio.CancelledError):
            await waiter

        release.set()
        await asyncio.wait([load])
        del load, waiter
        gc.collect()
    finally:
        loop.set_exception_handler(None)

    assert not [context for context in reported if "never retrieved" in context.get("message", "")]
    assert "key" not in cache._inflight
