"""
TTL cache with single-flight loading for upstream-derived values.

One instance is created per cached concern (asset catalog, live meta snapshot,
leaderboards, synthetic meta) by the composition root and injected where it is
needed. Concurrent callers that miss the same key await one shared load.
"""

import asyncio
import copy
import time
from typing import Any, Awaitable, Callable, Dict, Generic, Optional, Tuple, TypeVar

import structlog

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Clock = Callable[[], float]


class TTLCache(Generic[T]):
    """Keyed TTL cache whose misses are loaded at most once at a time.

    ``ttl=None`` keeps entries for the lifetime of the cache. Every value
    handed out is a deep copy, so callers cannot mutate cached state.
    """

    def __init__(
        self,
        name: str,
        ttl: Optional[float] = 300,
        maxsize: int = 128,
        clock: Clock = time.time,
    ):
        """
        Initialize TTL cache.

        Args:
            name: Cache name used in log events
            ttl: Time to live in seconds, or None for no expiry
            maxsize: Maximum number of entries
            clock: Time source in seconds; injectable for tests
        """
        self.name = name
        self.ttl = ttl
        self.maxsize = maxsize
        self.clock = clock
        self.cache: Dict[str, Tuple[T, Optional[float]]] = {}
        self._inflight: Dict[str, "asyncio.Task[T]"] = {}
        self._hits = 0
        self._misses = 0
        self.loads = 0

    def _expiry(self, now: float) -> Optional[float]:
        return None if self.ttl is None else now + self.ttl

    def _lookup(self, key: str) -> Tuple[bool, Optional[T]]:
        entry = self.cache.get(key)
        if entry is None:
            return False, None
        value, expires_at = entry
        if expires_at is None or self.clock() < expires_at:
            return True, value
        del self.cache[key]
        logger.debug("Cache expired", cache=self.name, key=key)
        return False, None

    def get(self, key: str) -> Optional[T]:
        """
        Get a copy of a value if present and not expired.

        Args:
            key: Cache key

        Returns:
            Cached value if exists and not expired, None otherwise
        """
        found, value = self._lookup(key)
        if found:
            self._hits += 1
            return copy.deepcopy(value)
        self._misses += 1
        return None

    def set(self, key: str, value: T) -> None:
        """
        Set value in cache with TTL.

        Args:
            key: Cache key
            value: Value to cache
        """
        # Simple LRU: if cache is full, remove oldest entry
        if len(self.cache) >= self.maxsize and key not in self.cache:
            oldest_key = next(iter(self.cache))
            del self.cache[oldest_key]
            logger.debug("Cache eviction", cache=self.name, key=oldest_key, reason="full")

        self.cache[key] = (value, self._expiry(self.clock()))
        logger.debug("Cache set", cache=self.name, key=key, ttl=self.ttl)

    async def get_or_load(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        """
        Return the cached value for ``key``, loading it on a miss.

        While a load is in flight, further callers for the same key await it
        instead of starting their own. A failed load is not cached and its
        exception is raised to every waiter.

        Args:
            key: Cache key
            loader: Zero-argument coroutine factory producing the value

        Returns:
            An independent deep copy of the cached value
        """
        found, value = self._lookup(key)
        if found:
            self._hits += 1
            logger.debug("Cache hit", cache=self.name, key=key, hits=self._hits)
            return copy.deepcopy(value)  # type: ignore[return-value]

        task = self._inflight.get(key)
        if task is None:
            self._misses += 1
            task = asyncio.ensure_future(self._load(key, loader))
            task.add_done_callback(self._consume_exception)
            self._inflight[key] = task
        else:
            logger.debug("Cache load joined", cache=self.name, key=key)

        result = await asyncio.shield(task)
        return copy.deepcopy(result)

    def _consume_exception(self, task: "asyncio.Future[T]") -> None:
        """Retrieve a failed load's exception even when every waiter was cancelled."""
        if not task.cancelled() and task.exception() is not None:
            logger.debug("Cache load failed", cache=self.name, error=str(task.exception()))

    async def _load(self, key: str, loader: Callable[[], Awaitable[T]]) -> T:
        self.loads += 1
        try:
            value = await loader()
            self.set(key, value)
            return value
        finally:
            self._inflight.pop(key, None)

    def clear(self) -> None:
        """Clear all entries from cache."""
        count = len(self.cache)
        self.cache.clear()
        self._hits = 0
        self._misses = 0
        logger.info("Cache cleared", cache=self.name, entries_removed=count)

    def stats(self) -> Dict[str, Any]:
        """Get cache statistics."""
        total = self._hits + self._misses
        return {
            "size": len(self.cache),
            "maxsize": self.maxsize,
            "hits": self._hits,
            "misses": self._misses,
            "loads": self.loads,
            "inflight": len(self._inflight),
            "hit_rate": self._hits / total if total > 0 else 0.0,
        }

    def __len__(self) -> int:
        """Get number of entries in cache."""
        return len(self.cache)
