"""Cache-aside read-through over the shared key-value store."""

from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

import structlog
from pydantic import TypeAdapter

from portfolio_stats.entities import CachedPayload
from portfolio_stats.protocols import KeyValueStore

T = TypeVar("T")

logger = structlog.get_logger(__name__)


class ReadThroughCache:
    """Serve a value from the store, or fetch, store and serve it.

    The store is strictly optional: a failing read is treated as a miss
    and a failing write is logged and discarded, so a store outage
    degrades to "always fetch fresh". Errors raised by the fetch routine
    are never caught here.

    Concurrent misses for the same key are not coalesced; each one calls
    upstream and the last write wins.

    Example:
        ```python
        cache = ReadThroughCache(store)
        payload = await cache.get_or_fetch(
            "github:starred",
            github.fetch_starred,
            ttl=3600,
            adapter=TypeAdapter(list[ProjectItem]),
        )
        ```
    """

    def __init__(self, store: KeyValueStore) -> None:
        """Initialize the cache.

        Args:
            store: The shared key-value store.
        """
        self._store = store

    async def get_or_fetch(
        self,
        key: str,
        fetch: Callable[[], Awaitable[T]],
        ttl: int,
        adapter: TypeAdapter[T],
    ) -> CachedPayload:
        """Return the cached JSON for ``key``, populating it on a miss.

        Args:
            key: Namespaced cache key
            fetch: Zero-argument coroutine function producing the value
            ttl: Time-to-live for a freshly written entry, in seconds
            adapter: Serializes the fetched value to JSON

        Returns:
            CachedPayload holding the JSON body and whether it was a hit

        Raises:
            Exception: Whatever ``fetch`` raises
        """
        cached = await self._read(key)
        if cached:
            logger.debug("cache_hit", cache_key=key)
            return CachedPayload(body=cached, hit=True)

        logger.info("cache_miss", cache_key=key)
        value = await fetch()
        body = adapter.dump_json(value, by_alias=True)

        if _is_empty(value):
            logger.info("cache_skip_empty", cache_key=key)
        else:
            await self._write(key, body, ttl)

        return CachedPayload(body=body, hit=False)

    async def _read(self, key: str) -> bytes | None:
        try:
            return await self._store.get(key)
        except Exception as e:
            logger.warning("cache_read_failed", cache_key=key, error=str(e))
            return None

    async def _write(self, key: str, body: bytes, ttl: int) -> None:
        """Best-effort write; failure leaves the next request to fetch again."""
        try:
            await self._store.set(key, body, ttl)
        except Exception as e:
            logger.warning("cache_write_failed", cache_key=key, error=str(e))


def _is_empty(value: Any) -> bool:
    if value is None:
        return True
    try:
        return len(value) == 0
    except TypeError:
        return False
