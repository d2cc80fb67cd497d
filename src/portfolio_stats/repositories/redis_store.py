"""Redis implementation of KeyValueStore.

Uses the asyncio flavour of redis-py so store calls do not block other
requests being served by the same event loop.
"""

from redis import asyncio as aioredis
from redis.exceptions import RedisError

from portfolio_stats.config import Settings, get_redis_client


class RedisKeyValueStore:
    """Redis-backed key-value store.

    This class satisfies the KeyValueStore protocol through structural
    typing - no explicit inheritance needed.
    """

    def __init__(self, redis_client: aioredis.Redis) -> None:
        """Initialize the store.

        Args:
            redis_client: An asyncio Redis client.
        """
        self._client = redis_client

    @classmethod
    def create(cls, settings: Settings | None = None) -> "RedisKeyValueStore":
        """Factory method building the client from settings.

        Args:
            settings: Settings to read the Redis URL from. If None, uses defaults.

        Returns:
            Configured RedisKeyValueStore
        """
        return cls(get_redis_client(settings))

    async def get(self, key: str) -> bytes | None:
        return await self._client.get(key)

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        await self._client.set(key, value, ex=ttl)

    async def set_many(self, mapping: dict[str, str]) -> None:
        await self._client.mset(mapping)

    async def delete(self, key: str) -> int:
        return int(await self._client.delete(key))

    async def ping(self) -> bool:
        """Check if Redis is accessible.

        Returns:
            True if healthy, False otherwise
        """
        try:
            return bool(await self._client.ping())
        except (RedisError, OSError):
            return False

    async def close(self) -> None:
        """Release the connection pool."""
        await self._client.aclose()

    @property
    def client(self) -> aioredis.Redis:
        """Get the Redis client."""
        return self._client
