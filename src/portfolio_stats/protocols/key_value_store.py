"""Key-value store protocol.

Defines the narrow interface the cache and the Strava token service need
from the shared store: get, set with expiry, multi-set, delete.
"""

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueStore(Protocol):
    """Protocol for the shared key-value store.

    Per-key operations are expected to be atomic. Nothing else is:
    a read followed by a write may interleave with other requests.

    Example:
        ```python
        from portfolio_stats.protocols import KeyValueStore

        store: KeyValueStore = RedisKeyValueStore.create()
        await store.set("github:starred", b"[]", ttl=3600)
        ```
    """

    async def get(self, key: str) -> bytes | None:
        """Read a value.

        Args:
            key: The namespaced key, e.g. ``github:starred``

        Returns:
            The stored bytes, or None if the key is absent or expired
        """
        ...

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        """Write a value that expires after ``ttl`` seconds.

        Args:
            key: The namespaced key
            value: The serialized value
            ttl: Time-to-live in seconds
        """
        ...

    async def set_many(self, mapping: dict[str, str]) -> None:
        """Write several values at once, without expiry.

        Args:
            mapping: Key to value mapping
        """
        ...

    async def delete(self, key: str) -> int:
        """Delete a key.

        Args:
            key: The namespaced key

        Returns:
            Number of keys removed (0 if it did not exist)
        """
        ...

    async def ping(self) -> bool:
        """Check if the store is reachable.

        Returns:
            True if healthy, False otherwise
        """
        ...
