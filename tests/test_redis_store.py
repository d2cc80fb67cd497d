"""Tests for the Redis-backed store, against a mocked asyncio client."""

from unittest.mock import AsyncMock

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from portfolio_stats.protocols import KeyValueStore
from portfolio_stats.repositories import RedisKeyValueStore


@pytest.fixture
def redis_client():
    return AsyncMock()


@pytest.fixture
def redis_store(redis_client):
    return RedisKeyValueStore(redis_client)


def test_satisfies_protocol(redis_store):
    assert isinstance(redis_store, KeyValueStore)


async def test_set_uses_expiry(redis_store, redis_client):
    await redis_store.set("github:starred", b"[]", ttl=3600)
    redis_client.set.assert_awaited_once_with("github:starred", b"[]", ex=3600)


async def test_get_returns_raw_bytes(redis_store, redis_client):
    redis_client.get.return_value = b'[{"name":"a/b"}]'
    assert await redis_store.get("github:starred") == b'[{"name":"a/b"}]'


async def test_set_many_uses_mset(redis_store, redis_client):
    await redis_store.set_many({"strava:access_token": "a", "strava:refresh_token": "r"})
    redis_client.mset.assert_awaited_once_with({"strava:access_token": "a", "strava:refresh_token": "r"})


async def test_delete_returns_count(redis_store, redis_client):
    redis_client.delete.return_value = 1
    assert await redis_store.delete("wakatime:stats") == 1


async def test_errors_propagate_from_reads(redis_store, redis_client):
    redis_client.get.side_effect = RedisConnectionError("down")
    with pytest.raises(RedisConnectionError):
        await redis_store.get("k")


async def test_ping_false_when_unreachable(redis_store, redis_client):
    redis_client.ping.side_effect = RedisConnectionError("down")
    assert await redis_store.ping() is False


async def test_ping_true_when_reachable(redis_store, redis_client):
    redis_client.ping.return_value = True
    assert await redis_store.ping() is True
