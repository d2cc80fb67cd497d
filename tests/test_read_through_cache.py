"""Tests for the cache-aside read-through."""

import pytest
from pydantic import TypeAdapter

from portfolio_stats.dto import ProjectItem
from portfolio_stats.errors import UpstreamError
from portfolio_stats.services import ReadThroughCache

PROJECTS = TypeAdapter(list[ProjectItem])


def make_fetch(result):
    calls = []

    async def fetch():
        calls.append(1)
        return result

    return fetch, calls


@pytest.fixture
def cache(store):
    return ReadThroughCache(store)


async def test_miss_fetches_once_and_writes_once(cache, store):
    fetch, calls = make_fetch([ProjectItem(name="a/b", stargazer_count=3)])

    payload = await cache.get_or_fetch("github:starred", fetch, ttl=120, adapter=PROJECTS)

    assert payload.hit is False
    assert payload.cache_status == "miss"
    assert len(calls) == 1
    assert store.count("set") == 1
    assert store.ttls["github:starred"] == 120
    assert store.data["github:starred"] == payload.body


async def test_hit_returns_stored_bytes_verbatim(cache, store):
    stored = b'[{"name":"x/y","stargazerCount":7}]'
    store.data["github:starred"] = stored
    fetch, calls = make_fetch([])

    payload = await cache.get_or_fetch("github:starred", fetch, ttl=120, adapter=PROJECTS)

    assert payload.hit is True
    assert payload.body == stored
    assert calls == []
    assert store.count("set") == 0


async def test_second_read_is_byte_identical_to_first(cache, store):
    fetch, calls = make_fetch([ProjectItem(name="a/b", description="ünïcode", stargazer_count=1)])

    first = await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)
    second = await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)

    assert second.hit is True
    assert second.body == first.body
    assert len(calls) == 1


async def test_body_uses_camel_case_keys(cache):
    fetch, _ = make_fetch([ProjectItem(name="a/b", homepage_url="https://x", stargazer_count=2)])

    payload = await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)

    assert b'"homepageUrl":"https://x"' in payload.body
    assert b'"stargazerCount":2' in payload.body


async def test_read_failure_is_treated_as_miss(cache, store):
    store.fail_reads = True
    fetch, calls = make_fetch([ProjectItem(name="a/b")])

    payload = await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)

    assert payload.hit is False
    assert len(calls) == 1


async def test_write_failure_does_not_affect_response(cache, store):
    store.fail_writes = True
    fetch, _ = make_fetch([ProjectItem(name="a/b")])

    payload = await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)

    assert payload.hit is False
    assert b'"a/b"' in payload.body
    assert "k" not in store.data


async def test_fetch_error_propagates_without_write(cache, store):
    async def fetch():
        raise UpstreamError("github", "boom")

    with pytest.raises(UpstreamError):
        await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)

    assert store.count("set") == 0


async def test_empty_result_is_served_but_not_stored(cache, store):
    fetch, calls = make_fetch([])

    payload = await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)

    assert payload.body == b"[]"
    assert store.count("set") == 0

    await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)
    assert len(calls) == 2


async def test_empty_stored_value_counts_as_miss(cache, store):
    store.data["k"] = b""
    fetch, calls = make_fetch([ProjectItem(name="a/b")])

    payload = await cache.get_or_fetch("k", fetch, ttl=60, adapter=PROJECTS)

    assert payload.hit is False
    assert len(calls) == 1
