"""Tests for the Strava token refresh state machine."""

import asyncio
import dataclasses

import httpx
import pytest

from portfolio_stats.errors import NotConfiguredError, TokenUnavailableError, UpstreamError
from portfolio_stats.repositories import StravaClient
from portfolio_stats.repositories.strava_client import STRAVA_TOKEN_URL
from portfolio_stats.services import StravaTokenService
from portfolio_stats.services.strava_token_service import ACCESS_TOKEN_KEY, REFRESH_TOKEN_KEY


def exchange(upstream, access="new-access", refresh="new-refresh"):
    seen = []

    def responder(request):
        seen.append(request.url.params["refresh_token"])
        return httpx.Response(200, json={"access_token": access, "refresh_token": refresh, "expires_at": 99})

    upstream.on("POST", STRAVA_TOKEN_URL, responder)
    return seen


def make_service(store, http_client, settings):
    return StravaTokenService(store, StravaClient(http_client, settings), settings)


async def test_uses_stored_refresh_token(store, http_client, settings, upstream):
    store.data[REFRESH_TOKEN_KEY] = b"stored-refresh"
    seen = exchange(upstream)

    tokens = await make_service(store, http_client, settings).refresh()

    assert seen == ["stored-refresh"]
    assert tokens.access_token == "new-access"


async def test_falls_back_to_configured_token_when_none_stored(store, http_client, settings, upstream):
    seen = exchange(upstream)

    await make_service(store, http_client, settings).refresh()

    assert seen == ["env-refresh"]


async def test_store_read_failure_falls_back_to_configured_token(store, http_client, settings, upstream):
    store.fail_reads = True
    seen = exchange(upstream)

    await make_service(store, http_client, settings).refresh()

    assert seen == ["env-refresh"]


async def test_persists_rotated_token_pair(store, http_client, settings, upstream):
    exchange(upstream, access="a1", refresh="r1")

    await make_service(store, http_client, settings).refresh()

    assert store.data[ACCESS_TOKEN_KEY] == b"a1"
    assert store.data[REFRESH_TOKEN_KEY] == b"r1"
    assert store.count("set_many") == 1


async def test_next_refresh_uses_rotated_token(store, http_client, settings, upstream):
    seen = exchange(upstream, refresh="rotated")
    service = make_service(store, http_client, settings)

    await service.refresh()
    await service.refresh()

    assert seen == ["env-refresh", "rotated"]


async def test_persist_failure_is_not_fatal(store, http_client, settings, upstream):
    store.fail_writes = True
    exchange(upstream)

    tokens = await make_service(store, http_client, settings).refresh()

    assert tokens.access_token == "new-access"
    assert REFRESH_TOKEN_KEY not in store.data


async def test_no_token_anywhere_raises(store, http_client, settings, upstream):
    service = make_service(store, http_client, dataclasses.replace(settings, strava_refresh_token=None))

    with pytest.raises(TokenUnavailableError):
        await service.refresh()

    assert upstream.requests == []


async def test_unconfigured_client_raises(store, http_client, settings):
    service = make_service(store, http_client, dataclasses.replace(settings, strava_client_id=None))

    with pytest.raises(NotConfiguredError):
        await service.refresh()


async def test_unconfigured_client_checked_before_token_lookup(store, http_client, settings, upstream):
    unconfigured = dataclasses.replace(
        settings, strava_client_id=None, strava_client_secret=None, strava_refresh_token=None
    )

    with pytest.raises(NotConfiguredError) as exc_info:
        await make_service(store, http_client, unconfigured).refresh()

    assert exc_info.value.missing == ["STRAVA_CLIENT_ID", "STRAVA_CLIENT_SECRET"]
    assert store.count("get") == 0
    assert upstream.requests == []


async def test_rejected_exchange_propagates_and_keeps_old_token(store, http_client, settings, upstream):
    store.data[REFRESH_TOKEN_KEY] = b"stored-refresh"
    upstream.on("POST", STRAVA_TOKEN_URL, lambda request: httpx.Response(401, json={"message": "Authorization Error"}))

    with pytest.raises(UpstreamError):
        await make_service(store, http_client, settings).refresh()

    assert store.data[REFRESH_TOKEN_KEY] == b"stored-refresh"


async def test_concurrent_refreshes_are_serialized(store, http_client, settings, upstream):
    counter = iter(range(1, 100))

    def responder(request):
        n = next(counter)
        return httpx.Response(200, json={"access_token": f"a{n}", "refresh_token": f"r{n}"})

    upstream.on("POST", STRAVA_TOKEN_URL, responder)
    service = make_service(store, http_client, settings)

    await asyncio.gather(service.refresh(), service.refresh())

    used = [r.url.params["refresh_token"] for r in upstream.requests]
    assert used == ["env-refresh", "r1"]
