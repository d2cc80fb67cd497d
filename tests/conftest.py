"""Shared fixtures: in-memory store, fake upstream HTTP, test settings."""

from collections.abc import Callable

import httpx
import pytest

from portfolio_stats.config import Settings


class InMemoryStore:
    """KeyValueStore fake that records calls and can be told to fail."""

    def __init__(self) -> None:
        self.data: dict[str, bytes] = {}
        self.ttls: dict[str, int | None] = {}
        self.calls: list[tuple[str, object]] = []
        self.fail_reads = False
        self.fail_writes = False
        self.fail_deletes: set[str] = set()
        self.healthy = True

    async def get(self, key: str) -> bytes | None:
        self.calls.append(("get", key))
        if self.fail_reads:
            raise ConnectionError("store unavailable")
        return self.data.get(key)

    async def set(self, key: str, value: bytes, ttl: int) -> None:
        self.calls.append(("set", key))
        if self.fail_writes:
            raise ConnectionError("store unavailable")
        self.data[key] = value
        self.ttls[key] = ttl

    async def set_many(self, mapping: dict[str, str]) -> None:
        self.calls.append(("set_many", tuple(mapping)))
        if self.fail_writes:
            raise ConnectionError("store unavailable")
        for key, value in mapping.items():
            self.data[key] = value.encode()
            self.ttls[key] = None

    async def delete(self, key: str) -> int:
        self.calls.append(("delete", key))
        if key in self.fail_deletes:
            raise ConnectionError("store unavailable")
        return 1 if self.data.pop(key, None) is not None else 0

    async def ping(self) -> bool:
        return self.healthy

    def count(self, op: str) -> int:
        return sum(1 for name, _ in self.calls if name == op)


Responder = Callable[[httpx.Request], httpx.Response]


def _route(request: httpx.Request) -> str:
    url = request.url
    return f"{url.scheme}://{url.host}{url.path}"


class FakeUpstream:
    """Routes requests by method and URL (without query) to responders.

    Unrouted requests get a 404, which clients turn into UpstreamError.
    """

    def __init__(self) -> None:
        self.routes: dict[tuple[str, str], Responder] = {}
        self.requests: list[httpx.Request] = []

    def on(self, method: str, url: str, responder: Responder) -> None:
        self.routes[(method, url)] = responder

    def queue(self, method: str, url: str, *payloads: object) -> None:
        """Answer successive requests with the given JSON payloads."""
        pending = list(payloads)

        def responder(request: httpx.Request) -> httpx.Response:
            assert pending, f"unexpected extra request to {request.url}"
            return httpx.Response(200, json=pending.pop(0))

        self.on(method, url, responder)

    def calls_to(self, url: str) -> list[httpx.Request]:
        return [r for r in self.requests if _route(r) == url]

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.method, _route(request))
        responder = self.routes.get(key)
        if responder is None:
            return httpx.Response(404, json={"message": "not found"})
        return responder(request)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        cache_ttl_github=600,
        cache_ttl_cargo=700,
        cache_ttl_strava=300,
        cache_ttl_wakatime=800,
        cache_ttl_npm=900,
        cache_ttl_leetcode=1000,
        request_cache_seconds=60,
        github_api_key="gh-token",
        github_username="octocat",
        github_starred_limit=6,
        cargo_user_id="4242",
        strava_client_id="123",
        strava_client_secret="strava-secret",
        strava_refresh_token="env-refresh",
        strava_activity_pages=2,
        strava_activities_per_page=2,
        wakatime_api_key="waka-key",
        npm_username="npm-user",
        leetcode_username="leet-user",
        log_level="info",
        log_json=False,
    )


@pytest.fixture
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture
def upstream() -> FakeUpstream:
    return FakeUpstream()


@pytest.fixture
def http_client(upstream: FakeUpstream) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(upstream))
