"""Dependency injection configuration for FastAPI app.

Uses FastAPI's app.state pattern for storing service instances.

Pattern:
    - Services stored in app.state during lifespan
    - Dependency functions retrieve from request.app.state
    - Store and HTTP client can be injected (tests pass fakes)
"""

from contextlib import asynccontextmanager
from typing import Annotated

import httpx
import structlog
from fastapi import Depends, FastAPI, Request

from portfolio_stats.config import Settings
from portfolio_stats.handlers import CacheHandler, StatsHandler, StravaAuthHandler
from portfolio_stats.logging_config import configure_logging
from portfolio_stats.protocols import KeyValueStore
from portfolio_stats.repositories import (
    CratesClient,
    GitHubClient,
    LeetCodeClient,
    NpmClient,
    RedisKeyValueStore,
    StravaClient,
    WakaTimeClient,
    build_http_client,
)
from portfolio_stats.services import (
    InvalidationService,
    ReadThroughCache,
    StatsService,
    StravaTokenService,
)

logger = structlog.get_logger(__name__)


def _from_state(request: Request, name: str):
    value = getattr(request.app.state, name, None)
    if value is None:
        raise RuntimeError(f"{name} not initialized. Check lifespan setup.")
    return value


def get_stats_handler(request: Request) -> StatsHandler:
    """Dependency injection for StatsHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "stats_handler")


def get_cache_handler(request: Request) -> CacheHandler:
    """Dependency injection for CacheHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "cache_handler")


def get_strava_handler(request: Request) -> StravaAuthHandler:
    """Dependency injection for StravaAuthHandler from app.state.

    Raises:
        RuntimeError: If handler is not initialized
    """
    return _from_state(request, "strava_handler")


def build_lifespan(
    settings: Settings,
    store: KeyValueStore | None = None,
    http_client: httpx.AsyncClient | None = None,
):
    """Create the lifespan context manager for the app.

    Resources passed in are used as-is and left open on shutdown;
    resources created here are closed on shutdown.

    Args:
        settings: Application settings
        store: Key-value store. If None, a Redis store is created.
        http_client: Shared upstream HTTP client. If None, one is created.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Initialize all layers and store them in app.state.

        1. Store and HTTP client (data access)
        2. Upstream clients and services (business logic)
        3. Handlers (HTTP endpoints)
        """
        configure_logging(settings.log_level, settings.log_json)

        owned_store = store is None
        owned_http = http_client is None
        kv_store = store if store is not None else RedisKeyValueStore.create(settings)
        http = http_client if http_client is not None else build_http_client(settings)

        strava_tokens = StravaTokenService(kv_store, StravaClient(http, settings), settings)
        stats_service = StatsService(
            ReadThroughCache(kv_store),
            github=GitHubClient(http, settings),
            crates=CratesClient(http, settings),
            strava_tokens=strava_tokens,
            wakatime=WakaTimeClient(http, settings),
            npm=NpmClient(http, settings),
            leetcode=LeetCodeClient(http, settings),
            settings=settings,
        )

        app.state.store = kv_store
        app.state.stats_handler = StatsHandler(stats_service, settings)
        app.state.cache_handler = CacheHandler(InvalidationService(kv_store, settings), kv_store)
        app.state.strava_handler = StravaAuthHandler(strava_tokens)

        logger.info(
            "service_started",
            redis_url=settings.redis_url,
            cache_healthy=await kv_store.ping(),
        )

        yield

        del app.state.strava_handler
        del app.state.cache_handler
        del app.state.stats_handler
        del app.state.store

        if owned_http:
            await http.aclose()
        if owned_store:
            await kv_store.close()
        logger.info("service_stopped")

    return lifespan


# Type aliases for cleaner dependency injection
StatsHandlerDep = Annotated[StatsHandler, Depends(get_stats_handler)]
CacheHandlerDep = Annotated[CacheHandler, Depends(get_cache_handler)]
StravaHandlerDep = Annotated[StravaAuthHandler, Depends(get_strava_handler)]
