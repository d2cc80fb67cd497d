from typing import Annotated, Any

import httpx
from fastapi import FastAPI, Query
from fastapi.middleware.cors import CORSMiddleware

from portfolio_stats.api.dependencies import (
    CacheHandlerDep,
    StatsHandlerDep,
    StravaHandlerDep,
    build_lifespan,
)
from portfolio_stats.config import Settings, get_settings
from portfolio_stats.dto import (
    HealthCheckResponse,
    InvalidateCacheQuery,
    InvalidationErrorResponse,
    InvalidationResponse,
    TokenRefreshResponse,
)
from portfolio_stats.protocols import KeyValueStore

API_VERSION = "0.1.0"


def create_app(
    settings: Settings | None = None,
    store: KeyValueStore | None = None,
    http_client: httpx.AsyncClient | None = None,
) -> FastAPI:
    """Build the FastAPI application.

    Args:
        settings: Application settings. Defaults to environment settings.
        store: Key-value store to use instead of Redis.
        http_client: HTTP client to use for upstream calls.

    Returns:
        The configured FastAPI app
    """
    settings = settings or get_settings()

    app = FastAPI(
        title="Portfolio Stats API",
        description="Cached statistics from GitHub, crates.io, Strava, WakaTime, npm and LeetCode",
        version=API_VERSION,
        lifespan=build_lifespan(settings, store=store, http_client=http_client),
    )

    app.add_middleware(
        CORSMiddleware,  # type: ignore[arg-type]
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["*"],
        expose_headers=["x-redis-cache"],
    )

    @app.get("/")
    async def root() -> dict[str, Any]:
        """Root endpoint with API information."""
        return {
            "name": "Portfolio Stats API",
            "version": API_VERSION,
            "endpoints": {
                "github": [
                    "/api/github/contributions",
                    "/api/github/starred",
                    "/api/github/repositories",
                ],
                "cargo": ["/api/cargo/packages"],
                "strava": ["/api/strava/activities", "/api/strava/auth/refresh"],
                "wakatime": ["/api/wakatime/stats"],
                "npm": ["/api/npm/packages"],
                "leetcode": ["/api/leetcode/stats"],
                "cache": ["/api/cache/invalidate"],
                "health": ["/health"],
            },
        }

    @app.get("/health", response_model=HealthCheckResponse)
    async def health(handler: CacheHandlerDep) -> dict:
        """Health check endpoint."""
        return await handler.health_check()

    @app.get("/api/github/contributions")
    async def github_contributions(handler: StatsHandlerDep):
        """Public repositories the user has contributed to, most starred first."""
        return await handler.github_contributions()

    @app.get("/api/github/starred")
    async def github_starred(handler: StatsHandlerDep):
        """Recently starred repositories, most starred first."""
        return await handler.github_starred()

    @app.get("/api/github/repositories")
    async def github_repositories(handler: StatsHandlerDep):
        """Public repositories owned by the user, most starred first."""
        return await handler.github_repositories()

    @app.get("/api/cargo/packages")
    async def cargo_packages(handler: StatsHandlerDep):
        """Crates published on crates.io, most downloaded first."""
        return await handler.cargo_packages()

    @app.get("/api/strava/activities")
    async def strava_activities(handler: StatsHandlerDep):
        """Recent Strava activities, newest first."""
        return await handler.strava_activities()

    @app.get("/api/wakatime/stats")
    async def wakatime_stats(handler: StatsHandlerDep):
        """Coding time over the last seven days."""
        return await handler.wakatime_stats()

    @app.get("/api/npm/packages")
    async def npm_packages(handler: StatsHandlerDep):
        """Packages published to npm, most downloaded first."""
        return await handler.npm_packages()

    @app.get("/api/leetcode/stats")
    async def leetcode_stats(handler: StatsHandlerDep):
        """Solved LeetCode problems per difficulty."""
        return await handler.leetcode_stats()

    @app.post("/api/strava/auth/refresh", response_model=TokenRefreshResponse)
    async def strava_refresh(handler: StravaHandlerDep) -> TokenRefreshResponse:
        """Exchange the stored Strava refresh token for a new access token."""
        return await handler.refresh()

    @app.get(
        "/api/cache/invalidate",
        response_model=InvalidationResponse,
        responses={400: {"model": InvalidationErrorResponse}},
    )
    async def invalidate_cache(
        query: Annotated[InvalidateCacheQuery, Query()],
        handler: CacheHandlerDep,
    ):
        """Delete every cache key owned by a target."""
        return await handler.invalidate(query.target)

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "portfolio_stats.api.app:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.api_reload,
    )
