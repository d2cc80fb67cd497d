"""HTTP handlers for the cached data endpoints.

Handlers turn a CachedPayload into a JSON response and map service
errors to status codes.
"""

from collections.abc import Awaitable, Callable

from fastapi import HTTPException, Response, status

from portfolio_stats.config import Settings, get_settings
from portfolio_stats.entities import CachedPayload
from portfolio_stats.errors import NotConfiguredError, TokenUnavailableError, UpstreamError
from portfolio_stats.services import StatsService

CACHE_STATUS_HEADER = "x-redis-cache"


class StatsHandler:
    """HTTP handlers for the statistics endpoints.

    Every response carries ``x-redis-cache: hit|miss``. Upstream failures
    become 502, missing configuration 503, anything else 500.
    """

    def __init__(self, stats_service: StatsService, settings: Settings | None = None) -> None:
        """Initialize the stats handler.

        Args:
            stats_service: The stats service for business logic (required).
            settings: Settings for the Cache-Control max-age.
        """
        self._stats = stats_service
        self._settings = settings or get_settings()

    async def _serve(self, read: Callable[[], Awaitable[CachedPayload]]) -> Response:
        try:
            payload = await read()
        except UpstreamError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Upstream request failed: {e.message}",
            ) from e
        except (NotConfiguredError, TokenUnavailableError) as e:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=e.message,
            ) from e
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to load stats: {e}",
            ) from e

        return Response(
            content=payload.body,
            media_type="application/json",
            headers={
                CACHE_STATUS_HEADER: payload.cache_status,
                "cache-control": f"public, max-age={self._settings.request_cache_seconds}",
            },
        )

    async def github_contributions(self) -> Response:
        """Handle GET /api/github/contributions requests."""
        return await self._serve(self._stats.github_contributions)

    async def github_starred(self) -> Response:
        """Handle GET /api/github/starred requests."""
        return await self._serve(self._stats.github_starred)

    async def github_repositories(self) -> Response:
        """Handle GET /api/github/repositories requests."""
        return await self._serve(self._stats.github_repositories)

    async def cargo_packages(self) -> Response:
        """Handle GET /api/cargo/packages requests."""
        return await self._serve(self._stats.cargo_packages)

    async def strava_activities(self) -> Response:
        """Handle GET /api/strava/activities requests."""
        return await self._serve(self._stats.strava_activities)

    async def wakatime_stats(self) -> Response:
        """Handle GET /api/wakatime/stats requests."""
        return await self._serve(self._stats.wakatime_stats)

    async def npm_packages(self) -> Response:
        """Handle GET /api/npm/packages requests."""
        return await self._serve(self._stats.npm_packages)

    async def leetcode_stats(self) -> Response:
        """Handle GET /api/leetcode/stats requests."""
        return await self._serve(self._stats.leetcode_stats)
