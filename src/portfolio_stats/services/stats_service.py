"""Stats service: one cached read per upstream resource.

Each method binds a cache key, a TTL, a fetch routine and a wire shape,
and hands them to the read-through cache.
"""

from pydantic import TypeAdapter

from portfolio_stats.config import Settings, get_settings
from portfolio_stats.dto import (
    CargoPackageItem,
    LeetCodeStatsItem,
    NpmPackageItem,
    ProjectItem,
    StravaActivityItem,
    WakaTimeStatsItem,
)
from portfolio_stats.entities import CachedPayload, Project
from portfolio_stats.repositories import (
    CratesClient,
    GitHubClient,
    LeetCodeClient,
    NpmClient,
    WakaTimeClient,
)
from portfolio_stats.services import cache_keys
from portfolio_stats.services.read_through_cache import ReadThroughCache
from portfolio_stats.services.strava_token_service import StravaTokenService

_projects = TypeAdapter(list[ProjectItem])
_cargo_packages = TypeAdapter(list[CargoPackageItem])
_strava_activities = TypeAdapter(list[StravaActivityItem])
_npm_packages = TypeAdapter(list[NpmPackageItem])
_wakatime_stats = TypeAdapter(WakaTimeStatsItem)
_leetcode_stats = TypeAdapter(LeetCodeStatsItem)


def _project_items(projects: list[Project]) -> list[ProjectItem]:
    return [ProjectItem.model_validate(p) for p in projects]


class StatsService:
    """Cached access to every upstream statistic the site displays.

    Example:
        ```python
        stats = StatsService(cache, github=..., crates=..., strava=..., ...)
        payload = await stats.github_starred()
        payload.body      # JSON bytes
        payload.hit       # served from cache?
        ```
    """

    def __init__(
        self,
        cache: ReadThroughCache,
        *,
        github: GitHubClient,
        crates: CratesClient,
        strava_tokens: StravaTokenService,
        wakatime: WakaTimeClient,
        npm: NpmClient,
        leetcode: LeetCodeClient,
        settings: Settings | None = None,
    ) -> None:
        self._cache = cache
        self._github = github
        self._crates = crates
        self._strava_tokens = strava_tokens
        self._wakatime = wakatime
        self._npm = npm
        self._leetcode = leetcode
        self._settings = settings or get_settings()

    async def github_contributions(self) -> CachedPayload:
        async def fetch() -> list[ProjectItem]:
            return _project_items(await self._github.fetch_contributions())

        return await self._cache.get_or_fetch(
            cache_keys.github_contributions(self._settings.github_username),
            fetch,
            ttl=self._settings.cache_ttl_github,
            adapter=_projects,
        )

    async def github_repositories(self) -> CachedPayload:
        async def fetch() -> list[ProjectItem]:
            return _project_items(await self._github.fetch_repositories())

        return await self._cache.get_or_fetch(
            cache_keys.GITHUB_REPOSITORIES,
            fetch,
            ttl=self._settings.cache_ttl_github,
            adapter=_projects,
        )

    async def github_starred(self) -> CachedPayload:
        async def fetch() -> list[ProjectItem]:
            return _project_items(await self._github.fetch_starred())

        return await self._cache.get_or_fetch(
            cache_keys.GITHUB_STARRED,
            fetch,
            ttl=self._settings.cache_ttl_github,
            adapter=_projects,
        )

    async def cargo_packages(self) -> CachedPayload:
        async def fetch() -> list[CargoPackageItem]:
            return [CargoPackageItem.model_validate(p) for p in await self._crates.fetch_packages()]

        return await self._cache.get_or_fetch(
            cache_keys.cargo_packages(self._settings.cargo_user_id),
            fetch,
            ttl=self._settings.cache_ttl_cargo,
            adapter=_cargo_packages,
        )

    async def strava_activities(self) -> CachedPayload:
        """Recent activities; only a cache miss triggers a token refresh."""

        async def fetch() -> list[StravaActivityItem]:
            tokens = await self._strava_tokens.refresh()
            activities = await self._strava_tokens.client.fetch_activities(tokens.access_token)
            return [StravaActivityItem.model_validate(a) for a in activities]

        return await self._cache.get_or_fetch(
            cache_keys.STRAVA_ACTIVITIES,
            fetch,
            ttl=self._settings.cache_ttl_strava,
            adapter=_strava_activities,
        )

    async def wakatime_stats(self) -> CachedPayload:
        async def fetch() -> WakaTimeStatsItem:
            return WakaTimeStatsItem.model_validate(await self._wakatime.fetch_stats())

        return await self._cache.get_or_fetch(
            cache_keys.WAKATIME_STATS,
            fetch,
            ttl=self._settings.cache_ttl_wakatime,
            adapter=_wakatime_stats,
        )

    async def npm_packages(self) -> CachedPayload:
        async def fetch() -> list[NpmPackageItem]:
            return [NpmPackageItem.model_validate(p) for p in await self._npm.fetch_packages()]

        return await self._cache.get_or_fetch(
            cache_keys.npm_packages(self._settings.npm_username),
            fetch,
            ttl=self._settings.cache_ttl_npm,
            adapter=_npm_packages,
        )

    async def leetcode_stats(self) -> CachedPayload:
        async def fetch() -> LeetCodeStatsItem:
            return LeetCodeStatsItem.model_validate(await self._leetcode.fetch_stats())

        return await self._cache.get_or_fetch(
            cache_keys.leetcode_stats(self._settings.leetcode_username),
            fetch,
            ttl=self._settings.cache_ttl_leetcode,
            adapter=_leetcode_stats,
        )
