"""Repository layer for data access.

This layer hides external dependencies (Redis, upstream HTTP APIs)
behind small classes. Upstream clients own the whole fetch routine for
their service: request, paginate, normalize, de-duplicate, sort.
"""

from portfolio_stats.protocols import KeyValueStore

from .crates_client import CratesClient
from .github_client import GitHubClient
from .http_client import BaseApiClient, build_http_client
from .leetcode_client import LeetCodeClient
from .npm_client import NpmClient
from .redis_store import RedisKeyValueStore
from .strava_client import StravaClient
from .wakatime_client import WakaTimeClient

__all__ = [
    "KeyValueStore",
    "BaseApiClient",
    "build_http_client",
    "CratesClient",
    "GitHubClient",
    "LeetCodeClient",
    "NpmClient",
    "RedisKeyValueStore",
    "StravaClient",
    "WakaTimeClient",
]
