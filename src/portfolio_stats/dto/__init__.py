"""Data Transfer Objects for API contracts.

These Pydantic models define the JSON shapes served to the site
(camelCase keys) and stored in the cache. Internal logic uses the
entities package.
"""

from .requests import InvalidateCacheQuery
from .responses import (
    CargoPackageItem,
    HealthCheckResponse,
    InvalidationErrorResponse,
    InvalidationResponse,
    LanguageItem,
    LeetCodeDifficultyItem,
    LeetCodeStatsItem,
    NpmPackageItem,
    ProjectItem,
    StravaActivityItem,
    TokenRefreshResponse,
    WakaTimeEntryItem,
    WakaTimeStatsItem,
)

__all__ = [
    "InvalidateCacheQuery",
    "CargoPackageItem",
    "HealthCheckResponse",
    "InvalidationErrorResponse",
    "InvalidationResponse",
    "LanguageItem",
    "LeetCodeDifficultyItem",
    "LeetCodeStatsItem",
    "NpmPackageItem",
    "ProjectItem",
    "StravaActivityItem",
    "TokenRefreshResponse",
    "WakaTimeEntryItem",
    "WakaTimeStatsItem",
]
