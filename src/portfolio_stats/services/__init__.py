"""Service layer for business logic.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)

Services depend on the KeyValueStore protocol and on upstream clients
passed in by the caller, which keeps them testable with fakes.
"""

from . import cache_keys
from .invalidation_service import InvalidationService
from .read_through_cache import ReadThroughCache
from .stats_service import StatsService
from .strava_token_service import StravaTokenService

__all__ = [
    "cache_keys",
    "InvalidationService",
    "ReadThroughCache",
    "StatsService",
    "StravaTokenService",
]
