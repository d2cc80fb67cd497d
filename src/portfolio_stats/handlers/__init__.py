"""Handler layer for HTTP endpoints.

Handlers depend on services (business logic), not directly on
repositories.

Architecture:
    Handler -> Service -> Repository
    (HTTP)  -> (Business) -> (Data Access)
"""

from .cache_handler import CacheHandler
from .stats_handler import CACHE_STATUS_HEADER, StatsHandler
from .strava_handler import StravaAuthHandler

__all__ = [
    "CACHE_STATUS_HEADER",
    "CacheHandler",
    "StatsHandler",
    "StravaAuthHandler",
]
