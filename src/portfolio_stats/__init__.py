"""Portfolio Stats - cached statistics from third-party services.

This package serves GitHub, crates.io, Strava, WakaTime, npm and
LeetCode statistics for a portfolio site, each through a read-through
cache over a shared Redis store.

Layers:
    - protocols: Interface contracts (KeyValueStore)
    - repositories: Redis store and upstream API clients
    - services: Read-through cache, stats, Strava tokens, invalidation
    - handlers: HTTP endpoint handlers
    - dto: Data transfer objects (API contracts)
    - entities: Domain models (internal)

For HTTP API:
    ```python
    from portfolio_stats.api.app import app, create_app
    ```
"""

from portfolio_stats.config import Settings, get_redis_client, get_settings
from portfolio_stats.entities import CachedPayload, InvalidationOutcome
from portfolio_stats.errors import (
    NotConfiguredError,
    PortfolioStatsError,
    TokenUnavailableError,
    UnknownTargetError,
    UpstreamError,
)
from portfolio_stats.protocols import KeyValueStore
from portfolio_stats.repositories import RedisKeyValueStore
from portfolio_stats.services import (
    InvalidationService,
    ReadThroughCache,
    StatsService,
    StravaTokenService,
)

__all__ = [
    # Configuration
    "Settings",
    "get_settings",
    "get_redis_client",
    # Errors
    "PortfolioStatsError",
    "UpstreamError",
    "NotConfiguredError",
    "TokenUnavailableError",
    "UnknownTargetError",
    # Protocols (interfaces)
    "KeyValueStore",
    # Repositories (data access)
    "RedisKeyValueStore",
    # Services (business logic)
    "ReadThroughCache",
    "StatsService",
    "StravaTokenService",
    "InvalidationService",
    # Entities (domain models)
    "CachedPayload",
    "InvalidationOutcome",
]
