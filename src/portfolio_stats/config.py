import os
from dataclasses import dataclass
from functools import lru_cache

from dotenv import load_dotenv
from redis import asyncio as aioredis

load_dotenv()

_LOG_LEVELS = ("debug", "info", "warning", "error", "critical")


def _ttl(name: str, default: str) -> int:
    return int(os.getenv(name, os.getenv("CACHE_TTL", default)))


@dataclass(frozen=True)
class Settings:
    """Application settings loaded from environment variables."""

    # Redis
    redis_url: str = os.getenv("REDIS_URL", "redis://localhost:6379")
    redis_password: str | None = os.getenv("REDIS_PASSWORD")

    # Cache TTLs in seconds, one per resource
    cache_ttl_github: int = _ttl("CACHE_TTL_GITHUB", "21600")
    cache_ttl_cargo: int = _ttl("CACHE_TTL_CARGO", "21600")
    cache_ttl_strava: int = _ttl("CACHE_TTL_STRAVA", "3600")
    cache_ttl_wakatime: int = _ttl("CACHE_TTL_WAKATIME", "21600")
    cache_ttl_npm: int = _ttl("CACHE_TTL_NPM", "21600")
    cache_ttl_leetcode: int = _ttl("CACHE_TTL_LEETCODE", "21600")
    # Max-age advertised to browsers/CDNs on data responses
    request_cache_seconds: int = int(os.getenv("REQUEST_CACHE_SECONDS", "60"))

    # Upstream HTTP
    http_timeout: float = float(os.getenv("HTTP_TIMEOUT", "30"))
    user_agent: str = os.getenv("USER_AGENT", "portfolio-stats (+https://github.com)")

    # GitHub
    github_api_key: str | None = os.getenv("GITHUB_API_KEY")
    github_username: str | None = os.getenv("GITHUB_USERNAME")
    github_starred_limit: int = int(os.getenv("GITHUB_STARRED_LIMIT", "6"))

    # crates.io
    cargo_user_id: str | None = os.getenv("CARGO_USER_ID")

    # Strava
    strava_client_id: str | None = os.getenv("STRAVA_CLIENT_ID")
    strava_client_secret: str | None = os.getenv("STRAVA_CLIENT_SECRET")
    strava_refresh_token: str | None = os.getenv("STRAVA_REFRESH_TOKEN")
    strava_activity_pages: int = int(os.getenv("STRAVA_ACTIVITY_PAGES", "1"))
    strava_activities_per_page: int = int(os.getenv("STRAVA_ACTIVITIES_PER_PAGE", "30"))

    # WakaTime
    wakatime_api_key: str | None = os.getenv("WAKATIME_API_KEY")

    # npm
    npm_username: str | None = os.getenv("NPM_USERNAME")

    # LeetCode
    leetcode_username: str | None = os.getenv("LEETCODE_USERNAME")

    # API
    api_host: str = os.getenv("API_HOST", "0.0.0.0")
    api_port: int = int(os.getenv("API_PORT", "8000"))
    api_reload: bool = os.getenv("API_RELOAD", "false").lower() == "true"

    # Logging
    log_level: str = os.getenv("LOG_LEVEL", "info").lower()
    log_json: bool = os.getenv("LOG_JSON", "true").lower() == "true"

    @property
    def strava_configured(self) -> bool:
        """Whether the Strava OAuth client credentials are present."""
        return bool(self.strava_client_id and self.strava_client_secret)

    def __post_init__(self) -> None:
        """Validate settings after initialization."""
        for name in (
            "cache_ttl_github",
            "cache_ttl_cargo",
            "cache_ttl_strava",
            "cache_ttl_wakatime",
            "cache_ttl_npm",
            "cache_ttl_leetcode",
            "github_starred_limit",
            "strava_activity_pages",
            "strava_activities_per_page",
        ):
            if getattr(self, name) <= 0:
                raise ValueError(f"{name.upper()} must be a positive integer")

        if self.request_cache_seconds < 0:
            raise ValueError("REQUEST_CACHE_SECONDS must not be negative")

        if self.log_level not in _LOG_LEVELS:
            raise ValueError(f"LOG_LEVEL must be one of {list(_LOG_LEVELS)}, got {self.log_level!r}")


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


def get_redis_client(settings: Settings | None = None) -> aioredis.Redis:
    """Create an asyncio Redis client instance."""
    settings = settings or get_settings()
    return aioredis.from_url(
        settings.redis_url,
        password=settings.redis_password,
        decode_responses=False,
    )
