"""Response DTOs for API endpoints."""

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RecordItem(BaseModel):
    """Base for records served to the site: camelCase on the wire, built from entities."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


class LanguageItem(RecordItem):
    name: str
    color: str = ""


class ProjectItem(RecordItem):
    """A GitHub repository."""

    name: str = Field(..., description="owner/name of the repository")
    description: str = ""
    homepage_url: str = ""
    url: str = ""
    stargazer_count: int = Field(0, ge=0)
    is_fork: bool = False
    languages: list[LanguageItem] = Field(default_factory=list)


class CargoPackageItem(RecordItem):
    """A crate published on crates.io."""

    id: str
    name: str
    description: str = ""
    downloads: int = Field(0, ge=0)
    recent_downloads: int = Field(0, ge=0)
    max_version: str = ""
    repository: str = ""
    homepage: str = ""
    documentation: str = ""
    created_at: str = ""
    updated_at: str = ""


class StravaActivityItem(RecordItem):
    """A Strava activity (meters, seconds, meters per second)."""

    id: int
    name: str
    sport_type: str = ""
    start_date: str = ""
    distance: float = 0.0
    moving_time: int = 0
    elapsed_time: int = 0
    total_elevation_gain: float = 0.0
    average_speed: float = 0.0
    kudos_count: int = 0


class WakaTimeEntryItem(RecordItem):
    name: str
    total_seconds: float = 0.0
    percent: float = 0.0
    text: str = ""


class WakaTimeStatsItem(RecordItem):
    """Coding time over the last seven days."""

    range: str
    total_seconds: float = 0.0
    human_readable_total: str = ""
    daily_average: float = 0.0
    human_readable_daily_average: str = ""
    languages: list[WakaTimeEntryItem] = Field(default_factory=list)
    editors: list[WakaTimeEntryItem] = Field(default_factory=list)


class NpmPackageItem(RecordItem):
    """A package published to npm."""

    name: str
    version: str = ""
    description: str = ""
    url: str = ""
    repository: str = ""
    homepage: str = ""
    published_at: str = ""
    weekly_downloads: int = Field(0, ge=0)


class LeetCodeDifficultyItem(RecordItem):
    difficulty: str
    solved: int = 0
    total: int = 0


class LeetCodeStatsItem(RecordItem):
    """Solved problems per difficulty for a LeetCode user."""

    username: str
    ranking: int = 0
    difficulties: list[LeetCodeDifficultyItem] = Field(default_factory=list)


class InvalidationResponse(BaseModel):
    """Response DTO for a completed cache invalidation."""

    success: bool = Field(..., description="Always true once keys were attempted")
    message: str = Field(..., description="Human-readable status message")
    deleted: int = Field(..., description="Number of delete calls that succeeded", ge=0)
    failed: int = Field(..., description="Number of delete calls that failed", ge=0)
    keys: list[str] = Field(..., description="Every key that was attempted")


class InvalidationErrorResponse(BaseModel):
    """Response DTO for an unknown invalidation target."""

    error: str = Field(..., description="What went wrong")
    available: list[str] = Field(..., description="Valid target names")


class TokenRefreshResponse(BaseModel):
    """Response DTO for a Strava token refresh."""

    access_token: str | None = Field(None, description="New access token, null on failure")
    expires_at: int | None = Field(None, description="Unix timestamp the access token expires at")
    error: str | None = Field(None, description="Why no token could be obtained")


class HealthCheckResponse(BaseModel):
    """Response DTO for health check."""

    status: str = Field(..., description="Health status: 'healthy' or 'unhealthy'")
    cache_healthy: bool = Field(..., description="Whether the key-value store is reachable")
