"""Request DTOs for API endpoints."""

from pydantic import BaseModel, Field


class InvalidateCacheQuery(BaseModel):
    """Query parameters of GET /api/cache/invalidate.

    ``target`` is deliberately a free string: unknown values are answered
    with the list of valid targets rather than a validation error.
    """

    target: str | None = Field(
        None,
        description="Cache group to clear: github, strava, wakatime, npm, leetcode or all",
    )
