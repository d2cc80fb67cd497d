"""Strava domain entities."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StravaActivity:
    """A single Strava activity, distances in meters and times in seconds."""

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


@dataclass(frozen=True)
class StravaTokens:
    """Result of a Strava OAuth token exchange.

    Attributes:
        access_token: Short-lived bearer token for the REST API
        refresh_token: Token to use for the next exchange
        expires_at: Unix timestamp when the access token expires
    """

    access_token: str
    refresh_token: str
    expires_at: int = 0
