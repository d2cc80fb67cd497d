"""Strava OAuth and REST client."""

from typing import Any

from portfolio_stats.entities import StravaActivity, StravaTokens
from portfolio_stats.errors import NotConfiguredError, UpstreamError
from portfolio_stats.repositories.http_client import BaseApiClient
from portfolio_stats.utils import unique_by

STRAVA_TOKEN_URL = "https://www.strava.com/oauth/token"
STRAVA_ACTIVITIES_URL = "https://www.strava.com/api/v3/athlete/activities"


def normalize_activity(activity: dict[str, Any]) -> StravaActivity:
    """Map a Strava SummaryActivity to a StravaActivity."""
    return StravaActivity(
        id=int(activity["id"]),
        name=activity.get("name") or "",
        sport_type=activity.get("sport_type") or activity.get("type") or "",
        start_date=activity.get("start_date") or "",
        distance=float(activity.get("distance") or 0.0),
        moving_time=int(activity.get("moving_time") or 0),
        elapsed_time=int(activity.get("elapsed_time") or 0),
        total_elevation_gain=float(activity.get("total_elevation_gain") or 0.0),
        average_speed=float(activity.get("average_speed") or 0.0),
        kudos_count=int(activity.get("kudos_count") or 0),
    )


def sort_activities(activities: list[StravaActivity]) -> list[StravaActivity]:
    """Newest first; activities starting at the same time ordered by name."""
    by_name = sorted(activities, key=lambda a: (a.name.casefold(), a.name, a.id))
    return sorted(by_name, key=lambda a: a.start_date, reverse=True)


class StravaClient(BaseApiClient):
    """Client for the Strava API."""

    service = "strava"

    def missing_credentials(self) -> list[str]:
        """Names of the unset OAuth client settings."""
        return [
            name
            for name, value in (
                ("STRAVA_CLIENT_ID", self._settings.strava_client_id),
                ("STRAVA_CLIENT_SECRET", self._settings.strava_client_secret),
            )
            if not value
        ]

    def _credentials(self) -> tuple[str, str]:
        missing = self.missing_credentials()
        if missing:
            raise NotConfiguredError(self.service, missing)
        return self._settings.strava_client_id, self._settings.strava_client_secret

    async def refresh_token(self, refresh_token: str) -> StravaTokens:
        """Exchange a refresh token for a new access/refresh token pair.

        Args:
            refresh_token: The current refresh token

        Returns:
            The new StravaTokens

        Raises:
            NotConfiguredError: If client credentials are missing
            UpstreamError: If the exchange fails
        """
        client_id, client_secret = self._credentials()
        payload = await self._request_json(
            "POST",
            STRAVA_TOKEN_URL,
            params={
                "client_id": client_id,
                "client_secret": client_secret,
                "grant_type": "refresh_token",
                "refresh_token": refresh_token,
            },
        )
        if not isinstance(payload, dict) or not payload.get("access_token") or not payload.get("refresh_token"):
            raise UpstreamError(self.service, "token response is missing tokens")

        return StravaTokens(
            access_token=payload["access_token"],
            refresh_token=payload["refresh_token"],
            expires_at=int(payload.get("expires_at") or 0),
        )

    async def fetch_activities(self, access_token: str) -> list[StravaActivity]:
        """Recent activities of the authenticated athlete, newest first.

        Requests pages 1..``STRAVA_ACTIVITY_PAGES`` in order and stops early
        on a short page.

        Args:
            access_token: Bearer token from refresh_token()

        Returns:
            Sorted, de-duplicated list of StravaActivity
        """
        per_page = self._settings.strava_activities_per_page
        raw: list[dict[str, Any]] = []

        for page in range(1, self._settings.strava_activity_pages + 1):
            batch = await self._request_json(
                "GET",
                STRAVA_ACTIVITIES_URL,
                params={"page": page, "per_page": per_page},
                headers={"authorization": f"Bearer {access_token}"},
            )
            if not isinstance(batch, list):
                raise UpstreamError(self.service, "activity listing is not a list")

            raw.extend(a for a in batch if isinstance(a, dict) and a.get("id") is not None)
            if len(batch) < per_page:
                break

        activities = unique_by((normalize_activity(a) for a in raw), lambda a: a.id)
        return sort_activities(activities)
