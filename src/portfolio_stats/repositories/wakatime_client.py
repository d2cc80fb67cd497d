"""WakaTime REST client."""

import base64
from typing import Any

from portfolio_stats.entities import WakaTimeEntry, WakaTimeStats
from portfolio_stats.errors import NotConfiguredError, UpstreamError
from portfolio_stats.repositories.http_client import BaseApiClient
from portfolio_stats.utils import by_metric_then_name

WAKATIME_STATS_URL = "https://wakatime.com/api/v1/users/current/stats/last_7_days"


def normalize_entry(entry: dict[str, Any]) -> WakaTimeEntry:
    return WakaTimeEntry(
        name=entry.get("name") or "",
        total_seconds=float(entry.get("total_seconds") or 0.0),
        percent=float(entry.get("percent") or 0.0),
        text=entry.get("text") or "",
    )


def _entries(raw: list[dict[str, Any]] | None) -> tuple[WakaTimeEntry, ...]:
    entries = [normalize_entry(e) for e in raw or [] if isinstance(e, dict) and e.get("name")]
    return tuple(by_metric_then_name(entries, lambda e: e.total_seconds, lambda e: e.name))


def normalize_stats(data: dict[str, Any]) -> WakaTimeStats:
    """Map the ``data`` object of a stats response to WakaTimeStats."""
    return WakaTimeStats(
        range=data.get("range") or "last_7_days",
        total_seconds=float(data.get("total_seconds") or 0.0),
        human_readable_total=data.get("human_readable_total") or "",
        daily_average=float(data.get("daily_average") or 0.0),
        human_readable_daily_average=data.get("human_readable_daily_average") or "",
        languages=_entries(data.get("languages")),
        editors=_entries(data.get("editors")),
    )


class WakaTimeClient(BaseApiClient):
    """Client for the WakaTime API (API key over HTTP basic auth)."""

    service = "wakatime"

    async def fetch_stats(self) -> WakaTimeStats:
        api_key = self._settings.wakatime_api_key
        if not api_key:
            raise NotConfiguredError(self.service, ["WAKATIME_API_KEY"])

        token = base64.b64encode(api_key.encode()).decode()
        payload = await self._request_json(
            "GET",
            WAKATIME_STATS_URL,
            headers={"authorization": f"Basic {token}"},
        )
        if not isinstance(payload, dict) or not isinstance(payload.get("data"), dict):
            raise UpstreamError(self.service, "stats response has no data object")
        return normalize_stats(payload["data"])
