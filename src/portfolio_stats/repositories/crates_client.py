"""crates.io REST client."""

from typing import Any

import httpx

from portfolio_stats.entities import CargoPackage
from portfolio_stats.errors import NotConfiguredError, UpstreamError
from portfolio_stats.repositories.http_client import BaseApiClient
from portfolio_stats.utils import by_metric_then_name, unique_by

CRATES_URL = "https://crates.io/api/v1/crates"


def normalize_crate(crate: dict[str, Any]) -> CargoPackage:
    """Map a crates.io crate object to a CargoPackage."""
    return CargoPackage(
        id=str(crate.get("id") or crate.get("name") or ""),
        name=crate.get("name") or "",
        description=(crate.get("description") or "").strip(),
        downloads=crate.get("downloads") or 0,
        recent_downloads=crate.get("recent_downloads") or 0,
        max_version=crate.get("max_stable_version") or crate.get("max_version") or "",
        repository=crate.get("repository") or "",
        homepage=crate.get("homepage") or "",
        documentation=crate.get("documentation") or "",
        created_at=crate.get("created_at") or "",
        updated_at=crate.get("updated_at") or "",
    )


class CratesClient(BaseApiClient):
    """Client for the crates.io API.

    Lists every crate owned by ``CARGO_USER_ID``, following
    ``meta.next_page`` (a query string relative to the listing URL).
    """

    service = "crates.io"

    async def fetch_packages(self, per_page: int = 10) -> list[CargoPackage]:
        """All crates of the configured user, most downloaded first.

        Args:
            per_page: Page size requested from crates.io

        Returns:
            Sorted, de-duplicated list of CargoPackage
        """
        user_id = self._settings.cargo_user_id
        if not user_id:
            raise NotConfiguredError(self.service, ["CARGO_USER_ID"])

        base = httpx.URL(CRATES_URL)
        url: httpx.URL | None = base.copy_merge_params(
            {"page": 1, "per_page": per_page, "sort": "alpha", "user_id": user_id}
        )
        crates: list[dict[str, Any]] = []

        while url is not None:
            payload = await self._request_json("GET", url)
            if not isinstance(payload, dict):
                raise UpstreamError(self.service, "crate listing is not an object")

            crates.extend(c for c in payload.get("crates") or [] if isinstance(c, dict))

            next_page = (payload.get("meta") or {}).get("next_page")
            url = base.join(next_page) if next_page else None

        packages = [normalize_crate(c) for c in crates]
        packages = unique_by((p for p in packages if p.name), lambda p: p.name.casefold())
        return by_metric_then_name(packages, lambda p: p.downloads, lambda p: p.name)
