"""npm registry search client."""

from typing import Any

from portfolio_stats.entities import NpmPackage
from portfolio_stats.errors import NotConfiguredError, UpstreamError
from portfolio_stats.repositories.http_client import BaseApiClient
from portfolio_stats.utils import by_metric_then_name, unique_by

NPM_SEARCH_URL = "https://registry.npmjs.org/-/v1/search"


def normalize_package(obj: dict[str, Any]) -> NpmPackage:
    """Map a search result object (``{package, downloads, score}``) to NpmPackage."""
    package = obj.get("package") or {}
    links = package.get("links") or {}
    downloads = obj.get("downloads") or {}
    return NpmPackage(
        name=package.get("name") or "",
        version=package.get("version") or "",
        description=package.get("description") or "",
        url=links.get("npm") or "",
        repository=links.get("repository") or "",
        homepage=links.get("homepage") or "",
        published_at=package.get("date") or "",
        weekly_downloads=int(downloads.get("weekly") or 0),
    )


class NpmClient(BaseApiClient):
    """Client for the npm registry search endpoint.

    Pages through ``maintainer:<user>`` results using the ``from`` offset
    until ``total`` results have been seen or a page comes back empty.
    """

    service = "npm"

    async def fetch_packages(self, page_size: int = 250) -> list[NpmPackage]:
        username = self._settings.npm_username
        if not username:
            raise NotConfiguredError(self.service, ["NPM_USERNAME"])

        objects: list[dict[str, Any]] = []
        offset = 0

        while True:
            payload = await self._request_json(
                "GET",
                NPM_SEARCH_URL,
                params={"text": f"maintainer:{username}", "size": page_size, "from": offset},
            )
            if not isinstance(payload, dict):
                raise UpstreamError(self.service, "search response is not an object")

            page = payload.get("objects") or []
            objects.extend(o for o in page if isinstance(o, dict))
            offset += len(page)

            if not page or offset >= int(payload.get("total") or 0):
                break

        packages = [normalize_package(o) for o in objects]
        packages = unique_by((p for p in packages if p.name), lambda p: p.name.casefold())
        return by_metric_then_name(packages, lambda p: p.weekly_downloads, lambda p: p.name)
