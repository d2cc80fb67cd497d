"""Shared plumbing for upstream API clients."""

from typing import Any

import httpx
import structlog

from portfolio_stats.config import Settings, get_settings
from portfolio_stats.errors import UpstreamError

logger = structlog.get_logger(__name__)


def build_http_client(settings: Settings | None = None) -> httpx.AsyncClient:
    """Create the async HTTP client shared by all upstream clients.

    Args:
        settings: Settings to read timeout and user agent from.

    Returns:
        The httpx.AsyncClient instance
    """
    settings = settings or get_settings()
    return httpx.AsyncClient(
        timeout=settings.http_timeout,
        headers={"user-agent": settings.user_agent},
        limits=httpx.Limits(max_connections=100, max_keepalive_connections=20),
    )


class BaseApiClient:
    """Base class for clients that talk JSON to one upstream service.

    Subclasses set ``service`` and call ``_request_json``; every transport
    error, non-2xx status and undecodable body comes out as UpstreamError.
    """

    service = "upstream"

    def __init__(self, http_client: httpx.AsyncClient, settings: Settings | None = None) -> None:
        """Initialize the client.

        Args:
            http_client: Shared async HTTP client.
            settings: Settings. Defaults to the process-wide settings.
        """
        self._http = http_client
        self._settings = settings or get_settings()

    async def _request_json(self, method: str, url: str | httpx.URL, **kwargs: Any) -> Any:
        """Send a request and decode the JSON body.

        Args:
            method: HTTP method
            url: Absolute URL
            **kwargs: Passed through to httpx (params, json, headers, ...)

        Returns:
            The decoded JSON document

        Raises:
            UpstreamError: On transport failure, non-2xx status or invalid JSON
        """
        try:
            response = await self._http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.error("upstream_request_failed", service=self.service, url=str(url), error=str(e))
            raise UpstreamError(self.service, f"request failed: {e}") from e

        if response.is_error:
            logger.error(
                "upstream_bad_status",
                service=self.service,
                url=str(url),
                status_code=response.status_code,
            )
            raise UpstreamError(
                self.service,
                f"unexpected status {response.status_code}",
                status_code=response.status_code,
            )

        try:
            return response.json()
        except ValueError as e:
            raise UpstreamError(self.service, "response is not valid JSON") from e
