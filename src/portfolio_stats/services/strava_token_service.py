"""Strava access token lifecycle.

The refresh token lives in the shared store so that a token rotated by
Strava on one exchange is used for the next one. States:

    no token stored --(fallback from settings)--> exchange
    token stored    ------------------------------> exchange
    exchange        --(persist, best effort)------> token refreshed
"""

import asyncio

import structlog

from portfolio_stats.config import Settings, get_settings
from portfolio_stats.entities import StravaTokens
from portfolio_stats.errors import NotConfiguredError, TokenUnavailableError
from portfolio_stats.protocols import KeyValueStore
from portfolio_stats.repositories import StravaClient

ACCESS_TOKEN_KEY = "strava:access_token"
REFRESH_TOKEN_KEY = "strava:refresh_token"

logger = structlog.get_logger(__name__)


class StravaTokenService:
    """Obtains fresh Strava access tokens.

    Refreshes within one process are serialized by a lock so that two
    requests do not spend the same refresh token concurrently. Separate
    processes can still race; the last persisted pair wins.
    """

    def __init__(
        self,
        store: KeyValueStore,
        client: StravaClient,
        settings: Settings | None = None,
    ) -> None:
        self._store = store
        self._client = client
        self._settings = settings or get_settings()
        self._lock = asyncio.Lock()

    async def current_refresh_token(self) -> str:
        """Stored refresh token, else the configured fallback.

        Raises:
            TokenUnavailableError: If neither is available
        """
        stored: bytes | None = None
        try:
            stored = await self._store.get(REFRESH_TOKEN_KEY)
        except Exception as e:
            logger.error("strava_refresh_token_read_failed", error=str(e))

        if stored:
            return stored.decode() if isinstance(stored, bytes) else str(stored)

        if self._settings.strava_refresh_token:
            logger.info("strava_refresh_token_fallback")
            return self._settings.strava_refresh_token

        logger.error("strava_refresh_token_missing")
        raise TokenUnavailableError("Refresh token not found")

    async def refresh(self) -> StravaTokens:
        """Exchange the current refresh token and persist the new pair.

        Returns:
            The new StravaTokens

        Raises:
            NotConfiguredError: If Strava client credentials are missing
            TokenUnavailableError: If there is no refresh token to exchange
            UpstreamError: If Strava rejects the exchange
        """
        if not self._settings.strava_configured:
            raise NotConfiguredError(self._client.service, self._client.missing_credentials())

        async with self._lock:
            refresh_token = await self.current_refresh_token()

            logger.info("strava_token_refreshing")
            tokens = await self._client.refresh_token(refresh_token)

            try:
                await self._store.set_many(
                    {
                        ACCESS_TOKEN_KEY: tokens.access_token,
                        REFRESH_TOKEN_KEY: tokens.refresh_token,
                    }
                )
            except Exception as e:
                logger.error("strava_token_persist_failed", error=str(e))
            else:
                logger.info("strava_token_refreshed", expires_at=tokens.expires_at)

            return tokens

    @property
    def client(self) -> StravaClient:
        """The Strava API client used for exchanges."""
        return self._client
