"""HTTP handler for the Strava token refresh."""

from fastapi import HTTPException, status

from portfolio_stats.dto import TokenRefreshResponse
from portfolio_stats.errors import NotConfiguredError, TokenUnavailableError, UpstreamError
from portfolio_stats.services import StravaTokenService


class StravaAuthHandler:
    """Exposes the Strava token refresh over HTTP.

    Missing configuration or a missing refresh token is reported in the
    body with a null ``access_token``; a failed exchange is a 502.
    """

    def __init__(self, token_service: StravaTokenService) -> None:
        self._tokens = token_service

    async def refresh(self) -> TokenRefreshResponse:
        """Handle POST /api/strava/auth/refresh requests."""
        try:
            tokens = await self._tokens.refresh()
        except NotConfiguredError:
            return TokenRefreshResponse(error="Strava not configured")
        except TokenUnavailableError as e:
            return TokenRefreshResponse(error=e.message)
        except UpstreamError as e:
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail=f"Failed to refresh Strava token: {e.message}",
            ) from e

        return TokenRefreshResponse(access_token=tokens.access_token, expires_at=tokens.expires_at)
