"""HTTP handlers for cache maintenance."""

from fastapi import HTTPException, status
from fastapi.responses import JSONResponse

from portfolio_stats.dto import InvalidationErrorResponse, InvalidationResponse
from portfolio_stats.errors import UnknownTargetError
from portfolio_stats.protocols import KeyValueStore
from portfolio_stats.services import InvalidationService


class CacheHandler:
    """HTTP handlers for cache invalidation and health."""

    def __init__(self, invalidation_service: InvalidationService, store: KeyValueStore) -> None:
        self._invalidation = invalidation_service
        self._store = store

    async def invalidate(self, target: str | None) -> InvalidationResponse | JSONResponse:
        """Handle GET /api/cache/invalidate requests.

        Args:
            target: Requested target name, possibly missing

        Returns:
            InvalidationResponse on success; a 400 JSONResponse listing the
            valid targets when the target is unknown
        """
        try:
            outcome = await self._invalidation.invalidate(target)
        except UnknownTargetError as e:
            body = InvalidationErrorResponse(error=e.message, available=e.available)
            return JSONResponse(status_code=status.HTTP_400_BAD_REQUEST, content=body.model_dump())
        except Exception as e:
            raise HTTPException(
                status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                detail=f"Failed to invalidate cache: {e}",
            ) from e

        return InvalidationResponse(
            success=True,
            message=f"Cache invalidation completed for: {outcome.target}",
            deleted=outcome.deleted,
            failed=outcome.failed,
            keys=list(outcome.keys),
        )

    async def health_check(self) -> dict:
        """Handle GET /health requests.

        Returns:
            Dict with health status

        Raises:
            HTTPException: 503 if the store is unreachable
        """
        is_healthy = await self._store.ping()
        if not is_healthy:
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail="Key-value store is unreachable",
            )
        return {"status": "healthy", "cache_healthy": True}
