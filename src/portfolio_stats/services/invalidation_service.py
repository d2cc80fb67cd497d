"""Manual invalidation of named cache groups."""

import structlog

from portfolio_stats.config import Settings, get_settings
from portfolio_stats.entities import InvalidationOutcome
from portfolio_stats.errors import UnknownTargetError
from portfolio_stats.protocols import KeyValueStore
from portfolio_stats.services import cache_keys

ALL_TARGET = "all"

logger = structlog.get_logger(__name__)


class InvalidationService:
    """Deletes the cache keys owned by a target.

    Targets are a fixed enumeration of service names plus ``all``; each
    maps to a statically known key list derived from settings.
    """

    def __init__(self, store: KeyValueStore, settings: Settings | None = None) -> None:
        self._store = store
        self._settings = settings or get_settings()

    @property
    def targets(self) -> dict[str, list[str]]:
        s = self._settings
        return {
            "github": [
                cache_keys.GITHUB_STARRED,
                cache_keys.GITHUB_REPOSITORIES,
                cache_keys.github_contributions(s.github_username),
            ],
            "strava": [cache_keys.STRAVA_ACTIVITIES],
            "wakatime": [cache_keys.WAKATIME_STATS],
            "npm": [cache_keys.npm_packages(s.npm_username)],
            "leetcode": [cache_keys.leetcode_stats(s.leetcode_username)],
        }

    def available_targets(self) -> list[str]:
        return [*self.targets, ALL_TARGET]

    def keys_for(self, target: str | None) -> list[str]:
        """Keys owned by ``target``, duplicates removed.

        Raises:
            UnknownTargetError: If the target is not in the enumeration
        """
        targets = self.targets
        if target == ALL_TARGET:
            return list(dict.fromkeys(k for keys in targets.values() for k in keys))
        if target in targets:
            return list(dict.fromkeys(targets[target]))
        raise UnknownTargetError(target, self.available_targets())

    async def invalidate(self, target: str | None) -> InvalidationOutcome:
        """Delete every key owned by ``target``, one at a time.

        A failing delete is counted and logged; the remaining keys are
        still attempted.

        Args:
            target: Target name

        Returns:
            InvalidationOutcome with success/failure counts

        Raises:
            UnknownTargetError: If the target is unknown; nothing is deleted
        """
        keys = self.keys_for(target)
        deleted = 0
        failed = 0

        for key in keys:
            try:
                await self._store.delete(key)
            except Exception as e:
                failed += 1
                logger.warning("cache_delete_failed", target=target, cache_key=key, error=str(e))
            else:
                deleted += 1

        logger.info("cache_invalidated", target=target, deleted=deleted, failed=failed)
        return InvalidationOutcome(target=target, deleted=deleted, failed=failed, keys=tuple(keys))
