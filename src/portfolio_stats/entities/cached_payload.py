"""Cached payload domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CachedPayload:
    """Serialized JSON body of a data endpoint plus where it came from.

    Attributes:
        body: UTF-8 JSON bytes, exactly as stored in (or written to) the cache
        hit: True if the body was read from the cache, False if freshly fetched
    """

    body: bytes
    hit: bool

    @property
    def cache_status(self) -> str:
        return "hit" if self.hit else "miss"
