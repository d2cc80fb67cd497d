"""Invalidation outcome domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class InvalidationOutcome:
    """Result of deleting the keys owned by an invalidation target.

    Attributes:
        target: The requested target name
        deleted: Number of delete calls that succeeded
        failed: Number of delete calls that raised
        keys: Every key that was attempted, in order
    """

    target: str
    deleted: int
    failed: int
    keys: tuple[str, ...]
