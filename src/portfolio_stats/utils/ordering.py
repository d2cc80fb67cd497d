"""Ordering and de-duplication helpers for record lists."""

from collections.abc import Callable, Iterable
from typing import TypeVar

T = TypeVar("T")


def by_metric_then_name(
    records: Iterable[T],
    metric: Callable[[T], float],
    name: Callable[[T], str],
) -> list[T]:
    """Sort records by a metric descending, ties broken by name.

    Names compare case-insensitively, with the exact name as a last
    resort so that the order is total even for ``Foo`` vs ``foo``.

    Args:
        records: Records to sort
        metric: Popularity metric (stars, downloads, seconds, ...)
        name: Display name of a record

    Returns:
        A new sorted list
    """
    return sorted(records, key=lambda r: (-metric(r), name(r).casefold(), name(r)))


def unique_by(records: Iterable[T], key: Callable[[T], object]) -> list[T]:
    """Drop records whose natural key was already seen, keeping the first.

    Args:
        records: Records in arrival order (page after page)
        key: Natural key of a record

    Returns:
        Records with duplicates removed, arrival order preserved
    """
    seen: set[object] = set()
    result = []
    for record in records:
        k = key(record)
        if k in seen:
            continue
        seen.add(k)
        result.append(record)
    return result
