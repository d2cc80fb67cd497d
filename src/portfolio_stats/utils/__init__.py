"""Utility modules shared by the upstream clients."""

from .ordering import by_metric_then_name, unique_by

__all__ = [
    "by_metric_then_name",
    "unique_by",
]
