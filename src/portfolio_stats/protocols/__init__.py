"""Protocol interfaces for swappable implementations.

This package contains protocol definitions using structural typing.
Any object with matching methods satisfies a protocol, which lets the
Redis store be replaced by an in-memory fake in tests.
"""

from .key_value_store import KeyValueStore

__all__ = [
    "KeyValueStore",
]
