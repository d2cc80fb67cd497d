"""Domain entities for internal representation.

These are frozen dataclasses produced by the upstream clients' normalize
functions and consumed by services. They carry no serialization logic;
the wire shape lives in the dto package.
"""

from .cached_payload import CachedPayload
from .cargo_package import CargoPackage
from .invalidation import InvalidationOutcome
from .leetcode import LeetCodeDifficulty, LeetCodeStats
from .npm_package import NpmPackage
from .project import Language, Project
from .strava import StravaActivity, StravaTokens
from .wakatime import WakaTimeEntry, WakaTimeStats

__all__ = [
    "CachedPayload",
    "CargoPackage",
    "InvalidationOutcome",
    "Language",
    "LeetCodeDifficulty",
    "LeetCodeStats",
    "NpmPackage",
    "Project",
    "StravaActivity",
    "StravaTokens",
    "WakaTimeEntry",
    "WakaTimeStats",
]
