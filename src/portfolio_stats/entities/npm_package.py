"""npm package domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NpmPackage:
    """A package published to the npm registry."""

    name: str
    version: str = ""
    description: str = ""
    url: str = ""
    repository: str = ""
    homepage: str = ""
    published_at: str = ""
    weekly_downloads: int = 0
