"""crates.io package domain entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class CargoPackage:
    """A crate published on crates.io."""

    id: str
    name: str
    description: str = ""
    downloads: int = 0
    recent_downloads: int = 0
    max_version: str = ""
    repository: str = ""
    homepage: str = ""
    documentation: str = ""
    created_at: str = ""
    updated_at: str = ""
