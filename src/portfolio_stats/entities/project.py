"""GitHub repository domain entities."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Language:
    """A repository language as reported by GitHub linguist."""

    name: str
    color: str = ""


@dataclass(frozen=True)
class Project:
    """A GitHub repository shown on the portfolio.

    Attributes:
        name: ``owner/name`` of the repository
        description: Repository description, empty if unset
        homepage_url: Project homepage, empty if unset
        url: Repository URL on github.com
        stargazer_count: Number of stars
        is_fork: Whether the repository is a fork
        languages: Up to three languages, largest first
    """

    name: str
    description: str = ""
    homepage_url: str = ""
    url: str = ""
    stargazer_count: int = 0
    is_fork: bool = False
    languages: tuple[Language, ...] = field(default_factory=tuple)
