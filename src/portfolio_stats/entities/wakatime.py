"""WakaTime domain entities."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class WakaTimeEntry:
    """Time spent in one language or editor over the stats range."""

    name: str
    total_seconds: float = 0.0
    percent: float = 0.0
    text: str = ""


@dataclass(frozen=True)
class WakaTimeStats:
    """Coding activity summary for the last seven days."""

    range: str = "last_7_days"
    total_seconds: float = 0.0
    human_readable_total: str = ""
    daily_average: float = 0.0
    human_readable_daily_average: str = ""
    languages: tuple[WakaTimeEntry, ...] = field(default_factory=tuple)
    editors: tuple[WakaTimeEntry, ...] = field(default_factory=tuple)
