"""Cache key namespace: ``<service>:<resource>[:<scope>]``."""

GITHUB_STARRED = "github:starred"
GITHUB_REPOSITORIES = "github:repositories"
STRAVA_ACTIVITIES = "strava:activities"
WAKATIME_STATS = "wakatime:stats"


def github_contributions(username: str | None) -> str:
    return f"github:contributions:{username or ''}"


def cargo_packages(user_id: str | None) -> str:
    return f"cargo:packages:{user_id or ''}"


def npm_packages(username: str | None) -> str:
    return f"npm:packages:{username or ''}"


def leetcode_stats(username: str | None) -> str:
    return f"leetcode:stats:{username or ''}"
