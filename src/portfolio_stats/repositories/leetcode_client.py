"""LeetCode GraphQL client."""

from typing import Any

from portfolio_stats.entities import LeetCodeDifficulty, LeetCodeStats
from portfolio_stats.errors import NotConfiguredError, UpstreamError
from portfolio_stats.repositories.http_client import BaseApiClient

LEETCODE_GRAPHQL_URL = "https://leetcode.com/graphql"

DIFFICULTY_ORDER = ("All", "Easy", "Medium", "Hard")

USER_STATS_QUERY = """
query UserStats($username: String!) {
  allQuestionsCount {
    difficulty
    count
  }
  matchedUser(username: $username) {
    username
    profile {
      ranking
    }
    submitStatsGlobal {
      acSubmissionNum {
        difficulty
        count
      }
    }
  }
}
"""


def _difficulty_rank(difficulty: str) -> tuple[int, str]:
    try:
        return DIFFICULTY_ORDER.index(difficulty), difficulty
    except ValueError:
        return len(DIFFICULTY_ORDER), difficulty


def normalize_stats(data: dict[str, Any]) -> LeetCodeStats:
    """Join solved counts with question totals per difficulty.

    Raises:
        UpstreamError: If the user does not exist
    """
    user = data.get("matchedUser")
    if not user:
        raise UpstreamError("leetcode", "user not found")

    totals = {q.get("difficulty"): int(q.get("count") or 0) for q in data.get("allQuestionsCount") or [] if q}
    solved = {
        s.get("difficulty"): int(s.get("count") or 0)
        for s in (user.get("submitStatsGlobal") or {}).get("acSubmissionNum") or []
        if s
    }

    difficulties = [
        LeetCodeDifficulty(difficulty=d, solved=solved.get(d, 0), total=totals.get(d, 0))
        for d in set(totals) | set(solved)
        if d
    ]
    difficulties.sort(key=lambda d: _difficulty_rank(d.difficulty))

    return LeetCodeStats(
        username=user.get("username") or "",
        ranking=int((user.get("profile") or {}).get("ranking") or 0),
        difficulties=tuple(difficulties),
    )


class LeetCodeClient(BaseApiClient):
    """Client for LeetCode's public GraphQL endpoint."""

    service = "leetcode"

    async def fetch_stats(self) -> LeetCodeStats:
        username = self._settings.leetcode_username
        if not username:
            raise NotConfiguredError(self.service, ["LEETCODE_USERNAME"])

        payload = await self._request_json(
            "POST",
            LEETCODE_GRAPHQL_URL,
            json={"query": USER_STATS_QUERY, "variables": {"username": username}},
            headers={"referer": "https://leetcode.com"},
        )
        if not isinstance(payload, dict):
            raise UpstreamError(self.service, "GraphQL response is not an object")
        if payload.get("errors"):
            messages = "; ".join(str(e.get("message", e)) for e in payload["errors"])
            raise UpstreamError(self.service, f"GraphQL errors: {messages}")

        return normalize_stats(payload.get("data") or {})
