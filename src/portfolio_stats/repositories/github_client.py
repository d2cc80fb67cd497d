"""GitHub GraphQL client.

Fetches three repository lists for the configured user:
- repositories contributed to (paginated)
- repositories owned (paginated)
- most recently starred repositories (single call)

All three are normalized into Project entities, de-duplicated by
``nameWithOwner`` (case-insensitive) and sorted by stars.
"""

from typing import Any

from portfolio_stats.entities import Language, Project
from portfolio_stats.errors import NotConfiguredError, UpstreamError
from portfolio_stats.repositories.http_client import BaseApiClient
from portfolio_stats.utils import by_metric_then_name, unique_by

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

_REPOSITORY_FIELDS = """
    name
    nameWithOwner
    description
    homepageUrl
    url
    stargazerCount
    isFork
    languages(first: 3, orderBy: {field: SIZE, direction: DESC}) {
      nodes {
        color
        name
      }
    }
"""

CONTRIBUTIONS_QUERY = """
query Contributions($login: String!, $cursor: String) {
  user(login: $login) {
    repositoriesContributedTo(
      privacy: PUBLIC
      first: 100
      after: $cursor
      orderBy: {field: STARGAZERS, direction: DESC}
      contributionTypes: [COMMIT]
      includeUserRepositories: false
    ) {
      nodes {
        ... on Repository {%s}
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
""" % _REPOSITORY_FIELDS

REPOSITORIES_QUERY = """
query Repositories($login: String!, $cursor: String) {
  user(login: $login) {
    repositories(
      privacy: PUBLIC
      first: 100
      after: $cursor
      isFork: false
      ownerAffiliations: [OWNER]
      orderBy: {field: STARGAZERS, direction: DESC}
    ) {
      nodes {%s}
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
""" % _REPOSITORY_FIELDS

STARRED_QUERY = """
query Starred($login: String!, $first: Int!) {
  user(login: $login) {
    starredRepositories(first: $first, orderBy: {field: STARRED_AT, direction: DESC}) {
      nodes {%s}
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
""" % _REPOSITORY_FIELDS


def normalize_repository(node: dict[str, Any]) -> Project:
    """Map a GraphQL Repository node to a Project.

    Args:
        node: The raw ``Repository`` object

    Returns:
        Project with every missing field replaced by its default
    """
    languages = (node.get("languages") or {}).get("nodes") or []
    return Project(
        name=node.get("nameWithOwner") or node.get("name") or "",
        description=node.get("description") or "",
        homepage_url=node.get("homepageUrl") or "",
        url=node.get("url") or "",
        stargazer_count=node.get("stargazerCount") or 0,
        is_fork=bool(node.get("isFork")),
        languages=tuple(
            Language(name=lang.get("name") or "", color=lang.get("color") or "")
            for lang in languages
            if isinstance(lang, dict)
        ),
    )


def sort_projects(projects: list[Project]) -> list[Project]:
    """Most starred first; equal star counts ordered by name."""
    return by_metric_then_name(projects, lambda p: p.stargazer_count, lambda p: p.name)


class GitHubClient(BaseApiClient):
    """Client for the GitHub GraphQL API.

    Example:
        ```python
        async with httpx.AsyncClient() as http:
            github = GitHubClient(http, settings)
            projects = await github.fetch_contributions()
        ```
    """

    service = "github"

    @property
    def username(self) -> str:
        if not self._settings.github_username or not self._settings.github_api_key:
            missing = [
                name
                for name, value in (
                    ("GITHUB_USERNAME", self._settings.github_username),
                    ("GITHUB_API_KEY", self._settings.github_api_key),
                )
                if not value
            ]
            raise NotConfiguredError(self.service, missing)
        return self._settings.github_username

    async def _query(self, query: str, variables: dict[str, Any], connection: str) -> dict[str, Any]:
        """Run a query and return ``data.user.<connection>``.

        Raises:
            UpstreamError: If GraphQL reports errors or the user is missing
        """
        payload = await self._request_json(
            "POST",
            GITHUB_GRAPHQL_URL,
            json={"query": query, "variables": variables},
            headers={"authorization": f"Bearer {self._settings.github_api_key}"},
        )
        if not isinstance(payload, dict):
            raise UpstreamError(self.service, "GraphQL response is not an object")
        if payload.get("errors"):
            messages = "; ".join(str(e.get("message", e)) for e in payload["errors"])
            raise UpstreamError(self.service, f"GraphQL errors: {messages}")

        user = (payload.get("data") or {}).get("user")
        if not user:
            raise UpstreamError(self.service, f"user {variables.get('login')!r} not found")
        page = user.get(connection)
        if not isinstance(page, dict):
            raise UpstreamError(self.service, f"response has no {connection}")
        return page

    async def _paginate(self, query: str, connection: str) -> list[Project]:
        """Follow ``pageInfo.endCursor`` until ``hasNextPage`` is false."""
        login = self.username
        nodes: list[dict[str, Any]] = []
        cursor: str | None = None

        while True:
            page = await self._query(query, {"login": login, "cursor": cursor}, connection)
            nodes.extend(n for n in page.get("nodes") or [] if isinstance(n, dict))

            page_info = page.get("pageInfo") or {}
            cursor = page_info.get("endCursor")
            if not page_info.get("hasNextPage") or not cursor:
                break

        projects = [normalize_repository(n) for n in nodes]
        projects = unique_by((p for p in projects if p.name), lambda p: p.name.casefold())
        return sort_projects(projects)

    async def fetch_contributions(self) -> list[Project]:
        """Public repositories the user has committed to, excluding their own."""
        return await self._paginate(CONTRIBUTIONS_QUERY, "repositoriesContributedTo")

    async def fetch_repositories(self) -> list[Project]:
        """Public, non-fork repositories owned by the user."""
        return await self._paginate(REPOSITORIES_QUERY, "repositories")

    async def fetch_starred(self) -> list[Project]:
        """The user's most recently starred repositories."""
        page = await self._query(
            STARRED_QUERY,
            {"login": self.username, "first": self._settings.github_starred_limit},
            "starredRepositories",
        )
        projects = [normalize_repository(n) for n in page.get("nodes") or [] if isinstance(n, dict)]
        projects = unique_by((p for p in projects if p.name), lambda p: p.name.casefold())
        return sort_projects(projects)
