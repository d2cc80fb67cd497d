"""Tests for the GitHub GraphQL client."""

import dataclasses
import json

import httpx
import pytest

from portfolio_stats.errors import NotConfiguredError, UpstreamError
from portfolio_stats.repositories import GitHubClient
from portfolio_stats.repositories.github_client import GITHUB_GRAPHQL_URL, normalize_repository


def repo(name_with_owner, stars, **extra):
    return {
        "name": name_with_owner.split("/")[-1],
        "nameWithOwner": name_with_owner,
        "stargazerCount": stars,
        **extra,
    }


def graphql_page(connection, nodes, cursor=None, has_next=False):
    return {
        "data": {
            "user": {
                connection: {
                    "nodes": nodes,
                    "pageInfo": {"endCursor": cursor, "hasNextPage": has_next},
                }
            }
        }
    }


@pytest.fixture
def github(http_client, settings):
    return GitHubClient(http_client, settings)


def test_normalize_fills_defaults():
    project = normalize_repository({"name": "solo"})

    assert project.name == "solo"
    assert project.description == ""
    assert project.homepage_url == ""
    assert project.url == ""
    assert project.stargazer_count == 0
    assert project.is_fork is False
    assert project.languages == ()


def test_normalize_prefers_name_with_owner_and_flattens_languages():
    project = normalize_repository(
        repo(
            "rust-lang/rust",
            100,
            description=None,
            languages={"nodes": [{"name": "Rust", "color": "#dea584"}, None]},
        )
    )

    assert project.name == "rust-lang/rust"
    assert project.description == ""
    assert [(lang.name, lang.color) for lang in project.languages] == [("Rust", "#dea584")]


async def test_contributions_follow_cursor_and_deduplicate(github, upstream):
    cursors = []

    def responder(request):
        variables = json.loads(request.content)["variables"]
        cursors.append(variables["cursor"])
        if variables["cursor"] is None:
            return httpx.Response(
                200,
                json=graphql_page(
                    "repositoriesContributedTo",
                    [repo("Owner/Repo", 5), repo("a/first", 1)],
                    cursor="c1",
                    has_next=True,
                ),
            )
        return httpx.Response(
            200,
            json=graphql_page("repositoriesContributedTo", [repo("owner/repo", 5), repo("b/second", 9)]),
        )

    upstream.on("POST", GITHUB_GRAPHQL_URL, responder)

    projects = await github.fetch_contributions()

    assert cursors == [None, "c1"]
    assert [p.name for p in projects] == ["b/second", "Owner/Repo", "a/first"]


async def test_requests_carry_bearer_token_and_login(github, upstream):
    upstream.queue("POST", GITHUB_GRAPHQL_URL, graphql_page("repositories", [repo("octocat/x", 1)]))

    await github.fetch_repositories()

    request = upstream.requests[0]
    assert request.headers["authorization"] == "Bearer gh-token"
    assert json.loads(request.content)["variables"]["login"] == "octocat"


async def test_starred_is_single_call_sorted_by_stars_then_name(github, upstream):
    upstream.queue(
        "POST",
        GITHUB_GRAPHQL_URL,
        graphql_page(
            "starredRepositories",
            [repo("c/low", 10), repo("z/zeta", 50), repo("a/Alpha", 50)],
            cursor="more",
            has_next=True,
        ),
    )

    projects = await github.fetch_starred()

    assert [(p.name, p.stargazer_count) for p in projects] == [
        ("a/Alpha", 50),
        ("z/zeta", 50),
        ("c/low", 10),
    ]
    assert len(upstream.requests) == 1
    assert json.loads(upstream.requests[0].content)["variables"]["first"] == 6


async def test_graphql_errors_raise_upstream_error(github, upstream):
    upstream.queue("POST", GITHUB_GRAPHQL_URL, {"errors": [{"message": "Bad credentials"}]})

    with pytest.raises(UpstreamError, match="Bad credentials"):
        await github.fetch_starred()


async def test_missing_user_raises_upstream_error(github, upstream):
    upstream.queue("POST", GITHUB_GRAPHQL_URL, {"data": {"user": None}})

    with pytest.raises(UpstreamError, match="not found"):
        await github.fetch_contributions()


async def test_missing_connection_raises_upstream_error(github, upstream):
    upstream.queue("POST", GITHUB_GRAPHQL_URL, {"data": {"user": {"login": "octocat"}}})

    with pytest.raises(UpstreamError, match="starredRepositories"):
        await github.fetch_starred()


async def test_non_object_nodes_are_skipped(github, upstream):
    upstream.queue(
        "POST",
        GITHUB_GRAPHQL_URL,
        graphql_page("repositories", ["junk", 3, repo("me/kept", 2, languages={"nodes": ["x"]})]),
    )

    projects = await github.fetch_repositories()

    assert [p.name for p in projects] == ["me/kept"]
    assert projects[0].languages == ()


async def test_http_error_status_raises_upstream_error(github, upstream):
    upstream.on("POST", GITHUB_GRAPHQL_URL, lambda request: httpx.Response(502, text="bad gateway"))

    with pytest.raises(UpstreamError) as exc_info:
        await github.fetch_repositories()

    assert exc_info.value.status_code == 502


async def test_invalid_json_raises_upstream_error(github, upstream):
    upstream.on("POST", GITHUB_GRAPHQL_URL, lambda request: httpx.Response(200, text="<html>"))

    with pytest.raises(UpstreamError, match="not valid JSON"):
        await github.fetch_starred()


async def test_missing_credentials_raise_before_any_request(http_client, settings, upstream):
    github = GitHubClient(http_client, dataclasses.replace(settings, github_api_key=None))

    with pytest.raises(NotConfiguredError) as exc_info:
        await github.fetch_starred()

    assert exc_info.value.missing == ["GITHUB_API_KEY"]
    assert upstream.requests == []
