"""Shared pytest fixtures for all tests."""

import json
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
import pytest_asyncio

from teams_graph.config.settings import AppSettings
from teams_graph.fetching.fetcher import GitHubFetcher
from teams_graph.models.team import Team

GITHUB_API = "https://api.github.com"
TEST_TOKEN = "ghp_test_token_1234"


class FakeGitHub:
    """In-memory stand-in for the GitHub REST API, served through httpx.MockTransport."""

    def __init__(self):
        self.routes: Dict[Tuple[str, Optional[str]], Tuple[int, bytes, Dict[str, str]]] = {}
        self.requests: List[httpx.Request] = []

    def add(
        self,
        path: str,
        payload: Any,
        status: int = 200,
        headers: Optional[Dict[str, str]] = None,
        page: Optional[str] = None,
    ) -> None:
        content = payload if isinstance(payload, bytes) else json.dumps(payload).encode()
        self.routes[(path, page)] = (status, content, headers or {})

    def add_teams(self, teams: List[Dict[str, str]], org: str = "giantswarm") -> None:
        self.add(f"/orgs/{org}/teams", teams)

    def add_members(self, slug: str, logins: List[str], org: str = "giantswarm") -> None:
        self.add(
            f"/orgs/{org}/teams/{slug}/members", [{"login": login} for login in logins]
        )

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.url.path, request.url.params.get("page"))
        if key not in self.routes:
            return httpx.Response(404, json={"message": "Not Found"})
        status, content, headers = self.routes[key]
        return httpx.Response(status, content=content, headers=headers)

    def requested_paths(self) -> List[str]:
        return [request.url.path for request in self.requests]


def team_entry(name: str, slug: Optional[str] = None) -> Dict[str, str]:
    """A team-list entry as GitHub returns it."""
    slug = slug or name.lower().replace(" ", "-")
    return {
        "name": name,
        "slug": slug,
        "members_url": f"{GITHUB_API}/teams/1/members{{/member}}",
    }


@pytest.fixture
def fake_github():
    return FakeGitHub()


@pytest_asyncio.fixture
async def fetcher_factory():
    """Builds GitHubFetchers around MockTransport handlers and closes their clients."""
    clients: List[httpx.AsyncClient] = []

    def make(handler) -> GitHubFetcher:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        clients.append(client)
        return GitHubFetcher(token=TEST_TOKEN, client=client)

    yield make

    for client in clients:
        await client.aclose()


@pytest_asyncio.fixture
async def fetcher(fake_github, fetcher_factory):
    """GitHubFetcher wired to the fake API."""
    return fetcher_factory(fake_github.handler)


@pytest.fixture
def settings(tmp_path):
    """Settings that ignore any local .env and write into tmp_path."""
    return AppSettings(
        _env_file=None,
        github_token=TEST_TOKEN,
        output_path=str(tmp_path / "teams-graph.json"),
        max_concurrency=2,
    )


@pytest.fixture
def sample_teams():
    """Teams from the alpha / sig-x / beta scenario."""
    return [
        Team(name="team-alpha", slug="team-alpha", members=["a", "b"]),
        Team(name="sig-x", slug="sig-x", members=["b", "c"]),
        Team(name="team-beta", slug="team-beta", members=["c"]),
    ]
