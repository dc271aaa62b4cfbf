import asyncio
from typing import List, TypeVar

from loguru import logger
from pydantic import TypeAdapter, ValidationError

from teams_graph.fetching.fetcher import FetchError, GitHubFetcher
from teams_graph.graph.classifier import is_relevant_team
from teams_graph.models.team import Member, Team, TeamSummary

DEFAULT_API_URL = "https://api.github.com"
DEFAULT_PAGE_SIZE = 100

T = TypeVar("T")

_TEAM_LIST = TypeAdapter(List[TeamSummary])
_MEMBER_LIST = TypeAdapter(List[Member])


class LoadError(Exception):
    """Raised when the team directory cannot be loaded."""

    pass


class DecodeError(LoadError):
    """Raised when a response body is not the expected JSON shape."""

    pass


class TeamLoader:
    """Loads the relevant teams of an organization together with their members."""

    def __init__(
        self,
        fetcher: GitHubFetcher,
        org: str,
        api_url: str = DEFAULT_API_URL,
        page_size: int = DEFAULT_PAGE_SIZE,
        follow_pagination: bool = True,
        max_concurrency: int = 1,
    ):
        self.fetcher = fetcher
        self.org = org
        self.api_url = api_url.rstrip("/")
        self.page_size = page_size
        self.follow_pagination = follow_pagination
        self.max_concurrency = max(1, max_concurrency)

    def teams_url(self) -> str:
        return f"{self.api_url}/orgs/{self.org}/teams?per_page={self.page_size}"

    def members_url(self, slug: str) -> str:
        return (
            f"{self.api_url}/orgs/{self.org}/teams/{slug}/members"
            f"?per_page={self.page_size}"
        )

    async def load_relevant_teams(self) -> List[Team]:
        """Fetches the team list, keeps relevant teams and attaches their members.

        Teams keep the order of the team-list response. Any failure aborts the
        whole load; with concurrent member fetches the error of the earliest
        team in that order is the one raised.

        Raises:
            LoadError: a fetch failed.
            DecodeError: a response was not the expected JSON shape.
        """
        summaries = await self.fetch_team_list()
        relevant = [summary for summary in summaries if is_relevant_team(summary.name)]
        logger.info(
            f"{len(relevant)} of {len(summaries)} teams in '{self.org}' are relevant."
        )

        semaphore = asyncio.Semaphore(self.max_concurrency)

        async def load_members(summary: TeamSummary) -> List[str]:
            async with semaphore:
                return await self.fetch_team_members(summary.slug)

        results = await asyncio.gather(
            *(load_members(summary) for summary in relevant), return_exceptions=True
        )

        teams: List[Team] = []
        for summary, result in zip(relevant, results):
            if isinstance(result, BaseException):
                if isinstance(result, LoadError):
                    raise type(result)(
                        f"Error fetching team members for team '{summary.name}' "
                        f"(slug {summary.slug}): {result}"
                    ) from result
                raise result
            teams.append(Team.from_summary(summary, result))
        return teams

    async def fetch_team_list(self) -> List[TeamSummary]:
        logger.info("fetching teams")
        url = self.teams_url()
        pages = await self._fetch_pages(url, "teams")
        return self._decode_pages(pages, _TEAM_LIST, f"Error parsing teams from '{url}'")

    async def fetch_team_members(self, slug: str) -> List[str]:
        logger.info(f"fetching team members for '{slug}'")
        url = self.members_url(slug)
        pages = await self._fetch_pages(url, f"members for slug {slug}")
        members = self._decode_pages(
            pages, _MEMBER_LIST, f"Error parsing members for slug {slug}"
        )
        return [member.login for member in members]

    async def _fetch_pages(self, url: str, what: str) -> List[bytes]:
        try:
            return await self.fetcher.fetch_pages(url, follow_next=self.follow_pagination)
        except FetchError as e:
            raise LoadError(f"Error fetching {what}: {e}") from e

    @staticmethod
    def _decode_pages(
        pages: List[bytes], adapter: TypeAdapter[List[T]], context: str
    ) -> List[T]:
        items: List[T] = []
        for body in pages:
            try:
                items.extend(adapter.validate_json(body))
            except ValidationError as e:
                raise DecodeError(f"{context}: {e}") from e
        return items
